"""Configuration: env, VLC endpoint, Twitch credentials, state file."""
import os
from pathlib import Path

from vlctwitch.errors import StartupError

# Base paths (project root = parent of vlctwitch package)
BASE_DIR = Path(__file__).resolve().parent.parent

# Load .env from project root so TWITCH_CLIENT_ID etc. are set
try:
    from dotenv import load_dotenv
    load_dotenv(BASE_DIR / ".env")
except ImportError:
    pass
DATA_DIR = BASE_DIR / "data"
STATE_PATH = Path(os.getenv("VLCTWITCH_STATE_PATH", str(DATA_DIR / "state.json")))

# Twitch (OAuth; tokens stored in STATE_PATH after first connect)
TWITCH_CLIENT_ID = os.getenv("TWITCH_CLIENT_ID", "")
TWITCH_CLIENT_SECRET = os.getenv("TWITCH_CLIENT_SECRET", "")
TWITCH_REDIRECT_URI = os.getenv("TWITCH_REDIRECT_URI", "http://localhost:21825")
TWITCH_SCOPES = ["channel:manage:broadcast"]

# One-shot OAuth callback listener; must match TWITCH_REDIRECT_URI
CALLBACK_HOST = os.getenv("VLCTWITCH_CALLBACK_HOST", "localhost")
CALLBACK_PORT = int(os.getenv("VLCTWITCH_CALLBACK_PORT", "21825"))

# Channel title, str.format placeholders: {title}, {game_name}
TITLE_TEMPLATE = os.getenv("VLCTWITCH_TITLE", "Listening to {title}")

# VLC HTTP interface (basic auth, empty user)
VLC_STATUS_URL = os.getenv("VLC_STATUS_URL", "http://localhost:8080/requests/status.json")
VLC_PASSWORD = os.getenv("VLC_PASSWORD", "Popcorn")
VLC_COMMAND = os.getenv("VLC_COMMAND", "vlc")
VLC_LAUNCH = os.getenv("VLC_LAUNCH", "1").lower() in ("1", "true", "yes")

# Timing (seconds)
POLL_INTERVAL_SEC = float(os.getenv("VLCTWITCH_POLL_INTERVAL_SEC", "60"))
HTTP_TIMEOUT_SEC = float(os.getenv("VLCTWITCH_HTTP_TIMEOUT_SEC", "10"))
AUTH_TIMEOUT_SEC = float(os.getenv("VLCTWITCH_AUTH_TIMEOUT_SEC", "300"))  # 0 = wait forever

LOG_LEVEL = os.getenv("VLCTWITCH_LOG_LEVEL", "INFO").upper()


def ensure_data_dir() -> None:
    STATE_PATH.parent.mkdir(parents=True, exist_ok=True)


def require_twitch_credentials() -> None:
    """Raise StartupError if the Twitch application is not configured."""
    missing = [
        name
        for name, value in (
            ("TWITCH_CLIENT_ID", TWITCH_CLIENT_ID),
            ("TWITCH_CLIENT_SECRET", TWITCH_CLIENT_SECRET),
        )
        if not value
    ]
    if missing:
        raise StartupError(f"Missing configuration: {', '.join(missing)}")
