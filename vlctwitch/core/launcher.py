"""Open the browser for OAuth and spawn VLC with its HTTP interface enabled."""
import logging
import subprocess
import webbrowser
from typing import List

from vlctwitch.errors import AuthorizationError, StartupError

logger = logging.getLogger(__name__)


def open_url(url: str) -> None:
    """Open url in the default browser. The URL is logged so it can be opened by hand."""
    logger.info("Opening Twitch authorization page: %s", url)
    try:
        opened = webbrowser.open(url)
    except webbrowser.Error as e:
        raise AuthorizationError(f"Cannot open browser: {e}") from e
    if not opened:
        raise AuthorizationError("No browser available; open the URL above manually")


def vlc_command(executable: str, password: str) -> List[str]:
    return [executable, "--extraintf", "http", "--http-password", password]


def launch_player(executable: str, password: str) -> subprocess.Popen:
    """Start VLC and return immediately. The process is not monitored afterwards."""
    cmd = vlc_command(executable, password)
    try:
        proc = subprocess.Popen(
            cmd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
    except OSError as e:
        raise StartupError(f"Cannot launch VLC ({executable}): {e}") from e
    logger.info("Started VLC (pid %s) with HTTP interface", proc.pid)
    return proc
