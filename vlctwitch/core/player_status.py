"""Read VLC's status.json over its HTTP interface."""
import logging
from typing import Any

import requests

from vlctwitch.config import HTTP_TIMEOUT_SEC, VLC_PASSWORD, VLC_STATUS_URL
from vlctwitch.errors import PlayerStatusDecodeError, PlayerUnavailableError
from vlctwitch.models.playback import PlaybackSnapshot

logger = logging.getLogger(__name__)

STATE_KEY = "state"
ALBUM_PATH = "information.category.meta.album"
TITLE_PATH = "information.category.meta.title"


def deep_get(data: Any, path: str, default: Any = None) -> Any:
    """Follow a dotted path through nested dicts; default on any missing segment."""
    current = data
    for key in path.split("."):
        if not isinstance(current, dict) or key not in current:
            return default
        current = current[key]
    return current


def _str_at(data: Any, path: str) -> str:
    value = deep_get(data, path, "")
    return value if isinstance(value, str) else ""


def parse_snapshot(data: dict[str, Any]) -> PlaybackSnapshot:
    """Map a status document to a snapshot. Stopped VLC returns a sparse document; that is fine."""
    return PlaybackSnapshot(
        playing=_str_at(data, STATE_KEY) == "playing",
        album=_str_at(data, ALBUM_PATH),
        title=_str_at(data, TITLE_PATH),
    )


def fetch_player_status(
    url: str = VLC_STATUS_URL,
    password: str = VLC_PASSWORD,
    timeout: float = HTTP_TIMEOUT_SEC,
    http: Any = requests,
) -> dict[str, Any]:
    """GET the status document. Raises PlayerUnavailableError or PlayerStatusDecodeError."""
    logger.debug("Fetching player status...")
    try:
        resp = http.get(url, auth=("", password), timeout=timeout)
    except requests.RequestException as e:
        raise PlayerUnavailableError(f"VLC not reachable at {url}: {e}") from e
    if resp.status_code == 401:
        raise PlayerUnavailableError("VLC rejected the HTTP password")
    if not 200 <= resp.status_code < 300:
        raise PlayerUnavailableError(f"VLC returned HTTP {resp.status_code}")
    try:
        data = resp.json()
    except ValueError as e:
        raise PlayerStatusDecodeError(f"VLC status is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise PlayerStatusDecodeError("VLC status is not a JSON object")
    logger.debug("Fetched player status")
    return data


def fetch_snapshot(**kwargs: Any) -> PlaybackSnapshot:
    return parse_snapshot(fetch_player_status(**kwargs))
