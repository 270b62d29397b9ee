"""Persist and load the session record (JSON).

Writes are atomic (temp file in the same directory + rename) so a crash
mid-write never loses the only copy of the refresh token.
"""
import json
import logging
import os
import tempfile
from dataclasses import asdict, fields
from pathlib import Path

from vlctwitch.config import STATE_PATH
from vlctwitch.errors import SessionStoreError
from vlctwitch.models.session import SessionRecord

logger = logging.getLogger(__name__)

_FIELDS = tuple(f.name for f in fields(SessionRecord))


def load_session(path: Path = STATE_PATH) -> SessionRecord:
    """Load the session from disk. A missing file is an empty (unauthenticated) session."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.info("No state file at %s, starting unauthenticated", path)
        return SessionRecord()
    except OSError as e:
        raise SessionStoreError(f"Cannot read state file {path}: {e}") from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise SessionStoreError(f"State file {path} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise SessionStoreError(f"State file {path} must contain a JSON object")

    values = {}
    for name in _FIELDS:
        value = data.get(name) or ""
        if not isinstance(value, str):
            raise SessionStoreError(f"State file {path}: '{name}' must be a string")
        values[name] = value
    record = SessionRecord(**values)

    if bool(record.access_token) != bool(record.refresh_token):
        raise SessionStoreError(
            f"State file {path} has only one of access_token/refresh_token; delete it to re-authorize"
        )
    return record


def save_session(record: SessionRecord, path: Path = STATE_PATH) -> None:
    """Atomically replace the state file with record."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=path.name, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(asdict(record), f, indent=2)
            f.write("\n")
        os.replace(tmp, path)
    except Exception:
        try:
            os.unlink(tmp)
        except OSError:
            pass
        raise
