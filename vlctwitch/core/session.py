"""Live session shared by the authorization flow and the sync loop."""
import logging
from dataclasses import replace
from pathlib import Path

from vlctwitch.config import STATE_PATH
from vlctwitch.core.session_store import load_session, save_session
from vlctwitch.models.session import SessionRecord

logger = logging.getLogger(__name__)


class Session:
    """The one authoritative session record. Every change is persisted before returning."""

    def __init__(self, record: SessionRecord | None = None, path: Path = STATE_PATH) -> None:
        self._record = record if record is not None else SessionRecord()
        self._path = path

    @classmethod
    def load(cls, path: Path = STATE_PATH) -> "Session":
        return cls(load_session(path), path)

    @property
    def record(self) -> SessionRecord:
        return self._record

    @property
    def access_token(self) -> str:
        return self._record.access_token

    @property
    def refresh_token(self) -> str:
        return self._record.refresh_token

    @property
    def last_title(self) -> str:
        return self._record.last_title

    @property
    def last_game_name(self) -> str:
        return self._record.last_game_name

    @property
    def is_authenticated(self) -> bool:
        return self._record.is_authenticated

    def update(self, **changes: str) -> None:
        """Apply changes and save. The in-memory record only changes if the save succeeds."""
        updated = replace(self._record, **changes)
        save_session(updated, self._path)
        self._record = updated

    def set_tokens(self, access_token: str, refresh_token: str) -> None:
        if not access_token or not refresh_token:
            raise ValueError("access_token and refresh_token must both be set")
        self.update(access_token=access_token, refresh_token=refresh_token)
        logger.debug("Session tokens updated")

    def mark_synced(self, title: str, game_name: str) -> None:
        self.update(last_title=title, last_game_name=game_name)
