"""Data models for playback snapshots and the persisted session."""
from vlctwitch.models.playback import PlaybackSnapshot
from vlctwitch.models.session import SessionRecord

__all__ = [
    "PlaybackSnapshot",
    "SessionRecord",
]
