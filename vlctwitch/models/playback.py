"""Playback snapshot from the VLC HTTP interface."""
from dataclasses import dataclass


@dataclass(frozen=True)
class PlaybackSnapshot:
    """One poll cycle's view of VLC."""
    playing: bool
    album: str  # used as the Twitch category (game) name
    title: str
