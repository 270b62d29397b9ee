"""Core services: session, Twitch OAuth and API, VLC status, channel sync, poll loop."""
from vlctwitch.core.authorization import AuthorizationFlow
from vlctwitch.core.session import Session
from vlctwitch.core.twitch_client import TwitchClient

__all__ = ["AuthorizationFlow", "Session", "TwitchClient"]
