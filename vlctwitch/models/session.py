"""Durable session: Twitch tokens and the last track pushed to the channel."""
from dataclasses import dataclass


@dataclass
class SessionRecord:
    """Stored in the state file. Tokens are both set or both empty."""
    access_token: str = ""
    refresh_token: str = ""
    last_game_name: str = ""
    last_title: str = ""

    @property
    def is_authenticated(self) -> bool:
        return bool(self.access_token and self.refresh_token)
