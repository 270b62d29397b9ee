import json
from typing import Any, Callable, Optional

import pytest

from vlctwitch.core.authorization import AuthorizationFlow
from vlctwitch.core.session import Session
from vlctwitch.core.title_template import TitleTemplate
from vlctwitch.core.twitch_client import Game, TokenPair, TokenValidation
from vlctwitch.models.session import SessionRecord

BROADCASTER_ID = "141981764"


class FakeResponse:
    def __init__(self, status_code: int = 200, body: Any = None, text: Optional[str] = None) -> None:
        self.status_code = status_code
        self._body = body
        self.text = text if text is not None else ("" if body is None else json.dumps(body))

    def json(self) -> Any:
        return json.loads(self.text)


class FakeHTTP:
    """Stands in for requests (module or Session): records calls, replays queued responses."""

    def __init__(self, *responses: Any) -> None:
        self.responses = list(responses)
        self.calls: list[dict[str, Any]] = []

    def _next(self, call: dict[str, Any]) -> FakeResponse:
        self.calls.append(call)
        item = self.responses.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item

    def request(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        return self._next({"method": method, "url": url, **kwargs})

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        return self._next({"method": "GET", "url": url, **kwargs})


class FakeTwitchClient:
    """In-memory Twitch: a set of accepted access tokens and a log of every call."""

    def __init__(
        self,
        valid_tokens: tuple[str, ...] = ("access-1",),
        refreshed: Optional[TokenPair] = None,
        refresh_error: Optional[Exception] = None,
        games: Optional[dict[str, list[str]]] = None,
        edit_error: Optional[Exception] = None,
    ) -> None:
        self.user_access_token = ""
        self.valid_tokens = set(valid_tokens)
        self.refreshed = refreshed or TokenPair(access_token="access-2", refresh_token="refresh-2")
        self.refresh_error = refresh_error
        self.games = games or {}
        self.edit_error = edit_error
        self.on_edit: Optional[Callable[[], None]] = None
        self.calls: list[tuple] = []
        self.edits: list[dict[str, str]] = []

    def authorization_url(self, scopes, state: str = "") -> str:
        return f"https://id.twitch.tv/oauth2/authorize?state={state}"

    def request_user_access_token(self, code: str) -> TokenPair:
        self.calls.append(("exchange", code))
        pair = TokenPair(access_token=f"access-{code}", refresh_token=f"refresh-{code}")
        self.valid_tokens.add(pair.access_token)
        return pair

    def validate_token(self, access_token: str) -> Optional[TokenValidation]:
        self.calls.append(("validate", access_token))
        if access_token not in self.valid_tokens:
            return None
        return TokenValidation(client_id="cid", login="streamer", user_id=BROADCASTER_ID)

    def refresh_user_access_token(self, refresh_token: str) -> TokenPair:
        self.calls.append(("refresh", refresh_token))
        if self.refresh_error is not None:
            raise self.refresh_error
        self.valid_tokens.add(self.refreshed.access_token)
        return self.refreshed

    def get_games(self, names) -> list[Game]:
        names = list(names)
        self.calls.append(("get_games", names))
        ids = self.games.get(names[0], [])
        return [Game(id=game_id, name=names[0]) for game_id in ids]

    def edit_channel_information(self, broadcaster_id: str, title: str, game_id: str = "") -> None:
        self.calls.append(("edit", broadcaster_id, title, game_id))
        if self.on_edit is not None:
            self.on_edit()
        if self.edit_error is not None:
            raise self.edit_error
        self.edits.append(
            {
                "broadcaster_id": broadcaster_id,
                "title": title,
                "game_id": game_id,
                "token": self.user_access_token,
            }
        )

    def names(self) -> list[str]:
        return [c[0] for c in self.calls]


@pytest.fixture
def state_path(tmp_path):
    return tmp_path / "state.json"


@pytest.fixture
def session(state_path):
    return Session(SessionRecord(access_token="access-1", refresh_token="refresh-1"), state_path)


@pytest.fixture
def twitch():
    client = FakeTwitchClient()
    client.user_access_token = "access-1"
    return client


@pytest.fixture
def auth(twitch, session):
    return AuthorizationFlow(twitch, session, open_browser=lambda url: None)


@pytest.fixture
def template():
    return TitleTemplate.parse("{title} | {game_name}")
