"""Twitch API client: OAuth endpoints on id.twitch.tv and the Helix calls we need."""
import logging
import urllib.parse
from typing import Any, Iterable, List, Optional

import requests
from pydantic import BaseModel, ValidationError

from vlctwitch.errors import StartupError, TwitchAPIError

logger = logging.getLogger(__name__)

OAUTH_BASE = "https://id.twitch.tv/oauth2"
HELIX_BASE = "https://api.twitch.tv/helix"


class TokenPair(BaseModel):
    """Response of the token endpoint (code exchange or refresh)."""
    access_token: str
    refresh_token: str
    expires_in: int = 0
    scope: List[str] = []
    token_type: str = "bearer"


class TokenValidation(BaseModel):
    """Response of /oauth2/validate for a user access token."""
    client_id: str
    login: str = ""
    user_id: str
    scopes: List[str] = []
    expires_in: int = 0


class Game(BaseModel):
    id: str
    name: str
    box_art_url: str = ""


class TwitchClient:
    """Thin synchronous wrapper around the Twitch endpoints used by the sync loop."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        user_access_token: str = "",
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        if not client_id or not client_secret:
            raise StartupError("Twitch client id and secret are required")
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.user_access_token = user_access_token
        self.timeout = timeout
        self._http = session or requests.Session()

    def authorization_url(self, scopes: Iterable[str], state: str = "") -> str:
        params = {
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "response_type": "code",
            "scope": " ".join(scopes),
        }
        if state:
            params["state"] = state
        return f"{OAUTH_BASE}/authorize?{urllib.parse.urlencode(params)}"

    # OAuth

    def request_user_access_token(self, code: str) -> TokenPair:
        """Exchange an authorization code for a token pair."""
        data = self._token_request(
            {
                "grant_type": "authorization_code",
                "code": code,
                "redirect_uri": self.redirect_uri,
            }
        )
        return self._parse(TokenPair, data)

    def refresh_user_access_token(self, refresh_token: str) -> TokenPair:
        data = self._token_request(
            {
                "grant_type": "refresh_token",
                "refresh_token": refresh_token,
            }
        )
        return self._parse(TokenPair, data)

    def validate_token(self, access_token: str) -> Optional[TokenValidation]:
        """Return token details, or None if Twitch says the token is invalid or expired."""
        if not access_token:
            return None
        resp = self._send(
            "GET",
            f"{OAUTH_BASE}/validate",
            headers={"Authorization": f"OAuth {access_token}"},
        )
        if resp.status_code == 401:
            return None
        self._raise_for_status(resp)
        return self._parse(TokenValidation, self._json(resp))

    # Helix

    def get_games(self, names: Iterable[str]) -> List[Game]:
        params = [("name", n) for n in names if n]
        if not params:
            return []
        resp = self._send("GET", f"{HELIX_BASE}/games", params=params, headers=self._helix_headers())
        self._raise_for_status(resp)
        items = self._json(resp).get("data") or []
        return [self._parse(Game, item) for item in items]

    def edit_channel_information(self, broadcaster_id: str, title: str, game_id: str = "") -> None:
        """PATCH the channel title and category. An empty game_id leaves the category unset."""
        body = {"title": title, "game_id": game_id}
        resp = self._send(
            "PATCH",
            f"{HELIX_BASE}/channels",
            params={"broadcaster_id": broadcaster_id},
            json=body,
            headers=self._helix_headers(),
        )
        self._raise_for_status(resp)

    # Internals

    def _helix_headers(self) -> dict[str, str]:
        return {
            "Client-Id": self.client_id,
            "Authorization": f"Bearer {self.user_access_token}",
        }

    def _token_request(self, form: dict[str, str]) -> dict[str, Any]:
        payload = {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            **form,
        }
        resp = self._send("POST", f"{OAUTH_BASE}/token", data=payload)
        self._raise_for_status(resp)
        return self._json(resp)

    def _send(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        try:
            return self._http.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise TwitchAPIError(f"{method} {url} failed: {e}") from e

    @staticmethod
    def _raise_for_status(resp: requests.Response) -> None:
        if 200 <= resp.status_code < 300:
            return
        message = ""
        try:
            body = resp.json()
            if isinstance(body, dict):
                message = body.get("message") or body.get("error") or ""
        except ValueError:
            message = (resp.text or "")[:200]
        raise TwitchAPIError(
            f"Twitch returned {resp.status_code}: {message or 'no details'}",
            status_code=resp.status_code,
        )

    @staticmethod
    def _json(resp: requests.Response) -> dict[str, Any]:
        try:
            data = resp.json()
        except ValueError as e:
            raise TwitchAPIError("Twitch returned a non-JSON body", resp.status_code) from e
        if not isinstance(data, dict):
            raise TwitchAPIError("Twitch returned an unexpected body", resp.status_code)
        return data

    @staticmethod
    def _parse(model, data):
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise TwitchAPIError(f"Unexpected Twitch response: {e}") from e
