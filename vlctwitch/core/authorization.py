"""Twitch OAuth: first-run code exchange through a local callback, and token refresh.

Only this module writes tokens into the session, and it always sets the live
client credential right after the session has been saved.
"""
import logging
import secrets
from typing import Callable, Iterable, Optional

from vlctwitch.api.app import CallbackServer, create_callback_app
from vlctwitch.api.state import CallbackState
from vlctwitch.config import AUTH_TIMEOUT_SEC, CALLBACK_HOST, CALLBACK_PORT, TWITCH_SCOPES
from vlctwitch.core.launcher import open_url
from vlctwitch.core.session import Session
from vlctwitch.core.twitch_client import TwitchClient
from vlctwitch.errors import (
    AuthorizationError,
    AuthorizationTimeout,
    TokenRefreshError,
    TwitchAPIError,
)

logger = logging.getLogger(__name__)


class AuthorizationFlow:
    """Owns the path from 'no tokens' to 'valid access token for the broadcaster'."""

    def __init__(
        self,
        client: TwitchClient,
        session: Session,
        *,
        host: str = CALLBACK_HOST,
        port: int = CALLBACK_PORT,
        scopes: Iterable[str] = TWITCH_SCOPES,
        timeout: float = AUTH_TIMEOUT_SEC,
        open_browser: Callable[[str], None] = open_url,
    ) -> None:
        self.client = client
        self.session = session
        self.host = host
        self.port = port
        self.scopes = list(scopes)
        self.timeout = timeout
        self._open_browser = open_browser

    def exchange_code(self, code: str) -> None:
        """Trade a single-use authorization code for tokens and persist them."""
        pair = self.client.request_user_access_token(code)
        self._store_tokens(pair.access_token, pair.refresh_token)
        logger.info("Connected to Twitch")

    def begin_authorization(self) -> None:
        """Run the browser flow once. Blocks until the redirect arrives or the timeout expires."""
        oauth_state = secrets.token_urlsafe(16)
        callback = CallbackState(self.exchange_code, expected_state=oauth_state)
        server = CallbackServer(create_callback_app(callback), self.host, self.port)
        try:
            server.start()
        except OSError as e:
            raise AuthorizationError(
                f"Cannot listen for the Twitch redirect on {self.host}:{self.port}: {e}"
            ) from e
        try:
            url = self.client.authorization_url(self.scopes, state=oauth_state)
            try:
                self._open_browser(url)
            except AuthorizationError as e:
                # Still listening; the user can open the logged URL themselves.
                logger.warning("%s", e)
            wait_for: Optional[float] = self.timeout if self.timeout > 0 else None
            if not callback.wait(wait_for):
                raise AuthorizationTimeout(
                    f"No Twitch redirect received within {self.timeout:.0f}s"
                )
        finally:
            server.stop()
        if callback.error is not None:
            raise callback.error

    def ensure_valid_token(self) -> str:
        """Return the broadcaster id for a token Twitch currently accepts, refreshing if needed."""
        if not self.session.is_authenticated:
            raise AuthorizationError("Not connected to Twitch; restart to authorize")

        validation = self.client.validate_token(self.session.access_token)
        if validation is not None:
            return validation.user_id

        logger.info("Access token no longer valid, refreshing")
        try:
            pair = self.client.refresh_user_access_token(self.session.refresh_token)
        except TwitchAPIError as e:
            raise TokenRefreshError(
                f"Token refresh failed, re-authorization required: {e}"
            ) from e
        self._store_tokens(pair.access_token, pair.refresh_token)

        validation = self.client.validate_token(pair.access_token)
        if validation is None:
            raise TokenRefreshError("Refreshed access token was rejected by Twitch")
        logger.info("Access token refreshed")
        return validation.user_id

    def _store_tokens(self, access_token: str, refresh_token: str) -> None:
        self.session.set_tokens(access_token, refresh_token)
        self.client.user_access_token = access_token
