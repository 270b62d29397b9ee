"""Twitch OAuth redirect target: exchange the code, then tell the user to close the tab."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from vlctwitch.api.state import CallbackState, get_callback_state
from vlctwitch.errors import AuthorizationError

logger = logging.getLogger(__name__)

router = APIRouter()

SUCCESS_PAGE = "<body><p>Connected to Twitch, you can close this page.</p></body>"


def _error_page(message: str, status_code: int) -> HTMLResponse:
    return HTMLResponse(f"<body><p>{message}</p></body>", status_code=status_code)


@router.get("/")
def twitch_callback(
    code: Optional[str] = None,
    state: Optional[str] = None,
    error: Optional[str] = None,
    error_description: Optional[str] = None,
    callback: CallbackState = Depends(get_callback_state),
):
    """Handle exactly one redirect from Twitch. Any outcome ends the authorization attempt."""
    if not callback.claim():
        return _error_page("Authorization already handled. You can close this page.", 409)

    if error:
        logger.warning("Twitch denied authorization: %s", error_description or error)
        callback.fail(AuthorizationError(f"Twitch denied authorization: {error_description or error}"))
        return _error_page("Twitch authorization was denied. Restart vlctwitch to try again.", 400)

    if callback.expected_state and state != callback.expected_state:
        callback.fail(AuthorizationError("OAuth state mismatch in Twitch callback"))
        return _error_page("Invalid authorization response. Restart vlctwitch to try again.", 400)

    if not code:
        callback.fail(AuthorizationError("Twitch callback did not include an authorization code"))
        return _error_page("Missing authorization code. Restart vlctwitch to try again.", 400)

    try:
        callback.exchange(code)
    except Exception as e:
        logger.error("Failed to exchange authorization code: %s", e)
        err = AuthorizationError(f"Failed to exchange authorization code: {e}")
        err.__cause__ = e
        callback.fail(err)
        return _error_page("Failed to connect to Twitch. Check the logs and try again.", 500)

    callback.succeed()
    return HTMLResponse(SUCCESS_PAGE)
