"""Exception hierarchy. Startup errors end the process; the rest skip one poll cycle."""


class VlcTwitchError(Exception):
    """Base class for all vlctwitch errors."""


class StartupError(VlcTwitchError):
    """Unrecoverable problem while starting (config, state file, template, client, VLC)."""


class SessionStoreError(StartupError):
    """State file exists but cannot be read as a session record."""


class TitleTemplateError(StartupError):
    """Channel title template is invalid or rendered to nothing."""


class AuthorizationError(VlcTwitchError):
    """OAuth authorization did not produce a usable token."""


class AuthorizationTimeout(AuthorizationError):
    """Nobody completed the browser flow before the callback listener gave up."""


class TokenRefreshError(AuthorizationError):
    """Refresh token was rejected; re-authorization is required."""


class PlayerStatusError(VlcTwitchError):
    """VLC status could not be read."""


class PlayerUnavailableError(PlayerStatusError, ConnectionError):
    """VLC is not running, not reachable, or refused the request."""


class PlayerStatusDecodeError(PlayerStatusError, ValueError):
    """VLC answered with something other than a JSON object."""


class TwitchAPIError(VlcTwitchError):
    """Twitch answered with an error status or could not be reached."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
