"""Shared state of the one-shot OAuth callback (injected into the route)."""
import threading
from typing import Callable, Optional

from fastapi import Request

from vlctwitch.errors import AuthorizationError


class CallbackState:
    """Holds the code handler and the outcome of the single callback request."""

    def __init__(self, exchange: Callable[[str], None], expected_state: str = "") -> None:
        self.exchange = exchange
        self.expected_state = expected_state
        self.error: Optional[AuthorizationError] = None
        self._done = threading.Event()
        self._lock = threading.Lock()
        self._claimed = False

    def claim(self) -> bool:
        """Return True for the first request only; later requests are turned away."""
        with self._lock:
            if self._claimed:
                return False
            self._claimed = True
            return True

    def succeed(self) -> None:
        self._done.set()

    def fail(self, error: AuthorizationError) -> None:
        self.error = error
        self._done.set()

    @property
    def done(self) -> bool:
        return self._done.is_set()

    def wait(self, timeout: Optional[float] = None) -> bool:
        return self._done.wait(timeout)


def get_callback_state(request: Request) -> CallbackState:
    return request.app.state.callback
