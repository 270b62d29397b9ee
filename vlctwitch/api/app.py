"""One-shot FastAPI app and uvicorn server for the Twitch OAuth redirect."""
import logging
import socket
import threading
from typing import Optional

import uvicorn
from fastapi import FastAPI

from vlctwitch.api.routes import twitch
from vlctwitch.api.state import CallbackState

logger = logging.getLogger(__name__)

SERVER_STOP_TIMEOUT_SEC = 5.0


def create_callback_app(callback: CallbackState) -> FastAPI:
    app = FastAPI(
        title="vlctwitch OAuth callback",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.callback = callback
    app.include_router(twitch.router, tags=["twitch"])
    return app


class CallbackServer:
    """Serve app on host:port in a background thread until stopped.

    The socket is bound in start() so a busy port fails before the browser
    is opened.
    """

    def __init__(self, app: FastAPI, host: str, port: int) -> None:
        self._app = app
        self._host = host
        self._port = port
        self._sock: Optional[socket.socket] = None
        self._server: Optional[uvicorn.Server] = None
        self._thread: Optional[threading.Thread] = None

    def start(self) -> None:
        self._sock = socket.create_server((self._host, self._port))
        config = uvicorn.Config(self._app, log_level="warning", access_log=False)
        self._server = uvicorn.Server(config)
        self._thread = threading.Thread(
            target=self._server.run,
            kwargs={"sockets": [self._sock]},
            name="oauth-callback",
            daemon=True,
        )
        self._thread.start()
        logger.info("Waiting for Twitch redirect on http://%s:%d", self._host, self._port)

    def stop(self) -> None:
        if self._server is not None:
            self._server.should_exit = True
        if self._thread is not None:
            self._thread.join(timeout=SERVER_STOP_TIMEOUT_SEC)
            self._thread = None
        if self._sock is not None:
            self._sock.close()
            self._sock = None
        logger.debug("OAuth callback server stopped")
