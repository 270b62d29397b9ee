"""Entry: authorize with Twitch, start VLC, then mirror the playing track into the channel."""
import logging
import sys
import threading
from functools import partial
from typing import Optional

from vlctwitch import config
from vlctwitch.core.authorization import AuthorizationFlow
from vlctwitch.core.channel_sync import sync_channel_to_playback
from vlctwitch.core.launcher import launch_player
from vlctwitch.core.player_status import fetch_snapshot
from vlctwitch.core.poll_loop import poll_forever
from vlctwitch.core.session import Session
from vlctwitch.core.title_template import TitleTemplate
from vlctwitch.core.twitch_client import TwitchClient
from vlctwitch.errors import AuthorizationError, StartupError

logger = logging.getLogger("vlctwitch")


def refresh(
    session: Session,
    client: TwitchClient,
    auth: AuthorizationFlow,
    title_template: TitleTemplate,
) -> dict:
    """One poll cycle: read VLC, then sync the channel."""
    snapshot = fetch_snapshot(
        url=config.VLC_STATUS_URL,
        password=config.VLC_PASSWORD,
        timeout=config.HTTP_TIMEOUT_SEC,
    )
    return sync_channel_to_playback(snapshot, session, client, auth, title_template)


def startup() -> tuple[Session, TwitchClient, AuthorizationFlow, TitleTemplate]:
    """Everything that must succeed before polling. Raises StartupError or AuthorizationError."""
    config.ensure_data_dir()
    session = Session.load(config.STATE_PATH)

    config.require_twitch_credentials()
    title_template = TitleTemplate.parse(config.TITLE_TEMPLATE)

    client = TwitchClient(
        client_id=config.TWITCH_CLIENT_ID,
        client_secret=config.TWITCH_CLIENT_SECRET,
        redirect_uri=config.TWITCH_REDIRECT_URI,
        user_access_token=session.access_token,
        timeout=config.HTTP_TIMEOUT_SEC,
    )
    auth = AuthorizationFlow(client, session)
    if not session.is_authenticated:
        auth.begin_authorization()

    if config.VLC_LAUNCH:
        launch_player(config.VLC_COMMAND, config.VLC_PASSWORD)
    return session, client, auth, title_template


def main(stop_event: Optional[threading.Event] = None) -> int:
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL, logging.INFO),
        format="%(levelname)s: %(name)s: %(message)s",
    )
    try:
        session, client, auth, title_template = startup()
    except (StartupError, AuthorizationError) as e:
        logger.critical("Startup failed: %s", e)
        return 1

    logger.info("Polling VLC every %.0fs", config.POLL_INTERVAL_SEC)
    try:
        poll_forever(
            partial(refresh, session, client, auth, title_template),
            config.POLL_INTERVAL_SEC,
            stop_event,
        )
    except KeyboardInterrupt:
        logger.info("Stopped")
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
