"""Decide whether the Twitch channel needs updating for the current VLC track, and do it."""
import logging
from typing import Any

from vlctwitch.core.authorization import AuthorizationFlow
from vlctwitch.core.session import Session
from vlctwitch.core.title_template import TitleTemplate
from vlctwitch.core.twitch_client import TwitchClient
from vlctwitch.models.playback import PlaybackSnapshot

logger = logging.getLogger(__name__)


def resolve_game_id(client: TwitchClient, game_name: str) -> str:
    """Return the id of the first game matching game_name, or "" if none."""
    if not game_name:
        return ""
    games = client.get_games([game_name])
    if not games:
        logger.debug("Sync: no Twitch category named %r", game_name)
        return ""
    return games[0].id


def sync_channel_to_playback(
    snapshot: PlaybackSnapshot,
    session: Session,
    client: TwitchClient,
    auth: AuthorizationFlow,
    title_template: TitleTemplate,
) -> dict[str, Any]:
    """Push the playing track to the channel title/category if it changed.

    Paused or stopped VLC leaves the channel as it is. A title equal to the
    last one pushed is a no-op, so a poll firing mid-song never repeats the
    update. The last-synced fields only move after Twitch accepted the edit;
    any failure raises and the next cycle retries the same update.

    Returns a dict with ok and reason, plus title and game_id when updated.
    """
    if not snapshot.playing:
        logger.debug("Sync: not playing, leaving channel as is")
        return {"ok": False, "reason": "not_playing"}

    if snapshot.title == session.last_title:
        logger.debug("Sync: %r already synced", snapshot.title)
        return {"ok": False, "reason": "unchanged"}

    broadcaster_id = auth.ensure_valid_token()
    game_id = resolve_game_id(client, snapshot.album)
    title = title_template.render(title=snapshot.title, game_name=snapshot.album)

    logger.debug("Updating channel information...")
    client.edit_channel_information(broadcaster_id, title=title, game_id=game_id)
    session.mark_synced(snapshot.title, snapshot.album)

    logger.info("Channel updated: %r (category %s)", title, game_id or "none")
    return {"ok": True, "reason": "updated", "title": title, "game_id": game_id}
