"""
Reconciles freshly parsed episodes with the store: decides which ones are new, stores them and announces them.
"""
import logging
from typing import Iterable, List, Optional, Protocol

from models.episode import Episode, EpisodeRecord
from models.resolution import Resolution
from services.db_implementations.db_interface import DatabaseInterface
from services.notification_service import EpisodeOrigin, NewEpisodeEvent

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    def notify(self, event: NewEpisodeEvent) -> None:
        ...


def reconcile_episodes(
    db: DatabaseInterface,
    episodes: Iterable[Episode],
    watched: bool,
    preferred_resolution: Resolution,
    origin: EpisodeOrigin = EpisodeOrigin.FEED,
    notifier: Optional[Notifier] = None,
) -> List[EpisodeRecord]:
    """
    Store the episodes that belong to subscribed shows and are not stored yet.

    Episodes of shows that are not subscribed, and episodes whose (show, episode, resolution)
    is already stored, are dropped without error. Each newly stored episode in the preferred
    resolution is announced once through the notifier. Safe to call with overlapping or
    repeated batches, including from the feed watcher and a subscription backfill at once:
    the store's unique constraint decides which caller inserts a key, and only that caller
    announces it.

    Args:
        db (DatabaseInterface): Episode store.
        episodes (Iterable[Episode]): Parsed episodes, in any order.
        watched (bool): Watched flag to store new episodes with.
        preferred_resolution (Resolution): Resolution the user watches in.
        origin (EpisodeOrigin): BACKFILL for a subscription backfill, FEED for the feed watcher.
        notifier (Optional[Notifier]): Receives a NewEpisodeEvent per announced episode.

    Returns:
        List[EpisodeRecord]: Episodes inserted by this call.
    """
    preferred_resolution = Resolution.parse(preferred_resolution)
    subscribed = {show.title: show.id for show in db.get_shows(subscribed=True)}
    if not subscribed:
        logger.debug("No subscribed shows; nothing to reconcile")
        return []

    inserted: List[EpisodeRecord] = []
    for episode in episodes:
        show_id = subscribed.get(episode.title.strip())
        if show_id is None:
            continue

        record = db.insert_episode(show_id, episode, watched=watched)
        if record is None:
            continue

        inserted.append(record)
        if notifier is not None and episode.resolution == preferred_resolution:
            notifier.notify(NewEpisodeEvent(episode=episode, origin=origin))

    if inserted:
        logger.info(f"Stored {len(inserted)} new episodes ({origin.value})")
    return inserted
