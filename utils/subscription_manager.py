"""
Subscription workflows: seeding shows from the season listing and subscribing with a backfill.
"""
import logging
from typing import Iterable, List, Optional

from models.episode import EpisodeRecord
from models.resolution import Resolution
from models.show import Show
from services.db_implementations.db_interface import DatabaseInterface
from services.feed_service import FeedService
from services.notification_service import EpisodeOrigin
from services.season_service import SeasonService
from utils.reconciler import reconcile_episodes, Notifier

logger = logging.getLogger(__name__)


def seed_shows(db: DatabaseInterface, season_service: SeasonService, dry_run: bool = False) -> int:
    """
    Add the current season's shows to the store. Shows already stored are left untouched.

    Returns:
        int: Number of shows added (titles found, in dry-run mode).
    """
    titles = season_service.fetch_current_season_titles()
    if dry_run:
        logger.info(f"Dry run: would insert up to {len(titles)} shows")
        return len(titles)
    return db.insert_show_titles(titles)


def subscribe_and_backfill(
    db: DatabaseInterface,
    feed_service: FeedService,
    show: Show,
    preferred_resolution: Resolution,
    notifier: Optional[Notifier] = None,
) -> List[EpisodeRecord]:
    """
    Subscribe to a show and store the episodes already released for it.

    Backfilled episodes are stored as watched, so only releases that arrive later show up
    as new episodes.

    Args:
        db (DatabaseInterface): Episode store.
        feed_service (FeedService): Feed client used for the show's search feed.
        show (Show): Show to subscribe to (must be stored).
        preferred_resolution (Resolution): Resolution the user watches in.
        notifier (Optional[Notifier]): Receives backfill announcements.

    Returns:
        List[EpisodeRecord]: Episodes stored by the backfill.

    Raises:
        FeedError: If the search feed cannot be fetched. The subscription is kept.
    """
    db.subscribe_to_show(show.id)
    logger.info(f"Subscribed to {show.title}")

    episodes = feed_service.fetch_show_episodes(show.title)
    return reconcile_episodes(
        db,
        episodes,
        watched=True,
        preferred_resolution=preferred_resolution,
        origin=EpisodeOrigin.BACKFILL,
        notifier=notifier,
    )


def resolve_shows(db: DatabaseInterface, titles: Iterable[str]) -> List[Show]:
    """
    Look up stored shows by title, case-insensitively.

    Raises:
        KeyError: Naming the first title that matches no stored show.
    """
    by_title = {show.title.lower(): show for show in db.get_shows()}
    shows = []
    for title in titles:
        show = db.get_show_by_title(title) or by_title.get(title.strip().lower())
        if show is None:
            raise KeyError(title)
        shows.append(show)
    return shows
