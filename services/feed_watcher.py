"""
Background feed watcher: polls the release feed and stores new episodes of subscribed shows.
"""
import logging
import queue
import threading
from typing import FrozenSet, List, Optional, Tuple

from models.episode import EpisodeRecord
from models.resolution import Resolution
from services.db_implementations.db_interface import DatabaseInterface
from services.feed_service import FeedService
from services.notification_service import EpisodeOrigin
from utils.animewatch_config import DEFAULT_POLL_INTERVAL, DEFAULT_RETRY_BACKOFF
from utils.reconciler import reconcile_episodes, Notifier

logger = logging.getLogger(__name__)


class FeedWatcher:
    """
    Polls the feed on a fixed interval in a daemon thread.

    A poll that fails for any reason is abandoned, its exception is put on the error
    channel (see drain_errors()) and the next poll runs after the retry backoff. There is
    no retry limit. stop() interrupts a pending wait.

    Attributes:
        poll_interval (float): Seconds between successful polls.
        retry_backoff (float): Seconds to wait after a failed poll.
    """

    def __init__(
        self,
        db: DatabaseInterface,
        feed_service: FeedService,
        preferred_resolution: Resolution,
        notifier: Optional[Notifier] = None,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        retry_backoff: float = DEFAULT_RETRY_BACKOFF,
    ):
        self.db = db
        self.feed_service = feed_service
        self.preferred_resolution = Resolution.parse(preferred_resolution)
        self.notifier = notifier
        self.poll_interval = poll_interval
        self.retry_backoff = retry_backoff

        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._errors: "queue.Queue[Exception]" = queue.Queue()
        self._last_seen: Optional[Tuple[str, FrozenSet[int]]] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def run_once(self) -> List[EpisodeRecord]:
        """
        Poll the feed once.

        Returns:
            List[EpisodeRecord]: Episodes stored by this poll; empty when neither the feed
            nor the set of subscribed shows changed since the last successful poll.

        Raises:
            FeedError: If the feed cannot be fetched.
        """
        snapshot = self.feed_service.fetch()
        # A new subscription can match items already in an unchanged feed
        subscribed = frozenset(show.id for show in self.db.get_shows(subscribed=True))
        seen = (snapshot.fingerprint, subscribed)
        if seen == self._last_seen:
            logger.debug("Feed and subscriptions unchanged since last poll")
            return []

        records = reconcile_episodes(
            self.db,
            self.feed_service.episodes_from(snapshot),
            watched=False,
            preferred_resolution=self.preferred_resolution,
            origin=EpisodeOrigin.FEED,
            notifier=self.notifier,
        )
        self._last_seen = seen
        return records

    def _run(self) -> None:
        logger.info(f"Feed watcher started (interval={self.poll_interval}s, backoff={self.retry_backoff}s)")
        while not self._stop_event.is_set():
            try:
                self.run_once()
                delay = self.poll_interval
            except Exception as e:
                logger.exception(f"Feed poll failed, retrying in {self.retry_backoff}s: {e}")
                self._errors.put(e)
                delay = self.retry_backoff
            self._stop_event.wait(delay)
        logger.info("Feed watcher stopped")

    def start(self) -> None:
        """Start polling in a daemon thread. Does nothing if already running."""
        if self.is_running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, daemon=True, name="feed-watcher")
        self._thread.start()

    def stop(self, timeout: Optional[float] = 5.0) -> None:
        """Ask the watcher to stop and wait for the current poll to finish."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    def drain_errors(self) -> List[Exception]:
        """Return and clear the errors raised by polls since the last call."""
        errors = []
        while True:
            try:
                errors.append(self._errors.get_nowait())
            except queue.Empty:
                return errors
