from abc import ABC, abstractmethod
from typing import List, Optional, Iterable
import logging
from models.show import Show
from models.episode import Episode, EpisodeRecord
from models.resolution import Resolution

logger = logging.getLogger(__name__)

class DatabaseInterface(ABC):
    """
    Abstract base class defining the interface for database operations in AnimeWatch.

    All subclasses must implement methods for initializing the database, seeding and subscribing
    to shows, and storing and querying episodes.

    Methods:
        initialize(): Initialize the database schema.
        insert_show_titles(titles): Insert show titles, ignoring ones already stored.
        get_shows(subscribed): Get shows, optionally filtered by subscription state.
        get_show_by_id(show_id): Get a show by its database ID.
        get_show_by_title(title): Get a show by its exact title.
        subscribe_to_show(show_id): Mark a show as subscribed.
        unsubscribe_from_show(show_id): Mark a show as not subscribed.
        insert_episode(show_id, episode, watched): Insert an episode unless its key is already stored.
        get_episode_by_id(episode_id): Get a stored episode by its database ID.
        get_episodes_for_show(show_id, resolution): Get stored episodes of a subscribed show.
        get_new_episodes(resolution): Get unwatched episodes of subscribed shows.
        flag_episode_as_watched(episode_id): Mark an episode as watched.
        backup_database(): Backup the database.
        is_read_only(): Check if database is in read-only mode.
    """

    @abstractmethod
    def initialize(self) -> None:
        """Initialize the database schema."""
        pass

    @abstractmethod
    def insert_show_titles(self, titles: Iterable[str]) -> int:
        """Insert show titles, ignoring existing ones. Returns the number of new shows."""
        pass

    @abstractmethod
    def get_shows(self, subscribed: Optional[bool] = None) -> List[Show]:
        """Get shows, all of them when subscribed is None."""
        pass

    @abstractmethod
    def get_show_by_id(self, show_id: int) -> Optional[Show]:
        """Get a show by its database ID."""
        pass

    @abstractmethod
    def get_show_by_title(self, title: str) -> Optional[Show]:
        """Get a show by its exact title."""
        pass

    @abstractmethod
    def subscribe_to_show(self, show_id: int) -> None:
        """Mark a show as subscribed."""
        pass

    @abstractmethod
    def unsubscribe_from_show(self, show_id: int) -> None:
        """Mark a show as not subscribed."""
        pass

    @abstractmethod
    def insert_episode(self, show_id: int, episode: Episode, watched: bool = False) -> Optional[EpisodeRecord]:
        """
        Insert an episode unless (show_id, episode, resolution) is already stored.
        Returns the new record, or None when the key already existed.
        """
        pass

    @abstractmethod
    def get_episode_by_id(self, episode_id: int) -> Optional[EpisodeRecord]:
        """Get a stored episode by its database ID."""
        pass

    @abstractmethod
    def get_episodes_for_show(self, show_id: int, resolution: Resolution) -> List[EpisodeRecord]:
        """Get stored episodes of a subscribed show in the given resolution."""
        pass

    @abstractmethod
    def get_new_episodes(self, resolution: Resolution) -> List[EpisodeRecord]:
        """Get unwatched episodes of subscribed shows in the given resolution."""
        pass

    @abstractmethod
    def flag_episode_as_watched(self, episode_id: int) -> bool:
        """Mark an episode as watched. Returns False if no such episode exists."""
        pass

    @abstractmethod
    def backup_database(self) -> str:
        """
        Backs up the database.
        Returns the path or identifier of the backup.
        """
        pass

    @abstractmethod
    def is_read_only(self) -> bool:
        """Check if database is in read-only mode."""
        pass
