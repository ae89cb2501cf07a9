# db_implementations/sqlite_implementation.py
import os
import sqlite3
import datetime
import logging
import shutil
from typing import List, Optional, Iterable
from contextlib import contextmanager
from models.show import Show
from models.episode import Episode, EpisodeRecord
from models.resolution import Resolution
from services.db_implementations.db_interface import DatabaseInterface

logger = logging.getLogger(__name__)

_EPISODE_COLUMNS = "e.id, e.show_id, e.title, e.episode, e.version, e.watched, e.resolution, e.torrent_link, e.fetched_at"

class SQLiteDBService(DatabaseInterface):
    """
    SQLite implementation of the DatabaseInterface for AnimeWatch.

    Every operation opens its own short-lived connection, so one instance can be shared
    between the feed watcher thread and the foreground commands.

    Attributes:
        db_file (str): Path to the SQLite database file.
        read_only (bool): Whether write operations are refused.
    """

    def __init__(self, db_file: str, read_only: bool = False) -> None:
        """Initialize the repository with a database file path.

        Args:
            db_file: Path to the SQLite database file
            read_only: If True, database will be opened in read-only mode
        """
        self.db_file = db_file
        self.read_only = read_only
        self._register_sqlite_datetime_adapters()

    @contextmanager
    def _connection(self):
        """Context manager to get a connection to the database."""
        try:
            if self.read_only:
                # For read-only mode, try URI mode first, fallback to regular mode
                try:
                    uri = f"file:{self.db_file}?mode=ro"
                    conn = sqlite3.connect(uri, uri=True, detect_types=sqlite3.PARSE_DECLTYPES, timeout=10.0)
                except sqlite3.OperationalError:
                    conn = sqlite3.connect(self.db_file, detect_types=sqlite3.PARSE_DECLTYPES, timeout=10.0)
            else:
                conn = sqlite3.connect(self.db_file, detect_types=sqlite3.PARSE_DECLTYPES, timeout=10.0)
        except sqlite3.Error as e:
            logger.exception(f"Failed to connect to database {self.db_file}: {e}")
            raise

        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        try:
            yield conn
            if not self.read_only:
                conn.commit()
        except sqlite3.Error as e:
            logger.exception(f"Error in database operation: {e}")
            if not self.read_only:
                conn.rollback()
            raise
        finally:
            conn.close()

    def __str__(self):
        """Return a string representation of the repository."""
        return f"SQLiteDBService(db_file={self.db_file})"

    @staticmethod
    def _datetime_to_iso(dt):
        """Convert a datetime object to ISO format string."""
        return dt.isoformat()

    @staticmethod
    def _iso_to_datetime(iso_str):
        """Convert an ISO format string to a datetime object."""
        if isinstance(iso_str, bytes):
            try:
                iso_str = iso_str.decode("utf-8")
            except UnicodeDecodeError:
                raise ValueError("Invalid byte sequence for datetime conversion")
        return datetime.datetime.fromisoformat(iso_str)

    def _register_sqlite_datetime_adapters(self):
        """Register SQLite adapter and converter for datetime handling."""
        try:
            sqlite3.register_adapter(datetime.datetime, self._datetime_to_iso)
            sqlite3.register_converter("DATETIME", self._iso_to_datetime)
        except sqlite3.Error as e:
            logger.exception(f"Error registering SQLite adapters: {e}")

    def _check_database_path(self) -> None:
        """Create the database file's directory if needed."""
        logger.debug(f"Resolved DB path: {os.path.abspath(self.db_file)}")
        db_dir = os.path.dirname(self.db_file)
        if db_dir and not os.path.isdir(db_dir):
            os.makedirs(db_dir, exist_ok=True)
            logger.info(f"Created database directory: {db_dir}")

    def _require_writable(self, operation: str) -> None:
        if self.read_only:
            raise PermissionError(f"Cannot {operation}: database is in read-only mode")

    def _create_table_shows(self, conn: sqlite3.Connection) -> None:
        conn.execute('''CREATE TABLE IF NOT EXISTS shows (
                            id INTEGER PRIMARY KEY AUTOINCREMENT,
                            title TEXT NOT NULL UNIQUE,
                            subscribed BOOLEAN NOT NULL DEFAULT 0)''')

    def _create_table_episodes(self, conn: sqlite3.Connection) -> None:
        conn.execute('''CREATE TABLE IF NOT EXISTS episodes (
                            id INTEGER PRIMARY KEY AUTOINCREMENT,
                            show_id INTEGER NOT NULL,
                            title TEXT NOT NULL,
                            episode TEXT NOT NULL,
                            version TEXT NOT NULL DEFAULT '',
                            watched BOOLEAN NOT NULL DEFAULT 0,
                            resolution TEXT NOT NULL,
                            torrent_link TEXT NOT NULL,
                            fetched_at DATETIME,
                            CONSTRAINT unique_episode UNIQUE (show_id, episode, resolution),
                            CONSTRAINT FK_episodes_shows FOREIGN KEY (show_id) REFERENCES shows(id))''')
        conn.execute("CREATE INDEX IF NOT EXISTS idx_episodes_watched ON episodes(watched, resolution)")

    def initialize(self) -> None:
        """Initialize the database schema by creating necessary tables if they don't exist."""
        if self.read_only:
            logger.info("Skipping database initialization in read-only mode")
            return
        self._check_database_path()
        with self._connection() as conn:
            self._create_table_shows(conn)
            self._create_table_episodes(conn)
        logger.info("Database initialized successfully")

    def insert_show_titles(self, titles: Iterable[str]) -> int:
        """Insert show titles, ignoring ones already stored."""
        self._require_writable("insert shows")
        inserted = 0
        with self._connection() as conn:
            for title in titles:
                title = (title or "").strip()
                if not title:
                    continue
                cursor = conn.execute("INSERT OR IGNORE INTO shows (title) VALUES (?)", (title,))
                inserted += cursor.rowcount
        logger.info(f"Inserted {inserted} new shows.")
        return inserted

    def get_shows(self, subscribed: Optional[bool] = None) -> List[Show]:
        """Return shows ordered by title, optionally filtered by subscription state."""
        with self._connection() as conn:
            if subscribed is None:
                cursor = conn.execute("SELECT id, title, subscribed FROM shows ORDER BY title COLLATE NOCASE")
            else:
                cursor = conn.execute(
                    "SELECT id, title, subscribed FROM shows WHERE subscribed = ? ORDER BY title COLLATE NOCASE",
                    (1 if subscribed else 0,),
                )
            shows = [Show.from_db_record(dict(row)) for row in cursor.fetchall()]
        logger.debug(f"Fetched {len(shows)} shows (subscribed={subscribed})")
        return shows

    def get_show_by_id(self, show_id: int) -> Optional[Show]:
        """Get a show by its database ID."""
        with self._connection() as conn:
            row = conn.execute("SELECT id, title, subscribed FROM shows WHERE id = ?", (show_id,)).fetchone()
        return Show.from_db_record(dict(row)) if row else None

    def get_show_by_title(self, title: str) -> Optional[Show]:
        """Get a show by its exact title, ignoring surrounding whitespace."""
        with self._connection() as conn:
            row = conn.execute(
                "SELECT id, title, subscribed FROM shows WHERE title = ?", ((title or "").strip(),)
            ).fetchone()
        return Show.from_db_record(dict(row)) if row else None

    def _set_subscribed(self, show_id: int, subscribed: bool) -> None:
        self._require_writable("change subscriptions")
        with self._connection() as conn:
            cursor = conn.execute("UPDATE shows SET subscribed = ? WHERE id = ?", (1 if subscribed else 0, show_id))
            if cursor.rowcount == 0:
                raise KeyError(f"No show with id {show_id}")
        logger.info(f"Show {show_id} subscribed={subscribed}")

    def subscribe_to_show(self, show_id: int) -> None:
        self._set_subscribed(show_id, True)

    def unsubscribe_from_show(self, show_id: int) -> None:
        self._set_subscribed(show_id, False)

    def insert_episode(self, show_id: int, episode: Episode, watched: bool = False) -> Optional[EpisodeRecord]:
        """Insert an episode; a key that already exists is ignored and None is returned."""
        self._require_writable("insert episodes")
        fetched_at = datetime.datetime.now()
        with self._connection() as conn:
            cursor = conn.execute('''
                INSERT OR IGNORE INTO episodes (
                    show_id, title, episode, version, watched, resolution, torrent_link, fetched_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            ''', (
                show_id,
                episode.title,
                episode.episode,
                episode.version,
                1 if watched else 0,
                episode.resolution.value,
                episode.torrent_link,
                fetched_at,
            ))
            if cursor.rowcount == 0:
                logger.debug(f"Episode already stored: {episode.formatted_title()} [{episode.resolution}]")
                return None
            episode_id = cursor.lastrowid

        logger.info(f"Inserted episode {episode.formatted_title()} [{episode.resolution}]")
        return EpisodeRecord(
            id=episode_id,
            show_id=show_id,
            title=episode.title,
            episode=episode.episode,
            version=episode.version,
            resolution=episode.resolution,
            torrent_link=episode.torrent_link,
            watched=watched,
            fetched_at=fetched_at,
        )

    def get_episode_by_id(self, episode_id: int) -> Optional[EpisodeRecord]:
        with self._connection() as conn:
            row = conn.execute(f"SELECT {_EPISODE_COLUMNS} FROM episodes AS e WHERE e.id = ?", (episode_id,)).fetchone()
        return EpisodeRecord.from_db_record(dict(row)) if row else None

    def get_episodes_for_show(self, show_id: int, resolution: Resolution) -> List[EpisodeRecord]:
        """Return a subscribed show's episodes in the given resolution, in episode order."""
        with self._connection() as conn:
            cursor = conn.execute(f'''
                SELECT {_EPISODE_COLUMNS}
                FROM shows AS s
                    JOIN episodes AS e ON s.id = e.show_id
                WHERE s.subscribed = 1
                    AND s.id = ?
                    AND e.resolution = ?
            ''', (show_id, Resolution.parse(resolution).value))
            episodes = [EpisodeRecord.from_db_record(dict(row)) for row in cursor.fetchall()]
        logger.debug(f"Fetched {len(episodes)} episodes for show_id={show_id}")
        return sorted(episodes)

    def get_new_episodes(self, resolution: Resolution) -> List[EpisodeRecord]:
        """Return unwatched episodes of subscribed shows, grouped by show title in episode order."""
        with self._connection() as conn:
            cursor = conn.execute(f'''
                SELECT {_EPISODE_COLUMNS}
                FROM shows AS s
                    JOIN episodes AS e ON s.id = e.show_id
                WHERE s.subscribed = 1
                    AND e.watched = 0
                    AND e.resolution = ?
            ''', (Resolution.parse(resolution).value,))
            episodes = [EpisodeRecord.from_db_record(dict(row)) for row in cursor.fetchall()]
        logger.debug(f"Fetched {len(episodes)} unwatched episodes")
        return sorted(episodes, key=lambda ep: (ep.title.lower(), ep.sort_key))

    def flag_episode_as_watched(self, episode_id: int) -> bool:
        self._require_writable("flag episodes")
        with self._connection() as conn:
            cursor = conn.execute("UPDATE episodes SET watched = 1 WHERE id = ?", (episode_id,))
            updated = cursor.rowcount > 0
        if updated:
            logger.info(f"Episode {episode_id} flagged as watched")
        else:
            logger.warning(f"No episode with id {episode_id} to flag as watched")
        return updated

    def backup_database(self) -> str:
        """
        Creates a backup of the SQLite database file.
        The backup is stored in a 'backups' directory next to the db file,
        with a timestamp in the filename.
        """
        if not self.db_file or not os.path.exists(self.db_file):
            raise FileNotFoundError("Database file not found.")

        timestamp = datetime.datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
        db_dir = os.path.dirname(os.path.abspath(self.db_file))
        backup_dir = os.path.join(db_dir, "backups")
        os.makedirs(backup_dir, exist_ok=True)

        db_filename = os.path.basename(self.db_file)
        backup_filename = f"{os.path.splitext(db_filename)[0]}_{timestamp}.db"
        backup_path = os.path.join(backup_dir, backup_filename)

        shutil.copy2(self.db_file, backup_path)
        logger.info(f"SQLite database backed up to {backup_path}")
        return backup_path

    def is_read_only(self) -> bool:
        return self.read_only
