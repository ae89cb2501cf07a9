"""
Episode models for AnimeWatch: parsed feed releases and their persisted records.
"""
import re
import datetime
from decimal import Decimal
import logging
from typing import Optional, Tuple
from pydantic import BaseModel, Field, ConfigDict, field_validator

from models.resolution import Resolution
from utils.errors import ParseError

logger = logging.getLogger(__name__)

_EPISODE_NUMBER_RE = re.compile(r"^(?P<whole>\d+)(?:\.(?P<part>\d*))?$")


def episode_sort_key(episode: str) -> Decimal:
    """
    Build a numeric ordering key for an episode number kept as text.

    The text is compared by its decimal value, so "2" sorts before "10",
    "10" before "10.25" and "10.25" before "10.5".

    Args:
        episode (str): Episode number text such as "12" or "12.5".

    Returns:
        Decimal: Numeric value of the episode number.

    Raises:
        ParseError: If the text is not an episode number.
    """
    match = _EPISODE_NUMBER_RE.match((episode or "").strip())
    if not match:
        raise ParseError(f"Not an episode number: {episode!r}")
    return Decimal(match.group(0))


class Episode(BaseModel):
    """
    Represents a single release parsed from the feed.

    Attributes:
        title (str): Show title.
        episode (str): Episode number as text (keeps split episodes like "12.5").
        resolution (Resolution): Release resolution.
        version (str): Release version tag such as "v2", empty when absent.
        torrent_link (str): Link to the release torrent.

    Methods:
        formatted_title(): Display title "<title> - <episode><version>".
        key: Uniqueness key (title, episode, resolution).
        sort_key: Episode-aware ordering key.
    """

    model_config = ConfigDict(
        frozen=True,
        extra='forbid'
    )

    title: str = Field(..., min_length=1, description="Show title")
    episode: str = Field(..., description="Episode number as text")
    resolution: Resolution = Field(..., description="Release resolution")
    version: str = Field("", description="Release version tag, empty when absent")
    torrent_link: str = Field(..., min_length=1, description="Link to the release torrent")

    @field_validator('resolution', mode='before')
    @classmethod
    def validate_resolution(cls, v):
        return Resolution.parse(v)

    @field_validator('version', mode='before')
    @classmethod
    def validate_version(cls, v):
        return v or ""

    @field_validator('episode')
    @classmethod
    def validate_episode(cls, v):
        episode_sort_key(v)
        return v.strip()

    @property
    def key(self) -> Tuple[str, str, Resolution]:
        return self.title, self.episode, self.resolution

    @property
    def sort_key(self) -> Tuple[Decimal, str]:
        return episode_sort_key(self.episode), self.version

    def formatted_title(self) -> str:
        return f"{self.title} - {self.episode}{self.version}"

    def __lt__(self, other: "Episode") -> bool:
        if not isinstance(other, Episode):
            return NotImplemented
        return self.sort_key < other.sort_key


class EpisodeRecord(Episode):
    """
    An episode as stored in the episodes table.

    Attributes:
        id (int): Database ID assigned on first insert.
        show_id (int): Database ID of the owning show.
        watched (bool): Whether the user has opened the episode.
        fetched_at (Optional[datetime.datetime]): When the episode was first stored.
    """

    id: int = Field(..., ge=1, description="Database ID")
    show_id: int = Field(..., ge=1, description="Database ID of the owning show")
    watched: bool = Field(False, description="Whether the episode has been opened")
    fetched_at: Optional[datetime.datetime] = Field(None, description="Record creation timestamp")

    @classmethod
    def from_db_record(cls, record: dict) -> "EpisodeRecord":
        """
        Construct an EpisodeRecord from a database row.

        Args:
            record (dict): Row from the episodes table.

        Returns:
            EpisodeRecord: Instantiated record.
        """
        return cls(
            id=record["id"],
            show_id=record["show_id"],
            title=record["title"],
            episode=record["episode"],
            version=record.get("version") or "",
            watched=bool(record["watched"]),
            resolution=record["resolution"],
            torrent_link=record["torrent_link"],
            fetched_at=record.get("fetched_at"),
        )

    def to_episode(self) -> Episode:
        """Drop the storage fields and return the plain parsed episode."""
        return Episode(
            title=self.title,
            episode=self.episode,
            resolution=self.resolution,
            version=self.version,
            torrent_link=self.torrent_link,
        )
