"""
Release title parsing for AnimeWatch.

Feed items are titled `[<subber>] <show title> - <episode>[.<part>] [<resolution>]<version>`,
for example "[Subs] Show Name - 12 [720p]" or "[Subs] Show Name - 12.5 [1080p]v2".
"""
import re
import logging
from dataclasses import dataclass
from typing import Optional

from models.episode import Episode, episode_sort_key
from models.resolution import Resolution
from utils.errors import ParseError

logger = logging.getLogger(__name__)

__all__ = ["ParsedTitle", "ParseError", "parse_title", "parse_feed_item", "episode_sort_key"]

TITLE_PATTERN = re.compile(
    r"^\s*\[(?P<subber>[^\]]+)\]\s*"
    r"(?P<title>.+?)\s+-\s+"
    r"(?P<episode>\d{1,4}(?:\.\d+)?)(?P<inner_version>v\d+)?\s*"
    r"\[(?P<resolution>[^\]]+)\]"
    r"(?P<version>v\d+)?",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class ParsedTitle:
    """Structured fields of a release title."""
    subber: str
    title: str
    episode: str
    resolution: Resolution
    version: str = ""


def parse_title(raw: str) -> ParsedTitle:
    """
    Parse a raw release title into its fields.

    Args:
        raw (str): Release title as published in the feed.

    Returns:
        ParsedTitle: Parsed fields. A missing version tag is "".

    Raises:
        ParseError: If the title does not match the grammar or carries an unknown resolution.
    """
    if not raw or not raw.strip():
        raise ParseError("Empty release title")

    match = TITLE_PATTERN.match(raw)
    if not match:
        raise ParseError(f"Release title does not match the expected format: {raw!r}")

    title = match.group("title").strip()
    if not title:
        raise ParseError(f"Release title has no show title: {raw!r}")

    resolution = Resolution.parse(match.group("resolution"))
    version = (match.group("version") or match.group("inner_version") or "").lower()

    parsed = ParsedTitle(
        subber=match.group("subber").strip(),
        title=title,
        episode=match.group("episode"),
        resolution=resolution,
        version=version,
    )
    logger.debug(f"Parsed: Title={parsed.title}, Episode={parsed.episode}, Resolution={parsed.resolution}, Version={parsed.version!r}")
    return parsed


def parse_feed_item(title: str, link: Optional[str]) -> Episode:
    """
    Build an Episode from a feed item's title and link.

    Args:
        title (str): Item title.
        link (Optional[str]): Item link (the torrent).

    Returns:
        Episode: Parsed episode.

    Raises:
        ParseError: If the title does not parse or the item has no link.
    """
    parsed = parse_title(title)
    if not link or not link.strip():
        raise ParseError(f"Feed item has no link: {title!r}")

    return Episode(
        title=parsed.title,
        episode=parsed.episode,
        resolution=parsed.resolution,
        version=parsed.version,
        torrent_link=link.strip(),
    )
