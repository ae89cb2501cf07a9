"""
RSS feed client for AnimeWatch: fetches release feeds and maps their items to parsed episodes.
"""
import hashlib
import logging
from dataclasses import dataclass, field
from typing import List, Optional
from urllib.parse import quote_plus

import feedparser
import requests

from models.episode import Episode
from utils.errors import FeedError, ParseError
from utils.title_parser import parse_feed_item
from utils.animewatch_config import DEFAULT_SEARCH_URL, DEFAULT_HTTP_TIMEOUT

logger = logging.getLogger(__name__)

USER_AGENT = "AnimeWatch/1.0 (+feed watcher)"


@dataclass(frozen=True)
class FeedItem:
    """Title and link of a single feed entry."""
    title: str
    link: Optional[str]


@dataclass(frozen=True)
class FeedSnapshot:
    """
    The items of one feed fetch.

    Attributes:
        url (str): Feed URL that was fetched.
        items (List[FeedItem]): Entries in feed order.
        fingerprint (str): SHA1 over the entries' titles and links, stable across fetches of an unchanged feed.
    """
    url: str
    items: List[FeedItem] = field(default_factory=list)
    fingerprint: str = ""


def _fingerprint(items: List[FeedItem]) -> str:
    digest = hashlib.sha1()
    for item in items:
        digest.update(item.title.encode("utf-8"))
        digest.update(b"\x1f")
        digest.update((item.link or "").encode("utf-8"))
        digest.update(b"\x1e")
    return digest.hexdigest()


class FeedService:
    """
    Service for fetching the release RSS feed and per-show search feeds.

    Methods:
        fetch(url): Fetch and decode a feed into a FeedSnapshot.
        episodes_from(snapshot): Parse a snapshot's items, skipping unparseable ones.
        fetch_episodes(url): Fetch a feed and parse its episodes.
        search_url_for(show_title): Build the search feed URL for a show.
        fetch_show_episodes(show_title): Fetch and parse the search feed for a show.
    """

    def __init__(self, feed_url: str, search_url_template: str = DEFAULT_SEARCH_URL, timeout: int = DEFAULT_HTTP_TIMEOUT):
        self.feed_url = feed_url
        self.search_url_template = search_url_template
        self.timeout = timeout

    def __str__(self):
        return f"FeedService(feed_url={self.feed_url})"

    def fetch(self, url: Optional[str] = None) -> FeedSnapshot:
        """
        Fetch a feed.

        Args:
            url (Optional[str]): Feed URL, the configured feed when None.

        Returns:
            FeedSnapshot: Entries of the feed.

        Raises:
            FeedError: If the request fails or the body is not a feed.
        """
        url = url or self.feed_url
        logger.debug(f"Fetching feed: {url}")
        try:
            response = requests.get(url, timeout=self.timeout, headers={"User-Agent": USER_AGENT})
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            logger.error(f"Error fetching feed {url}: {e}")
            raise FeedError(f"Failed to fetch feed {url}: {e}") from e

        parsed = feedparser.parse(response.content)
        if parsed.bozo and not parsed.entries:
            raise FeedError(f"Malformed feed at {url}: {parsed.get('bozo_exception')}")

        items = [
            FeedItem(title=(entry.get("title") or "").strip(), link=entry.get("link"))
            for entry in parsed.entries
        ]
        logger.debug(f"Fetched {len(items)} items from {url}")
        return FeedSnapshot(url=url, items=items, fingerprint=_fingerprint(items))

    def episodes_from(self, snapshot: FeedSnapshot) -> List[Episode]:
        """Parse a snapshot's items; items that do not parse are skipped."""
        episodes = []
        skipped = 0
        for item in snapshot.items:
            try:
                episodes.append(parse_feed_item(item.title, item.link))
            except ParseError as e:
                skipped += 1
                logger.debug(f"Skipping feed item: {e}")
        if skipped:
            logger.info(f"Skipped {skipped} unparseable items from {snapshot.url}")
        return episodes

    def fetch_episodes(self, url: Optional[str] = None) -> List[Episode]:
        return self.episodes_from(self.fetch(url))

    def search_url_for(self, show_title: str) -> str:
        return self.search_url_template.replace("{query}", quote_plus(show_title.strip()))

    def fetch_show_episodes(self, show_title: str) -> List[Episode]:
        """Fetch the search feed for a show, keeping only that show's episodes."""
        episodes = self.fetch_episodes(self.search_url_for(show_title))
        return [ep for ep in episodes if ep.title == show_title.strip()]
