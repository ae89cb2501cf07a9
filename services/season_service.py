"""
Season listing scraper: reads the current season's show titles from an HTML page.
"""
import logging
from typing import List

import requests
from bs4 import BeautifulSoup

from utils.errors import SeasonListError
from utils.animewatch_config import DEFAULT_SEASON_SELECTOR, DEFAULT_HTTP_TIMEOUT

logger = logging.getLogger(__name__)

# Typographic characters the listing uses that never appear in feed titles
_CHARACTER_REPLACEMENTS = {
    "\u2013": "-",
    "\u2019": "'",
}


def extract_show_titles(html: str, selector: str = DEFAULT_SEASON_SELECTOR) -> List[str]:
    """
    Extract show titles from a season listing page.

    The first element matching the CSS selector holds one title per line.

    Args:
        html (str): Page markup.
        selector (str): CSS selector of the element wrapping the titles.

    Returns:
        List[str]: Titles in page order, stripped and without duplicates.

    Raises:
        SeasonListError: If no element matches the selector.
    """
    soup = BeautifulSoup(html, "html.parser")
    wrapper = soup.select_one(selector)
    if wrapper is None:
        raise SeasonListError(f"No element matches '{selector}' in the season listing")

    text = wrapper.get_text()
    for original, replacement in _CHARACTER_REPLACEMENTS.items():
        text = text.replace(original, replacement)

    titles = []
    seen = set()
    for line in text.splitlines():
        title = line.strip()
        if title and title not in seen:
            seen.add(title)
            titles.append(title)
    return titles


class SeasonService:
    """Fetches the current season's show titles."""

    def __init__(self, season_url: str, selector: str = DEFAULT_SEASON_SELECTOR, timeout: int = DEFAULT_HTTP_TIMEOUT):
        self.season_url = season_url
        self.selector = selector
        self.timeout = timeout

    def fetch_current_season_titles(self) -> List[str]:
        """
        Download the season listing and extract its show titles.

        Raises:
            SeasonListError: If the page cannot be fetched or has no show list.
        """
        logger.info(f"Fetching season listing: {self.season_url}")
        try:
            response = requests.get(self.season_url, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            logger.error(f"Error fetching season listing {self.season_url}: {e}")
            raise SeasonListError(f"Failed to fetch season listing {self.season_url}: {e}") from e

        titles = extract_show_titles(response.text, self.selector)
        logger.info(f"Found {len(titles)} shows in the season listing")
        return titles
