"""
Resolution model for AnimeWatch, the closed set of release resolutions the feed publishes.
"""
from enum import Enum
from typing import List

from utils.errors import ParseError


class Resolution(str, Enum):
    """Video resolution of a release."""
    SD = "480p"
    HD = "720p"
    FHD = "1080p"

    @classmethod
    def parse(cls, text: str) -> "Resolution":
        """
        Parse a resolution from its wire text (e.g. "720p").

        Args:
            text (str): Resolution text, case-insensitive, surrounding whitespace ignored.

        Returns:
            Resolution: Matching resolution.

        Raises:
            ParseError: If the text is not one of the recognized resolutions.
        """
        if isinstance(text, cls):
            return text
        normalized = (text or "").strip().lower()
        for resolution in cls:
            if resolution.value == normalized:
                return resolution
        raise ParseError(f"Unrecognized resolution: {text!r}")

    def __str__(self) -> str:
        return self.value


AVAILABLE_RESOLUTIONS: List[str] = [r.value for r in Resolution]
