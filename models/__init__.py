"""
Models package for AnimeWatch.

This package contains Pydantic-based models for shows, parsed episodes and stored episode records.
"""

from .resolution import Resolution, AVAILABLE_RESOLUTIONS
from .show import Show
from .episode import Episode, EpisodeRecord, episode_sort_key

__all__ = ["Resolution", "AVAILABLE_RESOLUTIONS", "Show", "Episode", "EpisodeRecord", "episode_sort_key"]
