"""
Exception types shared across AnimeWatch services and utilities.
"""


class ParseError(ValueError):
    """Raised when a release title or one of its fields does not match the expected grammar."""


class FeedError(RuntimeError):
    """Raised when the RSS feed cannot be fetched or decoded."""


class SeasonListError(RuntimeError):
    """Raised when the season listing page cannot be fetched or has no show list."""


class PlayerLaunchError(RuntimeError):
    """Raised when the external video player cannot be started or exits with an error."""
