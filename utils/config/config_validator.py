"""
Configuration validation for AnimeWatch.

Checks that the settings every command depends on are present and well formed
before services are created from them.
"""
import logging
from typing import Dict, Any
from urllib.parse import urlparse

from models.resolution import Resolution, AVAILABLE_RESOLUTIONS
from utils.errors import ParseError
from .validation_models import ValidationResult, ValidationError, ErrorCode

logger = logging.getLogger(__name__)


class ConfigValidator:
    """Validates a normalized AnimeWatch configuration dictionary."""

    REQUIRED_KEYS = {
        'feed': ['url'],
        'season': ['url'],
        'player': ['path'],
        'preferences': ['resolution'],
    }

    URL_KEYS = [('feed', 'url'), ('feed', 'search_url'), ('season', 'url')]

    INTEGER_KEYS = [('feed', 'poll_interval'), ('feed', 'retry_backoff'), ('feed', 'timeout')]

    def validate(self, config: Dict[str, Dict[str, Any]]) -> ValidationResult:
        """
        Validate the configuration.

        Args:
            config: Normalized configuration dict.

        Returns:
            ValidationResult: Errors for missing or malformed settings.
        """
        result = ValidationResult()
        config = config or {}

        for section, keys in self.REQUIRED_KEYS.items():
            if section not in config:
                result.add_error(ValidationError(
                    section=section,
                    key=None,
                    message="Section is missing",
                    suggestion="Run 'animewatch init-config' to create a complete configuration",
                    error_code=ErrorCode.MISSING_SECTION,
                ))
                continue
            for key in keys:
                value = config[section].get(key)
                if value is None or not str(value).strip():
                    result.add_error(ValidationError(
                        section=section,
                        key=key,
                        message="Required value is missing",
                        suggestion=None,
                        error_code=ErrorCode.MISSING_KEY,
                    ))

        self._validate_resolution(config, result)
        self._validate_urls(config, result)
        self._validate_integers(config, result)

        if result.is_valid:
            logger.debug("Configuration validation passed")
        else:
            logger.warning(f"Configuration validation found {len(result.errors)} error(s)")
        return result

    def _validate_resolution(self, config: Dict[str, Dict[str, Any]], result: ValidationResult) -> None:
        value = config.get('preferences', {}).get('resolution')
        if not value:
            return
        try:
            Resolution.parse(value)
        except ParseError:
            result.add_error(ValidationError(
                section='preferences',
                key='resolution',
                message=f"Unknown resolution '{value}'",
                suggestion=f"Use one of: {', '.join(AVAILABLE_RESOLUTIONS)}",
                error_code=ErrorCode.INVALID_VALUE,
            ))

    def _validate_urls(self, config: Dict[str, Dict[str, Any]], result: ValidationResult) -> None:
        for section, key in self.URL_KEYS:
            value = config.get(section, {}).get(key)
            if not value:
                continue
            parsed = urlparse(str(value))
            if parsed.scheme not in ('http', 'https') or not parsed.netloc:
                result.add_error(ValidationError(
                    section=section,
                    key=key,
                    message=f"Not an http(s) URL: '{value}'",
                    suggestion=None,
                    error_code=ErrorCode.INVALID_VALUE,
                ))

        search_url = config.get('feed', {}).get('search_url')
        if search_url and '{query}' not in search_url:
            result.add_warning("[feed].search_url has no {query} placeholder; backfill will ignore the show title")

    def _validate_integers(self, config: Dict[str, Dict[str, Any]], result: ValidationResult) -> None:
        for section, key in self.INTEGER_KEYS:
            value = config.get(section, {}).get(key)
            if value is None:
                continue
            try:
                if int(value) <= 0:
                    raise ValueError
            except (TypeError, ValueError):
                result.add_error(ValidationError(
                    section=section,
                    key=key,
                    message=f"Expected a positive integer, got '{value}'",
                    suggestion=None,
                    error_code=ErrorCode.INVALID_VALUE,
                ))


def validate_configuration(config: Dict[str, Dict[str, Any]]) -> ValidationResult:
    """Validate a normalized configuration with the default validator."""
    return ConfigValidator().validate(config)
