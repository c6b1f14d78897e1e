"""Configuration for the tweet filtering pipeline."""

import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Tuple

import orjson

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_HOME_ACCOUNT_ID = "1376608884"
DEFAULT_CORRECTION_THRESHOLD = 10
DEFAULT_EXCLUDED_TAGS = ("#AdvenTale", "#SummerRerun")


@dataclass
class FilterConfig:
    """Settings shared by the exclusion rules, deduplicator and reconciler."""
    home_account_id: str = DEFAULT_HOME_ACCOUNT_ID
    correction_threshold: int = DEFAULT_CORRECTION_THRESHOLD  # Levenshtein distance
    excluded_tags: Tuple[str, ...] = field(default_factory=lambda: DEFAULT_EXCLUDED_TAGS)
    show_progress: bool = True

    def __post_init__(self):
        if self.home_account_id is None:
            self.home_account_id = ""
        self.home_account_id = str(self.home_account_id)

        if isinstance(self.correction_threshold, bool) or not isinstance(self.correction_threshold, int):
            raise ConfigurationError(
                "Correction threshold must be an integer",
                details=f"got {self.correction_threshold!r}",
            )
        if self.correction_threshold < 0:
            raise ConfigurationError(
                "Correction threshold must not be negative",
                details=f"got {self.correction_threshold}",
            )

        if isinstance(self.excluded_tags, str):
            raise ConfigurationError(
                "Excluded tags must be a list of strings",
                details=f"got a single string {self.excluded_tags!r}",
            )
        tags = tuple(self.excluded_tags or ())
        for tag in tags:
            if not isinstance(tag, str) or not tag:
                raise ConfigurationError(
                    "Excluded tags must be non-empty strings",
                    details=f"got {tag!r}",
                )
        self.excluded_tags = tags

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary for serialization."""
        return {
            'home_account_id': self.home_account_id,
            'correction_threshold': self.correction_threshold,
            'excluded_tags': list(self.excluded_tags),
            'show_progress': self.show_progress,
        }

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'FilterConfig':
        """Create FilterConfig from a dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in config_dict.items():
            if key in known:
                values[key] = value
            else:
                logger.warning(f"Ignoring unknown configuration key: {key}")
        return cls(**values)

    def merged(self, **overrides: Any) -> 'FilterConfig':
        """Return a copy with every override that is not None applied."""
        values = self.to_dict()
        values.update({key: value for key, value in overrides.items() if value is not None})
        return FilterConfig.from_dict(values)


def load_config(path: Path) -> FilterConfig:
    """Load a FilterConfig from a JSON file."""
    try:
        with open(path, 'rb') as f:
            data = orjson.loads(f.read())
    except OSError as e:
        raise ConfigurationError(f"Cannot read configuration file {path}", original_error=e) from e
    except orjson.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in configuration file {path}", original_error=e) from e

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Configuration file {path} must contain a JSON object",
            details=f"got {type(data).__name__}",
        )
    return FilterConfig.from_dict(data)
