"""Counts collected during one filtering run."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

import orjson


@dataclass
class FilterStats:
    """Statistics collected from filtering one archive."""
    tweets_read: int = 0
    exclusions: Dict[str, int] = field(default_factory=dict)
    corrections: int = 0
    remaining: int = 0
    stopped_at_date_limit: bool = False

    @property
    def total_excluded(self) -> int:
        return sum(self.exclusions.values())

    def summary_lines(self) -> List[str]:
        """Human readable summary, one count per line."""
        lines = [f"Tweets: {self.tweets_read}"]
        lines.extend(f"{label}: {count}" for label, count in self.exclusions.items())
        lines.append(f"Corrections: {self.corrections}")
        lines.append(f"Remaining stories: {self.remaining}")
        return lines

    def to_dict(self) -> Dict[str, Any]:
        return {
            'tweets_read': self.tweets_read,
            'exclusions': dict(self.exclusions),
            'corrections': self.corrections,
            'remaining': self.remaining,
            'stopped_at_date_limit': self.stopped_at_date_limit,
        }

    def save(self, path: Path) -> None:
        """Write the counts as JSON."""
        with open(path, 'wb') as f:
            f.write(orjson.dumps(self.to_dict(), option=orjson.OPT_INDENT_2))
