"""Exclusion rules deciding which archive rows are dropped before deduplication.

Rules are evaluated in a fixed order and the first match wins, so a row is
only ever counted against one rule.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional

from .config import FilterConfig
from .tweets.base import ArchiveRow

logger = logging.getLogger(__name__)


class ExclusionRule(ABC):
    """Base class for rules that filter out single archive rows."""

    label: str = ''

    def __init__(self):
        self.count = 0

    @abstractmethod
    def matches(self, row: ArchiveRow) -> bool:
        """Check a row without touching the counter."""
        pass

    def exclude(self, row: ArchiveRow) -> bool:
        """Return True if the row should be filtered out, counting it."""
        if self.matches(row):
            self.count += 1
            return True
        return False

    def __str__(self) -> str:
        return f"{self.label}: {self.count}"


class RetweetRule(ExclusionRule):
    """Retweets and modified tweets."""

    label = 'Retweets'
    prefixes = ('RT ', 'MT ')

    def matches(self, row: ArchiveRow) -> bool:
        return bool(row.retweeted_status_id) or row.text.startswith(self.prefixes)


class AnnouncementRule(ExclusionRule):
    """Announcements, i.e. tweets starting with '** '."""

    label = 'Announcements'
    prefix = '** '

    def matches(self, row: ArchiveRow) -> bool:
        return row.text.startswith(self.prefix)


class ReplyRule(ExclusionRule):
    """Replies to other accounts. Replies to the home account are kept."""

    label = 'Replies'

    def __init__(self, home_account_id: str):
        super().__init__()
        self.home_account_id = home_account_id

    def matches(self, row: ArchiveRow) -> bool:
        replied_user = row.in_reply_to_user_id
        if replied_user and replied_user != self.home_account_id:
            return True
        return row.text.startswith('@')


class TagRule(ExclusionRule):
    """Tweets containing any of the unwanted tags (case-sensitive)."""

    label = 'Unwanted tags'

    def __init__(self, tags: Iterable[str]):
        super().__init__()
        self.tags = tuple(tags)

    def matches(self, row: ArchiveRow) -> bool:
        return any(tag in row.text for tag in self.tags)


class ExclusionRuleSet:
    """The exclusion rules in evaluation order."""

    def __init__(self, config: FilterConfig):
        self.rules: List[ExclusionRule] = [
            RetweetRule(),
            AnnouncementRule(),
            ReplyRule(config.home_account_id),
            TagRule(config.excluded_tags),
        ]

    def first_match(self, row: ArchiveRow) -> Optional[ExclusionRule]:
        """Apply the rules in order, stopping at the first that excludes the row."""
        for rule in self.rules:
            if rule.exclude(row):
                logger.debug(f"Excluded tweet {row.tweet_id}: {rule.label}")
                return rule
        return None

    def counts(self) -> Dict[str, int]:
        return {rule.label: rule.count for rule in self.rules}
