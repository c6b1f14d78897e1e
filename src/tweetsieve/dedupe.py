"""Chronological near-duplicate merging.

Tweets arrive newest first. A tweet whose text is within the correction
threshold of the most recently retained tweet is treated as a typo-fixed
repost of it and folded away instead of being retained.
"""

import logging
from typing import Dict, Iterator, List, Optional, Tuple

from .config import FilterConfig
from .similarity import is_correction
from .tweets.base import Tweet

logger = logging.getLogger(__name__)

CorrectedPair = Tuple[Tweet, Tweet]


class RetainedTweets:
    """Retained tweets keyed by id, remembering the order they were added.

    All changes to retained tweets go through here by id.
    """

    def __init__(self):
        self._tweets: Dict[str, Tweet] = {}
        self._order: List[str] = []

    def add(self, tweet: Tweet) -> None:
        if tweet.id in self._tweets:
            raise KeyError(f"Tweet {tweet.id} is already retained")
        self._tweets[tweet.id] = tweet
        self._order.append(tweet.id)

    def get(self, tweet_id: str) -> Optional[Tweet]:
        return self._tweets.get(tweet_id)

    def __getitem__(self, tweet_id: str) -> Tweet:
        return self._tweets[tweet_id]

    def __contains__(self, tweet_id: str) -> bool:
        return tweet_id in self._tweets

    def __len__(self) -> int:
        return len(self._tweets)

    def __iter__(self) -> Iterator[Tweet]:
        return (self._tweets[tweet_id] for tweet_id in self._order)

    @property
    def ids(self) -> List[str]:
        """Snapshot of the retained ids in insertion order."""
        return list(self._order)

    def clear_reply_to(self, tweet_id: str) -> None:
        self._tweets[tweet_id].clear_reply_to()

    def add_reply(self, parent_id: str, reply_id: str) -> None:
        self._tweets[parent_id].add_reply(reply_id)

    def prune_replies(self, removed_ids) -> None:
        """Drop reply links that point at tweets no longer retained."""
        for tweet in self._tweets.values():
            if any(reply_id in removed_ids for reply_id in tweet.replies):
                tweet.replies = [r for r in tweet.replies if r not in removed_ids]

    def remove(self, tweet_id: str) -> Tweet:
        tweet = self._tweets.pop(tweet_id)
        self._order.remove(tweet_id)
        return tweet


class Deduplicator:
    """Folds corrections into the previously retained tweet."""

    def __init__(self, config: FilterConfig, retained: RetainedTweets,
                 corrected: List[CorrectedPair]):
        self.threshold = config.correction_threshold
        self.retained = retained
        self.corrected = corrected
        self.previous_id: Optional[str] = None
        self.corrections = 0

    def process(self, tweet: Tweet) -> bool:
        """Retain ``tweet`` or fold it into the previous one. Returns True if retained."""
        if tweet.id in self.retained:
            logger.warning(f"Skipping duplicate tweet id {tweet.id}")
            return False

        previous = self.retained.get(self.previous_id) if self.previous_id else None
        if previous is not None and is_correction(tweet.text, previous.text, self.threshold):
            self.retained.clear_reply_to(previous.id)
            self.corrected.append((tweet, previous))
            self.corrections += 1
            logger.debug(f"Tweet {tweet.id} is a correction of {previous.id}")
            return False

        self.retained.add(tweet)
        self.previous_id = tweet.id
        return True
