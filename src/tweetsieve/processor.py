from dataclasses import dataclass, field
from datetime import datetime, timezone
import logging
from typing import Iterable, List, Optional

from tqdm import tqdm

from .config import FilterConfig
from .conversation import ThreadReconciler
from .dedupe import CorrectedPair, Deduplicator, RetainedTweets
from .filters import ExclusionRuleSet
from .stats import FilterStats
from .tweets.base import ArchiveRow, Tweet
from .tweets.factory import TweetFactory

logger = logging.getLogger(__name__)


@dataclass
class FilterResult:
    """Outcome of one filtering run."""
    tweets: List[Tweet]
    corrected_pairs: List[CorrectedPair] = field(default_factory=list)
    stats: FilterStats = field(default_factory=FilterStats)

    @property
    def corrected(self) -> List[Tweet]:
        """Every tweet involved in a fold, each pair as (correction, corrected)."""
        return [tweet for pair in self.corrected_pairs for tweet in pair]


class TweetFilterProcessor:
    """Filters an archive's rows down to the tweets worth keeping.

    Rows must be given newest first, as they appear in a Twitter archive.
    """

    def __init__(self, config: Optional[FilterConfig] = None):
        self.config = config or FilterConfig()

    def process(self, rows: Iterable[ArchiveRow], since: Optional[datetime] = None) -> FilterResult:
        """Run exclusion, deduplication and thread reconciliation over ``rows``.

        Ingestion stops at the first tweet older than ``since``.
        """
        if since is not None and since.tzinfo is None:
            since = since.replace(tzinfo=timezone.utc)

        rules = ExclusionRuleSet(self.config)
        retained = RetainedTweets()
        corrected: List[CorrectedPair] = []
        deduplicator = Deduplicator(self.config, retained, corrected)
        stats = FilterStats()

        progress = tqdm(rows, desc="Filtering tweets", unit="tweet",
                        disable=not self.config.show_progress)
        try:
            for row in progress:
                stats.tweets_read += 1
                tweet = TweetFactory.create_tweet(row)

                if since is not None and tweet.timestamp < since:
                    logger.info(f"Reached date limit at tweet {tweet.id} ({tweet.formatted_timestamp})")
                    stats.stopped_at_date_limit = True
                    break

                if rules.first_match(row) is not None:
                    continue

                deduplicator.process(tweet)
        finally:
            progress.close()

        reconciler = ThreadReconciler(self.config, retained, corrected)
        reconciler.reconcile()

        stats.exclusions = rules.counts()
        stats.corrections = deduplicator.corrections + reconciler.corrections
        stats.remaining = len(retained)
        logger.info(
            f"Kept {stats.remaining} of {stats.tweets_read} tweets "
            f"({stats.total_excluded} excluded, {stats.corrections} corrections)"
        )

        return FilterResult(tweets=list(retained), corrected_pairs=corrected, stats=stats)
