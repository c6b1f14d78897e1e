"""Reply thread reconstruction over the retained tweets."""

import logging
from typing import List, Set

from .config import FilterConfig
from .dedupe import CorrectedPair, RetainedTweets
from .similarity import is_correction

logger = logging.getLogger(__name__)


class ThreadReconciler:
    """Links replies to their parents and folds replies that merely correct them.

    Tweets are visited in retained order (newest first), so a reply is seen
    before the tweet it answers. Each reply is inserted at the front of its
    parent's list, which therefore ends up in chronological order.

    A tweet folded into a newer reply is still visited until the pass ends,
    so a chain of corrections collapses into its newest version.
    """

    def __init__(self, config: FilterConfig, retained: RetainedTweets,
                 corrected: List[CorrectedPair]):
        self.threshold = config.correction_threshold
        self.retained = retained
        self.corrected = corrected
        self.corrections = 0

    def reconcile(self) -> None:
        to_remove: List[str] = []
        marked: Set[str] = set()

        for tweet_id in self.retained.ids:
            tweet = self.retained[tweet_id]
            if not tweet.is_reply or tweet.reply_to_id not in self.retained:
                continue

            # Keep the id before the reply link is cleared
            target_id = tweet.reply_to_id
            if target_id == tweet_id:
                continue
            if target_id in marked:
                logger.debug(f"Skipping reply {tweet_id}: target {target_id} already folded")
                continue

            target = self.retained[target_id]
            if is_correction(tweet.text, target.text, self.threshold):
                to_remove.append(target_id)
                marked.add(target_id)
                self.retained.clear_reply_to(tweet_id)
                self.corrected.append((tweet, target))
                self.corrections += 1
                logger.debug(f"Reply {tweet_id} is a correction of {target_id}")
            else:
                self.retained.add_reply(target_id, tweet_id)

        for tweet_id in to_remove:
            self.retained.remove(tweet_id)

        if marked:
            self.retained.prune_replies(marked)
