"""JSONL exporter implementation."""
from pathlib import Path
from typing import Any, Dict, List

import orjson

from .base import Exporter
from ..tweets.base import Tweet


class JSONLExporter(Exporter):
    """Export tweets to JSONL format, one tweet per line."""

    suffix = '.jsonl'

    def write_tweets(self, tweets: List[Tweet], path: Path) -> None:
        with open(path, 'wb') as f:
            for tweet in tweets:
                f.write(orjson.dumps(self._format_tweet(tweet)))
                f.write(b'\n')

    def _format_tweet(self, tweet: Tweet) -> Dict[str, Any]:
        return {
            "id": tweet.id,
            "replyToId": tweet.reply_to_id,
            "timestamp": tweet.formatted_timestamp,
            "text": tweet.text,
            "replies": list(tweet.replies),
        }
