from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional

import pandas as pd

TIMESTAMP_FORMAT = '%Y-%m-%d %H:%M:%S %z'

# Order matters: '&' first so the entities added below are not escaped twice
_ESCAPES = (
    ('&', '&amp;'),
    ('"', '&quot;'),
    ("'", '&apos;'),
    ('\r\n', '<br>'),
    ('\n', '<br>'),
)


def escape_text(text: str) -> str:
    """HTML-escape tweet text and replace line breaks with ``<br>``."""
    for old, new in _ESCAPES:
        text = text.replace(old, new)
    return text


def parse_timestamp(value: str) -> datetime:
    """Parse an archive timestamp into an aware datetime (naive means UTC).

    Raises ValueError when the value cannot be parsed.
    """
    if not value or not value.strip():
        raise ValueError("empty timestamp")
    stamp = pd.Timestamp(value.strip())
    if pd.isna(stamp):
        raise ValueError(f"not a timestamp: {value!r}")
    if stamp.tzinfo is None:
        stamp = stamp.tz_localize(timezone.utc)
    return stamp.to_pydatetime()


@dataclass
class ArchiveRow:
    """One line of tabular archive data, before any filtering.

    ``kind`` is ``"archive"`` for raw ``tweets.csv`` lines and ``"filtered"``
    for lines re-read from a previous run's output.
    """
    tweet_id: str
    in_reply_to_status_id: str = ''
    in_reply_to_user_id: str = ''
    timestamp: str = ''
    source: str = ''
    text: str = ''
    retweeted_status_id: str = ''
    replies: List[str] = field(default_factory=list)
    kind: str = 'archive'
    row_number: Optional[int] = None


@dataclass
class Tweet:
    """A tweet that may end up in the filtered output."""
    id: str
    reply_to_id: str
    timestamp: datetime
    text: str
    replies: List[str] = field(default_factory=list)

    @property
    def is_reply(self) -> bool:
        """True if the tweet still points at a tweet it replies to."""
        return bool(self.reply_to_id)

    def clear_reply_to(self) -> None:
        """Turn the tweet into a thread root."""
        self.reply_to_id = ''

    def add_reply(self, tweet_id: str) -> None:
        """Insert a reply first in the list, since tweets are read newest first."""
        if tweet_id in self.replies:
            return
        self.replies.insert(0, tweet_id)

    @property
    def formatted_timestamp(self) -> str:
        return self.timestamp.strftime(TIMESTAMP_FORMAT)

    def to_row(self) -> dict:
        """Fields in output column order."""
        return {
            'id': self.id,
            'replyToId': self.reply_to_id,
            'timestamp': self.formatted_timestamp,
            'text': self.text,
            'replies': ','.join(self.replies),
        }
