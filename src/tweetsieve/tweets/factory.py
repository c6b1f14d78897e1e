from typing import Callable, Dict

from .base import ArchiveRow, Tweet, escape_text, parse_timestamp
from ..exceptions import SchemaError


def _from_archive_row(row: ArchiveRow) -> Tweet:
    return Tweet(
        id=row.tweet_id,
        reply_to_id=row.in_reply_to_status_id,
        timestamp=parse_timestamp(row.timestamp),
        text=escape_text(row.text),
    )


def _from_filtered_row(row: ArchiveRow) -> Tweet:
    # Text was escaped by the run that wrote it
    return Tweet(
        id=row.tweet_id,
        reply_to_id=row.in_reply_to_status_id,
        timestamp=parse_timestamp(row.timestamp),
        text=row.text,
        replies=list(row.replies),
    )


class TweetFactory:
    """Factory for creating tweets from the different kinds of input rows."""

    _row_kinds: Dict[str, Callable[[ArchiveRow], Tweet]] = {
        'archive': _from_archive_row,
        'filtered': _from_filtered_row,
    }

    @classmethod
    def create_tweet(cls, row: ArchiveRow) -> Tweet:
        """Create a tweet of the appropriate kind."""
        if row.kind not in cls._row_kinds:
            raise ValueError(f"Unknown row kind: {row.kind}")

        try:
            return cls._row_kinds[row.kind](row)
        except ValueError as e:
            where = f"row {row.row_number}" if row.row_number else f"tweet {row.tweet_id}"
            raise SchemaError(
                f"Unparseable timestamp at {where}",
                details=f"found {row.timestamp!r}",
                original_error=e,
            ) from e
