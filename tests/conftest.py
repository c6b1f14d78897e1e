"""Test fixtures and configuration."""

import zipfile
from datetime import datetime, timezone
from pathlib import Path

import pandas as pd
import pytest

from tweetsieve.archive import ARCHIVE_HEADERS
from tweetsieve.config import FilterConfig
from tweetsieve.tweets.base import ArchiveRow, Tweet

HOME_ID = "42"


def archive_row(tweet_id, text, timestamp="2020-01-01 00:00:00 +0000", reply_to="",
                reply_to_user="", retweet_of=""):
    """One tweets.csv line as a list in archive column order."""
    return [tweet_id, reply_to, reply_to_user, timestamp, "<a>web</a>", text, retweet_of]


def make_row(tweet_id, text, timestamp="2020-01-01 00:00:00 +0000", **kwargs) -> ArchiveRow:
    return ArchiveRow(tweet_id=tweet_id, text=text, timestamp=timestamp, **kwargs)


def make_tweet(tweet_id, text, reply_to_id="", day=1) -> Tweet:
    return Tweet(
        id=tweet_id,
        reply_to_id=reply_to_id,
        timestamp=datetime(2020, 1, day, tzinfo=timezone.utc),
        text=text,
    )


@pytest.fixture
def config():
    """Filter configuration with a known home account and no progress bar."""
    return FilterConfig(home_account_id=HOME_ID, show_progress=False)


@pytest.fixture
def write_archive(tmp_path):
    """Return a function writing rows into a zip archive as tweets.csv."""
    def _write(rows, headers=None, name="archive.zip", entry="tweets.csv") -> Path:
        headers = headers or ARCHIVE_HEADERS[:7]
        frame = pd.DataFrame(rows, columns=headers)
        archive_path = tmp_path / name
        with zipfile.ZipFile(archive_path, 'w') as zf:
            zf.writestr(entry, frame.to_csv(index=False))
        return archive_path
    return _write


@pytest.fixture
def story_rows():
    """Five archive rows, newest first: a reply to an unrelated story, a
    retweet, the unrelated story, a corrected story and its typo version."""
    return [
        archive_row("5", "And then the lighthouse went dark for good, or so the sailors say.",
                    timestamp="2020-01-05 10:00:00 +0000", reply_to="3", reply_to_user=HOME_ID),
        archive_row("4", "RT @someone: read my story", timestamp="2020-01-04 10:00:00 +0000",
                    retweet_of="999"),
        archive_row("3", "The lighthouse keeper's cat counted ships until the sea ran dry.",
                    timestamp="2020-01-03 10:00:00 +0000"),
        archive_row("2", "Once upon a time there was a dragon who loved tea & cake.",
                    timestamp="2020-01-02 10:00:00 +0000"),
        archive_row("1", "Once upon a time there was a dragn who loved tee & cake.",
                    timestamp="2020-01-01 10:00:00 +0000"),
    ]


@pytest.fixture(name="archive_row")
def archive_row_fixture():
    return archive_row


@pytest.fixture(name="make_row")
def make_row_fixture():
    return make_row


@pytest.fixture(name="make_tweet")
def make_tweet_fixture():
    return make_tweet
