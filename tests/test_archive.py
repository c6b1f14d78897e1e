"""Tests for reading archives and filtered CSV files."""

import zipfile

import pytest

from tweetsieve.archive import (
    ARCHIVE_HEADERS, FilteredArchive, TwitterArchive, open_archive, split_replies
)
from tweetsieve.exceptions import ArchiveIOError, ConfigurationError, SchemaError


def test_load_valid_archive(write_archive, story_rows):
    archive = TwitterArchive(write_archive(story_rows))
    rows = list(archive.rows())

    assert [row.tweet_id for row in rows] == ["5", "4", "3", "2", "1"]
    assert rows[0].in_reply_to_status_id == "3"
    assert rows[0].in_reply_to_user_id == "42"
    assert rows[1].retweeted_status_id == "999"
    assert rows[2].in_reply_to_status_id == ""
    assert [row.row_number for row in rows] == [1, 2, 3, 4, 5]
    assert all(row.kind == "archive" for row in rows)


def test_ids_are_kept_as_strings(write_archive, archive_row):
    rows = list(TwitterArchive(write_archive([archive_row("1376608884000000001", "hi")])).rows())
    assert rows[0].tweet_id == "1376608884000000001"


def test_extra_trailing_columns_are_ignored(write_archive, archive_row):
    row = archive_row("1", "A story") + ["", "", "https://example.com"]
    rows = list(TwitterArchive(write_archive([row], headers=ARCHIVE_HEADERS)).rows())
    assert rows[0].text == "A story"


def test_text_with_newlines_and_quotes(write_archive, archive_row):
    text = 'Line one,\nShe said "hi"'
    rows = list(TwitterArchive(write_archive([archive_row("1", text)])).rows())
    assert rows[0].text == text


def test_header_only_archive_has_no_rows(write_archive):
    assert list(TwitterArchive(write_archive([])).rows()) == []


def test_missing_tweets_csv(write_archive, story_rows):
    path = write_archive(story_rows, entry="other.csv")
    with pytest.raises(SchemaError) as excinfo:
        TwitterArchive(path).load()
    assert "does not contain tweets.csv" in str(excinfo.value)


def test_mismatching_header(write_archive, story_rows):
    headers = list(ARCHIVE_HEADERS[:7])
    headers[1] = "reply_to"
    with pytest.raises(SchemaError) as excinfo:
        TwitterArchive(write_archive(story_rows, headers=headers)).load()

    message = str(excinfo.value)
    assert "column 2" in message
    assert '"in_reply_to_status_id"' in message
    assert '"reply_to"' in message


def test_too_few_header_fields(write_archive):
    headers = ARCHIVE_HEADERS[:5]
    with pytest.raises(SchemaError, match="Too few header fields"):
        TwitterArchive(write_archive([["1", "", "", "2020-01-01", "web"]], headers=headers)).load()


def test_empty_tweets_csv(tmp_path):
    path = tmp_path / "archive.zip"
    with zipfile.ZipFile(path, 'w') as zf:
        zf.writestr("tweets.csv", "")
    with pytest.raises(SchemaError):
        TwitterArchive(path).load()


def test_missing_archive_file(tmp_path):
    with pytest.raises(ArchiveIOError) as excinfo:
        TwitterArchive(tmp_path / "nope.zip").load()
    assert isinstance(excinfo.value.__cause__, FileNotFoundError)


def test_not_a_zip_file(tmp_path):
    path = tmp_path / "archive.zip"
    path.write_text("tweet_id,text\n1,hello\n")
    with pytest.raises(ArchiveIOError, match="not a readable zip archive"):
        TwitterArchive(path).load()


def test_filtered_archive_rows(tmp_path):
    path = tmp_path / "stories_filtered.csv"
    path.write_text(
        '"id","replyToId","timestamp","text","replies"\n'
        '"3","","2020-01-03 10:00:00 +0000","A tale &amp; more","5,6"\n'
        '"5","3","2020-01-05 10:00:00 +0000","The end",""\n',
        encoding='utf-8',
    )

    rows = list(FilteredArchive(path).rows())

    assert [row.tweet_id for row in rows] == ["3", "5"]
    assert rows[0].replies == ["5", "6"]
    assert rows[0].text == "A tale &amp; more"
    assert rows[1].in_reply_to_status_id == "3"
    assert rows[1].replies == []
    assert all(row.kind == "filtered" for row in rows)


def test_filtered_archive_header_mismatch(tmp_path):
    path = tmp_path / "other.csv"
    path.write_text('"id","parent","timestamp","text","replies"\n', encoding='utf-8')
    with pytest.raises(SchemaError, match="column 2"):
        FilteredArchive(path).load()


def test_split_replies():
    assert split_replies("") == []
    assert split_replies("1,2, 3") == ["1", "2", "3"]


def test_open_archive_dispatch(tmp_path):
    assert isinstance(open_archive(tmp_path / "twitter.zip"), TwitterArchive)
    assert isinstance(open_archive(tmp_path / "twitter_filtered.CSV"), FilteredArchive)
    with pytest.raises(ConfigurationError):
        open_archive(tmp_path / "tweets.json")
