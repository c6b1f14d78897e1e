"""Readers turning a Twitter archive into ArchiveRows."""

from pathlib import Path
import logging
from typing import IO, Iterator, List, Optional, Sequence, Union
import zipfile

import pandas as pd

from .exceptions import ArchiveIOError, ConfigurationError, SchemaError
from .tweets.base import ArchiveRow

logger = logging.getLogger(__name__)

# Column order of tweets.csv in a Twitter archive
ARCHIVE_HEADERS = [
    'tweet_id',
    'in_reply_to_status_id',
    'in_reply_to_user_id',
    'timestamp',
    'source',
    'text',
    'retweeted_status_id',
    'retweeted_status_user_id',
    'retweeted_status_timestamp',
    'expanded_urls',
]
# Only the columns up to retweeted_status_id are used
REQUIRED_ARCHIVE_COLUMNS = 7

FILTERED_HEADERS = ['id', 'replyToId', 'timestamp', 'text', 'replies']


def read_csv_frame(source: Union[IO[bytes], Path]) -> pd.DataFrame:
    """Read tabular tweet data with every field kept as a string."""
    frame = pd.read_csv(
        source,
        dtype=str,
        keep_default_na=False,
        index_col=False,
        encoding='utf-8',
    )
    return frame.fillna('')


def validate_headers(headers: Sequence[str], expected: Sequence[str], required: int) -> None:
    """Check that the first ``required`` headers match ``expected`` in order."""
    for index in range(required):
        if index >= len(headers):
            raise SchemaError(
                "Too few header fields",
                details=f"expected at least {required}, found {len(headers)}",
            )
        if headers[index] != expected[index]:
            raise SchemaError(
                f"Mismatching header fields in column {index + 1}",
                details=f'expected "{expected[index]}", found "{headers[index]}"',
            )


class TwitterArchive:
    """A Twitter archive zip file holding ``tweets.csv``."""

    def __init__(self, file_path: Path, entry_name: str = 'tweets.csv'):
        self.file_path = Path(file_path)
        self.entry_name = entry_name
        self.frame: Optional[pd.DataFrame] = None

    def load(self) -> None:
        """Read and validate the tweets table."""
        try:
            with zipfile.ZipFile(self.file_path) as archive:
                try:
                    entry = archive.getinfo(self.entry_name)
                except KeyError as e:
                    raise SchemaError(
                        f"Archive {self.file_path} does not contain {self.entry_name}",
                        original_error=e,
                    ) from e
                with archive.open(entry) as handle:
                    frame = read_csv_frame(handle)
        except zipfile.BadZipFile as e:
            raise ArchiveIOError(f"{self.file_path} is not a readable zip archive", original_error=e) from e
        except pd.errors.EmptyDataError as e:
            raise SchemaError(f"{self.entry_name} in {self.file_path} is empty", original_error=e) from e
        except pd.errors.ParserError as e:
            raise SchemaError(f"Cannot parse {self.entry_name} in {self.file_path}", original_error=e) from e
        except (OSError, UnicodeDecodeError) as e:
            raise ArchiveIOError(f"Cannot read archive {self.file_path}", original_error=e) from e

        validate_headers(list(frame.columns), ARCHIVE_HEADERS, REQUIRED_ARCHIVE_COLUMNS)
        self.frame = frame
        logger.info(f"Loaded {len(frame)} rows from {self.file_path}")

    def rows(self) -> Iterator[ArchiveRow]:
        """Yield rows in file order (newest tweet first)."""
        if self.frame is None:
            self.load()

        columns = self.frame.iloc[:, :REQUIRED_ARCHIVE_COLUMNS]
        for number, values in enumerate(columns.itertuples(index=False, name=None), start=1):
            (tweet_id, reply_to_status, reply_to_user, timestamp,
             source, text, retweeted_status) = values
            yield ArchiveRow(
                tweet_id=tweet_id,
                in_reply_to_status_id=reply_to_status,
                in_reply_to_user_id=reply_to_user,
                timestamp=timestamp,
                source=source,
                text=text,
                retweeted_status_id=retweeted_status,
                kind='archive',
                row_number=number,
            )


class FilteredArchive:
    """A CSV previously written by this tool, read back for re-filtering."""

    def __init__(self, file_path: Path):
        self.file_path = Path(file_path)
        self.frame: Optional[pd.DataFrame] = None

    def load(self) -> None:
        try:
            frame = read_csv_frame(self.file_path)
        except pd.errors.EmptyDataError as e:
            raise SchemaError(f"{self.file_path} is empty", original_error=e) from e
        except pd.errors.ParserError as e:
            raise SchemaError(f"Cannot parse {self.file_path}", original_error=e) from e
        except (OSError, UnicodeDecodeError) as e:
            raise ArchiveIOError(f"Cannot read {self.file_path}", original_error=e) from e

        validate_headers(list(frame.columns), FILTERED_HEADERS, len(FILTERED_HEADERS))
        self.frame = frame
        logger.info(f"Loaded {len(frame)} filtered tweets from {self.file_path}")

    def rows(self) -> Iterator[ArchiveRow]:
        if self.frame is None:
            self.load()

        columns = self.frame.iloc[:, :len(FILTERED_HEADERS)]
        for number, values in enumerate(columns.itertuples(index=False, name=None), start=1):
            tweet_id, reply_to_id, timestamp, text, replies = values
            yield ArchiveRow(
                tweet_id=tweet_id,
                in_reply_to_status_id=reply_to_id,
                timestamp=timestamp,
                text=text,
                replies=split_replies(replies),
                kind='filtered',
                row_number=number,
            )


def split_replies(value: str) -> List[str]:
    return [reply.strip() for reply in value.split(',') if reply.strip()]


def open_archive(file_path: Path) -> Union[TwitterArchive, FilteredArchive]:
    """Pick the reader matching the file extension."""
    file_path = Path(file_path)
    suffix = file_path.suffix.lower()
    if suffix == '.zip':
        return TwitterArchive(file_path)
    if suffix == '.csv':
        return FilteredArchive(file_path)
    raise ConfigurationError(
        f"Unsupported input file {file_path}",
        details="expected a Twitter archive .zip or a filtered .csv",
    )
