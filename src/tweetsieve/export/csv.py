"""CSV exporter implementation."""
import csv
from pathlib import Path
from typing import List

import pandas as pd

from .base import Exporter
from ..archive import FILTERED_HEADERS
from ..tweets.base import Tweet


class CSVExporter(Exporter):
    """Export tweets as a CSV with every field quoted."""

    suffix = '.csv'

    def write_tweets(self, tweets: List[Tweet], path: Path) -> None:
        frame = pd.DataFrame([tweet.to_row() for tweet in tweets], columns=FILTERED_HEADERS)
        frame.to_csv(
            path,
            index=False,
            quoting=csv.QUOTE_ALL,
            lineterminator='\n',
            encoding='utf-8',
        )
