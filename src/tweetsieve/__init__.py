from .archive import TwitterArchive, FilteredArchive, open_archive
from .config import FilterConfig, load_config
from .conversation import ThreadReconciler
from .dedupe import Deduplicator, RetainedTweets
from .exceptions import TweetSieveError, ConfigurationError, SchemaError, ArchiveIOError
from .filters import ExclusionRuleSet
from .processor import TweetFilterProcessor, FilterResult
from .similarity import distance
from .stats import FilterStats
from .tweets.base import ArchiveRow, Tweet
from .export.csv import CSVExporter
from .export.jsonl import JSONLExporter

__all__ = [
    'TwitterArchive',
    'FilteredArchive',
    'open_archive',
    'FilterConfig',
    'load_config',
    'ThreadReconciler',
    'Deduplicator',
    'RetainedTweets',
    'TweetSieveError',
    'ConfigurationError',
    'SchemaError',
    'ArchiveIOError',
    'ExclusionRuleSet',
    'TweetFilterProcessor',
    'FilterResult',
    'distance',
    'FilterStats',
    'ArchiveRow',
    'Tweet',
    'CSVExporter',
    'JSONLExporter',
]
