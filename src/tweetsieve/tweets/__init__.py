from .base import ArchiveRow, Tweet, escape_text, parse_timestamp
from .factory import TweetFactory

__all__ = ['ArchiveRow', 'Tweet', 'TweetFactory', 'escape_text', 'parse_timestamp']
