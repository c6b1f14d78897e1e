"""Base class for exporters."""
from abc import ABC, abstractmethod
from contextlib import contextmanager
import logging
import os
from pathlib import Path
from typing import Dict, Iterator, List

from ..exceptions import ArchiveIOError
from ..tweets.base import Tweet

logger = logging.getLogger(__name__)


@contextmanager
def replacing(outputs: Dict[str, Path]) -> Iterator[Dict[str, Path]]:
    """Yield temporary paths, keyed like ``outputs``, that replace the outputs
    once every one of them has been written.

    If anything fails, none of the outputs is left behind.
    """
    targets = {key: Path(path) for key, path in outputs.items()}
    staged = {key: path.with_name(f".{path.name}.tmp") for key, path in targets.items()}
    names = ', '.join(str(path) for path in targets.values())
    replaced: List[Path] = []

    for path in targets.values():
        if path.is_dir():
            raise ArchiveIOError(f"Cannot write {path}", details="is a directory")

    try:
        for path in targets.values():
            path.parent.mkdir(parents=True, exist_ok=True)
        yield staged
        for key, path in targets.items():
            os.replace(staged[key], path)
            replaced.append(path)
    except OSError as e:
        for path in replaced:
            if path.exists():
                path.unlink()
        raise ArchiveIOError(f"Cannot write {names}", original_error=e) from e
    finally:
        for tmp_path in staged.values():
            if tmp_path.exists():
                tmp_path.unlink()

    for path in targets.values():
        logger.info(f"Wrote {path}")


class Exporter(ABC):
    """Base class for filtered tweet exporters."""

    suffix: str = ''

    @abstractmethod
    def write_tweets(self, tweets: List[Tweet], path: Path) -> None:
        """Write tweets to ``path`` in the exporter's format."""
        pass

    def export_tweets(self, tweets: List[Tweet], output_path: Path) -> None:
        """Export tweets, leaving nothing at ``output_path`` if writing fails."""
        with replacing({'tweets': output_path}) as staged:
            self.write_tweets(tweets, staged['tweets'])
