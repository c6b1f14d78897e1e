from datetime import datetime
from pathlib import Path
import argparse
import logging
import sys
from typing import List, Optional

from .archive import open_archive
from .config import FilterConfig, load_config
from .exceptions import ConfigurationError, TweetSieveError, iter_error_chain
from .export import EXPORTERS, replacing
from .processor import FilterResult, TweetFilterProcessor
from .tweets.base import parse_timestamp

logger = logging.getLogger(__name__)


def setup_logging(debug: bool):
    """Configure logging for the application."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='tweetsieve',
        description='Filter a Twitter archive into a slimmer CSV with retweets, replies and corrections removed',
    )
    parser.add_argument('archive', type=Path,
                        help='Twitter archive zip file, or a previously filtered CSV')
    parser.add_argument('-o', '--output', type=Path,
                        help='Output file (default: <archive>_filtered.csv next to the archive)')
    parser.add_argument('-d', '--since', help='Ignore tweets older than this date')
    parser.add_argument('--home-id', help='Account id of the archive owner; replies to it are kept')
    parser.add_argument('--threshold', type=int,
                        help='Maximum edit distance for a tweet to count as a correction')
    parser.add_argument('--tag', dest='tags', action='append',
                        help='Exclude tweets containing this tag (repeatable, replaces the defaults)')
    parser.add_argument('--config', type=Path, help='JSON file with filter settings')
    parser.add_argument('--format', choices=sorted(EXPORTERS), default='csv', help='Output format')
    parser.add_argument('--stats-json', type=Path, help='Also write the run statistics as JSON')
    parser.add_argument('--no-progress', action='store_true', help='Disable the progress bar')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    return parser


def build_config(args: argparse.Namespace) -> FilterConfig:
    """Defaults, overridden by the config file, overridden by the command line."""
    config = load_config(args.config) if args.config else FilterConfig()
    return config.merged(
        home_account_id=args.home_id,
        correction_threshold=args.threshold,
        excluded_tags=args.tags,
        show_progress=False if args.no_progress else None,
    )


def parse_since(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return parse_timestamp(value)
    except ValueError as e:
        raise ConfigurationError(f"Unparseable date limit: {value}", original_error=e) from e


def default_output_path(archive_path: Path, suffix: str) -> Path:
    return archive_path.with_name(f"{archive_path.stem}_filtered{suffix}")


def corrected_output_path(output_path: Path) -> Path:
    return output_path.with_name(f"{output_path.stem}_corrected{output_path.suffix}")


def run(args: argparse.Namespace) -> FilterResult:
    """Filter the archive and write the outputs. Nothing is written on failure."""
    config = build_config(args)
    since = parse_since(args.since)
    exporter = EXPORTERS[args.format]()
    output_path = args.output or default_output_path(args.archive, exporter.suffix)

    archive = open_archive(args.archive)
    result = TweetFilterProcessor(config).process(archive.rows(), since=since)

    for line in result.stats.summary_lines():
        print(line)

    outputs = {'tweets': output_path}
    if result.corrected_pairs:
        outputs['corrected'] = corrected_output_path(output_path)
    if args.stats_json:
        outputs['stats'] = args.stats_json

    # All outputs are replaced together, or none is
    with replacing(outputs) as staged:
        exporter.write_tweets(result.tweets, staged['tweets'])
        if 'corrected' in staged:
            exporter.write_tweets(result.corrected, staged['corrected'])
        if 'stats' in staged:
            result.stats.save(staged['stats'])

    print(f"Remaining tweets written to {outputs['tweets']}")
    if 'corrected' in outputs:
        print(f"Corrected tweets written to {outputs['corrected']}")
    if 'stats' in outputs:
        print(f"Statistics written to {outputs['stats']}")

    return result


def report_error(error: BaseException) -> None:
    lines = ["Error:"]
    lines.extend(str(e) or type(e).__name__ for e in iter_error_chain(error))
    print("\n".join(lines), file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.debug)

    try:
        run(args)
    except (TweetSieveError, OSError) as e:
        logger.error(f"Filtering failed: {e}")
        report_error(e)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
