"""CLI entry point for histpack."""

import argparse
import logging
import sys
from pathlib import Path

from histpack.exceptions import HistpackError
from histpack.extractor import HistoryExtractor
from histpack.models import ExtractionProgress, FormattingOptions
from histpack.sources import get_source

logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
)
logger = logging.getLogger(__name__)


def _open_source(repo: str, context_lines: int = 3):
    source = get_source(Path(repo), context_lines=context_lines)
    if source is None:
        logger.error(f"Cannot process: {repo}")
        logger.error("Supported inputs: Git repositories")
        sys.exit(1)
    return source


def _log_progress(progress: ExtractionProgress) -> None:
    if progress.is_complete:
        logger.info("")
        logger.info("Summary:")
        logger.info(f"- Total files generated: {progress.generated_files}")
        logger.info(f"- Total commits processed: {progress.processed_commits}")
        logger.info(f"- Total time: {progress.elapsed.total_seconds():.2f} seconds")
    elif progress.current_file_path is not None:
        logger.info(
            f"  Commit {progress.processed_commits}/{progress.matching_commits} "
            f"({progress.percent_complete:.2f}%) -> {Path(progress.current_file_path).name}"
        )


def extract(
    repo: str,
    output_dir: str,
    author_pattern: str,
    options: FormattingOptions,
) -> None:
    """Extract an author's history from a repository into Markdown files.

    Args:
        repo: Path to the Git repository
        output_dir: Directory for the generated files
        author_pattern: Author name/email substring or glob
        options: Formatting options
    """
    source = _open_source(repo, options.context_lines)

    with HistoryExtractor(source, options=options) as extractor:
        logger.info(f"Repository: {repo} ({source.source_type})")
        logger.info(f"Output directory: {output_dir}")
        logger.info(f"Author pattern: {author_pattern}")
        logger.info("")

        total = extractor.total_commit_count()
        matching = extractor.matching_commit_count(author_pattern)
        logger.info(f"Total commits: {total}")
        logger.info(f"Matching commits: {matching}")
        logger.info("")

        if matching == 0:
            logger.info("No commits found matching the author pattern.")
            return

        logger.info("Processing commits...")
        result = extractor.extract(author_pattern, output_dir, _log_progress)

    if result.generated_files > 0:
        logger.info("")
        logger.info(f"Generated files in: {output_dir}")
        for path in result.generated_file_paths:
            logger.info(f"- {Path(path).name}")


def count(repo: str, author_pattern: str | None = None) -> None:
    """Print total (and matching) commit counts for a repository."""
    with _open_source(repo) as source:
        print(f"Total commits: {source.total_commit_count()}")
        if author_pattern:
            print(f"Matching commits: {source.matching_commit_count(author_pattern)}")


def deck() -> None:
    """Launch the Flight Deck TUI for interactive extraction."""
    from histpack.flight_deck import main as flight_deck_main

    flight_deck_main()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="histpack",
        description="histpack - Git history to size-capped Markdown",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # extract command
    extract_parser = subparsers.add_parser(
        "extract",
        help="Extract an author's commit history into Markdown files",
    )
    extract_parser.add_argument("repo", help="Path to the Git repository")
    extract_parser.add_argument("output_dir", help="Directory for generated files")
    extract_parser.add_argument(
        "author_pattern",
        help="Author name or email to match (substring, or glob with * and ?)",
    )
    extract_parser.add_argument(
        "--max-chars",
        type=int,
        default=700_000,
        help="Maximum characters per file (default: 700000)",
    )
    extract_parser.add_argument(
        "--content-threshold",
        type=float,
        default=0.9,
        help="Fraction of --max-chars used for commit content (default: 0.9)",
    )
    extract_parser.add_argument(
        "--context-lines",
        type=int,
        default=3,
        help="Diff context lines (default: 3)",
    )
    extract_parser.add_argument(
        "--show-merge-content",
        action="store_true",
        help="Render file content for merge commits",
    )

    # count command
    count_parser = subparsers.add_parser(
        "count",
        help="Show commit counts for a repository",
    )
    count_parser.add_argument("repo", help="Path to the Git repository")
    count_parser.add_argument(
        "author_pattern",
        nargs="?",
        default=None,
        help="Optional author pattern to count matches for",
    )

    # deck command
    subparsers.add_parser(
        "deck",
        help="Launch Flight Deck TUI for interactive extraction",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        if args.command == "extract":
            options = FormattingOptions(
                max_characters_per_file=args.max_chars,
                content_threshold_fraction=args.content_threshold,
                context_lines=args.context_lines,
                show_merge_commit_content=args.show_merge_content,
            )
            extract(args.repo, args.output_dir, args.author_pattern, options)
        elif args.command == "count":
            count(args.repo, args.author_pattern)
        elif args.command == "deck":
            deck()
    except (HistpackError, OSError) as e:
        logger.error(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
