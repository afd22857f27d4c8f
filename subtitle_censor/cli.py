"""
Subtitle Censor - CLI Entry Point

Filters profanity from an SRT file and writes the filtered subtitles.

Usage:
    censor-subtitles input.srt [-o output.srt] [--level mild]

Example:
    censor-subtitles movie.srt --level strict --report movie.json
    censor-subtitles movie.srt --all-levels
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from . import __version__
from .analysis.orchestrator import SubtitleAnalyzer
from .config import Config
from .error_handler import UserFriendlyError, safe_operation
from .models import FilteredSubtitleResult, FilterLevel
from .reporting import generate_summary, print_summary, save_summary_json
from .subtitles.parser import write_srt_file
from .subtitles.repair import detect_timing_issues

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="censor-subtitles",
        description="Filter profanity from SRT subtitles and build an audio mute timeline",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  censor-subtitles movie.srt
  censor-subtitles movie.srt -o clean.srt --level strict
  censor-subtitles movie.srt --all-levels --report levels.json
  censor-subtitles movie.srt --offset-ms -1500 --speed 1.0427  # PAL speed-up
  censor-subtitles movie.srt --check-timing
        """
    )

    parser.add_argument(
        "input",
        type=Path,
        help="Input SRT file path"
    )

    parser.add_argument(
        "--output", "-o",
        type=Path,
        default=None,
        help="Output SRT path (default: <input>.<level>.srt)"
    )

    levels = parser.add_mutually_exclusive_group()
    levels.add_argument(
        "--level", "-l",
        type=str,
        choices=[level.value for level in FilterLevel],
        default=None,
        help="Filter level (default from config: mild)"
    )
    levels.add_argument(
        "--all-levels",
        action="store_true",
        help="Write one filtered file per level"
    )

    parser.add_argument(
        "--custom-word",
        action="append",
        default=[],
        metavar="WORD",
        help="Additional word to filter (repeatable)"
    )

    parser.add_argument(
        "--whitelist",
        action="append",
        default=[],
        metavar="WORD",
        help="Word never to filter (repeatable)"
    )

    parser.add_argument(
        "--offset-ms",
        type=int,
        default=None,
        help="Shift all timestamps by this many milliseconds"
    )

    parser.add_argument(
        "--speed",
        type=float,
        default=None,
        help="Multiply all timestamps by this ratio before shifting"
    )

    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration YAML file"
    )

    parser.add_argument(
        "--report",
        type=Path,
        default=None,
        help="Save JSON summary to file"
    )

    parser.add_argument(
        "--check-timing",
        action="store_true",
        help="Report timing problems in the input and exit"
    )

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )
    verbosity.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only print errors"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    return parser.parse_args(argv)


def apply_overrides(config: Config, args: argparse.Namespace) -> Config:
    """Apply CLI overrides to a loaded config."""
    if args.level is not None:
        config.filter.default_level = args.level
        logger.info(f"CLI override: level = {args.level}")

    if args.custom_word:
        config.filter.custom_words = list(config.filter.custom_words) + args.custom_word
    if args.whitelist:
        config.filter.whitelist = list(config.filter.whitelist) + args.whitelist

    if args.offset_ms is not None:
        config.timing.offset_ms = args.offset_ms
        logger.info(f"CLI override: offset = {args.offset_ms}ms")

    if args.speed is not None:
        config.timing.speed_ratio = args.speed
        logger.info(f"CLI override: speed ratio = {args.speed}")

    if args.verbose:
        config.logging.level = "DEBUG"
    elif args.quiet:
        config.logging.level = "WARNING"

    config.validate()
    return config


def output_path_for(input_path: Path, output: Optional[Path], level: FilterLevel, multiple: bool) -> Path:
    """Where to write the filtered file for one level."""
    if output is None:
        return input_path.with_name(f"{input_path.stem}.{level.value}.srt")
    if multiple:
        return output.with_name(f"{output.stem}.{level.value}{output.suffix or '.srt'}")
    return output


@safe_operation("reading subtitles")
def read_subtitles(path: Path) -> str:
    return path.read_text(encoding="utf-8-sig")


@safe_operation("loading configuration")
def load_config(args: argparse.Namespace) -> Config:
    return apply_overrides(Config.load(args.config), args)


def print_timing_report(path: Path, text: str) -> bool:
    """Print timing problems. Returns True if any were found."""
    report = detect_timing_issues(text)
    print(f"{path.name}: {report.total_entries} entries")
    print(f"  Overlapping entries: {report.overlapping_entries}")
    print(f"  Invalid durations:   {report.invalid_durations}")
    print(f"  Large gaps:          {report.large_gaps}")
    for issue in report.issues:
        print(f"  - {issue}")
    return report.has_issues


@safe_operation("filtering subtitles")
def run(args: argparse.Namespace, config: Config, text: str) -> Dict[FilterLevel, FilteredSubtitleResult]:
    """Analyze and write filtered subtitles for the requested levels."""
    analyzer = SubtitleAnalyzer.from_config(config)
    levels = list(FilterLevel) if args.all_levels else [config.default_level]
    content_id = str(args.input.resolve())
    padding = int(config.timing.mute_padding_ms)

    results = {}
    for level in levels:
        result = analyzer.analyze(
            content_id,
            text,
            level,
            custom_words=config.filter.custom_words,
            whitelist=config.filter.whitelist,
        )
        if result is None:
            raise UserFriendlyError(
                f"No usable subtitles found in {args.input.name}.",
                f"analysis of {args.input} returned no result",
            )

        destination = output_path_for(args.input, args.output, level, len(levels) > 1)
        write_srt_file(result.filtered, destination)
        results[level] = result

        if not args.quiet:
            print_summary(generate_summary(result, level, args.input, padding))
            print(f"✓ Filtered subtitles saved to: {destination}")

    if args.report:
        if len(results) == 1:
            report = generate_summary(next(iter(results.values())), source=args.input, mute_padding_ms=padding)
        else:
            report = {
                level.value: generate_summary(result, level, args.input, padding)
                for level, result in results.items()
            }
        save_summary_json(report, args.report)

    return results


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    try:
        config = load_config(args)
        config.setup_logging(force=True)

        text = read_subtitles(args.input)

        if args.check_timing:
            print_timing_report(args.input, text)
            return 0

        run(args, config, text)
        return 0

    except KeyboardInterrupt:
        print("\nCancelled by user")
        return 130

    except UserFriendlyError as e:
        logger.debug(f"Failed: {e.technical_message}")
        print(f"\nError: {e.user_message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
