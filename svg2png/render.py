# svg2png/render.py
"""
Icon Rendering Script.

Renders every SVG file in a source directory to a PNG in a target directory.
Output sizes come from the icon category sizes (-s), the expected display
width (-w) or the zoom factor (-z), in that order of precedence.

Exit status: 0 on success, including when some files were skipped or failed
and when no SVG files were found; 2 for invalid arguments or configuration;
1 when the target directory cannot be created.
"""

import argparse
import logging
import sys

from svg2png.config import (
    DEFAULT_JOBS,
    ICON_CATEGORIES,
    NUM_ICON_CATEGORIES,
    OUTPUT_FORMATS,
)
from svg2png.conversion.driver import convert_directory
from svg2png.utils.config import build_configuration, get_config_value, load_config
from svg2png.utils.error_handling import ConfigError, DirectoryError
from svg2png.utils.logger import setup_logging

logger = logging.getLogger(__name__)


def positive_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: '{value}'")
    if not number > 0:
        raise argparse.ArgumentTypeError(f"must be greater than 0: '{value}'")
    return number


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: '{value}'")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be greater than 0: '{value}'")
    return number


def create_parser() -> argparse.ArgumentParser:
    """Creates the argument parser; options left unset are None so config file values apply."""
    category_names = "\n".join(f"  - {name} ({size}px sources)" for name, size in ICON_CATEGORIES)
    parser = argparse.ArgumentParser(
        prog="svg2png",
        description="Renders SVG files to PNGs.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"Icon category sizes for -s, in order:\n{category_names}",
    )

    parser.add_argument("source_dir", help="Directory containing the SVG files.")
    parser.add_argument("target_dir", help="Directory to write the PNG files to (created if missing).")

    # --- Sizing ---
    parser.add_argument(
        "-z", "--zoom",
        type=positive_float,
        default=None,
        help="Zoom factor, defaults to 1.0.",
    )
    parser.add_argument(
        "-w", "--expected_width",
        type=positive_int,
        default=None,
        help="Expected display width in pixels; launcher icons are scaled by width / 540.",
    )
    parser.add_argument(
        "-s", "--sizes",
        type=positive_int,
        nargs=NUM_ICON_CATEGORIES,
        default=None,
        metavar="SIZE",
        help=f"Target sizes for the {NUM_ICON_CATEGORIES} icon categories.",
    )

    # --- Output ---
    parser.add_argument(
        "-f", "--format",
        choices=list(OUTPUT_FORMATS),
        default=None,
        help="Color format, defaults to rgba.",
    )
    parser.add_argument(
        "-j", "--jobs",
        type=positive_int,
        default=None,
        help=f"Number of files converted in parallel (default: {DEFAULT_JOBS}).",
    )
    parser.add_argument(
        "--no_progress",
        action="store_true",
        help="Do not show a progress bar.",
    )

    # --- Configuration & Logging ---
    parser.add_argument(
        "--config_file",
        type=str,
        default=None,
        help="Optional YAML file with defaults for the options above.",
    )
    parser.add_argument(
        "--log_level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging level (default: INFO).",
    )
    parser.add_argument(
        "--log_file",
        type=str,
        default=None,
        help="Path to an optional log file.",
    )

    return parser


def main(argv=None) -> int:
    """Main entry point; returns the process exit status."""
    parser = create_parser()
    args = parser.parse_args(argv)

    file_config = {}
    if args.config_file:
        try:
            file_config = load_config(args.config_file)
        except ConfigError as e:
            parser.error(e.message)

    setup_logging(
        get_config_value("log_level", args, file_config, "INFO"),
        get_config_value("log_file", args, file_config),
    )

    try:
        config = build_configuration(args, file_config)
        jobs = get_config_value("jobs", args, file_config, DEFAULT_JOBS)
        if isinstance(jobs, bool) or not isinstance(jobs, int) or jobs <= 0:
            raise ConfigError(f"Number of jobs must be a positive integer, got {jobs!r}.")
    except ConfigError as e:
        parser.error(e.message)

    if get_config_value("zoom", args, file_config) is None:
        logger.info("No zoom factor given, defaulting to 1.0")
    logger.debug(f"Configuration: {config}")

    try:
        report = convert_directory(
            args.source_dir,
            args.target_dir,
            config,
            jobs=jobs,
            progress=not args.no_progress,
        )
    except DirectoryError as e:
        logger.error(e.message)
        return 1

    logger.debug(f"Finished: {len(report.results)} files processed")
    return 0


if __name__ == "__main__":
    sys.exit(main())
