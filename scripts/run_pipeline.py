"""CLI entry point for the text-to-SQL pipeline.

Usage:
    python -m scripts.run_pipeline mydata.txt batch_2024 [--lines=5000] [--delimiter='|'] [--encoding=UTF-8]
"""

import argparse
import logging
import sys

from lgtxt import PipelineConfig, PipelineError, run_pipeline
from lgtxt.config import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_DELIMITER,
    DEFAULT_ENCODING,
    DEFAULT_SPLIT_LINES,
    default_output_dir,
)

logger = logging.getLogger(__name__)

EPILOG = """\
Example:
  python -m scripts.run_pipeline mydata.txt batch_2024 --lines=5000 --delimiter='|'
"""


class UsageExitParser(argparse.ArgumentParser):
    """ArgumentParser that exits with status 1 on bad usage."""

    def error(self, message: str) -> None:
        self.print_help(sys.stderr)
        self.exit(1, f"\n{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = UsageExitParser(
        prog="run",
        description="Split a large delimited text file, convert it to CSV and generate a SQL load script",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
    )
    parser.add_argument("text_file", help="Delimited text file to load")
    parser.add_argument("sub_folder", help="Run label scoping the CSV and SQL output folders")
    parser.add_argument(
        "--lines",
        type=int,
        default=DEFAULT_SPLIT_LINES,
        help=f"Number of lines per split file (default: {DEFAULT_SPLIT_LINES})",
    )
    parser.add_argument(
        "--delimiter",
        default=DEFAULT_DELIMITER,
        help=f"Delimiter for the input file (default: {DEFAULT_DELIMITER})",
    )
    parser.add_argument(
        "--encoding",
        default=DEFAULT_ENCODING,
        help=f"Encoding for the files, e.g. UTF-8 or ISO-8859-1 (default: {DEFAULT_ENCODING})",
    )
    parser.add_argument(
        "--batch-size",
        type=int,
        default=DEFAULT_BATCH_SIZE,
        help=f"Rows per INSERT statement (default: {DEFAULT_BATCH_SIZE})",
    )
    parser.add_argument("--database", default=None, help="Database name (default: the run label)")
    parser.add_argument(
        "--output-dir",
        default=None,
        help="Base output directory (default: $LGTXT_OUTPUT_DIR or ./output)",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        config = PipelineConfig(
            split_lines=args.lines,
            delimiter=args.delimiter,
            encoding=args.encoding,
            output_base_dir=args.output_dir or default_output_dir(),
            batch_size=args.batch_size,
            database_name=args.database,
        )
        result = run_pipeline(args.text_file, args.sub_folder, config)
    except PipelineError as e:
        logger.error("%s", e)
        sys.exit(1)

    logger.info("Done. %d rows written to %s", result.rows, result.sql_path)


if __name__ == "__main__":
    main()
