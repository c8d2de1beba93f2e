"""Run the split -> CSV -> SQL stages for one source file."""

import logging
import shutil
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from lgtxt.chunker import FileLineSplitter, LineSplitter
from lgtxt.config import PipelineConfig
from lgtxt.errors import ConfigError, InputNotFoundError
from lgtxt.normalizer import EncodingConverter, normalize_chunks
from lgtxt.schema import infer_schema, table_name_for
from lgtxt.sql_emitter import write_sql_script
from lgtxt.types import PathLike

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%d/%m/%Y %H:%M:%S"
SPLIT_PREFIX = "split_"


@dataclass(frozen=True)
class PipelineResult:
    split_dir: Path
    csv_dir: Path
    sql_path: Path
    table: str
    chunks: int
    files_processed: int
    total_files: int
    rows: int
    statements: int
    elapsed_seconds: float


def validate_run_label(run_label: str) -> None:
    """The run label becomes a directory name under the CSV and SQL roots."""
    if not run_label or not run_label.strip():
        raise ConfigError("run_label cannot be empty")
    if run_label in (".", "..") or Path(run_label).name != run_label:
        raise ConfigError(f"run_label must be a single folder name, got {run_label!r}")


def clear_directory(path: Path) -> None:
    """Create ``path`` if needed and delete everything inside it."""
    path.mkdir(parents=True, exist_ok=True)
    for child in path.iterdir():
        if child.is_dir() and not child.is_symlink():
            shutil.rmtree(child)
        else:
            child.unlink()


def prepare_directories(config: PipelineConfig, run_label: str) -> tuple[Path, Path, Path]:
    split_dir = config.split_dir()
    csv_dir = config.csv_dir(run_label)
    sql_dir = config.sql_dir(run_label)
    for label, path in (("text", split_dir), ("csv", csv_dir), ("sql", sql_dir)):
        logger.info("Clearing %s files in %s...", label, path)
        clear_directory(path)
    return split_dir, csv_dir, sql_dir


def run_pipeline(
    source: PathLike,
    run_label: str,
    config: PipelineConfig | None = None,
    splitter: LineSplitter | None = None,
    converter: EncodingConverter | None = None,
) -> PipelineResult:
    """Split ``source``, convert the chunks to CSV and write the SQL script.

    Every run clears the split directory and the run label's CSV and SQL
    directories first, so outputs are always fully regenerated.

    Returns a summary of what was produced.
    """
    config = config or PipelineConfig()
    splitter = splitter or FileLineSplitter()
    source = Path(source)

    validate_run_label(run_label)
    if not source.is_file():
        raise InputNotFoundError(f"File '{source}' not found.")

    started = time.monotonic()
    logger.info("Pipeline start time: [ %s ]", datetime.now().strftime(TIMESTAMP_FORMAT))

    split_dir, csv_dir, sql_dir = prepare_directories(config, run_label)
    table = table_name_for(source)

    logger.info("Splitting file '%s' into chunks of %d lines...", source, config.split_lines)
    chunks = splitter.split(source, config.split_lines, split_dir, f"{SPLIT_PREFIX}{table}")

    logger.info("Converting split files to CSV in folder '%s'...", csv_dir)
    normalize_chunks(chunks, csv_dir, config.delimiter, config.encoding, converter)

    columns = infer_schema(csv_dir, config.encoding)
    csv_files = sorted(p for p in csv_dir.glob("*.csv") if p.is_file())

    sql_path = sql_dir / f"{table}.sql"
    stats = write_sql_script(
        sql_path,
        config.database_for(run_label),
        table,
        columns,
        csv_files,
        config.encoding,
        batch_size=config.batch_size,
        progress_every=config.progress_every,
    )

    elapsed = time.monotonic() - started
    result = PipelineResult(
        split_dir=split_dir,
        csv_dir=csv_dir,
        sql_path=sql_path,
        table=table,
        chunks=len(chunks),
        files_processed=len(stats),
        total_files=len(csv_files),
        rows=sum(s.rows for s in stats),
        statements=sum(s.batches for s in stats),
        elapsed_seconds=elapsed,
    )

    logger.info("Total files processed: %d of %d", result.files_processed, result.total_files)
    logger.info("Pipeline end time: [ %s ]", datetime.now().strftime(TIMESTAMP_FORMAT))
    logger.info("Pipeline completed.")
    logger.info("  Split files in: %s", split_dir)
    logger.info("  CSV files in: %s", csv_dir)
    logger.info("  SQL script in: %s", sql_path)
    logger.info(
        "Total execution time: %.1f seconds (%d rows, %d INSERT statements).",
        elapsed,
        result.rows,
        result.statements,
    )
    return result
