"""Batched multi-row INSERT generation from normalized CSV files."""

import logging
from pathlib import Path
from typing import Iterator, TextIO

from lgtxt.schema import render_preamble, render_table_ddl
from lgtxt.types import ColumnSpec, EmitStats, PathLike

logger = logging.getLogger(__name__)

NULL = "NULL"
QUOTE_CHARS = str.maketrans("", "", "'\"")


def strip_quotes(value: str) -> str:
    return value.translate(QUOTE_CHARS)


def render_value(field: str) -> str:
    """Render one CSV field as a SQL literal.

    Quotes are removed before the emptiness test, so a field made only of
    quote characters becomes NULL.
    """
    value = strip_quotes(field)
    if value == "":
        return NULL
    return f"'{value}'"


def row_to_sql_tuple(fields: list[str]) -> str:
    """Render a row as ``('a',NULL,'c')``, keeping field order."""
    return "(" + ",".join(render_value(f) for f in fields) + ")"


def render_insert(table: str, tuples: list[str]) -> str:
    return f"INSERT INTO [{table}] VALUES " + ", ".join(tuples) + ";"


def chunked_tuples(
    csv_path: PathLike,
    encoding: str,
    batch_size: int,
    stats: EmitStats,
    skip_header: bool = True,
    expected_columns: int | None = None,
    progress_every: int = 1000,
) -> Iterator[list[str]]:
    """Yield lists of up to ``batch_size`` rendered row tuples from one CSV file.

    Reads line by line. The trailing partial batch is yielded at end of file,
    so a batch never spans two files. ``stats`` is updated as rows are read.
    """
    with open(csv_path, encoding=encoding, newline="\n") as f:
        if skip_header:
            next(f, None)

        batch: list[str] = []
        for line_num, line in enumerate(f, start=2 if skip_header else 1):
            line = line.rstrip("\r\n")
            if line == "":
                stats.blank_lines += 1
                logger.debug("Skipping blank line %d in %s", line_num, csv_path)
                continue

            fields = line.split(",")
            if expected_columns is not None and len(fields) != expected_columns:
                stats.shape_mismatches += 1
                logger.warning(
                    "Line %d in %s has %d field(s), expected %d; rendering as-is",
                    line_num,
                    csv_path,
                    len(fields),
                    expected_columns,
                )

            batch.append(row_to_sql_tuple(fields))
            stats.rows += 1
            if stats.rows % progress_every == 0:
                logger.info("Processed %d rows in %s", stats.rows, csv_path)

            if len(batch) >= batch_size:
                yield batch
                batch = []

        if batch:
            yield batch


def emit_csv(
    out: TextIO,
    csv_path: PathLike,
    table: str,
    encoding: str,
    batch_size: int = 500,
    skip_header: bool = True,
    expected_columns: int | None = None,
    progress_every: int = 1000,
) -> EmitStats:
    """Append the INSERT statements for one CSV file to ``out``."""
    stats = EmitStats()
    out.write(f"-- Processing {csv_path}...\n")
    for batch in chunked_tuples(
        csv_path,
        encoding,
        batch_size,
        stats,
        skip_header=skip_header,
        expected_columns=expected_columns,
        progress_every=progress_every,
    ):
        out.write(render_insert(table, batch) + "\n")
        stats.batches += 1

    logger.info("Finished processing %s. Total rows: %d", csv_path, stats.rows)
    if stats.shape_mismatches:
        logger.warning(
            "%d row(s) in %s did not match the header's %d column(s)",
            stats.shape_mismatches,
            csv_path,
            expected_columns,
        )
    return stats


def write_sql_script(
    sql_path: PathLike,
    database: str,
    table: str,
    columns: list[ColumnSpec],
    csv_files: list[Path],
    encoding: str,
    batch_size: int = 500,
    progress_every: int = 1000,
) -> list[EmitStats]:
    """Write the full script: preamble, table DDL, one section per CSV, trailer.

    Only the first CSV file carries the header row; later files are chunk
    continuations and every line in them is data.
    """
    logger.info("Initializing SQL script %s...", sql_path)
    results: list[EmitStats] = []
    with open(sql_path, "w", encoding=encoding, newline="\n") as out:
        out.write(render_preamble(database))
        logger.info("Creating table structure in SQL script...")
        out.write(render_table_ddl(table, columns))

        logger.info("Generating SQL scripts in '%s'...", sql_path)
        out.write(f"-- SQL script for inserting data into {table}\n")
        total = len(csv_files)
        for i, csv_file in enumerate(csv_files, start=1):
            logger.info("Processing file %d of %d: %s", i, total, csv_file)
            results.append(
                emit_csv(
                    out,
                    csv_file,
                    table,
                    encoding,
                    batch_size=batch_size,
                    skip_header=(i == 1),
                    expected_columns=len(columns),
                    progress_every=progress_every,
                )
            )

        logger.info("Finalizing SQL script...")
        out.write("GO\n")

    logger.info("SQL script generated: %s", sql_path)
    return results
