"""Table schema inference from a CSV header, and the SQL script preamble."""

import logging
import re
from pathlib import Path

from lgtxt.errors import InputNotFoundError, NoCsvFilesError, SchemaError
from lgtxt.types import ColumnSpec, PathLike

logger = logging.getLogger(__name__)

SCRIPT_TITLE = "-- SQL Script to Create Database and Insert Data"

DATABASE_DDL = """\
IF NOT EXISTS (SELECT * FROM sys.databases WHERE name = '{database}')
BEGIN
    CREATE DATABASE [{database}];
END;
GO
USE [{database}];
"""

TABLE_DDL = """\
IF OBJECT_ID('{table}', 'U') IS NOT NULL DROP TABLE [{table}];
CREATE TABLE [{table}] (
    {columns}
);
GO
"""

_INVALID_IDENTIFIER_CHARS = re.compile(r"[^A-Za-z0-9_]")


def sanitize_column_name(name: str) -> str:
    """Replace every character outside ``[A-Za-z0-9_]`` with ``_``."""
    return _INVALID_IDENTIFIER_CHARS.sub("_", name)


def table_name_for(source: PathLike) -> str:
    """The target table is named after the source file, without extension."""
    return Path(source).stem


def find_first_csv(csv_dir: PathLike) -> Path:
    csv_dir = Path(csv_dir)
    if not csv_dir.is_dir():
        raise InputNotFoundError(f"CSV directory '{csv_dir}' not found.")
    csv_files = sorted(p for p in csv_dir.glob("*.csv") if p.is_file())
    if not csv_files:
        raise NoCsvFilesError(f"No CSV files found in {csv_dir}.")
    return csv_files[0]


def read_header(csv_path: PathLike, encoding: str) -> str:
    """Return the first line of ``csv_path`` without its line terminator."""
    with open(csv_path, encoding=encoding, newline="\n") as f:
        return f.readline().rstrip("\r\n")


def infer_columns(header: str) -> list[ColumnSpec]:
    """Split a comma-separated header into sanitized text columns, in order."""
    if not header.strip():
        raise SchemaError("Header row is empty; cannot create table structure.")
    return [ColumnSpec(sanitize_column_name(name)) for name in header.split(",")]


def render_preamble(database: str) -> str:
    return f"{SCRIPT_TITLE}\n" + DATABASE_DDL.format(database=database)


def render_table_ddl(table: str, columns: list[ColumnSpec]) -> str:
    if not columns:
        raise SchemaError(f"Table {table} has no columns.")
    return TABLE_DDL.format(table=table, columns=",".join(c.render() for c in columns))


def infer_schema(csv_dir: PathLike, encoding: str) -> list[ColumnSpec]:
    """Derive the column list from the header of the first CSV in ``csv_dir``."""
    logger.info("Extracting table structure from the first CSV file...")
    first_file = find_first_csv(csv_dir)
    columns = infer_columns(read_header(first_file, encoding))
    logger.info("Inferred %d column(s) from %s", len(columns), first_file)
    logger.debug("Columns: %s", [c.name for c in columns])
    return columns
