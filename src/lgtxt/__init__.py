"""Large delimited text file -> chunked CSV -> batched SQL script pipeline."""

from lgtxt.config import PipelineConfig
from lgtxt.errors import (
    ConfigError,
    InputNotFoundError,
    NoCsvFilesError,
    PipelineError,
    SchemaError,
)
from lgtxt.pipeline import PipelineResult, run_pipeline
from lgtxt.sql_emitter import row_to_sql_tuple
from lgtxt.types import ColumnSpec

__all__ = [
    "ColumnSpec",
    "ConfigError",
    "InputNotFoundError",
    "NoCsvFilesError",
    "PipelineConfig",
    "PipelineError",
    "PipelineResult",
    "SchemaError",
    "row_to_sql_tuple",
    "run_pipeline",
]
