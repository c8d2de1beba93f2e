"""Exceptions raised by the pipeline stages.

Library code raises these; only the CLI turns them into exit codes.
"""


class PipelineError(Exception):
    """Base class for all pipeline failures."""


class ConfigError(PipelineError, ValueError):
    """An option value is missing or out of range."""


class InputNotFoundError(PipelineError):
    """A required input file or directory does not exist."""


class NoCsvFilesError(InputNotFoundError):
    """Schema inference found no CSV files to read a header from."""


class SchemaError(PipelineError):
    """The header row cannot produce a table definition."""
