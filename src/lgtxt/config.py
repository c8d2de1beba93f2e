"""Immutable run configuration."""

import codecs
import os
from dataclasses import dataclass, field
from pathlib import Path

from lgtxt.errors import ConfigError

DEFAULT_SPLIT_LINES = 10000
DEFAULT_DELIMITER = "|"
DEFAULT_ENCODING = "ISO-8859-1"
DEFAULT_BATCH_SIZE = 500
DEFAULT_PROGRESS_EVERY = 1000
OUTPUT_DIR_ENV = "LGTXT_OUTPUT_DIR"


def default_output_dir() -> Path:
    return Path(os.environ.get(OUTPUT_DIR_ENV, "./output"))


@dataclass(frozen=True)
class PipelineConfig:
    """Options shared by every stage of one run.

    Validated on construction, so a config that exists is usable.
    ``database_name`` of ``None`` means "use the run label".
    """

    split_lines: int = DEFAULT_SPLIT_LINES
    delimiter: str = DEFAULT_DELIMITER
    encoding: str = DEFAULT_ENCODING
    output_base_dir: Path = field(default_factory=default_output_dir)
    batch_size: int = DEFAULT_BATCH_SIZE
    progress_every: int = DEFAULT_PROGRESS_EVERY
    database_name: str | None = None

    def __post_init__(self) -> None:
        # frozen: normalise through object.__setattr__
        object.__setattr__(self, "output_base_dir", Path(self.output_base_dir))

        for name in ("split_lines", "batch_size", "progress_every"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ConfigError(f"{name} must be a positive integer, got {value!r}")

        if len(self.delimiter) != 1:
            raise ConfigError(f"delimiter must be a single character, got {self.delimiter!r}")
        if self.delimiter in "\r\n":
            raise ConfigError("delimiter cannot be a line terminator")

        try:
            codecs.lookup(self.encoding)
        except LookupError:
            raise ConfigError(f"Unknown encoding: {self.encoding}") from None

        if self.database_name is not None and not self.database_name.strip():
            raise ConfigError("database_name cannot be blank")

    def split_dir(self) -> Path:
        return self.output_base_dir / "split_files"

    def csv_dir(self, run_label: str) -> Path:
        return self.output_base_dir / "converted_csv" / run_label

    def sql_dir(self, run_label: str) -> Path:
        return self.output_base_dir / "sql_files" / run_label

    def database_for(self, run_label: str) -> str:
        return self.database_name or run_label
