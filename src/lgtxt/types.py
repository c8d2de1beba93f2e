"""Shared types for the lgtxt package."""

from dataclasses import dataclass
from pathlib import Path

TEXT_COLUMN_TYPE = "NVARCHAR(MAX)"

PathLike = str | Path


@dataclass(frozen=True)
class ColumnSpec:
    name: str
    type: str = TEXT_COLUMN_TYPE

    def render(self) -> str:
        return f"[{self.name}] {self.type}"


@dataclass
class EmitStats:
    """Counters for one CSV file passed through the SQL emitter."""

    rows: int = 0
    batches: int = 0
    blank_lines: int = 0
    shape_mismatches: int = 0
