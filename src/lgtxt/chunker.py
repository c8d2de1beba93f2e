"""Split a large text file into numbered fixed-size line chunks."""

import logging
from abc import ABC, abstractmethod
from pathlib import Path

from lgtxt.errors import ConfigError, InputNotFoundError
from lgtxt.types import PathLike

logger = logging.getLogger(__name__)

CHUNK_SUFFIX = ".txt"


def chunk_suffix(index: int) -> str:
    """Numeric suffix for the ``index``-th chunk (0-based).

    Same scheme as ``split -d``: ``00``..``89``, then ``9000``..``9899``,
    then ``990000``..``998999`` and so on. Lexical order of the suffixes
    always matches chunk order.
    """
    if index < 0:
        raise ValueError(f"chunk index must be >= 0, got {index}")
    level = 0
    while index >= 9 * 10 ** (level + 1):
        index -= 9 * 10 ** (level + 1)
        level += 1
    return "9" * level + str(index).zfill(level + 2)


class LineSplitter(ABC):
    """Abstract interface for partitioning a file into line chunks."""

    @abstractmethod
    def split(
        self,
        source: PathLike,
        split_lines: int,
        out_dir: PathLike,
        prefix: str,
    ) -> list[Path]:
        """Write consecutive ``split_lines``-line slices of ``source`` into ``out_dir``.

        Args:
            source: File to split.
            split_lines: Maximum number of lines per chunk.
            out_dir: Existing directory receiving the chunks.
            prefix: File name prefix, e.g. ``split_orders``.

        Returns:
            Chunk paths in line order.
        """


class FileLineSplitter(LineSplitter):
    """Streams the source in binary mode; bytes are copied untouched.

    Only one input and one output handle are open at any time.
    """

    def split(
        self,
        source: PathLike,
        split_lines: int,
        out_dir: PathLike,
        prefix: str,
    ) -> list[Path]:
        source = Path(source)
        out_dir = Path(out_dir)
        if split_lines < 1:
            raise ConfigError(f"split_lines must be a positive integer, got {split_lines}")
        if not source.is_file():
            raise InputNotFoundError(f"File '{source}' not found.")

        chunks: list[Path] = []
        out = None
        lines_in_chunk = 0
        try:
            with open(source, "rb") as f:
                for line in f:
                    if out is None or lines_in_chunk >= split_lines:
                        if out is not None:
                            out.close()
                        path = out_dir / f"{prefix}{chunk_suffix(len(chunks))}{CHUNK_SUFFIX}"
                        out = open(path, "wb")
                        chunks.append(path)
                        lines_in_chunk = 0
                    out.write(line)
                    lines_in_chunk += 1
        finally:
            if out is not None:
                out.close()

        logger.info("Split %s into %d chunk(s) of up to %d lines", source, len(chunks), split_lines)
        return chunks


def count_lines(path: PathLike) -> int:
    """Count lines the way the splitter does: a trailing unterminated line counts."""
    with open(path, "rb") as f:
        return sum(1 for _ in f)
