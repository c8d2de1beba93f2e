"""Turn raw delimited chunks into comma-separated CSV files."""

import logging
from abc import ABC, abstractmethod
from pathlib import Path

from lgtxt.types import PathLike

logger = logging.getLogger(__name__)

CSV_DELIMITER = ","
CSV_SUFFIX = ".csv"


class EncodingConverter(ABC):
    """Abstract interface for re-encoding raw bytes."""

    @abstractmethod
    def reencode(self, data: bytes, from_encoding: str, to_encoding: str) -> bytes:
        """Decode ``data`` as ``from_encoding`` and return it encoded as ``to_encoding``."""


class CodecConverter(EncodingConverter):
    """Re-encodes with Python codecs.

    Byte sequences that cannot be decoded, and characters the target
    encoding cannot represent, are dropped with a warning rather than
    failing the run.
    """

    def reencode(self, data: bytes, from_encoding: str, to_encoding: str) -> bytes:
        try:
            text = data.decode(from_encoding)
        except UnicodeDecodeError as e:
            logger.warning(
                "Invalid %s byte sequence at offset %d, stripping undecodable bytes",
                from_encoding,
                e.start,
            )
            text = data.decode(from_encoding, errors="ignore")

        try:
            return text.encode(to_encoding)
        except UnicodeEncodeError as e:
            logger.warning(
                "Character %r cannot be represented in %s, stripping it",
                e.object[e.start : e.end],
                to_encoding,
            )
            return text.encode(to_encoding, errors="ignore")


def substitute_delimiter(text: str, delimiter: str) -> str:
    """Replace every ``delimiter`` with a comma.

    This is a plain character replace: a delimiter inside a quoted field is
    replaced too.
    """
    if delimiter == CSV_DELIMITER:
        return text
    return text.replace(delimiter, CSV_DELIMITER)


def normalize_chunk(
    chunk: PathLike,
    csv_dir: PathLike,
    delimiter: str,
    encoding: str,
    converter: EncodingConverter,
) -> Path:
    """Write ``<csv_dir>/<chunk stem>.csv`` and return its path.

    The line count is preserved: neither transform touches line terminators.
    """
    chunk = Path(chunk)
    output_csv = Path(csv_dir) / f"{chunk.stem}{CSV_SUFFIX}"
    logger.info("Converting %s to %s...", chunk, output_csv)

    raw = chunk.read_bytes()
    text = converter.reencode(raw, encoding, encoding).decode(encoding)
    output_csv.write_bytes(substitute_delimiter(text, delimiter).encode(encoding))
    return output_csv


def normalize_chunks(
    chunks: list[Path],
    csv_dir: PathLike,
    delimiter: str,
    encoding: str,
    converter: EncodingConverter | None = None,
) -> list[Path]:
    converter = converter or CodecConverter()
    return [normalize_chunk(c, csv_dir, delimiter, encoding, converter) for c in chunks]
