"""Shared test fixtures."""

from pathlib import Path

import pytest

from lgtxt import PipelineConfig


@pytest.fixture
def output_dir(tmp_path):
    return tmp_path / "output"


@pytest.fixture
def config(output_dir):
    """A config writing under the test's tmp dir, small enough to exercise chunking."""
    return PipelineConfig(split_lines=2, output_base_dir=output_dir)


@pytest.fixture
def make_source(tmp_path):
    """Write a source text file from a list of lines and return its path."""

    def _make(lines: list[str], name: str = "people.txt", encoding: str = "latin-1") -> Path:
        path = tmp_path / "input" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes("".join(f"{line}\n" for line in lines).encode(encoding))
        return path

    return _make
