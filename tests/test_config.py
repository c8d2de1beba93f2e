"""Tests for PipelineConfig validation."""

import dataclasses
from pathlib import Path

import pytest

from lgtxt import ConfigError, PipelineConfig
from lgtxt.config import OUTPUT_DIR_ENV


class TestPipelineConfig:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv(OUTPUT_DIR_ENV, raising=False)
        config = PipelineConfig()
        assert config.split_lines == 10000
        assert config.delimiter == "|"
        assert config.encoding == "ISO-8859-1"
        assert config.batch_size == 500
        assert config.output_base_dir == Path("./output")

    def test_output_dir_from_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv(OUTPUT_DIR_ENV, str(tmp_path / "out"))
        assert PipelineConfig().output_base_dir == tmp_path / "out"

    def test_output_dir_accepts_strings(self):
        assert PipelineConfig(output_base_dir="x/y").output_base_dir == Path("x/y")

    def test_frozen(self):
        config = PipelineConfig(output_base_dir="out")
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.split_lines = 5

    def test_directories(self):
        config = PipelineConfig(output_base_dir="out")
        assert config.split_dir() == Path("out/split_files")
        assert config.csv_dir("b1") == Path("out/converted_csv/b1")
        assert config.sql_dir("b1") == Path("out/sql_files/b1")

    def test_database_name(self):
        assert PipelineConfig(output_base_dir="out").database_for("b1") == "b1"
        config = PipelineConfig(output_base_dir="out", database_name="crm")
        assert config.database_for("b1") == "crm"

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"split_lines": 0},
            {"split_lines": -5},
            {"split_lines": True},
            {"batch_size": 0},
            {"progress_every": 0},
            {"delimiter": ""},
            {"delimiter": "||"},
            {"delimiter": "\n"},
            {"encoding": "not-a-codec"},
            {"database_name": " "},
        ],
    )
    def test_invalid_values(self, kwargs):
        with pytest.raises(ConfigError):
            PipelineConfig(output_base_dir="out", **kwargs)

    def test_config_error_is_value_error(self):
        with pytest.raises(ValueError):
            PipelineConfig(output_base_dir="out", split_lines=0)

    def test_utf8_accepted(self):
        assert PipelineConfig(output_base_dir="out", encoding="UTF-8").encoding == "UTF-8"
