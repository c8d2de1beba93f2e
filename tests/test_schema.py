"""Tests for header-based schema inference and DDL rendering."""

import pytest

from lgtxt.errors import InputNotFoundError, NoCsvFilesError, SchemaError
from lgtxt.schema import (
    find_first_csv,
    infer_columns,
    infer_schema,
    read_header,
    render_preamble,
    render_table_ddl,
    sanitize_column_name,
    table_name_for,
)
from lgtxt.types import ColumnSpec


class TestSanitize:
    def test_replaces_invalid_characters(self):
        assert sanitize_column_name("first name") == "first_name"
        assert sanitize_column_name("e-mail") == "e_mail"
        assert sanitize_column_name("Product1 revenue ($)") == "Product1_revenue____"
        assert sanitize_column_name("Zoë") == "Zo_"

    def test_keeps_valid_identifiers(self):
        assert sanitize_column_name("Bill_ID_2") == "Bill_ID_2"

    def test_idempotent(self):
        for name in ["a b", "x-y.z", '"quoted"', "ok_1", "", "é€"]:
            once = sanitize_column_name(name)
            assert sanitize_column_name(once) == once


class TestInferColumns:
    def test_header_order_and_text_type(self):
        columns = infer_columns("id,name,email")
        assert columns == [ColumnSpec("id"), ColumnSpec("name"), ColumnSpec("email")]
        assert all(c.type == "NVARCHAR(MAX)" for c in columns)

    def test_empty_header(self):
        with pytest.raises(SchemaError):
            infer_columns("")

    def test_quoted_header_names_are_sanitized(self):
        assert [c.name for c in infer_columns('"id","full name"')] == ["_id_", "_full_name_"]


class TestRendering:
    def test_table_ddl(self):
        ddl = render_table_ddl("people", infer_columns("id,name,email"))
        assert ddl == (
            "IF OBJECT_ID('people', 'U') IS NOT NULL DROP TABLE [people];\n"
            "CREATE TABLE [people] (\n"
            "    [id] NVARCHAR(MAX),[name] NVARCHAR(MAX),[email] NVARCHAR(MAX)\n"
            ");\n"
            "GO\n"
        )

    def test_preamble(self):
        assert render_preamble("sales") == (
            "-- SQL Script to Create Database and Insert Data\n"
            "IF NOT EXISTS (SELECT * FROM sys.databases WHERE name = 'sales')\n"
            "BEGIN\n"
            "    CREATE DATABASE [sales];\n"
            "END;\n"
            "GO\n"
            "USE [sales];\n"
        )

    def test_table_without_columns(self):
        with pytest.raises(SchemaError):
            render_table_ddl("t", [])

    def test_table_name_drops_extension(self):
        assert table_name_for("data/orders_2024.txt") == "orders_2024"
        assert table_name_for("orders.dat") == "orders"


class TestHeaderDiscovery:
    def test_first_csv_in_sorted_order(self, tmp_path):
        for name in ["split_a01.csv", "split_a00.csv", "notes.txt"]:
            (tmp_path / name).write_text("x\n")
        assert find_first_csv(tmp_path).name == "split_a00.csv"

    def test_no_csv_files(self, tmp_path):
        (tmp_path / "readme.txt").write_text("x\n")
        with pytest.raises(NoCsvFilesError):
            find_first_csv(tmp_path)

    def test_no_csv_files_is_input_not_found(self, tmp_path):
        with pytest.raises(InputNotFoundError):
            find_first_csv(tmp_path)

    def test_missing_directory(self, tmp_path):
        with pytest.raises(InputNotFoundError):
            find_first_csv(tmp_path / "missing")

    def test_read_header_reads_first_line_only(self, tmp_path):
        csv_file = tmp_path / "a.csv"
        csv_file.write_bytes(b"id,name\r\n1,x\r\n")
        assert read_header(csv_file, "UTF-8") == "id,name"

    def test_infer_schema(self, tmp_path):
        (tmp_path / "split_p00.csv").write_text("id,first name\n1,a\n")
        (tmp_path / "split_p01.csv").write_text("2,b\n")
        assert [c.name for c in infer_schema(tmp_path, "UTF-8")] == ["id", "first_name"]
