#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/integration/test_round_trip.py
"""Integration tests writing workbooks to disk and reading them back.

Tests cover:
- Save and reload in both container formats
- Numeric canonicalization after a round trip
- Multi-sheet content and writer equality across save/load

"""

import datetime

import pytest
from utils import PII_FIRST_LINE, PII_HEADER, PII_ROWS, PII_SHEET_NAME

from workbook_accessor import WorkbookReader, WorkbookWriter, WriterOptions

FORMATS = ["xls", "xlsx"]


def _writer(workbook_format):
    return WorkbookWriter(options=WriterOptions(workbook_format=workbook_format))


@pytest.mark.integration
@pytest.mark.parametrize("workbook_format", FORMATS)
class TestRoundTrip:
    """Test saving with the writer and reading with the reader."""

    def test_single_row(self, workbook_format, temp_dir):
        path = temp_dir / f"round_trip.{workbook_format}"
        with _writer(workbook_format) as writer:
            writer.add_row("abc", "def").save(path)

        with WorkbookReader.open(path, has_header=False) as reader:
            assert list(reader.to_csv()) == ["abc,def"]

    def test_number_canonicalization(self, workbook_format, temp_dir):
        path = temp_dir / f"numbers.{workbook_format}"
        with _writer(workbook_format) as writer:
            writer.add_row(2.14540, 10.0, 3, -0.5).save(path)

        with WorkbookReader(path, has_header=False) as reader:
            assert list(reader.to_lists()) == [["2.1454", "10", "3", "-0.5"]]

    def test_typed_values(self, workbook_format, temp_dir):
        path = temp_dir / f"typed.{workbook_format}"
        with _writer(workbook_format) as writer:
            writer.add_row("kind", "value")
            writer.add_row("flag", True)
            writer.add_row("day", datetime.date(2013, 3, 28))
            writer.add_row("moment", datetime.datetime(2013, 3, 28, 15, 44, 17))
            writer.add_row("formula-like", "=SUM(A1:A2)")
            writer.save(path)

        with WorkbookReader(path) as reader:
            assert {row["kind"]: row["value"] for row in reader.to_maps()} == {
                "flag": "TRUE",
                "day": "2013-03-28",
                "moment": "2013-03-28 15:44:17",
                "formula-like": "=SUM(A1:A2)",
            }

    def test_patient_listing(self, workbook_format, temp_dir):
        path = temp_dir / f"{PII_SHEET_NAME}.{workbook_format}"
        with _writer(workbook_format) as writer:
            writer.set_sheet_name(PII_SHEET_NAME).add_row(*PII_HEADER)
            for row in PII_ROWS:
                writer.add_row(*row)
            writer.save(path)

        with WorkbookReader(path) as reader:
            assert reader.all_sheet_names() == [PII_SHEET_NAME]
            assert reader.header == PII_HEADER
            assert next(iter(reader.to_lists())) == PII_FIRST_LINE
            assert len(list(reader.to_maps())) == 9

    def test_multiple_sheets(self, workbook_format, temp_dir):
        path = temp_dir / f"sheets.{workbook_format}"
        with _writer(workbook_format) as writer:
            writer.set_sheet_name("People").add_row("name").add_row("Alice")
            writer.create_and_turn_to_sheet("Scores").add_row("score").add_row(95)
            writer.create_sheet("Blank")
            expected = writer.to_reader().to_multimap()
            writer.save(path)

        with WorkbookReader(path) as reader:
            assert reader.all_sheet_names() == ["People", "Scores", "Blank"]
            assert reader.to_multimap() == expected
            assert expected == {"People": [["Alice"]], "Scores": [["95"]], "Blank": []}

    def test_writer_equal_after_reload(self, workbook_format, temp_dir):
        path = temp_dir / f"equal.{workbook_format}"
        writer = _writer(workbook_format).add_row("abc", 1).add_row("def", 2.5)
        writer.save(path)

        with WorkbookReader(path) as reader:
            assert WorkbookWriter.open(reader.document) == writer

    def test_to_bytes_readable(self, workbook_format):
        writer = _writer(workbook_format).add_row("abc", "def")
        with WorkbookReader(writer.to_bytes(), has_header=False) as reader:
            assert list(reader.to_csv()) == ["abc,def"]

    def test_append_to_loaded_workbook(self, workbook_format, temp_dir):
        path = temp_dir / f"append.{workbook_format}"
        _writer(workbook_format).add_row("first").save(path)

        with WorkbookReader(path) as reader:
            writer = WorkbookWriter.open(reader.document)
            writer.add_row("second").save(path)

        with WorkbookReader(path, has_header=False) as reader:
            assert list(reader.to_csv()) == ["first", "second"]
