#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_lifecycle.py
"""Unit tests for the close lifecycle of readers and writers."""

import openpyxl
import pytest
from utils import create_multi_sheet_workbook

from workbook_accessor import WorkbookReader, WorkbookWriter
from workbook_accessor.exceptions import WorkbookClosedError

READER_CALLS = [
    ("header", lambda r: r.header),
    ("has_header", lambda r: r.has_header),
    ("workbook", lambda r: r.workbook),
    ("document", lambda r: r.document),
    ("all_sheet_names", lambda r: r.all_sheet_names()),
    ("current_sheet_name", lambda r: r.current_sheet_name()),
    ("turn_to_sheet_index", lambda r: r.turn_to_sheet(0)),
    ("turn_to_sheet_name", lambda r: r.turn_to_sheet("Ragged")),
    ("turn_to_sheet_header", lambda r: r.turn_to_sheet(0, False)),
    ("turn_to_sheet_bad_key", lambda r: r.turn_to_sheet(None)),
    ("create_sheet", lambda r: r.create_sheet("new")),
    ("create_and_turn_to_sheet", lambda r: r.create_and_turn_to_sheet("new")),
    ("with_header", lambda r: r.with_header()),
    ("without_header", lambda r: r.without_header()),
    ("to_csv", lambda r: r.to_csv()),
    ("to_lists", lambda r: r.to_lists()),
    ("to_arrays", lambda r: r.to_arrays()),
    ("to_maps", lambda r: r.to_maps()),
    ("to_multimap", lambda r: r.to_multimap()),
]

WRITER_CALLS = [
    ("workbook_format", lambda w: w.workbook_format),
    ("all_sheet_names", lambda w: w.all_sheet_names()),
    ("current_sheet_name", lambda w: w.current_sheet_name()),
    ("turn_to_sheet", lambda w: w.turn_to_sheet(0)),
    ("create_sheet", lambda w: w.create_sheet("new")),
    ("create_and_turn_to_sheet", lambda w: w.create_and_turn_to_sheet("new")),
    ("set_sheet_name", lambda w: w.set_sheet_name("renamed")),
    ("add_row", lambda w: w.add_row("abc")),
    ("to_bytes", lambda w: w.to_bytes()),
    ("to_reader", lambda w: w.to_reader()),
    ("save", lambda w: w.save("never-written.xls")),
    ("eq", lambda w: w == WorkbookWriter()),
    ("hash", lambda w: hash(w)),
]


@pytest.fixture
def closed_reader():
    reader = WorkbookReader(create_multi_sheet_workbook())
    reader.close()
    return reader


@pytest.fixture
def closed_writer():
    writer = WorkbookWriter()
    writer.close()
    return writer


@pytest.mark.unit
class TestReaderLifecycle:
    """Test that a closed reader rejects every operation."""

    @pytest.mark.parametrize("name,call", READER_CALLS, ids=[name for name, _ in READER_CALLS])
    def test_closed_reader_rejects(self, closed_reader, name, call):
        with pytest.raises(WorkbookClosedError, match="Workbook has been closed."):
            call(closed_reader)

    def test_closed_flag(self):
        reader = WorkbookReader(create_multi_sheet_workbook())
        assert reader.closed is False
        reader.close()
        assert reader.closed is True

    def test_second_close_is_noop(self, closed_reader):
        closed_reader.close()
        assert closed_reader.closed is True

    def test_rejection_is_permanent(self, closed_reader):
        for _ in range(2):
            with pytest.raises(WorkbookClosedError):
                closed_reader.all_sheet_names()

    def test_stream_created_before_close(self):
        reader = WorkbookReader(create_multi_sheet_workbook())
        rows = reader.to_lists()
        reader.close()
        with pytest.raises(WorkbookClosedError):
            list(rows)

    def test_context_manager_closes(self):
        with WorkbookReader(create_multi_sheet_workbook()) as reader:
            assert not reader.closed
        assert reader.closed

    def test_context_manager_closes_on_error(self):
        with pytest.raises(RuntimeError):
            with WorkbookReader(create_multi_sheet_workbook()) as reader:
                raise RuntimeError("boom")
        assert reader.closed

    def test_repr_after_close(self, closed_reader):
        assert repr(closed_reader) == "WorkbookReader(<closed>)"


@pytest.mark.unit
class TestWriterLifecycle:
    """Test that a closed writer rejects every operation."""

    @pytest.mark.parametrize("name,call", WRITER_CALLS, ids=[name for name, _ in WRITER_CALLS])
    def test_closed_writer_rejects(self, closed_writer, name, call, temp_dir, monkeypatch):
        monkeypatch.chdir(temp_dir)
        with pytest.raises(WorkbookClosedError):
            call(closed_writer)
        assert not (temp_dir / "never-written.xls").exists()

    def test_context_manager_closes(self):
        with WorkbookWriter() as writer:
            writer.add_row("abc")
        assert writer.closed

    def test_borrowed_workbook_stays_usable(self):
        wb = openpyxl.Workbook()
        writer = WorkbookWriter.open(wb)
        writer.add_row("abc")
        writer.close()
        assert wb.active["A1"].value == "abc"
        assert WorkbookWriter.open(wb).add_row("def").workbook.active["A2"].value == "def"
