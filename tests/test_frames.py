"""
Unit tests for DataFrame <-> sheet conversion.
"""

import pandas as pd

from gridbook.spreadsheet import Range, frame_to_sheet, sheet_to_frame


class TestFrameToSheet:
    """Test Suite for frame_to_sheet."""

    def test_writes_header_and_values(self, sheet, employees):
        written = frame_to_sheet(employees, sheet)
        assert written == Range.from_a1("A1:C5")
        assert sheet.cell("A1").value == "name"
        assert sheet.cell("B2").value == 30
        assert sheet.cell("C5").value == "hr"
        sheet.validate()

    def test_origin_and_no_header(self, sheet, employees):
        written = frame_to_sheet(employees, sheet, origin="C3", header=False)
        assert written == Range.from_a1("C3:E6")
        assert sheet.cell("C3").value == "Alice"
        assert [r.row_number for r in sheet.rows()] == [3, 4, 5, 6]

    def test_missing_values_become_empty(self, sheet):
        frame = pd.DataFrame({"a": [1.0, float("nan")], "b": [None, "x"]})
        frame_to_sheet(frame, sheet)
        assert sheet.cell("A3").value is None
        assert sheet.cell("B2").value is None
        assert sheet.cell("B3").value == "x"

    def test_rows_stay_sorted_when_writing_above(self, sheet, employees):
        sheet.cell("A20").value = "footer"
        frame_to_sheet(employees, sheet)
        numbers = [r.row_number for r in sheet.rows()]
        assert numbers == sorted(numbers)


class TestSheetToFrame:
    """Test Suite for sheet_to_frame."""

    def test_empty_sheet(self, sheet):
        assert sheet_to_frame(sheet).empty

    def test_with_header(self, sheet, employees):
        frame_to_sheet(employees, sheet)
        frame = sheet_to_frame(sheet)
        assert list(frame.columns) == ["name", "age", "dept"]
        assert frame["name"].tolist() == ["Alice", "Bob", "Charlie", "Diana"]
        assert list(frame.index) == [2, 3, 4, 5]

    def test_without_header_fills_gaps(self, sheet):
        sheet.cell("B2").value = 1
        sheet.cell("C4").value = 2
        frame = sheet_to_frame(sheet, header=False)
        assert list(frame.columns) == ["B", "C"]
        assert list(frame.index) == [2, 3, 4]
        assert frame.loc[2, "B"] == 1
        assert frame.loc[4, "C"] == 2
        assert frame.loc[3, "B"] is None
