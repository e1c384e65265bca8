"""
Unit tests for cell and range reference handling.

Tests cover:
- parse_cell_reference / format_cell_reference
- column label <-> index conversion
- Range: A1 notation parsing/formatting, absolute form, set operations
- Reference: sheet-qualified absolute references and parsing
"""

import pytest

from gridbook.exceptions import CellReferenceError
from gridbook.spreadsheet.reference import (
    Range,
    Reference,
    column_to_index,
    format_cell_reference,
    index_to_column,
    parse_cell_reference,
    strip_absolute,
)


class TestCellReference:
    """Test Suite for single-cell reference parsing."""

    def test_parse_simple(self):
        assert parse_cell_reference("A10") == ("A", 10)

    def test_parse_multi_letter_lowercase(self):
        """Column labels are upper-cased."""
        assert parse_cell_reference("ab7") == ("AB", 7)

    def test_parse_absolute_markers(self):
        assert parse_cell_reference("$C$5") == ("C", 5)
        assert parse_cell_reference("C$5") == ("C", 5)

    @pytest.mark.parametrize("ref", ["", "not-a-ref", "10A", "A", "ABCD1", "A0", "A1:B2"])
    def test_parse_invalid(self, ref):
        with pytest.raises(CellReferenceError):
            parse_cell_reference(ref)

    def test_cell_reference_error_is_value_error(self):
        with pytest.raises(ValueError, match="invalid cell reference"):
            parse_cell_reference("xyz")

    def test_format(self):
        assert format_cell_reference("B", 3) == "B3"
        assert format_cell_reference("B", 3, absolute=True) == "$B$3"

    def test_strip_absolute(self):
        assert strip_absolute("$A$1:$C$5") == "A1:C5"


class TestColumns:
    """Test Suite for column label conversion."""

    @pytest.mark.parametrize("label,index", [("A", 1), ("Z", 26), ("AA", 27), ("ZZ", 702), ("XFD", 16384)])
    def test_conversion(self, label, index):
        assert column_to_index(label) == index
        assert index_to_column(index) == label

    def test_index_must_be_positive(self):
        with pytest.raises(ValueError, match="positive"):
            index_to_column(0)

    def test_invalid_label(self):
        with pytest.raises(CellReferenceError):
            column_to_index("A1")


class TestRange:
    """Test Suite for Range class."""

    def test_from_a1_single_cell(self):
        r = Range.from_a1("B3")
        assert (r.row, r.col, r.row_end, r.col_end) == (3, 2, 3, 2)
        assert r.is_single_cell

    def test_from_a1_range(self):
        r = Range.from_a1("A2:C100")
        assert (r.row, r.col, r.row_end, r.col_end) == (2, 1, 100, 3)

    def test_from_a1_reversed_corners_normalized(self):
        assert Range.from_a1("C5:A1") == Range.from_a1("A1:C5")

    def test_from_a1_absolute(self):
        assert Range.from_a1("$A$1:$C$5") == Range.from_a1("A1:C5")

    def test_from_a1_invalid(self):
        with pytest.raises(CellReferenceError, match="empty"):
            Range.from_a1("")
        with pytest.raises(CellReferenceError):
            Range.from_a1("A1:B2:C3")
        with pytest.raises(CellReferenceError):
            Range.from_a1("A1:foo")

    def test_to_a1(self):
        assert Range(row=1, col=1, row_end=5, col_end=3).to_a1() == "A1:C5"
        assert Range(row=1, col=1, row_end=5, col_end=3).to_a1(absolute=True) == "$A$1:$C$5"
        assert Range(row=4, col=2).to_a1() == "B4"

    def test_invalid_coordinates(self):
        with pytest.raises(ValueError, match="positive"):
            Range(row=0, col=1)
        with pytest.raises(ValueError, match="End coordinates"):
            Range(row=5, col=1, row_end=2)

    def test_contains(self):
        r = Range.from_a1("B2:D4")
        assert r.contains("C", 3)
        assert not r.contains("A", 3)
        assert not r.contains("C", 5)

    def test_intersect_and_union(self):
        a = Range.from_a1("A1:C3")
        b = Range.from_a1("B2:D4")
        assert a.intersect(b) == Range.from_a1("B2:C3")
        assert a.union(b) == Range.from_a1("A1:D4")
        assert a.intersect(Range.from_a1("E5")) is None

    def test_start_end(self):
        r = Range.from_a1("B2:D4")
        assert r.start == "B2"
        assert r.end == "D4"


class TestReference:
    """Test Suite for sheet-qualified references."""

    def test_to_string(self):
        assert Reference("Sheet1", "A1:A5").to_string() == "'Sheet1'!$A$1:$A$5"

    def test_single_cell(self):
        assert str(Reference("Sheet1", "B2")) == "'Sheet1'!$B$2"

    def test_quotes_are_doubled(self):
        assert Reference("Bob's", "A1").to_string() == "'Bob''s'!$A$1"

    def test_parse(self):
        ref = Reference.parse("'My Sheet'!$A$1:$C$5")
        assert ref.sheet_name == "My Sheet"
        assert ref.range_ref == Range.from_a1("A1:C5")

    def test_parse_unquoted_and_escaped(self):
        assert Reference.parse("Data!A1").sheet_name == "Data"
        assert Reference.parse("'Bob''s'!$A$1").sheet_name == "Bob's"

    def test_parse_requires_sheet(self):
        with pytest.raises(CellReferenceError, match="sheet qualifier"):
            Reference.parse("A1:B2")
