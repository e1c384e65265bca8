"""
Unit tests for the Workbook.

Tests cover:
- Sheet management (add, lookup, positions, removal)
- Relationship collections kept one per sheet
- Defined names: explicit entries, reserved name, scope bookkeeping
- Workbook-level validation
"""

import pytest

from gridbook.exceptions import (
    DuplicateRowError,
    ReservedNameError,
    SheetNotFoundError,
    WorkbookValidationError,
)
from gridbook.spreadsheet import Relationships, Workbook
from gridbook.spreadsheet.limits import AUTO_FILTER_NAME


class TestSheets:
    """Test Suite for sheet management."""

    def test_default_names(self, workbook):
        assert workbook.add_sheet().name == "Sheet1"
        assert workbook.add_sheet().name == "Sheet2"

    def test_duplicate_name_rejected(self, workbook):
        workbook.add_sheet("Data")
        with pytest.raises(ValueError, match="already exists"):
            workbook.add_sheet("data")

    def test_sheet_by_name(self, workbook):
        s = workbook.add_sheet("Data")
        assert workbook.sheet_by_name("DATA") is s
        with pytest.raises(SheetNotFoundError):
            workbook.sheet_by_name("Missing")

    def test_sheet_index(self, workbook):
        a = workbook.add_sheet("A")
        b = workbook.add_sheet("B")
        assert workbook.sheet_index(a) == 0
        assert workbook.sheet_index(b) == 1
        assert workbook.sheet_index(Workbook().add_sheet("C")) is None

    def test_each_sheet_has_relationships(self, workbook):
        sheets = [workbook.add_sheet() for _ in range(3)]
        rels = [workbook.relationships_for(s) for s in sheets]
        assert all(isinstance(r, Relationships) for r in rels)
        assert len({id(r) for r in rels}) == 3

    def test_relationships_survive_reordering_by_removal(self, workbook):
        a = workbook.add_sheet("A")
        b = workbook.add_sheet("B")
        link = b.add_hyperlink("https://example.com")
        workbook.remove_sheet(a)
        assert workbook.relationships_for(b).get(link.rel_id).target == "https://example.com"

    def test_remove_sheet(self, workbook):
        s = workbook.add_sheet("Gone")
        workbook.remove_sheet(s)
        assert workbook.sheets() == []
        assert s.workbook is None
        assert workbook.relationships_for(s) is None
        with pytest.raises(SheetNotFoundError):
            workbook.remove_sheet(s)

    def test_remove_sheet_adjusts_scoped_names(self, workbook):
        workbook.add_sheet("A")
        b = workbook.add_sheet("B")
        workbook.add_sheet("C")
        on_b = workbook.add_defined_name("OnB", "'B'!$A$1")
        on_b.local_sheet_id = 1
        on_c = workbook.add_defined_name("OnC", "'C'!$A$1")
        on_c.local_sheet_id = 2
        workbook.remove_sheet(b)
        assert [dn.name for dn in workbook.defined_names()] == ["OnC"]
        assert on_c.local_sheet_id == 1


class TestDefinedNames:
    """Test Suite for workbook defined names."""

    def test_add_and_remove(self, workbook):
        dn = workbook.add_defined_name("Totals", "'Sheet1'!$B$2:$B$9")
        assert workbook.defined_names() == [dn]
        workbook.remove_defined_name(dn)
        assert workbook.defined_names() == []

    def test_remove_missing_is_noop(self, workbook):
        from gridbook.spreadsheet import DefinedName

        workbook.add_defined_name("Totals", "'Sheet1'!$B$2")
        workbook.remove_defined_name(DefinedName("Totals", "'Sheet1'!$B$2"))
        assert len(workbook.defined_names()) == 1

    def test_reserved_name(self, workbook):
        with pytest.raises(ReservedNameError):
            workbook.add_defined_name(AUTO_FILTER_NAME, "'Sheet1'!$A$1:$B$2")

    def test_empty_name(self, workbook):
        with pytest.raises(ValueError, match="non-empty"):
            workbook.add_defined_name("", "x")

    def test_explicit_names_precede_filter_names(self, workbook, sheet):
        sheet.set_auto_filter("A1:B2")
        workbook.add_defined_name("Totals", "'Sheet1'!$B$2")
        assert [dn.name for dn in workbook.defined_names()] == ["Totals", AUTO_FILTER_NAME]

    def test_derived_filter_names_are_not_stored(self, workbook, sheet):
        sheet.set_auto_filter("A1:B2")
        derived = workbook.defined_names()[0]
        derived.content = "tampered"
        assert workbook.defined_names()[0].content == "'Sheet1'!$A$1:$B$2"


class TestWorkbookValidation:
    """Test Suite for Workbook.validate()."""

    def test_valid(self, workbook):
        s = workbook.add_sheet("Data")
        s.cell("A1").value = 1
        workbook.validate()

    def test_sheet_errors_propagate(self, workbook):
        s = workbook.add_sheet("Data")
        s.add_numbered_row(2)
        s.add_numbered_row(2)
        with pytest.raises(DuplicateRowError):
            workbook.validate()

    def test_renamed_sheets_clash(self, workbook):
        workbook.add_sheet("A")
        b = workbook.add_sheet("B")
        b.name = "a"
        with pytest.raises(WorkbookValidationError, match="Duplicate sheet name"):
            workbook.validate()

    def test_name_scope_out_of_range(self, workbook):
        workbook.add_sheet("A")
        dn = workbook.add_defined_name("X", "'A'!$A$1")
        dn.local_sheet_id = 3
        with pytest.raises(WorkbookValidationError, match="missing sheet 3"):
            workbook.validate()
