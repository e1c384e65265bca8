"""
Markup-level validation of a sheet.

A sheet is persisted as two nodes: the metadata entry in the workbook's sheet
list (name and visibility state) and the worksheet content (rows, cells,
merged regions, autofilter, drawing reference). Each node has its own
validator; ``Sheet.validate`` runs both after its own structural checks.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from gridbook.exceptions import CellReferenceError, MarkupValidationError
from gridbook.spreadsheet.limits import (
    INVALID_SHEET_NAME_CHARS,
    MAX_COLUMN,
    MAX_ROW,
    SHEET_STATES,
)
from gridbook.spreadsheet.reference import Range, column_to_index
from gridbook.spreadsheet.relationships import RelationshipKind, Relationships

if TYPE_CHECKING:
    from gridbook.spreadsheet.sheet import Sheet


@dataclass
class SheetInfo:
    """Metadata node of a sheet.

    Attributes:
        name: Sheet name as shown on its tab
        state: Visibility state ("visible", "hidden" or "veryHidden")
    """
    name: str
    state: str = "visible"

    def validate(self, path: Optional[str] = None) -> None:
        """Validate the metadata node.

        Args:
            path: Location of the node (e.g. "workbook/sheets[2]"), prefixed
                to error messages when given

        Raises:
            MarkupValidationError: If the name or state is not allowed
        """
        prefix = f"{path}: " if path else ""
        if not self.name:
            raise MarkupValidationError(self.name, f"{prefix}sheet name must be non-empty")
        bad = sorted(set(self.name) & INVALID_SHEET_NAME_CHARS)
        if bad:
            raise MarkupValidationError(
                self.name,
                f"{prefix}sheet name '{self.name}' contains invalid characters: {''.join(bad)}",
            )
        if self.name.startswith("'") or self.name.endswith("'"):
            raise MarkupValidationError(
                self.name,
                f"{prefix}sheet name '{self.name}' cannot start or end with an apostrophe",
            )
        if self.state not in SHEET_STATES:
            raise MarkupValidationError(
                self.name, f"{prefix}sheet '{self.name}' has invalid state {self.state!r}"
            )


def validate_worksheet(sheet: "Sheet", rels: Optional[Relationships]) -> None:
    """Validate the content node of a sheet.

    Args:
        sheet: The sheet whose content is checked
        rels: The sheet's relationship collection, or None if detached

    Raises:
        MarkupValidationError: On the first content rule violated
    """
    name = sheet.name
    for row in sheet.rows():
        if row.row_number is not None and not 1 <= row.row_number <= MAX_ROW:
            raise MarkupValidationError(
                name, f"'{name}' row {row.row_number} is outside 1..{MAX_ROW}"
            )
        for cell in row.cells():
            if cell.column is None:
                continue
            try:
                col = column_to_index(cell.column)
            except CellReferenceError as e:
                raise MarkupValidationError(name, f"'{name}' {e}") from e
            if col > MAX_COLUMN:
                raise MarkupValidationError(
                    name, f"'{name}' cell {cell.reference} is beyond the last column"
                )

    for mc in sheet.merged_cells():
        try:
            Range.from_a1(mc.reference)
        except (CellReferenceError, ValueError) as e:
            raise MarkupValidationError(
                name, f"'{name}' invalid merged region {mc.reference!r}"
            ) from e

    if sheet.auto_filter is not None:
        try:
            Range.from_a1(sheet.auto_filter)
        except (CellReferenceError, ValueError) as e:
            raise MarkupValidationError(
                name, f"'{name}' invalid autofilter range {sheet.auto_filter!r}"
            ) from e

    if sheet.drawing_rel_id is not None:
        rel = rels.get(sheet.drawing_rel_id) if rels is not None else None
        if rel is None or rel.kind != RelationshipKind.DRAWING:
            raise MarkupValidationError(
                name, f"'{name}' drawing reference {sheet.drawing_rel_id} has no drawing relationship"
            )
