"""
Row, cell and merged-region model classes.

This module provides the structural units a Sheet is made of:
- Cell: A single addressable cell with an opaque value payload
- Row: An insertion-ordered collection of cells sharing a row number
- MergedCell: A rectangular region of cells marked as merged
"""

from typing import Any, List, Optional

from gridbook.spreadsheet.reference import (
    Range,
    column_to_index,
    format_cell_reference,
    index_to_column,
)


class Cell:
    """Represents a single cell within a row.

    Attributes:
        column: Column label (e.g. "A", "AB"); None for an unaddressed cell
        value: Cell payload; the model does not interpret it
    """

    def __init__(self, row: "Row", column: Optional[str], value: Any = None) -> None:
        self._row = row
        self.column = column
        self.value = value

    @property
    def row_number(self) -> Optional[int]:
        return self._row.row_number

    @property
    def reference(self) -> Optional[str]:
        """Return the A1 reference of this cell, or None if it is not fully addressed."""
        if self.column is None or self._row.row_number is None:
            return None
        return format_cell_reference(self.column, self._row.row_number)

    def is_empty(self) -> bool:
        return self.value is None or self.value == ""

    def __repr__(self) -> str:
        return f"Cell({self.reference!r}, value={self.value!r})"


class Row:
    """Represents a row of cells within a sheet.

    Cells are kept in insertion order. Column labels are expected to be unique
    within a row; ``cell()`` guarantees this, while ``add_cell()`` always appends
    after the right-most addressed column.

    Attributes:
        row_number: The 1-based row number, or None for an unnumbered row
    """

    def __init__(self, row_number: Optional[int] = None) -> None:
        self.row_number = row_number
        self._cells: List[Cell] = []

    def cells(self) -> List[Cell]:
        """Return all cells in the row, in insertion order."""
        return list(self._cells)

    def cell(self, column: str) -> Cell:
        """Return the cell in the given column, creating it if necessary.

        Args:
            column: Column label such as "A" or "AB" (case-insensitive)

        Returns:
            The existing or newly created Cell

        Raises:
            CellReferenceError: If column is not a valid column label
        """
        column_to_index(column)
        column = column.upper()
        for c in self._cells:
            if c.column == column:
                return c
        return self._append(column)

    def add_cell(self) -> Cell:
        """Append a cell in the column after the right-most addressed cell."""
        max_col = 0
        for c in self._cells:
            if c.column is not None:
                max_col = max(max_col, column_to_index(c.column))
        return self._append(index_to_column(max_col + 1))

    def _append(self, column: Optional[str]) -> Cell:
        c = Cell(self, column)
        self._cells.append(c)
        return c

    def remove_cell(self, cell: Cell) -> None:
        """Remove a cell from the row. Removing a cell not in the row is a no-op."""
        self._cells = [c for c in self._cells if c is not cell]

    def __len__(self) -> int:
        return len(self._cells)

    def __repr__(self) -> str:
        return f"Row({self.row_number!r}, cells={len(self._cells)})"


class MergedCell:
    """A rectangular region of cells merged into one.

    The region is stored as the two corner references exactly as supplied;
    the cells within it need not exist.

    Attributes:
        reference: Range string of the form "A1:B2"
    """

    def __init__(self, from_ref: str, to_ref: str) -> None:
        self.reference = f"{from_ref}:{to_ref}"

    @property
    def range(self) -> Range:
        """Parse the region into a Range.

        Raises:
            CellReferenceError: If either corner is not a valid cell reference
        """
        return Range.from_a1(self.reference)

    def __repr__(self) -> str:
        return f"MergedCell({self.reference!r})"
