"""
Cell and range reference handling.

This module provides the A1-notation primitives the sheet model consumes:
- parse_cell_reference / format_cell_reference: "A10" <-> ("A", 10)
- column_to_index / index_to_column: column label <-> 1-based index
- Range: A rectangular cell region (e.g., A2:C100)
- Reference: A sheet-qualified range reference (e.g., 'Sheet1'!$A$1:$C$5)
"""

import re
from typing import Optional, Tuple, Union

from gridbook.exceptions import CellReferenceError

_CELL_RE = re.compile(r"^\$?([A-Za-z]{1,3})\$?([0-9]+)$")
_COLUMN_RE = re.compile(r"^[A-Za-z]{1,3}$")


def column_to_index(letters: str) -> int:
    """Convert column letter(s) to a 1-based column index (A = 1, AA = 27)."""
    if not letters or not _COLUMN_RE.match(letters):
        raise CellReferenceError(letters, "invalid column label")
    index = 0
    for char in letters.upper():
        index = index * 26 + (ord(char) - 64)
    return index


def index_to_column(index: int) -> str:
    """Convert a 1-based column index to column letter(s) (1 = A, 27 = AA)."""
    if index < 1:
        raise ValueError("Column index must be positive")
    result = ""
    while index > 0:
        index -= 1
        result = chr(65 + (index % 26)) + result
        index //= 26
    return result


def parse_cell_reference(ref: str) -> Tuple[str, int]:
    """Split a cell reference into its column label and row number.

    Absolute markers are accepted and dropped, so ``$B$7`` parses the same as
    ``B7``. Column labels are upper-cased.

    Args:
        ref: Cell reference in A1 notation

    Returns:
        Tuple of (column label, 1-based row number)

    Raises:
        CellReferenceError: If ref is not a valid single-cell reference
    """
    if not isinstance(ref, str):
        raise CellReferenceError(repr(ref))
    match = _CELL_RE.match(ref.strip())
    if not match:
        raise CellReferenceError(ref)
    column, row_str = match.groups()
    row = int(row_str)
    if row < 1:
        raise CellReferenceError(ref, "row number must be positive")
    return column.upper(), row


def format_cell_reference(column: str, row: int, absolute: bool = False) -> str:
    """Build a cell reference from a column label and row number."""
    if absolute:
        return f"${column}${row}"
    return f"{column}{row}"


def strip_absolute(ref: str) -> str:
    """Remove all absolute-reference markers from a reference string."""
    return ref.replace("$", "")


class Range:
    """Represents a rectangular cell region in A1 notation.

    Range uses 1-indexed coordinates, matching A1 notation directly.

    A Range can be:
    - A single cell: A1 corresponds to (row=1, col=1, row_end=1, col_end=1)
    - A cell range: A1:B10 corresponds to (row=1, col=1, row_end=10, col_end=2)

    Attributes:
        row: Starting row
        col: Starting column
        row_end: Ending row (inclusive)
        col_end: Ending column (inclusive)
    """

    def __init__(
        self,
        row: int,
        col: int,
        row_end: Optional[int] = None,
        col_end: Optional[int] = None
    ) -> None:
        if row < 1 or col < 1:
            raise ValueError("Row and column must be positive (1-indexed)")

        self.row = row
        self.col = col
        self.row_end = row_end if row_end is not None else row
        self.col_end = col_end if col_end is not None else col

        if self.row_end < self.row or self.col_end < self.col:
            raise ValueError("End coordinates must be >= start coordinates")

    @classmethod
    def from_a1(cls, notation: str) -> "Range":
        """Parse A1 notation into a Range.

        Supports single cells (``A1``) and ranges (``A1:B10``), with or
        without absolute markers. Corners given in reverse order are
        normalized so that the start is the top-left cell.

        Raises:
            CellReferenceError: If notation is invalid
        """
        notation = notation.strip()
        if not notation:
            raise CellReferenceError(notation, "empty range reference")

        parts = notation.split(":")
        if len(parts) > 2:
            raise CellReferenceError(notation, "invalid range reference")

        start_col, start_row = parse_cell_reference(parts[0])
        if len(parts) == 1:
            return cls(row=start_row, col=column_to_index(start_col))

        end_col, end_row = parse_cell_reference(parts[1])
        c1, c2 = column_to_index(start_col), column_to_index(end_col)
        return cls(
            row=min(start_row, end_row),
            col=min(c1, c2),
            row_end=max(start_row, end_row),
            col_end=max(c1, c2),
        )

    @property
    def is_single_cell(self) -> bool:
        return self.row == self.row_end and self.col == self.col_end

    @property
    def start(self) -> str:
        return format_cell_reference(index_to_column(self.col), self.row)

    @property
    def end(self) -> str:
        return format_cell_reference(index_to_column(self.col_end), self.row_end)

    def to_a1(self, absolute: bool = False) -> str:
        """Convert Range to A1 notation (e.g. "A1", "A1:B10" or "$A$1:$B$10")."""
        start = format_cell_reference(index_to_column(self.col), self.row, absolute)
        if self.is_single_cell:
            return start
        end = format_cell_reference(index_to_column(self.col_end), self.row_end, absolute)
        return f"{start}:{end}"

    def contains(self, column: str, row: int) -> bool:
        """Check whether the cell at (column, row) lies inside this range."""
        col = column_to_index(column)
        return self.row <= row <= self.row_end and self.col <= col <= self.col_end

    def intersect(self, other: "Range") -> Optional["Range"]:
        """Compute the intersection of two ranges, or None if they do not overlap."""
        row_start = max(self.row, other.row)
        col_start = max(self.col, other.col)
        row_end = min(self.row_end, other.row_end)
        col_end = min(self.col_end, other.col_end)

        if row_start > row_end or col_start > col_end:
            return None

        return Range(row=row_start, col=col_start, row_end=row_end, col_end=col_end)

    def union(self, other: "Range") -> "Range":
        """Compute the bounding box of two ranges."""
        return Range(
            row=min(self.row, other.row),
            col=min(self.col, other.col),
            row_end=max(self.row_end, other.row_end),
            col_end=max(self.col_end, other.col_end),
        )

    def __repr__(self) -> str:
        return f"Range({self.to_a1()!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Range):
            return NotImplemented
        return (
            self.row == other.row
            and self.col == other.col
            and self.row_end == other.row_end
            and self.col_end == other.col_end
        )


class Reference:
    """A sheet-qualified, fully absolute range reference.

    The sheet name is always quoted, with embedded quotes doubled, so the
    result is valid regardless of spaces or punctuation in the name:
    ``'Sheet 1'!$A$1:$A$5``.

    Attributes:
        sheet_name: Name of the sheet the range belongs to
        range_ref: Parsed Range
    """

    def __init__(self, sheet_name: str, range_ref: Union[str, Range]) -> None:
        if isinstance(range_ref, Range):
            self.range_ref = range_ref
        elif isinstance(range_ref, str):
            self.range_ref = Range.from_a1(range_ref)
        else:
            raise ValueError("range_ref must be a Range object or string")
        self.sheet_name = sheet_name

    @staticmethod
    def quote_sheet_name(name: str) -> str:
        return "'" + name.replace("'", "''") + "'"

    @classmethod
    def parse(cls, text: str) -> "Reference":
        """Parse a ``'Name'!$A$1:$B$2`` string back into a Reference.

        Raises:
            CellReferenceError: If text is not a sheet-qualified reference
        """
        sheet_part, sep, range_part = text.rpartition("!")
        if not sep or not sheet_part:
            raise CellReferenceError(text, "missing sheet qualifier")
        if len(sheet_part) >= 2 and sheet_part[0] == "'" and sheet_part[-1] == "'":
            sheet_part = sheet_part[1:-1].replace("''", "'")
        return cls(sheet_part, range_part)

    def to_string(self) -> str:
        return f"{self.quote_sheet_name(self.sheet_name)}!{self.range_ref.to_a1(absolute=True)}"

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Reference({self.to_string()!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Reference):
            return NotImplemented
        return self.range_ref == other.range_ref and self.sheet_name == other.sheet_name
