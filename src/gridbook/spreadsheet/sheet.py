"""
The Sheet: one tab of a workbook.

A Sheet owns its rows (kept sorted by row number at all times), its merged
regions and its autofilter range. Concerns shared with the rest of the
workbook (defined names, drawings, hyperlinks) are reached through the
owning Workbook, which keys them by the sheet's stable ``sheet_id`` rather
than by its position.
"""

import logging
import uuid
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional

from gridbook.exceptions import (
    CellReferenceError,
    DuplicateCellError,
    DuplicateRowError,
    SheetNameLengthError,
)
from gridbook.spreadsheet.defined_names import DefinedName
from gridbook.spreadsheet.limits import AUTO_FILTER_NAME, MAX_SHEET_NAME_LENGTH
from gridbook.spreadsheet.markup import SheetInfo, validate_worksheet
from gridbook.spreadsheet.model import Cell, MergedCell, Row
from gridbook.spreadsheet.reference import (
    Range,
    Reference,
    column_to_index,
    format_cell_reference,
    parse_cell_reference,
    strip_absolute,
)
from gridbook.spreadsheet.relationships import DocumentKind, Hyperlink, RelationshipKind

if TYPE_CHECKING:
    from gridbook.spreadsheet.workbook import Drawing, Workbook

logger = logging.getLogger(__name__)


@dataclass
class CellLookup:
    """Outcome of resolving a cell reference on a sheet.

    Attributes:
        cell: The resolved cell; None only when fallback was disabled and the
            reference did not parse
        error: The parse error, if the reference was malformed
        used_fallback: True if ``cell`` was synthesised in a new row because
            the reference was malformed
    """
    cell: Optional[Cell]
    error: Optional[CellReferenceError] = None
    used_fallback: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None


def _row_sort_key(row: Row):
    # unnumbered rows sort first
    return (row.row_number is not None, row.row_number or 0)


class Sheet:
    """A single sheet within a workbook.

    Sheets are created with ``Workbook.add_sheet``; constructing one directly
    yields a detached sheet that cannot bind drawings or hyperlinks.

    Attributes:
        sheet_id: Stable identifier, independent of the sheet's position
        merged_cell_count: Number of merged regions, kept equal to
            ``len(merged_cells())``
        auto_filter: Autofilter range without absolute markers, or None
        drawing_rel_id: Relationship id of the sheet's drawing, or None
    """

    def __init__(self, name: str, workbook: Optional["Workbook"] = None) -> None:
        self._workbook = workbook
        self._info = SheetInfo(name=name)
        self._rows: List[Row] = []
        self._merged: List[MergedCell] = []
        self.sheet_id = uuid.uuid4().hex
        self.merged_cell_count = 0
        self.auto_filter: Optional[str] = None
        self.drawing_rel_id: Optional[str] = None

    @property
    def workbook(self) -> Optional["Workbook"]:
        return self._workbook

    @property
    def name(self) -> str:
        return self._info.name

    @name.setter
    def name(self, name: str) -> None:
        self._info.name = name

    @property
    def state(self) -> str:
        return self._info.state

    @state.setter
    def state(self, state: str) -> None:
        self._info.state = state

    # -- rows and cells -------------------------------------------------

    def rows(self) -> List[Row]:
        """Return all rows, sorted by row number."""
        return list(self._rows)

    def row(self, row_number: int) -> Row:
        """Return the row with the given number, creating it if necessary."""
        for r in self._rows:
            if r.row_number is not None and r.row_number == row_number:
                return r
        return self.add_numbered_row(row_number)

    def add_numbered_row(self, row_number: Optional[int]) -> Row:
        """Add a row with a given row number.

        No existence check is made: reusing a row number produces a sheet
        that fails ``validate()``. Prefer ``row()`` unless the number is known
        to be free. A row number of None adds an unnumbered row, which sorts
        before all numbered rows.
        """
        r = Row(row_number)
        self._rows.append(r)
        self._rows.sort(key=_row_sort_key)
        return r

    def add_row(self) -> Row:
        """Add a row numbered one past the current maximum (1 on an empty sheet).

        Mixing this with manually numbered rows is allowed but easy to get
        wrong; prefer one numbering style per sheet.
        """
        max_row = 0
        for r in self._rows:
            if r.row_number is not None and r.row_number > max_row:
                max_row = r.row_number
        return self.add_numbered_row(max_row + 1)

    def resolve_cell(self, ref: str, fallback: bool = True) -> CellLookup:
        """Resolve a cell reference such as "A10", creating the cell if needed.

        Args:
            ref: Cell reference in A1 notation
            fallback: If True, a malformed reference yields a new cell in a
                newly appended row instead of no cell

        Returns:
            CellLookup carrying the cell and any parse error
        """
        try:
            column, row_number = parse_cell_reference(ref)
        except CellReferenceError as e:
            logger.warning("error parsing cell reference on sheet %r: %s", self.name, e)
            if not fallback:
                return CellLookup(cell=None, error=e)
            return CellLookup(cell=self.add_row().add_cell(), error=e, used_fallback=True)
        return CellLookup(cell=self.row(row_number).cell(column))

    def cell(self, ref: str) -> Cell:
        """Return the cell at ``ref``, creating it (and its row) if necessary.

        A malformed reference never raises: it is logged and a fresh cell in
        a newly appended row is returned. Use ``resolve_cell`` to observe or
        refuse that fallback.
        """
        return self.resolve_cell(ref).cell

    def extents(self) -> Optional[Range]:
        """Return the bounding range of all addressed cells, or None if there are none."""
        bounds: Optional[Range] = None
        for r in self._rows:
            if r.row_number is None:
                continue
            for c in r.cells():
                if c.column is None:
                    continue
                cell_range = Range(row=r.row_number, col=column_to_index(c.column))
                bounds = cell_range if bounds is None else bounds.union(cell_range)
        return bounds

    # -- validation -----------------------------------------------------

    def validate(self) -> None:
        """Validate the sheet, raising on the first problem found.

        Raises:
            DuplicateRowError: If two rows share a row number
            DuplicateCellError: If two cells in a row share a column label
            SheetNameLengthError: If the name is longer than 31 characters
            MarkupValidationError: If the metadata or content node is invalid
        """
        used_rows = set()
        for r in self._rows:
            if r.row_number is not None:
                if r.row_number in used_rows:
                    raise DuplicateRowError(self.name, r.row_number)
                used_rows.add(r.row_number)
            used_cells = set()
            for c in r.cells():
                if c.column is None:
                    continue
                if c.column in used_cells:
                    raise DuplicateCellError(self.name, c.reference or c.column)
                used_cells.add(c.column)

        if len(self.name) > MAX_SHEET_NAME_LENGTH:
            raise SheetNameLengthError(self.name, len(self.name), MAX_SHEET_NAME_LENGTH)

        self._info.validate()
        rels = self._workbook.relationships_for(self) if self._workbook is not None else None
        validate_worksheet(self, rels)

    def validate_with_path(self, path: str) -> None:
        """Validate the metadata node only, prefixing errors with ``path``.

        Raises:
            MarkupValidationError: If the name or state is not allowed
        """
        self._info.validate(path)

    # -- merged cells ---------------------------------------------------

    def add_merged_cells(self, from_ref: str, to_ref: str) -> MergedCell:
        """Merge the cells from ``from_ref`` to ``to_ref``.

        Only the region is recorded; cells inside it are neither created nor
        checked, and overlaps with other regions are not detected.
        """
        merge = MergedCell(from_ref, to_ref)
        self._merged.append(merge)
        self.merged_cell_count = len(self._merged)
        return merge

    def merged_cells(self) -> List[MergedCell]:
        """Return the merged regions of the sheet, in the order they were added."""
        return list(self._merged)

    def remove_merged_cell(self, merged_cell: MergedCell) -> None:
        """Unmerge a region. Its cells remain; removing an unknown region is a no-op."""
        self._merged = [m for m in self._merged if m is not merged_cell]
        self.merged_cell_count = len(self._merged)

    # -- autofilter -----------------------------------------------------

    def range_reference(self, range_ref: str) -> str:
        """Convert "A1:A5" (or "A1") to "'Name'!$A$1:$A$5".

        Corners are kept in the order given. The result embeds the current
        name: renaming the sheet afterwards leaves previously computed
        strings stale.

        Raises:
            CellReferenceError: If a corner is not a valid cell reference
        """
        corners = [parse_cell_reference(part) for part in range_ref.split(":", 1)]
        body = ":".join(format_cell_reference(col, row, absolute=True) for col, row in corners)
        return f"{Reference.quote_sheet_name(self.name)}!{body}"

    def set_auto_filter(self, range_ref: str) -> None:
        """Set the autofilter range, replacing any existing one.

        The range should cover the whole filtered block (header included),
        e.g. "A1:C5". Absolute markers are stripped and reversed corners are
        put in top-left to bottom-right order. The workbook's defined
        names then expose the matching ``_xlnm._FilterDatabase`` entry.

        Raises:
            CellReferenceError: If range_ref is not a valid range
        """
        self.auto_filter = Range.from_a1(strip_absolute(range_ref).strip()).to_a1()

    def clear_auto_filter(self) -> None:
        """Remove the autofilter, and with it the derived defined name."""
        self.auto_filter = None

    def auto_filter_name(self) -> Optional[DefinedName]:
        """Return the defined name persisting this sheet's autofilter, or None.

        The entry is derived on each call, so its content follows renames and
        its scope follows the sheet's current position.
        """
        if self.auto_filter is None:
            return None
        local_sheet_id = None
        if self._workbook is not None:
            local_sheet_id = self._workbook.sheet_index(self)
        return DefinedName(
            name=AUTO_FILTER_NAME,
            content=self.range_reference(self.auto_filter),
            local_sheet_id=local_sheet_id,
            hidden=True,
        )

    # -- relationships --------------------------------------------------

    def set_drawing(self, drawing: "Drawing") -> None:
        """Attach a drawing, replacing any drawing already attached.

        A sheet references at most one drawing; the drawing itself may hold
        many charts.

        Raises:
            ValueError: If the sheet is detached or the drawing belongs to
                another workbook
        """
        rels = self._workbook.relationships_for(self) if self._workbook is not None else None
        if rels is None:
            raise ValueError(f"sheet {self.name!r} is not part of a workbook")
        if self._workbook.drawing_index(drawing) is None:
            raise ValueError(f"drawing {drawing.part_id} is not part of this workbook")

        if self.drawing_rel_id is not None:
            old = rels.get(self.drawing_rel_id)
            if old is not None:
                rels.remove(old)
        rel = rels.add_auto_relationship(DocumentKind.SPREADSHEET, drawing, RelationshipKind.DRAWING)
        self.drawing_rel_id = rel.id

    def drawing(self) -> Optional["Drawing"]:
        """Return the attached drawing, or None."""
        if self.drawing_rel_id is None or self._workbook is None:
            return None
        rels = self._workbook.relationships_for(self)
        rel = rels.get(self.drawing_rel_id) if rels is not None else None
        return rel.target if rel is not None else None

    def add_hyperlink(self, url: str) -> Hyperlink:
        """Register a hyperlink target on the sheet.

        Registering the hyperlink once on the sheet and pointing cells at it
        is cheaper than giving every cell its own link.
        """
        rels = self._workbook.relationships_for(self) if self._workbook is not None else None
        if rels is None:
            logger.debug("sheet %r not found in its workbook, hyperlink %s not added", self.name, url)
            return Hyperlink()
        return rels.add_hyperlink(url)

    def hyperlinks(self) -> List[Hyperlink]:
        if self._workbook is None:
            return []
        rels = self._workbook.relationships_for(self)
        if rels is None:
            return []
        return [Hyperlink(rel_id=r.id, url=r.target) for r in rels.of_kind(RelationshipKind.HYPERLINK)]

    def _detach(self) -> None:
        self._workbook = None

    def __repr__(self) -> str:
        return f"Sheet(name={self.name!r}, rows={len(self._rows)})"
