"""
The Workbook: owner of sheets and of the bookkeeping shared between them.

The workbook holds the ordered sheet list, one relationship collection per
sheet, the drawing parts and the defined-name table. Sheets and drawings are
identified by stable ids; positions are only computed on demand (for
defined-name scopes and export), so reordering or removing sheets never
misaligns the bookkeeping.
"""

import logging
import uuid
from typing import Dict, List, Optional

from gridbook.exceptions import SheetNotFoundError, WorkbookValidationError
from gridbook.spreadsheet.defined_names import DefinedName, DefinedNameTable
from gridbook.spreadsheet.relationships import Relationships
from gridbook.spreadsheet.sheet import Sheet

logger = logging.getLogger(__name__)


class Drawing:
    """A drawing part. A sheet references at most one drawing.

    Attributes:
        part_id: Stable identifier of the part within its workbook
        name: Optional display name
    """

    def __init__(self, name: Optional[str] = None) -> None:
        self.part_id = uuid.uuid4().hex
        self.name = name

    def __repr__(self) -> str:
        return f"Drawing(name={self.name!r})"


class Workbook:
    """An in-memory workbook.

    Usage::

        wb = Workbook()
        sheet = wb.add_sheet("Data")
        sheet.cell("A1").value = "Name"
        sheet.set_auto_filter("A1:C5")
        wb.validate()
    """

    def __init__(self) -> None:
        self._sheets: List[Sheet] = []
        self._rels: Dict[str, Relationships] = {}
        self._drawings: List[Drawing] = []
        self._names = DefinedNameTable()

    # -- sheets ---------------------------------------------------------

    def add_sheet(self, name: Optional[str] = None) -> Sheet:
        """Append a new sheet and its relationship collection.

        Args:
            name: Sheet name; defaults to "Sheet{n}" with n one past the
                number of sheets

        Raises:
            ValueError: If a sheet with the same name (case-insensitive) exists
        """
        if name is None:
            name = f"Sheet{len(self._sheets) + 1}"
        if self._find_sheet(name) is not None:
            raise ValueError(f"Sheet name already exists: {name}")
        sheet = Sheet(name, workbook=self)
        self._sheets.append(sheet)
        self._rels[sheet.sheet_id] = Relationships()
        logger.debug("added sheet %r (%s)", name, sheet.sheet_id)
        return sheet

    def remove_sheet(self, sheet: Sheet) -> None:
        """Detach a sheet together with its relationship collection.

        Explicit defined names scoped to the removed sheet are dropped and
        scopes of later sheets are shifted down by one.

        Raises:
            SheetNotFoundError: If the sheet is not part of this workbook
        """
        index = self.sheet_index(sheet)
        if index is None:
            raise SheetNotFoundError(sheet.name)
        del self._sheets[index]
        del self._rels[sheet.sheet_id]
        for dn in self._names:
            if dn.local_sheet_id is None or dn.local_sheet_id < index:
                continue
            if dn.local_sheet_id == index:
                self._names.remove(dn)
            else:
                dn.local_sheet_id -= 1
        sheet._detach()

    def sheets(self) -> List[Sheet]:
        return list(self._sheets)

    def _find_sheet(self, name: str) -> Optional[Sheet]:
        for s in self._sheets:
            if s.name.lower() == name.lower():
                return s
        return None

    def sheet_by_name(self, name: str) -> Sheet:
        """Return the sheet with the given name (case-insensitive).

        Raises:
            SheetNotFoundError: If no sheet has that name
        """
        sheet = self._find_sheet(name)
        if sheet is None:
            raise SheetNotFoundError(name)
        return sheet

    def sheet_index(self, sheet: Sheet) -> Optional[int]:
        """Return the current 0-based position of a sheet, or None if it is not in the workbook."""
        for i, s in enumerate(self._sheets):
            if s is sheet:
                return i
        return None

    def relationships_for(self, sheet: Sheet) -> Optional[Relationships]:
        """Return the relationship collection of a sheet, or None if it is not in the workbook."""
        return self._rels.get(sheet.sheet_id) if sheet.workbook is self else None

    # -- drawings -------------------------------------------------------

    def add_drawing(self, name: Optional[str] = None) -> Drawing:
        d = Drawing(name)
        self._drawings.append(d)
        return d

    def drawings(self) -> List[Drawing]:
        return list(self._drawings)

    def drawing_index(self, drawing: Drawing) -> Optional[int]:
        """Return the current 0-based position of a drawing, or None."""
        for i, d in enumerate(self._drawings):
            if d is drawing:
                return i
        return None

    # -- defined names --------------------------------------------------

    def add_defined_name(self, name: str, content: str) -> DefinedName:
        """Add a workbook-global defined name.

        Raises:
            ReservedNameError: For the reserved autofilter name
        """
        return self._names.add(name, content)

    def remove_defined_name(self, defined_name: DefinedName) -> None:
        self._names.remove(defined_name)

    def defined_names(self) -> List[DefinedName]:
        """Return all defined names: explicit entries, then one autofilter entry per filtered sheet.

        Autofilter entries are generated from the sheets on each call and are
        not stored; modifying them has no effect.
        """
        names = list(self._names)
        for sheet in self._sheets:
            dn = sheet.auto_filter_name()
            if dn is not None:
                names.append(dn)
        return names

    # -- validation -----------------------------------------------------

    def validate(self) -> None:
        """Validate every sheet and the workbook-level bookkeeping.

        Raises:
            SheetValidationError: If a sheet is invalid
            WorkbookValidationError: If sheet names clash or a defined name
                has an out-of-range scope
        """
        seen = set()
        for sheet in self._sheets:
            key = sheet.name.lower()
            if key in seen:
                raise WorkbookValidationError(f"Duplicate sheet name: {sheet.name}")
            seen.add(key)
            sheet.validate()

        for dn in self._names:
            if dn.local_sheet_id is not None and not 0 <= dn.local_sheet_id < len(self._sheets):
                raise WorkbookValidationError(
                    f"Defined name {dn.name!r} is scoped to missing sheet {dn.local_sheet_id}"
                )

    def __repr__(self) -> str:
        return f"Workbook(sheets={[s.name for s in self._sheets]!r})"
