"""
Spreadsheet model module.

This module provides the in-memory model of a workbook and its sheets,
together with the consistency rules the spreadsheet file format requires.
"""

from gridbook.spreadsheet.reference import (
    Range,
    Reference,
    column_to_index,
    format_cell_reference,
    index_to_column,
    parse_cell_reference,
)
from gridbook.spreadsheet.model import Cell, Row, MergedCell
from gridbook.spreadsheet.defined_names import DefinedName, DefinedNameTable
from gridbook.spreadsheet.relationships import (
    DocumentKind,
    Hyperlink,
    Relationship,
    RelationshipKind,
    Relationships,
)
from gridbook.spreadsheet.markup import SheetInfo
from gridbook.spreadsheet.sheet import CellLookup, Sheet
from gridbook.spreadsheet.workbook import Drawing, Workbook
from gridbook.spreadsheet.frames import frame_to_sheet, sheet_to_frame

__all__ = [
    "Range",
    "Reference",
    "column_to_index",
    "format_cell_reference",
    "index_to_column",
    "parse_cell_reference",
    "Cell",
    "Row",
    "MergedCell",
    "DefinedName",
    "DefinedNameTable",
    "DocumentKind",
    "Hyperlink",
    "Relationship",
    "RelationshipKind",
    "Relationships",
    "SheetInfo",
    "CellLookup",
    "Sheet",
    "Drawing",
    "Workbook",
    "frame_to_sheet",
    "sheet_to_frame",
]
