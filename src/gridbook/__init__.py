"""
gridbook - An in-memory model of spreadsheet workbooks and their sheets.

This package models the structure of a spreadsheet workbook (sheets, rows,
cells, merged regions, autofilters, drawings, hyperlinks and defined names)
and enforces the consistency rules the spreadsheet file format requires.
Writing the model to disk is left to a packaging layer, which consumes the
export view in ``gridbook.utils.serialization``.

Usage:
    >>> import gridbook
    >>> wb = gridbook.Workbook()
    >>> sheet = wb.add_sheet("Sales")
    >>> sheet.cell("A1").value = "Region"
    >>> sheet.set_auto_filter("A1:C5")
    >>> wb.validate()

Key components:
- Workbook: owns sheets, drawings, relationships and defined names
- Sheet: rows and cells, merged regions, autofilter, drawing and hyperlinks
- Range / Reference: A1 notation and sheet-qualified absolute references
"""

from .spreadsheet import (
    Cell,
    CellLookup,
    DefinedName,
    Drawing,
    Hyperlink,
    MergedCell,
    Range,
    Reference,
    Row,
    Sheet,
    Workbook,
    frame_to_sheet,
    sheet_to_frame,
)
from .exceptions import *
from .utils import serialize, deserialize, to_json, from_json, visualize

# Version
__version__ = "0.1.0"

__all__ = [
    'Workbook',
    'Sheet',
    'Row',
    'Cell',
    'CellLookup',
    'MergedCell',
    'DefinedName',
    'Drawing',
    'Hyperlink',
    'Range',
    'Reference',
    'frame_to_sheet',
    'sheet_to_frame',
    'serialize',
    'deserialize',
    'to_json',
    'from_json',
    'visualize',
]
