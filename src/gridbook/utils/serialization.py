"""
Workbook serialization utilities.

Provides a JSON-compatible export view of a workbook and the reverse load.
The export view is where positions are materialised: sheet order, drawing
part names, defined-name scopes and the ``_xlnm._FilterDatabase`` entries all
derive from the live model at serialization time. The serialized format
includes versioning for forward compatibility.
"""

import json
import re
from typing import Any, Dict, List

from gridbook.exceptions import CellReferenceError, SheetNotFoundError
from gridbook.spreadsheet.limits import AUTO_FILTER_NAME
from gridbook.spreadsheet.reference import Reference
from gridbook.spreadsheet.relationships import (
    EXTERNAL,
    Relationship,
    RelationshipKind,
)
from gridbook.spreadsheet.sheet import Sheet
from gridbook.spreadsheet.workbook import Workbook


# Current serialization format version
SERIALIZATION_VERSION = "1.0"

_DRAWING_PATH_RE = re.compile(r"drawing(\d+)\.xml$")


def _serialize_sheet(workbook: Workbook, sheet: Sheet, drawing_index: Dict[str, int]) -> Dict[str, Any]:
    rels = workbook.relationships_for(sheet)
    return {
        "name": sheet.name,
        "state": sheet.state,
        "rows": [
            {
                "r": row.row_number,
                "cells": [{"c": cell.column, "v": cell.value} for cell in row.cells()],
            }
            for row in sheet.rows()
        ],
        "merged_cells": [mc.reference for mc in sheet.merged_cells()],
        "auto_filter": sheet.auto_filter,
        "drawing": sheet.drawing_rel_id,
        "relationships": rels.to_dict(drawing_index) if rels is not None else [],
    }


def serialize(workbook: Workbook) -> Dict[str, Any]:
    """Serialize a workbook to a JSON-serializable dictionary.

    The serialized format includes:
    - version: Format version string for forward compatibility
    - sheets: Sheets in workbook order with rows, merges, autofilter and
      relationships (drawing targets resolved to part names)
    - drawings: Drawing parts in order
    - defined_names: Explicit names followed by the derived autofilter names

    Args:
        workbook: The workbook to serialize

    Returns:
        Dictionary that can be serialized to JSON (provided cell values are)

    Raises:
        TypeError: If workbook is not a Workbook instance
    """
    if not isinstance(workbook, Workbook):
        raise TypeError(f"Expected Workbook, got {type(workbook)}")

    drawing_index = {d.part_id: i + 1 for i, d in enumerate(workbook.drawings())}
    return {
        "version": SERIALIZATION_VERSION,
        "sheets": [_serialize_sheet(workbook, s, drawing_index) for s in workbook.sheets()],
        "drawings": [{"name": d.name} for d in workbook.drawings()],
        "defined_names": [dn.to_dict() for dn in workbook.defined_names()],
    }


def _load_relationships(workbook: Workbook, sheet: Sheet, entries: List[Dict[str, Any]]) -> None:
    rels = workbook.relationships_for(sheet)
    drawings = workbook.drawings()
    for entry in entries:
        kind = RelationshipKind(entry["type"])
        if entry.get("target_mode") == EXTERNAL:
            target = entry["target"]
        elif kind != RelationshipKind.DRAWING:
            raise ValueError(f"Internal {kind.name} relationship {entry['id']} has no part to target")
        else:
            match = _DRAWING_PATH_RE.search(entry["target"])
            if not match or not 1 <= int(match.group(1)) <= len(drawings):
                raise ValueError(f"Unresolvable relationship target: {entry['target']}")
            target = drawings[int(match.group(1)) - 1]
        rels.restore(Relationship(
            id=entry["id"],
            kind=kind,
            target=target,
            target_mode=entry.get("target_mode"),
        ))


def _load_sheet(workbook: Workbook, data: Dict[str, Any]) -> Sheet:
    sheet = workbook.add_sheet(data["name"])
    sheet.state = data.get("state", "visible")
    for row_data in data.get("rows", []):
        row = sheet.add_numbered_row(row_data["r"])
        for cell_data in row_data.get("cells", []):
            column = cell_data.get("c")
            if column is None:
                # unaddressed cells stay unaddressed
                cell = row.add_cell()
                cell.column = None
            else:
                cell = row.cell(column)
            cell.value = cell_data.get("v")
    for ref in data.get("merged_cells", []):
        from_ref, _, to_ref = ref.partition(":")
        sheet.add_merged_cells(from_ref, to_ref)
    if data.get("auto_filter"):
        sheet.set_auto_filter(data["auto_filter"])
    _load_relationships(workbook, sheet, data.get("relationships", []))
    sheet.drawing_rel_id = data.get("drawing")
    return sheet


def _load_filter_name(workbook: Workbook, data: Dict[str, Any]) -> None:
    """Turn a ``_xlnm._FilterDatabase`` entry back into a sheet autofilter."""
    reference = Reference.parse(data["content"])
    sheets = workbook.sheets()
    scope = data.get("local_sheet_id")
    if scope is not None and 0 <= scope < len(sheets):
        sheet = sheets[scope]
    else:
        sheet = workbook.sheet_by_name(reference.sheet_name)
    if sheet.auto_filter is None:
        sheet.set_auto_filter(reference.range_ref.to_a1())


def deserialize(data: Dict[str, Any]) -> Workbook:
    """Deserialize a workbook from a dictionary.

    Args:
        data: Dictionary produced by serialize()

    Returns:
        Reconstructed Workbook instance

    Raises:
        ValueError: If data is missing required fields or has invalid structure
        TypeError: If data is not a dictionary
    """
    if not isinstance(data, dict):
        raise TypeError(f"Expected dict, got {type(data)}")

    if "version" not in data:
        raise ValueError("Serialized workbook must have 'version' field")
    if "sheets" not in data:
        raise ValueError("Serialized workbook must have 'sheets' field")

    version = data["version"]
    if version != SERIALIZATION_VERSION:
        raise ValueError(
            f"Unsupported serialization version: {version}. "
            f"Expected {SERIALIZATION_VERSION}"
        )

    workbook = Workbook()
    try:
        for drawing_data in data.get("drawings", []):
            workbook.add_drawing(drawing_data.get("name"))
        for sheet_data in data["sheets"]:
            _load_sheet(workbook, sheet_data)
        for dn_data in data.get("defined_names", []):
            if dn_data["name"] == AUTO_FILTER_NAME:
                _load_filter_name(workbook, dn_data)
                continue
            dn = workbook.add_defined_name(dn_data["name"], dn_data["content"])
            dn.local_sheet_id = dn_data.get("local_sheet_id")
            dn.hidden = dn_data.get("hidden", False)
    except SheetNotFoundError as e:
        raise ValueError(f"Defined name refers to unknown sheet: {e}") from e
    except KeyError as e:
        raise ValueError(f"Missing required field in serialized workbook: {e}") from e
    except CellReferenceError as e:
        raise ValueError(f"Invalid reference in serialized workbook: {e}") from e

    return workbook


def to_json(workbook: Workbook, **kwargs) -> str:
    """Serialize a workbook to a JSON string.

    Args:
        workbook: The workbook to serialize
        **kwargs: Additional arguments to pass to json.dumps (e.g., indent=2)
    """
    return json.dumps(serialize(workbook), **kwargs)


def from_json(json_str: str) -> Workbook:
    """Deserialize a workbook from a JSON string.

    Raises:
        ValueError: If JSON is invalid or the workbook structure is invalid
    """
    if not isinstance(json_str, str):
        raise TypeError(f"Expected str, got {type(json_str)}")

    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON: {e}") from e

    return deserialize(data)
