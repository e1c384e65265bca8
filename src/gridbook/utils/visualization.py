"""
Workbook visualization utilities.

Provides text-based tree rendering of a workbook: its sheets with their
rows, merged regions, autofilter, drawing and hyperlinks, followed by the
defined names (derived autofilter names included).
"""

from typing import List, Tuple

from gridbook.spreadsheet.sheet import Sheet
from gridbook.spreadsheet.workbook import Workbook

# (label, children)
_Node = Tuple[str, list]


def visualize(workbook: Workbook) -> str:
    """Generate a text-based tree visualization of a workbook.

    Args:
        workbook: The workbook to visualize

    Returns:
        A string containing the tree-shaped visualization

    Example:
        >>> wb = Workbook()
        >>> sheet = wb.add_sheet("Data")
        >>> sheet.set_auto_filter("A1:C5")
        >>> print(visualize(wb))
        Workbook(sheets=1, drawings=0)
        ├── Sheet(name='Data', rows=0)
        │   └── AutoFilter('A1:C5')
        └── DefinedNames
            └── _xlnm._FilterDatabase = 'Data'!$A$1:$C$5 (scope=0)
    """
    if not isinstance(workbook, Workbook):
        raise TypeError(f"Expected Workbook, got {type(workbook)}")

    children: List[_Node] = [_sheet_node(s) for s in workbook.sheets()]
    names = workbook.defined_names()
    if names:
        children.append(("DefinedNames", [(_format_name(dn), []) for dn in names]))

    root = (f"Workbook(sheets={len(workbook.sheets())}, drawings={len(workbook.drawings())})", children)
    lines: List[str] = []
    _render(root, lines, prefix=None, is_last=True)
    return "\n".join(lines)


def _format_name(dn) -> str:
    scope = f" (scope={dn.local_sheet_id})" if dn.local_sheet_id is not None else ""
    return f"{dn.name} = {dn.content}{scope}"


def _sheet_node(sheet: Sheet) -> _Node:
    children: List[_Node] = []
    for mc in sheet.merged_cells():
        children.append((f"MergedCell({mc.reference!r})", []))
    if sheet.auto_filter is not None:
        children.append((f"AutoFilter({sheet.auto_filter!r})", []))
    drawing = sheet.drawing()
    if drawing is not None:
        children.append((f"Drawing({sheet.drawing_rel_id}, name={drawing.name!r})", []))
    for link in sheet.hyperlinks():
        children.append((f"Hyperlink({link.rel_id}, {link.url!r})", []))
    label = f"Sheet(name={sheet.name!r}, rows={len(sheet.rows())})"
    if sheet.state != "visible":
        label = f"Sheet(name={sheet.name!r}, rows={len(sheet.rows())}, state={sheet.state!r})"
    return (label, children)


def _render(node: _Node, lines: List[str], prefix, is_last: bool) -> None:
    """Recursively render a node and its children.

    Args:
        node: (label, children) pair to render
        lines: List to append rendered lines to
        prefix: Current prefix string for indentation, None for the root
        is_last: Whether this is the last child of its parent
    """
    label, children = node
    if prefix is None:
        lines.append(label)
        child_prefix = ""
    else:
        connector = "└── " if is_last else "├── "
        lines.append(prefix + connector + label)
        child_prefix = prefix + ("    " if is_last else "│   ")

    for i, child in enumerate(children):
        _render(child, lines, child_prefix, i == len(children) - 1)
