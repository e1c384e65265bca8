"""
Conversion between pandas DataFrames and sheet cells.

``frame_to_sheet`` writes a DataFrame into a sheet through the regular cell
addressing API (so the row-ordering invariant holds), and ``sheet_to_frame``
reads the populated block of a sheet back as a DataFrame.
"""

from typing import Any, List

import pandas as pd

from gridbook.spreadsheet.reference import (
    Range,
    column_to_index,
    index_to_column,
    parse_cell_reference,
)
from gridbook.spreadsheet.sheet import Sheet


def frame_to_sheet(
    frame: pd.DataFrame,
    sheet: Sheet,
    origin: str = "A1",
    header: bool = True,
) -> Range:
    """Write a DataFrame into a sheet.

    Missing values (NaN, None, NA) become empty cells.

    Args:
        frame: The DataFrame to write
        sheet: Target sheet
        origin: Top-left cell of the written block
        header: Whether to write the column names as the first row

    Returns:
        The Range covering the written block

    Raises:
        CellReferenceError: If origin is not a valid cell reference
    """
    col_label, start_row = parse_cell_reference(origin)
    start_col = column_to_index(col_label)

    rows: List[List[Any]] = []
    if header:
        rows.append([str(c) for c in frame.columns])
    body = frame.astype(object).where(pd.notna(frame), None)
    rows.extend(body.values.tolist())

    width = max(len(frame.columns), 1)
    for ri, values in enumerate(rows):
        row = sheet.row(start_row + ri)
        for ci, value in enumerate(values):
            row.cell(index_to_column(start_col + ci)).value = value

    return Range(
        row=start_row,
        col=start_col,
        row_end=start_row + max(len(rows), 1) - 1,
        col_end=start_col + width - 1,
    )


def sheet_to_frame(sheet: Sheet, header: bool = True) -> pd.DataFrame:
    """Read the populated block of a sheet into a DataFrame.

    The block is the sheet's extents. Cells that do not exist read as None.
    Without a header, columns are named by their column letters; the index
    holds the sheet row numbers in both cases.
    """
    bounds = sheet.extents()
    if bounds is None:
        return pd.DataFrame()

    columns = [index_to_column(c) for c in range(bounds.col, bounds.col_end + 1)]
    matrix = {n: [None] * len(columns) for n in range(bounds.row, bounds.row_end + 1)}
    for row in sheet.rows():
        if row.row_number not in matrix:
            continue
        for cell in row.cells():
            if cell.column is None:
                continue
            matrix[row.row_number][column_to_index(cell.column) - bounds.col] = cell.value

    row_numbers = list(matrix)
    data = [matrix[n] for n in row_numbers]
    if header:
        names = [v if v is not None else columns[i] for i, v in enumerate(data[0])]
        return pd.DataFrame(data[1:], columns=names, index=row_numbers[1:], dtype=object)
    return pd.DataFrame(data, columns=columns, index=row_numbers, dtype=object)
