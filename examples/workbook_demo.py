"""
Demonstration of the workbook model.

This script builds a small workbook from a DataFrame, adds merged headers,
an autofilter, a drawing and a hyperlink, validates it, and prints both the
outline and the serialized export view.
"""

import logging

import pandas as pd

from gridbook.spreadsheet import Workbook, frame_to_sheet
from gridbook.utils import to_json, visualize


def main():
    """Build, validate and export a demo workbook."""
    logging.basicConfig(level=logging.INFO)

    print("=" * 70)
    print("Gridbook Workbook Demo")
    print("=" * 70)
    print()

    sales = pd.DataFrame({
        "Product": ["Widget", "Gadget", "Doohickey"],
        "Price": [9.99, 24.50, 3.25],
        "Quantity": [10, 4, 120],
    })

    wb = Workbook()
    summary = wb.add_sheet("Summary")
    data = wb.add_sheet("Sales")

    summary.cell("A1").value = "Quarterly sales"
    summary.add_merged_cells("A1", "C1")

    written = frame_to_sheet(sales, data)
    data.set_auto_filter(written.to_a1())
    print(f"Wrote {len(sales)} rows to {data.range_reference(written.to_a1())}")

    data.set_drawing(wb.add_drawing("Revenue chart"))
    link = data.add_hyperlink("https://example.com/pricing")
    print(f"Hyperlink registered as {link.rel_id}")

    # A malformed reference falls back to a fresh row instead of failing
    lookup = data.resolve_cell("oops")
    print(f"Malformed reference handled: used_fallback={lookup.used_fallback}")
    data.rows()[-1].remove_cell(lookup.cell)

    wb.validate()
    print("✓ Workbook is valid")
    print()

    print(visualize(wb))
    print()
    print(to_json(wb, indent=2))


if __name__ == "__main__":
    main()
