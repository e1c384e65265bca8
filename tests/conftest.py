"""Shared pytest configuration and fixtures for gridbook tests."""

import pandas as pd
import pytest

from gridbook.spreadsheet import Workbook


@pytest.fixture
def workbook() -> Workbook:
    return Workbook()


@pytest.fixture
def sheet(workbook):
    return workbook.add_sheet("Sheet1")


@pytest.fixture
def employees() -> pd.DataFrame:
    return pd.DataFrame({
        "name": ["Alice", "Bob", "Charlie", "Diana"],
        "age": [30, 45, 28, 35],
        "dept": ["eng", "eng", "sales", "hr"],
    })
