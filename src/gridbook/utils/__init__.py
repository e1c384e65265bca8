"""
Utility functions for gridbook.

This module provides utilities for working with workbooks:
- visualization: Text-based tree rendering of a workbook
- serialization: Versioned JSON export view of a workbook and its reverse
"""

from .visualization import visualize
from .serialization import (
    serialize,
    deserialize,
    to_json,
    from_json,
    SERIALIZATION_VERSION
)

__all__ = [
    'visualize',
    'serialize',
    'deserialize',
    'to_json',
    'from_json',
    'SERIALIZATION_VERSION'
]
