"""
Exception classes for gridbook.

These exceptions are used throughout the gridbook package to signal structural
problems in the in-memory workbook model and malformed input.
"""


class SheetValidationError(Exception):
    """Raised when a sheet fails structural validation.

    Every validation failure names the offending sheet. Validation stops at the
    first failure, so a sheet may contain further problems that are only
    reported once the first one is fixed.
    """

    def __init__(self, sheet_name: str, message: str) -> None:
        super().__init__(message)
        self.sheet_name = sheet_name


class DuplicateRowError(SheetValidationError):
    """Raised when two rows in a sheet share the same row number.

    This typically results from calling ``Sheet.add_numbered_row`` twice with
    the same number instead of ``Sheet.row``.
    """

    def __init__(self, sheet_name: str, row_number: int) -> None:
        super().__init__(sheet_name, f"'{sheet_name}' reused row {row_number}")
        self.row_number = row_number


class DuplicateCellError(SheetValidationError):
    """Raised when two cells in a single row share the same column label."""

    def __init__(self, sheet_name: str, reference: str) -> None:
        super().__init__(sheet_name, f"'{sheet_name}' reused cell {reference}")
        self.reference = reference


class SheetNameLengthError(SheetValidationError):
    """Raised when a sheet name is longer than the format allows (31 characters)."""

    def __init__(self, sheet_name: str, length: int, max_length: int) -> None:
        super().__init__(
            sheet_name,
            f"sheet name '{sheet_name}' has {length} characters, max length is {max_length}",
        )
        self.length = length
        self.max_length = max_length


class MarkupValidationError(SheetValidationError):
    """Raised when the sheet metadata or content violates a markup-level rule.

    Examples:
        - Sheet name containing a forbidden character such as ``/`` or ``*``
        - Row number outside ``1..1048576``
        - Merged region or autofilter reference that is not a valid range
        - Drawing reference naming a missing relationship
    """
    pass


class WorkbookValidationError(Exception):
    """Raised when workbook-level bookkeeping is inconsistent.

    Examples:
        - Two sheets with the same name (compared case-insensitively)
        - A defined name scoped to a sheet index that does not exist
    """
    pass


class CellReferenceError(ValueError):
    """Raised when a cell or range reference string cannot be parsed."""

    def __init__(self, reference: str, reason: str = "invalid cell reference") -> None:
        super().__init__(f"{reason}: {reference!r}")
        self.reference = reference


class ReservedNameError(ValueError):
    """Raised when a caller tries to add a defined name reserved for internal use.

    The ``_xlnm._FilterDatabase`` name is generated from sheet autofilters and
    cannot be managed directly; use ``Sheet.set_auto_filter`` instead.
    """
    pass


class SheetNotFoundError(KeyError):
    """Raised when a sheet lookup by name fails."""
    pass
