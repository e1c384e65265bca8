"""Format limits and reserved names shared by the spreadsheet model."""

MAX_SHEET_NAME_LENGTH = 31
MAX_ROW = 1048576
MAX_COLUMN = 16384  # XFD

# Reserved defined name used to persist a sheet's autofilter range.
AUTO_FILTER_NAME = "_xlnm._FilterDatabase"

INVALID_SHEET_NAME_CHARS = frozenset("[]:*?/\\")

SHEET_STATES = ("visible", "hidden", "veryHidden")
