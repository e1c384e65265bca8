"""
Workbook-global defined names.

A defined name gives a symbolic name to a cell range or formula. It may be
scoped to a single sheet through ``local_sheet_id``, the position of that
sheet in the workbook.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional

from gridbook.exceptions import ReservedNameError
from gridbook.spreadsheet.limits import AUTO_FILTER_NAME


@dataclass
class DefinedName:
    """A named range or formula.

    Attributes:
        name: The symbolic name
        content: The referenced range or formula (e.g. "'Sheet1'!$A$1:$C$5")
        local_sheet_id: Position of the sheet the name is scoped to, if any
        hidden: Whether the name is hidden from the user interface
    """
    name: str
    content: str
    local_sheet_id: Optional[int] = None
    hidden: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "name": self.name,
            "content": self.content,
            "local_sheet_id": self.local_sheet_id,
            "hidden": self.hidden,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DefinedName":
        """Create from dictionary representation."""
        return cls(
            name=data["name"],
            content=data["content"],
            local_sheet_id=data.get("local_sheet_id"),
            hidden=data.get("hidden", False),
        )


class DefinedNameTable:
    """Ordered table of the defined names explicitly added to a workbook.

    Entries are compared by identity when removing, so two entries with the
    same name and content are still distinct. The reserved autofilter name is
    rejected here; filter entries are derived from the sheets instead.
    """

    def __init__(self) -> None:
        self._names: List[DefinedName] = []

    def add(self, name: str, content: str) -> DefinedName:
        """Add a new defined name and return it.

        Raises:
            ReservedNameError: If name is the reserved autofilter name
            ValueError: If name is empty
        """
        if not name:
            raise ValueError("Defined name must be a non-empty string")
        if name == AUTO_FILTER_NAME:
            raise ReservedNameError(
                f"{AUTO_FILTER_NAME} is reserved; use Sheet.set_auto_filter instead"
            )
        dn = DefinedName(name=name, content=content)
        self._names.append(dn)
        return dn

    def remove(self, defined_name: DefinedName) -> None:
        """Remove an entry. Removing an entry not in the table is a no-op."""
        self._names = [dn for dn in self._names if dn is not defined_name]

    def __iter__(self) -> Iterator[DefinedName]:
        return iter(list(self._names))

    def __len__(self) -> int:
        return len(self._names)
