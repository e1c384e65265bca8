"""
Per-sheet relationship collections.

A relationship associates a sheet with another part of the document: a
drawing inside the package, or an external hyperlink target. Each sheet owns
exactly one collection; relationship ids ("rId1", "rId2", ...) are assigned
by the collection.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional


class DocumentKind(Enum):
    """Kind of document a relationship target lives in."""
    SPREADSHEET = "spreadsheet"


class RelationshipKind(Enum):
    """Relationship type, valued by its package relationship type URI."""
    DRAWING = "http://schemas.openxmlformats.org/officeDocument/2006/relationships/drawing"
    HYPERLINK = "http://schemas.openxmlformats.org/officeDocument/2006/relationships/hyperlink"


# Target part names, resolved from a target's position at export time
_TARGET_PATHS = {
    (DocumentKind.SPREADSHEET, RelationshipKind.DRAWING): "../drawings/drawing{index}.xml",
}

EXTERNAL = "External"


@dataclass(eq=False)
class Relationship:
    """A single relationship entry.

    Attributes:
        id: Relationship id, unique within the owning collection
        kind: Relationship type
        target: Target handle (e.g. a Drawing) or an external URL
        doc_kind: Document kind used to resolve internal target paths
        target_mode: "External" for hyperlinks, None for internal parts
    """
    id: str
    kind: RelationshipKind
    target: Any
    doc_kind: DocumentKind = DocumentKind.SPREADSHEET
    target_mode: Optional[str] = None

    def target_path(self, index: int) -> str:
        """Resolve the part name for an internal target at 1-based ``index``."""
        pattern = _TARGET_PATHS.get((self.doc_kind, self.kind))
        if pattern is None:
            raise ValueError(f"No internal target path for {self.kind.name} relationships")
        return pattern.format(index=index)


@dataclass
class Hyperlink:
    """A hyperlink registered on a sheet.

    An inert hyperlink (empty ``rel_id``) is returned when the sheet could not
    be located in its workbook; it can be attached to nothing.
    """
    rel_id: str = ""
    url: str = ""

    @property
    def is_inert(self) -> bool:
        return not self.rel_id


class Relationships:
    """Ordered relationship collection for one sheet."""

    def __init__(self) -> None:
        self._rels: List[Relationship] = []
        self._next_id = 1

    def _new_id(self) -> str:
        rel_id = f"rId{self._next_id}"
        self._next_id += 1
        return rel_id

    def add_auto_relationship(
        self,
        doc_kind: DocumentKind,
        target: Any,
        rel_kind: RelationshipKind,
    ) -> Relationship:
        """Add a relationship to an internal part, assigning a fresh id.

        Args:
            doc_kind: Document kind the target belongs to
            target: Stable handle of the target part (e.g. a Drawing)
            rel_kind: Relationship type

        Returns:
            The new Relationship
        """
        rel = Relationship(id=self._new_id(), kind=rel_kind, target=target, doc_kind=doc_kind)
        self._rels.append(rel)
        return rel

    def add_hyperlink(self, url: str) -> Hyperlink:
        """Add an external hyperlink relationship and return its Hyperlink."""
        rel = Relationship(
            id=self._new_id(),
            kind=RelationshipKind.HYPERLINK,
            target=url,
            target_mode=EXTERNAL,
        )
        self._rels.append(rel)
        return Hyperlink(rel_id=rel.id, url=url)

    def restore(self, rel: Relationship) -> None:
        """Append a relationship carrying an existing id (used when loading).

        Raises:
            ValueError: If the id is already in use
        """
        if self.get(rel.id) is not None:
            raise ValueError(f"Duplicate relationship id: {rel.id}")
        self._rels.append(rel)
        suffix = rel.id[3:] if rel.id.startswith("rId") else ""
        if suffix.isdigit():
            self._next_id = max(self._next_id, int(suffix) + 1)

    def get(self, rel_id: str) -> Optional[Relationship]:
        for rel in self._rels:
            if rel.id == rel_id:
                return rel
        return None

    def remove(self, rel: Relationship) -> None:
        """Remove a relationship. Ids of removed entries are not reused."""
        self._rels = [r for r in self._rels if r is not rel]

    def of_kind(self, kind: RelationshipKind) -> List[Relationship]:
        return [r for r in self._rels if r.kind == kind]

    def to_dict(self, target_index: Dict[str, int]) -> List[Dict[str, Any]]:
        """Export the collection, resolving internal targets to part names.

        Args:
            target_index: Mapping of target part id to its 1-based position
        """
        out = []
        for rel in self._rels:
            if rel.target_mode == EXTERNAL:
                target = rel.target
            else:
                target = rel.target_path(target_index[rel.target.part_id])
            out.append({
                "id": rel.id,
                "type": rel.kind.value,
                "target": target,
                "target_mode": rel.target_mode,
            })
        return out

    def __iter__(self) -> Iterator[Relationship]:
        return iter(list(self._rels))

    def __len__(self) -> int:
        return len(self._rels)
