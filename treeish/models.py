from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional


ObjectType = Literal["tree", "blob"]
RefType = Literal["sha", "branch", "tag", "unknown"]


@dataclass(frozen=True)
class Commit:
    id: str
    title: str = ""
    message: str = ""
    author_name: Optional[str] = None
    author_email: Optional[str] = None
    authored_date: Optional[str] = None  # ISO 8601

    @property
    def short_id(self) -> str:
        return self.id[:8]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "short_id": self.short_id,
            "title": self.title,
            "message": self.message,
            "author_name": self.author_name,
            "author_email": self.author_email,
            "authored_date": self.authored_date,
        }


@dataclass(frozen=True)
class TreeEntry:
    name: str
    path: str
    type: ObjectType
    mode: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "path": self.path, "type": self.type, "mode": self.mode}


@dataclass
class Tree:
    """The object found at ``path`` in a commit.

    ``type`` is None when nothing exists at that path; such a tree is invalid.
    """

    ref: str
    path: str
    type: Optional[ObjectType] = None
    entries: List[TreeEntry] = field(default_factory=list)

    @property
    def invalid(self) -> bool:
        return self.type is None

    @property
    def is_blob(self) -> bool:
        return self.type == "blob"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ref": self.ref,
            "path": self.path,
            "type": self.type,
            "entries": [e.to_dict() for e in self.entries],
        }


@dataclass
class ViewContext:
    """Everything a tree/blob view needs about a resolved tree-ish."""

    id: str
    ref: str
    path: str
    ref_type: RefType
    commit: Commit
    tree: Tree

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "ref": self.ref,
            "path": self.path,
            "ref_type": self.ref_type,
            "commit": self.commit.to_dict(),
            "tree": self.tree.to_dict(),
        }


@dataclass(frozen=True)
class NotFound:
    """No commit or tree could be resolved for ``id``. The cause is not exposed."""

    id: str

    def to_dict(self) -> Dict[str, Any]:
        return {"error": "not_found", "id": self.id}
