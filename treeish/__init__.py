"""Split `ref/path` tree-ish identifiers and bind them to repository objects."""

from .binder import BindResult, InvalidPathError, bind_ref_context
from .models import Commit, NotFound, Tree, TreeEntry, ViewContext
from .ref_extractor import DEFAULT_SHA_LENGTH, RefPath, extract_ref

__version__ = "0.1.0"

__all__ = [
    "BindResult",
    "Commit",
    "DEFAULT_SHA_LENGTH",
    "InvalidPathError",
    "NotFound",
    "RefPath",
    "Tree",
    "TreeEntry",
    "ViewContext",
    "bind_ref_context",
    "extract_ref",
]
