from __future__ import annotations

import logging
from typing import Optional, Union

from .models import NotFound, ViewContext
from .ref_extractor import DEFAULT_SHA_LENGTH, extract_ref
from .repository.base import Repository, RepositoryError
from .utils.text import classify_ref_type

logger = logging.getLogger(__name__)

BindResult = Union[ViewContext, NotFound]


class RefNotFoundError(Exception):
    """No commit could be loaded for the resolved ref."""


class InvalidPathError(Exception):
    """The resolved path does not exist in the resolved commit."""


def _join(ref: str, path: str) -> str:
    # exactly one separator at the boundary; a bare ref keeps its trailing slash
    return f"{ref.rstrip('/')}/{path.lstrip('/')}"


def _bind(raw_id: str, repository: Optional[Repository], sha_length: int) -> ViewContext:
    branches = repository.branches() if repository is not None else []
    tags = repository.tags() if repository is not None else []

    ref, path = extract_ref(
        raw_id,
        branches + tags,
        repository is not None,
        sha_length=sha_length,
    )

    if repository is None:
        raise RefNotFoundError("no repository context")
    if not ref:
        raise RefNotFoundError("no ref in identifier")

    commit = repository.commit(ref)
    if commit is None:
        raise RefNotFoundError(f"no commit for ref {ref!r}")

    tree = repository.tree(commit, ref, path)
    if tree.invalid:
        raise InvalidPathError(f"{path!r} does not exist at {commit.short_id}")

    return ViewContext(
        id=_join(ref, path),
        ref=ref,
        path=path,
        ref_type=classify_ref_type(ref, branches, tags, sha_length),
        commit=commit,
        tree=tree,
    )


def bind_ref_context(
    raw_id: str,
    repository: Optional[Repository],
    *,
    sha_length: int = DEFAULT_SHA_LENGTH,
) -> BindResult:
    """Resolve ``raw_id`` against ``repository`` and load its commit and tree.

    Returns a ViewContext, or NotFound when there is no repository, the ref
    names no commit, the path is missing from that commit, or the backend
    fails. Callers get no finer-grained cause than NotFound.
    """
    try:
        return _bind(raw_id, repository, sha_length)
    except (RefNotFoundError, InvalidPathError, RepositoryError) as e:
        logger.debug("Cannot bind %r: %s", raw_id, e)
        return NotFound(id=raw_id)
