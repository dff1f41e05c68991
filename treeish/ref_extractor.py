from __future__ import annotations

import re
from typing import Dict, Iterable, NamedTuple


DEFAULT_SHA_LENGTH = 40

# Unicode alphanumerics (no underscore), like POSIX [[:alnum:]].
_ALNUM = r"[^\W_]"

_FIRST_SEGMENT_RE = re.compile(r"([^/]+)(.*)", re.DOTALL)

_sha_patterns: Dict[int, re.Pattern[str]] = {}


class RefPath(NamedTuple):
    """A tree-ish split into its ref and the path below it."""

    ref: str
    path: str


def _sha_prefix_re(sha_length: int) -> re.Pattern[str]:
    pattern = _sha_patterns.get(sha_length)
    if pattern is None:
        pattern = re.compile(r"(%s{%d})(.+)" % (_ALNUM, sha_length), re.DOTALL)
        _sha_patterns[sha_length] = pattern
    return pattern


def _naive_split(value: str) -> RefPath:
    m = _FIRST_SEGMENT_RE.search(value)
    if not m:
        # Nothing but slashes: there is no ref to speak of.
        return RefPath("", "")
    return RefPath(m.group(1), m.group(2))


def extract_ref(
    value: str,
    candidates: Iterable[str],
    has_context: bool,
    *,
    sha_length: int = DEFAULT_SHA_LENGTH,
) -> RefPath:
    """Split a ``ref/path`` string into the ref and the filesystem path.

    Both refs and paths use ``/`` as a separator, so the split is decided with
    the list of refs (branches and tags) the repository knows about.

      - without a repository context the result is always ``("", "")``
      - a leading run of ``sha_length`` alphanumerics is taken as a commit id
      - otherwise the one candidate ``c`` for which the input starts with
        ``c + "/"`` is the ref
      - with zero or several such candidates, the input is split on its first
        slash. Several matches are never narrowed down by length.

    Examples:
      extract_ref("master", ["master"], True)            -> ("master", "")
      extract_ref("v2.0.0/README.md", ["v2.0.0"], True)  -> ("v2.0.0", "README.md")
      extract_ref("issues/1234/app/models/project.rb", ["issues/1234"], True)
        -> ("issues/1234", "app/models/project.rb")
      extract_ref("non/existent/branch/README.md", ["master"], True)
        -> ("non", "existent/branch/README.md")
    """
    if not has_context:
        return RefPath("", "")

    m = _sha_prefix_re(sha_length).match(value)
    if m:
        ref, path = m.group(1), m.group(2)
    else:
        normalized = value if "/" in value else value + "/"

        matches = {c for c in candidates if c and normalized.startswith(c + "/")}

        if len(matches) == 1:
            ref = matches.pop()
            path = normalized[len(ref):]
        else:
            ref, path = _naive_split(normalized)

    if path.startswith("/"):
        path = path[1:]

    return RefPath(ref, path)
