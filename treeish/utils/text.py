from __future__ import annotations

import re
from typing import Collection, Dict

from ..models import RefType

_hex_patterns: Dict[int, re.Pattern[str]] = {}


def is_commit_id(ref: str, sha_length: int = 40) -> bool:
    pattern = _hex_patterns.get(sha_length)
    if pattern is None:
        pattern = re.compile(r"^[0-9a-fA-F]{%d}$" % sha_length)
        _hex_patterns[sha_length] = pattern
    return bool(pattern.match(ref.strip()))


def classify_ref_type(
    ref: str,
    branches: Collection[str],
    tags: Collection[str],
    sha_length: int = 40,
) -> RefType:
    r = ref.strip()
    # git looks in refs/tags before refs/heads for an ambiguous name
    if r in tags:
        return "tag"
    if r in branches:
        return "branch"
    if is_commit_id(r, sha_length):
        return "sha"
    return "unknown"
