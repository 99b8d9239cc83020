# ──────────────────────────────────────────────────────────────────────────────
# File: topic_url.py
# Directory: services/
# Purpose : Canonical topic URLs, the join key between the content tree and
#           the roadmap definition document.
#           • Content file path   → /parent/child
#           • Control name         → /parent/child
#
# Upstream:
#   - ENV: —
#   - Imports: pathlib, re, typing
#
# Downstream:
#   - services.content_index
#   - services.orchestrator
#   - services.prompt_builder
#
# Contents:
#   - canonical_topic_url()
#   - topic_url_from_path()
#   - topic_url_from_control_name()
#   - topic_segments()
# ──────────────────────────────────────────────────────────────────────────────
from __future__ import annotations

import re
from pathlib import Path, PurePosixPath
from typing import Iterable, List, Optional, Union

CONTENT_EXTENSION = ".md"
INDEX_FILE = "index" + CONTENT_EXTENSION
CONTROL_NAME_SEPARATOR = ":"

_ORDER_PREFIX_RE = re.compile(r"^\d+-")


def canonical_topic_url(segments: Iterable[str]) -> str:
    """
    Single normalisation shared by both topic sources. Drops ordering prefixes
    (`101-ecosystem` → `ecosystem`) and empty segments, then joins with `/`.
    """
    parts = [_ORDER_PREFIX_RE.sub("", s) for s in segments if s]
    parts = [p for p in parts if p]
    if not parts:
        return ""
    return "/" + "/".join(parts)


def topic_url_from_path(
    path: Union[str, Path], content_root: Optional[Union[str, Path]] = None
) -> str:
    """
    /content/101-a/5-b.md      → /a/b
    /content/101-a/index.md    → /a
    """
    p = PurePosixPath(Path(path).as_posix())
    if content_root is not None:
        p = p.relative_to(PurePosixPath(Path(content_root).as_posix()))

    segments = list(p.parts)
    if segments and segments[0] == "/":
        segments = segments[1:]
    if segments and segments[-1] == INDEX_FILE:
        segments = segments[:-1]
    elif segments and segments[-1].endswith(CONTENT_EXTENSION):
        segments[-1] = segments[-1][: -len(CONTENT_EXTENSION)]
    return canonical_topic_url(segments)


def topic_url_from_control_name(control_name: Optional[str]) -> str:
    """`101-ecosystem:npm` → /ecosystem/npm. Blank names give ``""``."""
    if not control_name:
        return ""
    return canonical_topic_url(control_name.strip().split(CONTROL_NAME_SEPARATOR))


def topic_segments(topic_url: str) -> List[str]:
    return [s for s in topic_url.split("/") if s]
