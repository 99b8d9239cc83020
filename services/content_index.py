# ──────────────────────────────────────────────────────────────────────────────
# File: content_index.py
# Directory: services/
# Purpose : Build the topic URL → content file registry for one roadmap.
#
# Upstream:
#   - ENV: —
#   - Imports: pathlib, typing, core.logging, services.errors, services.topic_url
#
# Downstream:
#   - services.orchestrator
#
# Contents:
#   - index_content_tree()
# ──────────────────────────────────────────────────────────────────────────────
from __future__ import annotations

from pathlib import Path
from typing import Dict

from core.logging import log_event
from services.errors import ContentDirectoryError, TopicUrlCollisionError
from services.topic_url import topic_url_from_path


def _walk(folder: Path, root: Path, registry: Dict[str, Path], strict: bool) -> None:
    # Sorted so that the collision winner does not depend on the OS listing order.
    for entry in sorted(folder.iterdir(), key=lambda p: p.name):
        if entry.is_dir():
            _walk(entry, root, registry, strict)
            continue
        if not entry.is_file():
            continue

        topic_url = topic_url_from_path(entry, root)
        previous = registry.get(topic_url)
        if previous is not None:
            if strict:
                raise TopicUrlCollisionError(topic_url, previous, entry)
            log_event("topic_url_collision", {
                "message": f"{entry} replaces {previous} for {topic_url}",
                "topic_url": topic_url,
                "kept": entry,
                "dropped": previous,
            })
        registry[topic_url] = entry


def index_content_tree(root: Path, *, strict: bool = False) -> Dict[str, Path]:
    """
    Recursively scan `root` and map every regular file to its topic URL.

    Later entries (in sorted order) win on collisions, with a warning event;
    pass strict=True to raise TopicUrlCollisionError instead. Symlinked
    directory cycles are not detected.
    """
    root = Path(root)
    if not root.is_dir():
        raise ContentDirectoryError(f"Content directory not found: {root}")

    registry: Dict[str, Path] = {}
    _walk(root, root, registry, strict)
    return registry
