# ──────────────────────────────────────────────────────────────────────────────
# File: orchestrator.py
# Directory: services/
# Purpose : Fill empty topic files for one roadmap.
#           • Index content files and load topic groups
#           • Per group: resolve → lookup → inspect → placeholder or generate
#           • Run every group concurrently, wait for all, surface failures
#
# Upstream:
#   - ENV: —
#   - Imports: anyio, asyncio, re, core.logging, services.*
#
# Downstream:
#   - main
#
# Contents:
#   - FillOutcome
#   - RunReport
#   - is_empty_content()
#   - fill_group()
#   - fill_roadmap()
# ──────────────────────────────────────────────────────────────────────────────
from __future__ import annotations

import asyncio
import re
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import anyio

from core.logging import log_event
from services.content_generator import ContentGenerator
from services.content_index import index_content_tree
from services.errors import GenerationError, MissingContentFileError, NonEmptyFileError
from services.prompt_builder import build_prompt, display_topic
from services.roadmap_definition import (
    TopicGroup,
    definition_path,
    load_roadmap_document,
    load_topic_groups,
)
from services.topic_url import topic_url_from_control_name

CONTENT_DIR_NAME = "content"

# Only a heading on the very first line counts; anything else is content.
_LEADING_HEADING_RE = re.compile(r"^#.+")


class FillOutcome(str, Enum):
    UNRESOLVED = "skipped_unresolved"
    MISSING_FILE = "missing_file"
    NOT_EMPTY = "not_empty"
    PLACEHOLDER = "placeholder"
    GENERATED = "generated"


@dataclass
class RunReport:
    roadmap_id: str
    results: List[Tuple[TopicGroup, FillOutcome]] = field(default_factory=list)

    def counts(self) -> Dict[str, int]:
        return dict(Counter(outcome.value for _, outcome in self.results))


def is_empty_content(text: str) -> bool:
    return _LEADING_HEADING_RE.sub("", text, count=1).strip() == ""


async def _lookup(group: TopicGroup, mapping: Dict[str, Path]) -> Tuple[str, Path]:
    """Resolve → lookup → inspect. Raises the per-topic skip errors."""
    topic_url = topic_url_from_control_name(group.control_id)
    content_path = mapping.get(topic_url)
    if content_path is None:
        raise MissingContentFileError(topic_url)

    # Undecodable bytes become U+FFFD so one bad file only affects its own topic.
    current = await anyio.Path(content_path).read_text(encoding="utf-8", errors="replace")
    if not is_empty_content(current):
        raise NonEmptyFileError(group.control_id, content_path)
    return topic_url, content_path


async def fill_group(
    group: TopicGroup,
    mapping: Dict[str, Path],
    *,
    roadmap_id: str,
    generator: Optional[ContentGenerator] = None,
) -> FillOutcome:
    if not topic_url_from_control_name(group.control_id):
        return FillOutcome.UNRESOLVED

    try:
        topic_url, content_path = await _lookup(group, mapping)
    except MissingContentFileError as exc:
        log_event("topic_missing_file", {"message": str(exc), "topic_url": exc.topic_url})
        return FillOutcome.MISSING_FILE
    except NonEmptyFileError as exc:
        log_event("topic_not_empty", {"message": str(exc), "path": exc.path})
        return FillOutcome.NOT_EMPTY

    target = anyio.Path(content_path)
    if generator is None:
        log_event("topic_writing", {"message": f"Writing {group.control_id}..", "path": content_path})
        await target.write_text(f"# {group.title}", encoding="utf-8")
        return FillOutcome.PLACEHOLDER

    log_event("topic_generating", {
        "message": f"Generating '{display_topic(topic_url)}'...",
        "topic_url": topic_url,
    })
    try:
        article = await generator.generate(build_prompt(topic_url, roadmap_id))
    except GenerationError as exc:
        exc.topic_url = topic_url
        raise

    log_event("topic_writing", {"message": f"Writing {group.control_id}..", "path": content_path})
    await target.write_text(article, encoding="utf-8")
    return FillOutcome.GENERATED


async def fill_roadmap(
    roadmap_dir: Path,
    roadmap_id: str,
    *,
    generator: Optional[ContentGenerator] = None,
    strict_index: bool = False,
) -> RunReport:
    """
    Fill every empty topic file of `roadmap_dir`.

    All groups run concurrently and are always allowed to settle. Every
    failure is logged; the first one is re-raised once the rest are done.
    Writes that already happened are kept.
    """
    roadmap_dir = Path(roadmap_dir)
    mapping = index_content_tree(roadmap_dir / CONTENT_DIR_NAME, strict=strict_index)
    groups = load_topic_groups(load_roadmap_document(definition_path(roadmap_dir, roadmap_id)))

    if generator is None:
        log_event("placeholder_mode", {
            "message": "OPEN_AI_API_KEY not found. Skipping openai api calls...",
        })

    log_event("run_waiting", {
        "message": "Waiting for all files to be written...",
        "groups": len(groups),
        "content_files": len(mapping),
    })
    results = await asyncio.gather(
        *(fill_group(g, mapping, roadmap_id=roadmap_id, generator=generator) for g in groups),
        return_exceptions=True,
    )

    report = RunReport(roadmap_id=roadmap_id)
    failures: List[BaseException] = []
    for group, result in zip(groups, results):
        if isinstance(result, BaseException):
            failures.append(result)
            log_event("topic_failed", {
                "message": f"Failed {group.control_id}: {result}",
                "error": type(result).__name__,
            })
            continue
        report.results.append((group, result))

    if failures:
        raise failures[0]

    log_event("run_complete", {"roadmap_id": roadmap_id, "outcomes": report.counts()})
    return report
