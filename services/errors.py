"""Error types raised by the roadmap content filler."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional


class RoadmapContentError(Exception):
    """Base class for every error this tool raises on purpose."""


class InvalidArgumentError(RoadmapContentError):
    """Roadmap id missing or not a directory under the roadmaps root."""

    def __init__(self, message: str, *, allowed: Optional[Iterable[str]] = None):
        super().__init__(message)
        self.allowed = sorted(allowed or [])


class MissingContentFileError(RoadmapContentError):
    """A topic group has no content file for its topic URL."""

    def __init__(self, topic_url: str):
        super().__init__(f"Missing file for: {topic_url}")
        self.topic_url = topic_url


class NonEmptyFileError(RoadmapContentError):
    """The content file already has a body and must not be overwritten."""

    def __init__(self, topic_id: str, path: Path):
        super().__init__(f"Ignoring {topic_id}. Not empty.")
        self.topic_id = topic_id
        self.path = path


class GenerationError(RoadmapContentError):
    """The upstream completion call failed or returned no usable text."""

    def __init__(self, message: str, *, topic_url: Optional[str] = None):
        super().__init__(message)
        self.topic_url = topic_url


class ContentDirectoryError(RoadmapContentError):
    """The roadmap content directory is missing or not a directory."""


class TopicUrlCollisionError(RoadmapContentError):
    """Two content files normalise to the same topic URL (strict indexing only)."""

    def __init__(self, topic_url: str, first: Path, second: Path):
        super().__init__(f"{first} and {second} both map to {topic_url}")
        self.topic_url = topic_url
        self.paths = (first, second)


class RoadmapDefinitionError(RoadmapContentError):
    """The roadmap definition document is missing or not valid mockup JSON."""
