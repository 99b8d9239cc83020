# ─────────────────────────────────────────────────────────────────────────────
# File: settings.py
# Directory: services
# Purpose: Manage configuration and environment variable loading for the
#          roadmap content filler, and validate the roadmap id argument.
#
# Upstream:
#   - ENV: OPEN_AI_API_KEY, ROADMAPS_DIR, ROADMAP_CONTENT_MODEL
#   - Imports: dotenv, os, pathlib, services.errors, utils.env
#
# Downstream:
#   - main
#   - services.orchestrator
#
# Contents:
#   - Settings
#   - load_settings()
#   - list_roadmap_ids()
#   - resolve_roadmap_dir()
# ─────────────────────────────────────────────────────────────────────────────
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from services.errors import InvalidArgumentError
from utils.env import get_str

# === Load .env file automatically at startup ===
load_dotenv(dotenv_path=Path(__file__).resolve().parents[1] / ".env")

# === Centralized environment variable names and defaults ===
API_KEY_ENV = "OPEN_AI_API_KEY"
ROADMAPS_DIR_ENV = "ROADMAPS_DIR"
MODEL_ENV = "ROADMAP_CONTENT_MODEL"

DEFAULT_ROADMAPS_DIR = Path("src") / "data" / "roadmaps"
DEFAULT_MODEL = "gpt-4"


@dataclass(frozen=True)
class Settings:
    roadmaps_dir: Path
    api_key: Optional[str]
    model: str

    @property
    def generation_enabled(self) -> bool:
        return bool(self.api_key)


def load_settings(
    *, roadmaps_dir: Optional[str] = None, model: Optional[str] = None
) -> Settings:
    """Read settings from the environment at call time; explicit args win."""
    root = roadmaps_dir or get_str(ROADMAPS_DIR_ENV) or str(Path.cwd() / DEFAULT_ROADMAPS_DIR)
    return Settings(
        roadmaps_dir=Path(root),
        api_key=get_str(API_KEY_ENV),
        model=model or get_str(MODEL_ENV, DEFAULT_MODEL),
    )


def list_roadmap_ids(roadmaps_dir: Path) -> List[str]:
    if not roadmaps_dir.is_dir():
        return []
    return sorted(p.name for p in roadmaps_dir.iterdir() if p.is_dir())


def resolve_roadmap_dir(roadmaps_dir: Path, roadmap_id: Optional[str]) -> Path:
    """
    Return <roadmaps_dir>/<roadmap_id>, or raise InvalidArgumentError carrying
    the list of valid ids so the CLI can print them.
    """
    allowed = list_roadmap_ids(roadmaps_dir)
    if not roadmap_id:
        raise InvalidArgumentError("roadmapId is required", allowed=allowed)
    if roadmap_id not in allowed:
        raise InvalidArgumentError(f"Invalid roadmap key {roadmap_id}", allowed=allowed)
    return roadmaps_dir / roadmap_id
