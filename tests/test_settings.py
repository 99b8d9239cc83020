# File: test_settings.py
# Directory: tests
# Purpose: Environment-driven settings, roadmap id validation, logging payloads.

import json
from pathlib import Path

import pytest

from core.logging import log_event
from services.errors import InvalidArgumentError
from services.settings import DEFAULT_MODEL, list_roadmap_ids, load_settings, resolve_roadmap_dir


def test_settings_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("OPEN_AI_API_KEY", "sk-abc")
    monkeypatch.setenv("ROADMAPS_DIR", str(tmp_path))
    monkeypatch.setenv("ROADMAP_CONTENT_MODEL", "gpt-4o-mini")

    settings = load_settings()

    assert settings.api_key == "sk-abc"
    assert settings.generation_enabled
    assert settings.roadmaps_dir == tmp_path
    assert settings.model == "gpt-4o-mini"


def test_blank_key_means_placeholder_mode(monkeypatch):
    monkeypatch.setenv("OPEN_AI_API_KEY", "  ")
    monkeypatch.delenv("ROADMAP_CONTENT_MODEL", raising=False)
    monkeypatch.delenv("ROADMAPS_DIR", raising=False)

    settings = load_settings(model=None)

    assert settings.api_key is None
    assert not settings.generation_enabled
    assert settings.model == DEFAULT_MODEL
    assert settings.roadmaps_dir == Path.cwd() / "src" / "data" / "roadmaps"


def test_explicit_arguments_win(monkeypatch, tmp_path):
    monkeypatch.setenv("ROADMAP_CONTENT_MODEL", "gpt-4o-mini")
    settings = load_settings(roadmaps_dir=str(tmp_path), model="gpt-4")
    assert settings.roadmaps_dir == tmp_path
    assert settings.model == "gpt-4"


def test_roadmap_ids_are_directories_only(tmp_path):
    (tmp_path / "frontend").mkdir()
    (tmp_path / "backend").mkdir()
    (tmp_path / "README.md").write_text("", encoding="utf-8")

    assert list_roadmap_ids(tmp_path) == ["backend", "frontend"]
    assert resolve_roadmap_dir(tmp_path, "backend") == tmp_path / "backend"
    with pytest.raises(InvalidArgumentError) as info:
        resolve_roadmap_dir(tmp_path, "README.md")
    assert info.value.allowed == ["backend", "frontend"]


def test_log_event_stringifies_paths(capsys):
    log_event("topic_writing", {"message": "Writing 101-git..", "path": Path("/tmp/101-git.md")})

    record = json.loads(capsys.readouterr().out)

    assert record["event"] == "topic_writing"
    assert record["details"] == {"message": "Writing 101-git..", "path": "/tmp/101-git.md"}
    assert record["timestamp"].endswith("Z")
