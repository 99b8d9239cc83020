# File: conftest.py
# Directory: tests
# Purpose: Shared test fixtures: fake OpenAI client, on-disk roadmap builder,
#          and a log_event recorder.
#
# Notes:
# - FakeOpenAI returns simple shaped responses compatible with our code
#   (`response.choices[0].message.content`).
# - Roadmaps are written under tmp_path in the same layout as the real tree:
#   <root>/<id>/<id>.json and <root>/<id>/content/**.md

import json
import types
from pathlib import Path
from typing import Dict, List, Optional

import httpx
import openai
import pytest

# --- Fake OpenAI ------------------------------------------------------------------------------

class _Msg:
    def __init__(self, content):
        self.content = content
class _Choice:
    def __init__(self, content):
        self.message = _Msg(content)
class _Resp:
    def __init__(self, contents):
        self.choices = [_Choice(c) for c in contents]

class FakeChatCompletions:
    def __init__(self, payload=None, *, error: Optional[Exception] = None, choices=None):
        self._payload = payload
        self._error = error
        self._choices = choices
        self.calls: List[dict] = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self._error is not None:
            raise self._error
        if self._choices is not None:
            return _Resp(self._choices)
        return _Resp([self._payload])

class FakeOpenAI:
    def __init__(self, payload=None, **kwargs):
        self.completions = FakeChatCompletions(payload, **kwargs)
        self.chat = types.SimpleNamespace(completions=self.completions)
        self.closed = False

    async def close(self):
        self.closed = True


def connection_error() -> openai.APIConnectionError:
    return openai.APIConnectionError(
        request=httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    )


@pytest.fixture
def fake_openai_text_reply():
    return FakeOpenAI("# Generated\n\nA concise introduction.")


@pytest.fixture
def fake_openai_failing():
    return FakeOpenAI(error=connection_error())


# --- Roadmap on disk --------------------------------------------------------------------------

def group_control(control_name, label=None, extra_children=None) -> dict:
    children = list(extra_children or [])
    if label is not None:
        children.append({"typeID": "Label", "properties": {"text": label}})
    control = {"typeID": "__group__", "properties": {}, "children": {"controls": {"control": children}}}
    if control_name is not None:
        control["properties"]["controlName"] = control_name
    return control


def build_roadmap(root: Path, roadmap_id: str, files: Dict[str, str], controls: List[dict]) -> Path:
    roadmap_dir = root / roadmap_id
    content_dir = roadmap_dir / "content"
    content_dir.mkdir(parents=True)
    for rel, text in files.items():
        path = content_dir / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    doc = {"mockup": {"controls": {"control": controls}}}
    (roadmap_dir / f"{roadmap_id}.json").write_text(json.dumps(doc), encoding="utf-8")
    return roadmap_dir


@pytest.fixture
def roadmaps_root(tmp_path):
    root = tmp_path / "roadmaps"
    root.mkdir()
    return root


# --- Log capture ------------------------------------------------------------------------------

@pytest.fixture
def events(monkeypatch):
    """Record log_event calls from every module that emits progress."""
    import importlib

    captured = []

    def record(event, data=None):
        captured.append((event, data or {}))

    for name in ("services.orchestrator", "services.content_index"):
        monkeypatch.setattr(importlib.import_module(name), "log_event", record, raising=True)
    return captured
