# File: logging.py
# Directory: core
# Purpose: Structured JSON logging helper for the roadmap content filler. Every
#          progress line is one JSON object on stdout, timestamped.
#
# Upstream:
#   - Imports: datetime, json, logging
#   - Callers: services.content_index, services.orchestrator, main, tests.*
#
# Downstream:
#   - stdout (terminal / CI logs)
#
# Contents:
#   - log_event(event_type: str, payload: dict)
#   - quiet_http_loggers()

import datetime
import json
import logging
from typing import Any, Dict


def _safe(obj: Any) -> Any:
    """
    Ensure object is JSON-serializable.
    Paths and other objects are passed through str(); dicts are walked.
    """
    if isinstance(obj, dict):
        return {str(k): _safe(v) for k, v in obj.items()}
    try:
        json.dumps(obj)
        return obj
    except (TypeError, ValueError):
        try:
            return str(obj)
        except Exception:
            return "<unserializable>"


def log_event(event_type: str, payload: Dict[str, Any]) -> None:
    """
    Emit a structured log line to stdout.
    Example:
      {"timestamp":"2026-10-17T09:12:44.001Z","event":"topic_writing","details":{"message":"Writing 101-intro.."}}
    """
    ts = datetime.datetime.now(datetime.timezone.utc).replace(tzinfo=None).isoformat() + "Z"
    record = {
        "timestamp": ts,
        "event": event_type,
        "details": _safe(payload),
    }
    try:
        print(json.dumps(record, ensure_ascii=False), flush=True)
    except Exception:
        # Last resort: print a minimal fallback
        print(f'{{"timestamp":"{ts}","event":"{event_type}","details":"<logging failure>"}}')


def quiet_http_loggers() -> None:
    """Per-request httpx/openai INFO lines drown out the progress events."""
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)
