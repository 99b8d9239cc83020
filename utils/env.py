# ──────────────────────────────────────────────────────────────────────────────
# File: utils/env.py
# Purpose: Safe env readers that ignore malformed values (e.g., "35=") and
#          provide stable defaults. Keep tiny and dependency-free.
# ──────────────────────────────────────────────────────────────────────────────
from __future__ import annotations
import os, re
from typing import Optional

_NUM_RE = re.compile(r"^\s*([0-9]+(?:\.[0-9]+)?)\s*$")

def get_float(name: str, default: float) -> float:
    v = os.getenv(name)
    if not v: return float(default)
    m = _NUM_RE.match(v)
    return float(m.group(1)) if m else float(default)

def get_str(name: str, default: Optional[str] = None) -> Optional[str]:
    """Blank values count as unset."""
    v = os.getenv(name)
    if v is None or not v.strip():
        return default
    return v.strip()

def get_optional_float(name: str) -> Optional[float]:
    """None when unset or malformed; callers treat None as "no limit"."""
    v = os.getenv(name)
    if not v: return None
    m = _NUM_RE.match(v)
    return float(m.group(1)) if m else None

def get_optional_int(name: str) -> Optional[int]:
    v = get_optional_float(name)
    return None if v is None else int(v)
