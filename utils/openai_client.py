# File: openai_client.py
# Directory: utils
# Purpose: Provides functionality to create and configure a client for interacting with OpenAI's API.
#
# Upstream:
#   - ENV (optional, granular timeouts; unset means no timeout):
#       OPENAI_CONNECT_TIMEOUT   (seconds)
#       OPENAI_READ_TIMEOUT      (seconds)
#       OPENAI_WRITE_TIMEOUT     (seconds)
#       OPENAI_POOL_TIMEOUT      (seconds)
#     Fallback (legacy, single value for all four if set):
#       OPENAI_TIMEOUT           (seconds)
#   - ENV (optional, connection limits; unset means unbounded):
#       OPENAI_MAX_KEEPALIVE     (default 20)
#       OPENAI_MAX_CONNECTIONS   (default unbounded)
#       OPENAI_KEEPALIVE_EXPIRY  (seconds, default 30)
#   - Imports: httpx, openai, utils.env
#
# Downstream:
#   - main
#
# Contents:
#   - build_timeout()
#   - build_limits()
#   - create_openai_client()
#
# Notes:
#   - The API key is passed in by the caller (settings decide which env var holds it).
#   - Every topic request is in flight at once and the run waits for all of them, so by
#     default there is no pool cap and no timeout. The env knobs are opt-in.
#   - SDK retries are switched off: a failed generation must surface on the first error.
#   - Keep a single AsyncClient for connection reuse/keep-alive. The OpenAI SDK will use it.

import httpx
from openai import AsyncOpenAI

from utils.env import get_float, get_optional_float, get_optional_int


def build_timeout() -> httpx.Timeout:
    """
    Timeout precedence:
      1) If OPENAI_TIMEOUT is set, it is used for connect/read/write/pool (legacy single knob).
      2) Otherwise, use granular OPENAI_CONNECT_TIMEOUT / READ / WRITE / POOL values.
    Anything unset stays None (wait forever).
    """
    t = get_optional_float("OPENAI_TIMEOUT")
    if t is not None:
        return httpx.Timeout(connect=t, read=t, write=t, pool=t)
    return httpx.Timeout(
        connect=get_optional_float("OPENAI_CONNECT_TIMEOUT"),
        read=get_optional_float("OPENAI_READ_TIMEOUT"),
        write=get_optional_float("OPENAI_WRITE_TIMEOUT"),
        pool=get_optional_float("OPENAI_POOL_TIMEOUT"),
    )


def build_limits() -> httpx.Limits:
    return httpx.Limits(
        max_keepalive_connections=get_optional_int("OPENAI_MAX_KEEPALIVE") or 20,
        max_connections=get_optional_int("OPENAI_MAX_CONNECTIONS"),
        keepalive_expiry=get_float("OPENAI_KEEPALIVE_EXPIRY", 30.0),
    )


def create_openai_client(api_key: str) -> AsyncOpenAI:
    """Return a configured AsyncOpenAI client backed by a shared httpx.AsyncClient."""
    timeout = build_timeout()
    http_client = httpx.AsyncClient(timeout=timeout, limits=build_limits())

    # Pass the timeout explicitly so the SDK does not substitute its own default.
    return AsyncOpenAI(
        api_key=api_key,
        http_client=http_client,
        timeout=timeout,
        max_retries=0,
    )
