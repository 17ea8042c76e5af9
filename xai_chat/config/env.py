"""xai_chat.config.env
===================

Environment variable names and small parsing helpers used by the
configuration adapter. Nothing outside ``xai_chat.config`` reads the process
environment; the transport layer only ever sees a ``ClientConfig``.

Failure Modes
-------------
- Helpers never raise on unset variables; they return ``None`` or the
  documented default and leave the decision to the caller.
"""

from __future__ import annotations

import os
from typing import Mapping, Optional

XAI_API_KEY_ENV = "XAI_API_KEY"
XAI_API_HOST_ENV = "XAI_API_HOST"
XAI_TIMEOUT_ENV = "XAI_TIMEOUT"
XAI_INSECURE_ENV = "XAI_INSECURE"
XAI_CONFIG_FILE_ENV = "XAI_CONFIG_FILE"

TRUTHY_VALUES = frozenset({"1", "true", "yes"})


def is_truthy(val: Optional[str]) -> bool:
    """Return True for ``"1"``, ``"true"`` or ``"yes"`` (case-insensitive)."""
    if val is None:
        return False
    return val.strip().lower() in TRUTHY_VALUES


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the provided string looks like a placeholder/test value.

    Heuristics: contains 'placeholder', 'changeme', 'your-api-key', or
    starts with 'test_'. The check is case-insensitive.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return (
        "placeholder" in v
        or "changeme" in v
        or "your-api-key" in v
        or v.startswith("test_")
    )


def get_env(name: str, environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """Return a non-empty value for ``name`` or ``None``.

    ``environ`` defaults to ``os.environ``; tests pass a plain dict instead of
    mutating the process environment.
    """
    source = os.environ if environ is None else environ
    val = source.get(name)
    if val is None or not val.strip():
        return None
    return val.strip()


def resolve_api_key(environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """Return the API key from ``XAI_API_KEY`` or ``None`` when unset."""
    return get_env(XAI_API_KEY_ENV, environ)


__all__ = [
    "XAI_API_KEY_ENV",
    "XAI_API_HOST_ENV",
    "XAI_TIMEOUT_ENV",
    "XAI_INSECURE_ENV",
    "XAI_CONFIG_FILE_ENV",
    "TRUTHY_VALUES",
    "is_truthy",
    "is_placeholder",
    "get_env",
    "resolve_api_key",
]
