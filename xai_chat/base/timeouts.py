"""Timeout values and duration parsing.

Key Components
--------------
DEFAULT_TIMEOUT_SECONDS
    Per-call deadline applied when nothing else is configured.

parse_duration(text)
    Parses a duration string into seconds. Accepts the Go ``time.Duration``
    syntax used by ``XAI_TIMEOUT`` (``"30s"``, ``"1m30s"``, ``"500ms"``,
    ``"1.5h"``, ``"-2s"``). A unitless number is only accepted for ``"0"``.

effective_timeout(configured, requested)
    Combines the channel-wide timeout with an optional per-call one. The
    tighter positive value wins; ``None`` or non-positive values mean
    "no deadline".

Failure Modes
-------------
``parse_duration`` raises ``ValueError`` on malformed input. Callers at the
configuration boundary catch it and fall back to the default.
"""
from __future__ import annotations

import re
from typing import Optional

DEFAULT_TIMEOUT_SECONDS = 60.0

_UNIT_SECONDS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}

_COMPONENT = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")


def parse_duration(text: str) -> float:
    """Return the number of seconds described by ``text``.

    Raises:
        ValueError: if ``text`` is empty or not a valid duration.
    """
    raw = (text or "").strip()
    if not raw:
        raise ValueError("empty duration")
    sign = 1.0
    body = raw
    if body[0] in "+-":
        sign = -1.0 if body[0] == "-" else 1.0
        body = body[1:]
    if body == "0":
        return 0.0

    total = 0.0
    pos = 0
    while pos < len(body):
        match = _COMPONENT.match(body, pos)
        if match is None:
            raise ValueError(f"invalid duration {text!r}")
        total += float(match.group(1)) * _UNIT_SECONDS[match.group(2)]
        pos = match.end()
    if pos == 0:
        raise ValueError(f"invalid duration {text!r}")
    return sign * total


def effective_timeout(configured: Optional[float], requested: Optional[float] = None) -> Optional[float]:
    """Return the deadline (seconds) to apply to a single call, or ``None``."""
    candidates = [t for t in (configured, requested) if t is not None and t > 0]
    return min(candidates) if candidates else None


__all__ = [
    "DEFAULT_TIMEOUT_SECONDS",
    "parse_duration",
    "effective_timeout",
]
