"""xai_chat.config.defaults
========================

Central place for the small, stable default values used by the client.
These can be overridden via environment variables, a config file, or explicit
arguments, but provide sensible fallbacks for production use and tests.

Only plain constants live here; the one import is the shared timeout
default from ``xai_chat.base.timeouts``.
"""

from __future__ import annotations

from ..base.timeouts import DEFAULT_TIMEOUT_SECONDS

# ---- Transport ----
# Production gRPC endpoint (host:port).
XAI_DEFAULT_API_HOST = "api.x.ai:443"
# Per-call deadline when neither env nor caller overrides it.
XAI_DEFAULT_TIMEOUT_SECONDS = DEFAULT_TIMEOUT_SECONDS
# TLS is on unless explicitly downgraded for local development.
XAI_DEFAULT_USE_INSECURE = False

# ---- Credentials ----
# Header that carries the API key on every call.
XAI_API_KEY_HEADER = "x-api-key"


__all__ = [
    "XAI_DEFAULT_API_HOST",
    "XAI_DEFAULT_TIMEOUT_SECONDS",
    "XAI_DEFAULT_USE_INSECURE",
    "XAI_API_KEY_HEADER",
]
