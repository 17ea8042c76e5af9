"""Cancellation error type.

Defines the public ``CancelledError`` used to signal that a caller cancelled
an in-flight ``Chat.sample`` call through its token.
"""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when an operation is cancelled by the caller.

    Distinguishes caller-driven cancellation from deadline expiry and from
    server-reported failures, both of which surface as ``ProviderError``.
    """

__all__ = ["CancelledError"]
