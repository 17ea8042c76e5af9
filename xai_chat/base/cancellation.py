"""Cancellation primitives (public API facade).

Notes
-----
- ``CancellationToken`` is the caller-side cancellation signal accepted by
  ``Chat.sample``.
- ``CancelledError`` is raised by operations that observe a cancellation request.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancelledError"]
