"""
Error classification helpers mapping exceptions to normalized ErrorCode values.

Implements gRPC status extraction, status-to-code mapping, and message-based
heuristics as a fallback for exceptions raised outside the RPC runtime.
"""
from __future__ import annotations

import asyncio
from typing import Dict, FrozenSet, Optional

import grpc

from .error_code import ErrorCode
from .provider_error import ProviderError


def _extract_status(exc: BaseException) -> Optional[grpc.StatusCode]:
    """Attempt to extract a gRPC status code from an exception.

    ``grpc.RpcError`` instances raised by the runtime are also ``grpc.Call``
    objects exposing ``code()``. Returns ``None`` for anything else.
    """
    code_fn = getattr(exc, "code", None)
    if not callable(code_fn):
        return None
    try:
        code = code_fn()
    except Exception:  # pragma: no cover - foreign objects with odd code()
        return None
    return code if isinstance(code, grpc.StatusCode) else None


_GRPC_STATUS_MAP: Dict[grpc.StatusCode, ErrorCode] = {
    grpc.StatusCode.CANCELLED: ErrorCode.CANCELLED,
    grpc.StatusCode.UNKNOWN: ErrorCode.UNKNOWN,
    grpc.StatusCode.INVALID_ARGUMENT: ErrorCode.VALIDATION,
    grpc.StatusCode.DEADLINE_EXCEEDED: ErrorCode.TIMEOUT,
    grpc.StatusCode.NOT_FOUND: ErrorCode.NOT_FOUND,
    grpc.StatusCode.ALREADY_EXISTS: ErrorCode.CONFLICT,
    grpc.StatusCode.PERMISSION_DENIED: ErrorCode.AUTH,
    grpc.StatusCode.RESOURCE_EXHAUSTED: ErrorCode.RATE_LIMIT,
    grpc.StatusCode.FAILED_PRECONDITION: ErrorCode.VALIDATION,
    grpc.StatusCode.ABORTED: ErrorCode.CONFLICT,
    grpc.StatusCode.OUT_OF_RANGE: ErrorCode.VALIDATION,
    grpc.StatusCode.UNIMPLEMENTED: ErrorCode.UNSUPPORTED,
    grpc.StatusCode.INTERNAL: ErrorCode.SERVER_ERROR,
    grpc.StatusCode.UNAVAILABLE: ErrorCode.UNAVAILABLE,
    grpc.StatusCode.DATA_LOSS: ErrorCode.SERVER_ERROR,
    grpc.StatusCode.UNAUTHENTICATED: ErrorCode.AUTH,
}

# Statuses a caller-side retry policy may reasonably retry.
_RETRYABLE_STATUSES: FrozenSet[grpc.StatusCode] = frozenset(
    {
        grpc.StatusCode.UNAVAILABLE,
        grpc.StatusCode.RESOURCE_EXHAUSTED,
        grpc.StatusCode.DEADLINE_EXCEEDED,
    }
)


def _heuristic_from_message(msg: str) -> Optional[ErrorCode]:  # pragma: no cover - simple mapping
    """Substring heuristic mapping for exceptions without a gRPC status."""
    PATTERN_GROUPS = (
        (ErrorCode.TIMEOUT, ("timeout", "timed out", "deadline")),
        (ErrorCode.AUTH, ("api key", "unauthenticated", "unauthorized", "permission denied")),
        (ErrorCode.UNAVAILABLE, ("unavailable", "connection refused", "failed to connect")),
        (ErrorCode.UNSUPPORTED, ("unsupported", "not supported", "unimplemented")),
        (ErrorCode.VALIDATION, ("invalid", "malformed")),
    )
    for code, patterns in PATTERN_GROUPS:
        if any(p in msg for p in patterns):
            return code
    return None


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. ProviderError passthrough.
        2. Timeout exceptions (sync/async, including grpc future timeouts).
        3. gRPC status mapping.
        4. Substring heuristics.
        5. ``UNKNOWN`` fallback.
    """
    if isinstance(exc, ProviderError):
        return exc.code
    if isinstance(exc, (TimeoutError, asyncio.TimeoutError, grpc.FutureTimeoutError)):
        return ErrorCode.TIMEOUT
    status = _extract_status(exc)
    if status is not None:
        return _GRPC_STATUS_MAP.get(status, ErrorCode.UNKNOWN)
    code = _heuristic_from_message(str(exc).lower())
    return code if code is not None else ErrorCode.UNKNOWN


def rpc_error_to_provider_error(exc: grpc.RpcError, *, model: Optional[str] = None) -> ProviderError:
    """Wrap a ``grpc.RpcError`` into a :class:`ProviderError`.

    The message prefers the status details sent by the server and falls back
    to ``str(exc)``. The original exception is kept on ``raw``.
    """
    status = _extract_status(exc)
    details_fn = getattr(exc, "details", None)
    details = details_fn() if callable(details_fn) else None
    return ProviderError(
        code=classify_exception(exc),
        message=details or str(exc) or (status.name if status else "rpc failed"),
        model=model,
        retryable=status in _RETRYABLE_STATUSES,
        raw=exc,
    )


__all__ = [
    "classify_exception",
    "rpc_error_to_provider_error",
    "_extract_status",
    "_GRPC_STATUS_MAP",
]
