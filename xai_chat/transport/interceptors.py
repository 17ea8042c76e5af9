"""Unary client interceptors installed on every connection.

TimeoutInterceptor
    Applies the configured per-call deadline. A caller-supplied deadline is
    kept when it is tighter.

MetadataInterceptor
    Attaches ``ApiKeyAuthPlugin`` headers on plaintext channels, where gRPC
    refuses call credentials. It rejects a plugin that still demands
    transport security, mirroring what the runtime does for TLS-only call
    credentials.
"""
from __future__ import annotations

import collections
from typing import Any, Callable, Optional

import grpc

from ..base.errors import ErrorCode, ProviderError
from ..base.timeouts import effective_timeout
from .credentials import ApiKeyAuthPlugin


class _ClientCallDetails(
    collections.namedtuple(
        "_ClientCallDetails",
        ("method", "timeout", "metadata", "credentials", "wait_for_ready", "compression"),
    ),
    grpc.ClientCallDetails,
):
    pass


def _replace_details(details: grpc.ClientCallDetails, **changes: Any) -> _ClientCallDetails:
    fields = {
        "method": details.method,
        "timeout": details.timeout,
        "metadata": details.metadata,
        "credentials": details.credentials,
        "wait_for_ready": getattr(details, "wait_for_ready", None),
        "compression": getattr(details, "compression", None),
    }
    fields.update(changes)
    return _ClientCallDetails(**fields)


class TimeoutInterceptor(grpc.UnaryUnaryClientInterceptor):
    """Bound every unary call by ``timeout`` seconds (``None``/``<= 0`` disables)."""

    def __init__(self, timeout: Optional[float]) -> None:
        self.timeout = timeout

    def intercept_unary_unary(
        self,
        continuation: Callable[[grpc.ClientCallDetails, Any], Any],
        client_call_details: grpc.ClientCallDetails,
        request: Any,
    ) -> Any:
        deadline = effective_timeout(self.timeout, client_call_details.timeout)
        if deadline != client_call_details.timeout:
            client_call_details = _replace_details(client_call_details, timeout=deadline)
        return continuation(client_call_details, request)


class MetadataInterceptor(grpc.UnaryUnaryClientInterceptor):
    """Append the plugin's headers to the call metadata."""

    def __init__(self, plugin: ApiKeyAuthPlugin) -> None:
        self._plugin = plugin

    def intercept_unary_unary(
        self,
        continuation: Callable[[grpc.ClientCallDetails, Any], Any],
        client_call_details: grpc.ClientCallDetails,
        request: Any,
    ) -> Any:
        if self._plugin.require_transport_security:
            raise ProviderError(
                code=ErrorCode.AUTH,
                message="credentials require transport security but the channel is insecure",
            )
        metadata = list(client_call_details.metadata or ())
        metadata.extend(self._plugin.metadata())
        return continuation(_replace_details(client_call_details, metadata=metadata), request)


__all__ = ["TimeoutInterceptor", "MetadataInterceptor"]
