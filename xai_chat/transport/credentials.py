"""Per-call credentials.

``ApiKeyAuthPlugin`` is the credential provider bound to a connection. On
every outbound call it yields the API key under ``x-api-key`` plus any static
extra headers. It also records whether it may only be used over an encrypted
transport; the connection builder derives that flag from the same config
field as the channel's transport mode.
"""
from __future__ import annotations

from typing import Mapping, Optional, Tuple

import grpc

from ..config.defaults import XAI_API_KEY_HEADER

Metadata = Tuple[Tuple[str, str], ...]


class ApiKeyAuthPlugin(grpc.AuthMetadataPlugin):
    """Injects the API key and static metadata into each call."""

    def __init__(
        self,
        api_key: str,
        extra_metadata: Optional[Mapping[str, str]] = None,
        *,
        require_transport_security: bool = True,
    ) -> None:
        self._api_key = api_key
        self._extra = dict(extra_metadata or {})
        self._require_transport_security = require_transport_security

    @property
    def require_transport_security(self) -> bool:
        return self._require_transport_security

    def metadata(self) -> Metadata:
        """Return the headers for one call; the API key entry comes last."""
        pairs = [(k, v) for k, v in self._extra.items() if k != XAI_API_KEY_HEADER]
        pairs.append((XAI_API_KEY_HEADER, self._api_key))
        return tuple(pairs)

    def __call__(self, context: grpc.AuthMetadataContext, callback: grpc.AuthMetadataPluginCallback) -> None:
        callback(self.metadata(), None)

    def call_credentials(self) -> grpc.CallCredentials:
        """Wrap the plugin for composition with TLS channel credentials."""
        return grpc.metadata_call_credentials(self, name="xai-api-key")

    def __repr__(self) -> str:
        return (
            f"ApiKeyAuthPlugin(extra_keys={sorted(self._extra)!r}, "
            f"require_transport_security={self._require_transport_security!r})"
        )


__all__ = ["ApiKeyAuthPlugin", "Metadata"]
