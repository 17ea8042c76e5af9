"""Explicit client configuration.

``ClientConfig`` is the only input of the connection builder. It never reads
the process environment; ``xai_chat.config.load_client_config`` is the
adapter that populates it from defaults, a config file and environment
variables at the process boundary.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence, Tuple

from .defaults import (
    XAI_API_KEY_HEADER,
    XAI_DEFAULT_API_HOST,
    XAI_DEFAULT_TIMEOUT_SECONDS,
    XAI_DEFAULT_USE_INSECURE,
)


@dataclass(frozen=True)
class ClientConfig:
    """Immutable connection settings.

    Attributes:
        api_key: Credential sent under ``x-api-key`` on every call.
        api_host: ``host:port`` of the gRPC endpoint.
        metadata: Static extra headers sent on every call. Keys are
            lower-cased (gRPC requirement) and may not shadow ``x-api-key``.
        timeout: Per-call deadline in seconds. ``None`` or a value ``<= 0``
            disables the deadline.
        use_insecure: Plaintext transport for local development. Also
            downgrades the per-call credentials so both sides agree.
        root_certificates: PEM bundle for TLS; ``None`` uses the system roots.
        channel_options: Extra ``(key, value)`` gRPC channel arguments.
        connect_timeout: When set, construction waits up to this many seconds
            for the channel to become ready.
    """

    api_key: str
    api_host: str = XAI_DEFAULT_API_HOST
    metadata: Mapping[str, str] = field(default_factory=dict)
    timeout: Optional[float] = XAI_DEFAULT_TIMEOUT_SECONDS
    use_insecure: bool = XAI_DEFAULT_USE_INSECURE
    root_certificates: Optional[bytes] = None
    channel_options: Sequence[Tuple[str, Any]] = ()
    connect_timeout: Optional[float] = None

    def __post_init__(self) -> None:
        if not self.api_key or not self.api_key.strip():
            raise ValueError("api_key must be a non-empty string")
        if not self.api_host or not self.api_host.strip():
            raise ValueError("api_host must be a non-empty host:port string")
        if self.use_insecure and self.root_certificates is not None:
            raise ValueError("root_certificates cannot be combined with use_insecure=True")
        if self.connect_timeout is not None and self.connect_timeout < 0:
            raise ValueError("connect_timeout must be >= 0")
        normalized = {str(k).strip().lower(): str(v) for k, v in (self.metadata or {}).items()}
        if XAI_API_KEY_HEADER in normalized:
            raise ValueError(f"metadata may not override the {XAI_API_KEY_HEADER!r} header")
        # Frozen dataclass: normalize through object.__setattr__.
        object.__setattr__(self, "metadata", normalized)
        object.__setattr__(self, "channel_options", tuple(self.channel_options or ()))

    @property
    def require_transport_security(self) -> bool:
        """Whether the transport and the per-call credentials demand TLS."""
        return not self.use_insecure

    @property
    def deadline_enabled(self) -> bool:
        return self.timeout is not None and self.timeout > 0

    def __repr__(self) -> str:
        return (
            f"ClientConfig(api_host={self.api_host!r}, timeout={self.timeout!r}, "
            f"use_insecure={self.use_insecure!r}, metadata_keys={sorted(self.metadata)!r})"
        )


__all__ = ["ClientConfig"]
