"""Connection builder.

``Connection`` owns the single long-lived gRPC channel of a client. It wires
transport credentials, per-call API key credentials and the deadline
interceptor from a :class:`ClientConfig`, and releases the channel exactly
once on :meth:`close`.

Transport modes
---------------
secure (default)
    ``ssl_channel_credentials`` composed with the plugin's call credentials.
insecure (local development only)
    Plaintext channel. gRPC will not attach call credentials to it, so the
    same plugin feeds :class:`MetadataInterceptor` instead, with
    ``require_transport_security=False``.

Both the transport mode and the plugin flag come from
``ClientConfig.require_transport_security``; they cannot drift apart.
"""
from __future__ import annotations

import threading
from typing import List, Optional

import grpc

from ..base.errors import ErrorCode, ProviderError
from ..base.logging import LogContext, get_logger, log_event
from ..config.client_config import ClientConfig
from .credentials import ApiKeyAuthPlugin
from .interceptors import MetadataInterceptor, TimeoutInterceptor

_logger = get_logger("xai_chat.transport")


class Connection:
    """Authenticated channel to the xAI API.

    The channel is safe for concurrent use; grpcio multiplexes calls. Closing
    is terminal and idempotent. Issuing calls concurrently with or after
    :meth:`close` is caller misuse and is not guarded.
    """

    def __init__(self, config: ClientConfig) -> None:
        self._config = config
        self._credentials = ApiKeyAuthPlugin(
            config.api_key,
            config.metadata,
            require_transport_security=config.require_transport_security,
        )
        self._raw_channel: Optional[grpc.Channel] = None
        self._channel: Optional[grpc.Channel] = None
        self._lock = threading.Lock()

    @classmethod
    def open(cls, config: ClientConfig) -> "Connection":
        """Build and open a connection in one step."""
        conn = cls(config)
        conn.connect()
        return conn

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def credentials(self) -> ApiKeyAuthPlugin:
        """The per-call credential provider bound to this connection."""
        return self._credentials

    @property
    def transport_secure(self) -> bool:
        """Whether the channel uses TLS."""
        return self._config.require_transport_security

    @property
    def channel(self) -> Optional[grpc.Channel]:
        """The intercepted channel, or ``None`` before connect / after close."""
        return self._channel

    @property
    def closed(self) -> bool:
        return self._channel is None

    def _interceptors(self) -> List[grpc.UnaryUnaryClientInterceptor]:
        interceptors: List[grpc.UnaryUnaryClientInterceptor] = []
        if not self.transport_secure:
            interceptors.append(MetadataInterceptor(self._credentials))
        interceptors.append(TimeoutInterceptor(self._config.timeout))
        return interceptors

    def _build_raw_channel(self) -> grpc.Channel:
        cfg = self._config
        options = list(cfg.channel_options)
        if not self.transport_secure:
            return grpc.insecure_channel(cfg.api_host, options=options)
        channel_creds = grpc.ssl_channel_credentials(root_certificates=cfg.root_certificates)
        creds = grpc.composite_channel_credentials(channel_creds, self._credentials.call_credentials())
        return grpc.secure_channel(cfg.api_host, creds, options=options)

    def connect(self) -> grpc.Channel:
        """Establish the channel once and return it.

        Raises:
            ProviderError: ``INTERNAL`` when the channel cannot be created,
                ``UNAVAILABLE`` when ``connect_timeout`` is set and the channel
                does not become ready in time.
        """
        with self._lock:
            if self._channel is not None:
                return self._channel
            ctx = LogContext(host=self._config.api_host)
            try:
                raw = self._build_raw_channel()
            except (grpc.RpcError, ValueError, TypeError, RuntimeError) as exc:
                log_event(_logger, "client.connect", ctx, ok=False, error=str(exc))
                raise ProviderError(
                    code=ErrorCode.INTERNAL,
                    message=f"could not create channel to {self._config.api_host}: {exc}",
                    raw=exc,
                ) from exc
            if self._config.connect_timeout is not None:
                try:
                    grpc.channel_ready_future(raw).result(timeout=self._config.connect_timeout)
                except grpc.FutureTimeoutError as exc:
                    raw.close()
                    log_event(_logger, "client.connect", ctx, ok=False, error="not ready")
                    raise ProviderError(
                        code=ErrorCode.UNAVAILABLE,
                        message=(
                            f"channel to {self._config.api_host} not ready after "
                            f"{self._config.connect_timeout}s"
                        ),
                        retryable=True,
                        raw=exc,
                    ) from exc
            self._raw_channel = raw
            self._channel = grpc.intercept_channel(raw, *self._interceptors())
            log_event(
                _logger,
                "client.connect",
                ctx,
                ok=True,
                secure=self.transport_secure,
                timeout=self._config.timeout,
            )
            return self._channel

    def close(self) -> None:
        """Release the channel. Safe to call repeatedly or before connect."""
        with self._lock:
            raw, self._raw_channel, self._channel = self._raw_channel, None, None
        if raw is None:
            return
        raw.close()
        log_event(_logger, "client.close", LogContext(host=self._config.api_host))

    def __enter__(self) -> "Connection":
        self.connect()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return f"Connection({self._config.api_host!r}, secure={self.transport_secure}, {state})"


__all__ = ["Connection"]
