"""Client entry point.

``Client`` owns one :class:`Connection` and the generated Chat and Auth stubs
on top of it.

Construction paths
------------------
``Client.from_env(api_key=None)``
    Resolves host, timeout, transport mode (and, when omitted, the key) from
    defaults, ``XAI_CONFIG_FILE`` and ``XAI_*`` environment variables.
``Client.with_options(api_key, api_host, metadata, timeout, use_insecure)``
    Explicit settings, no environment access.
``Client(config)``
    The core path; both helpers end here.

Construction raises :class:`ProviderError` instead of aborting when the
transport cannot be set up.
"""
from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

import grpc
from google.protobuf import empty_pb2

from .base.errors import rpc_error_to_provider_error
from .chat.chat import Chat
from .chat.messages import user
from .config import ClientConfig, load_client_config
from .config.defaults import XAI_DEFAULT_API_HOST, XAI_DEFAULT_TIMEOUT_SECONDS
from .proto import auth_pb2, auth_pb2_grpc, chat_pb2, chat_pb2_grpc
from .transport.connection import Connection


class Client:
    """Synchronous xAI chat client."""

    def __init__(self, config: ClientConfig) -> None:
        self._config = config
        self._connection = Connection.open(config)
        channel = self._connection.channel
        self._chat = chat_pb2_grpc.ChatStub(channel)
        self._auth = auth_pb2_grpc.AuthStub(channel)

    @classmethod
    def from_env(
        cls,
        api_key: Optional[str] = None,
        *,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "Client":
        """Create a client from an API key plus environment overrides.

        Defaults: host ``api.x.ai:443`` (``XAI_API_HOST``), timeout 60s
        (``XAI_TIMEOUT``, e.g. ``"30s"``, ``"2m"``; invalid values fall back to
        60s), TLS on (``XAI_INSECURE=1|true|yes`` disables it).
        """
        return cls(load_client_config(api_key=api_key, environ=environ))

    @classmethod
    def with_options(
        cls,
        api_key: str,
        api_host: str = XAI_DEFAULT_API_HOST,
        metadata: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = XAI_DEFAULT_TIMEOUT_SECONDS,
        use_insecure: bool = False,
        **options: Any,
    ) -> "Client":
        """Create a client from explicit settings.

        ``timeout`` of ``None`` or ``<= 0`` disables the per-call deadline.
        ``use_insecure`` is for local development only. Remaining keyword
        arguments are passed to :class:`ClientConfig`.
        """
        config = ClientConfig(
            api_key=api_key,
            api_host=api_host,
            metadata=dict(metadata or {}),
            timeout=timeout,
            use_insecure=use_insecure,
            **options,
        )
        return cls(config)

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def connection(self) -> Connection:
        return self._connection

    def chat_create(
        self,
        model: str,
        messages: Sequence[chat_pb2.Message],
        search_parameters: Optional[chat_pb2.SearchParameters] = None,
    ) -> Chat:
        """Build a :class:`Chat` from a model, messages and optional search parameters."""
        return Chat(self._chat, model, messages, search_parameters)

    def chat_create_with_prompt(
        self,
        model: str,
        prompt: str,
        search_parameters: Optional[chat_pb2.SearchParameters] = None,
    ) -> Chat:
        """Build a :class:`Chat` with a single user message holding ``prompt``."""
        return self.chat_create(model, [user(prompt)], search_parameters)

    def api_key_info(self, timeout: Optional[float] = None) -> auth_pb2.ApiKey:
        """Return the server's view of the configured API key."""
        try:
            return self._auth.get_api_key_info(empty_pb2.Empty(), timeout=timeout)
        except grpc.RpcError as exc:
            raise rpc_error_to_provider_error(exc) from exc

    def close(self) -> None:
        """Release the channel. Idempotent."""
        self._connection.close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"Client({self._connection!r})"


__all__ = ["Client"]
