"""xai_chat package

Convenience client for the xAI chat completion gRPC API.

Purpose:
    Build an authenticated gRPC channel (TLS, per-call API key header,
    per-call deadline) and assemble chat requests without touching the
    generated protobuf types by hand.

Public API (re-exported):
    - Version: ``__version__``
    - Client: :class:`Client`, :class:`ClientConfig`, :func:`load_client_config`
    - Chat: :class:`Chat` and the message/search builders
    - Errors: :class:`ProviderError`, :class:`ErrorCode`, :class:`CancelledError`
    - Cancellation: :class:`CancellationToken`

Example::

    from xai_chat import Client, search_parameters_x_on

    with Client.from_env() as client:
        chat = client.chat_create_with_prompt(
            "grok-4", "What is trending?", search_parameters_x_on(True, 3)
        )
        print(chat.sample())
"""

from .base.cancellation import CancellationToken, CancelledError
from .base.errors import ErrorCode, ProviderError
from .chat import (
    SEARCH_MODE_AUTO,
    SEARCH_MODE_OFF,
    SEARCH_MODE_ON,
    Chat,
    assistant,
    message,
    news_source,
    rss_source,
    search_parameters,
    search_parameters_with_date_range,
    search_parameters_x_on,
    source_kind,
    system,
    text_content,
    user,
    web_source,
    x_source,
)
from .client import Client
from .config import ClientConfig, load_client_config

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Client
    "Client",
    "ClientConfig",
    "load_client_config",
    # Chat
    "Chat",
    "user",
    "system",
    "assistant",
    "message",
    "text_content",
    "x_source",
    "web_source",
    "news_source",
    "rss_source",
    "source_kind",
    "search_parameters",
    "search_parameters_with_date_range",
    "search_parameters_x_on",
    "SEARCH_MODE_OFF",
    "SEARCH_MODE_ON",
    "SEARCH_MODE_AUTO",
    # Errors
    "ProviderError",
    "ErrorCode",
    "CancelledError",
    "CancellationToken",
]
