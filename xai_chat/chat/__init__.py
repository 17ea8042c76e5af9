"""Request assembly: message and search builders plus the ``Chat`` handle."""

from .chat import Chat
from .messages import (
    ROLE_ASSISTANT,
    ROLE_SYSTEM,
    ROLE_USER,
    assistant,
    message,
    system,
    text_content,
    user,
)
from .search import (
    SEARCH_MODE_AUTO,
    SEARCH_MODE_OFF,
    SEARCH_MODE_ON,
    news_source,
    rss_source,
    search_parameters,
    search_parameters_with_date_range,
    search_parameters_x_on,
    source_kind,
    web_source,
    x_source,
)

__all__ = [
    "Chat",
    "ROLE_ASSISTANT",
    "ROLE_SYSTEM",
    "ROLE_USER",
    "assistant",
    "message",
    "system",
    "text_content",
    "user",
    "SEARCH_MODE_AUTO",
    "SEARCH_MODE_OFF",
    "SEARCH_MODE_ON",
    "news_source",
    "rss_source",
    "search_parameters",
    "search_parameters_with_date_range",
    "search_parameters_x_on",
    "source_kind",
    "web_source",
    "x_source",
]
