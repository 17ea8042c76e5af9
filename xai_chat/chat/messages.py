"""
Message builders.

Small constructors for ``chat_pb2.Message`` and ``chat_pb2.Content`` so
callers never populate the generated types by hand. Only plain text content
is built here; the schema allows richer blocks, which callers can still pass
to :func:`message` directly.
"""
from __future__ import annotations

from typing import Union

from ..proto import chat_pb2

ROLE_USER = chat_pb2.MessageRole.ROLE_USER
ROLE_ASSISTANT = chat_pb2.MessageRole.ROLE_ASSISTANT
ROLE_SYSTEM = chat_pb2.MessageRole.ROLE_SYSTEM

ContentLike = Union[str, "chat_pb2.Content"]


def text_content(text: str) -> chat_pb2.Content:
    """Wrap plain text in a single content block."""
    return chat_pb2.Content(text=text)


def _as_content(item: ContentLike) -> chat_pb2.Content:
    if isinstance(item, str):
        return text_content(item)
    if isinstance(item, chat_pb2.Content):
        return item
    raise TypeError(f"message content must be str or Content, got {type(item).__name__}")


def message(role: "chat_pb2.MessageRole", *contents: ContentLike) -> chat_pb2.Message:
    """Build a message with ``role`` and content blocks in the given order.

    Strings are wrapped with :func:`text_content`.
    """
    return chat_pb2.Message(role=role, content=[_as_content(c) for c in contents])


def user(text: str) -> chat_pb2.Message:
    """A user-role message with one text block."""
    return message(ROLE_USER, text_content(text))


def system(text: str) -> chat_pb2.Message:
    return message(ROLE_SYSTEM, text_content(text))


def assistant(text: str) -> chat_pb2.Message:
    return message(ROLE_ASSISTANT, text_content(text))


__all__ = [
    "ROLE_USER",
    "ROLE_ASSISTANT",
    "ROLE_SYSTEM",
    "text_content",
    "message",
    "user",
    "system",
    "assistant",
]
