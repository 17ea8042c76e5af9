"""Unit tests for the message builders."""

from __future__ import annotations

import pytest

from xai_chat.chat.messages import (
    ROLE_ASSISTANT,
    ROLE_SYSTEM,
    ROLE_USER,
    assistant,
    message,
    system,
    text_content,
    user,
)
from xai_chat.proto import chat_pb2


def test_text_content_wraps_plain_text():
    block = text_content("hello")
    assert block.WhichOneof("content") == "text"
    assert block.text == "hello"


@pytest.mark.parametrize("text", ["hello", "", "multi\nline ✓"])
def test_user_message_has_one_text_block(text):
    msg = user(text)
    assert msg.role == ROLE_USER
    assert len(msg.content) == 1
    assert msg.content[0] == text_content(text)


def test_system_and_assistant_roles():
    assert system("be brief").role == ROLE_SYSTEM
    assert assistant("ok").role == ROLE_ASSISTANT
    assert assistant("ok").content[0].text == "ok"


def test_message_accepts_strings_and_blocks_in_order():
    msg = message(ROLE_USER, "first", text_content("second"), "third")
    assert [c.text for c in msg.content] == ["first", "second", "third"]


def test_message_rejects_unknown_content():
    with pytest.raises(TypeError):
        message(ROLE_USER, 42)  # type: ignore[arg-type]


def test_builders_return_independent_values():
    a = user("same")
    b = user("same")
    assert a == b
    a.content[0].text = "changed"
    assert b.content[0].text == "same"
    assert isinstance(a, chat_pb2.Message)
