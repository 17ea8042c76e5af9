"""Unit tests for cooperative cancellation primitives.

Covers idempotent cancel, cascade to children, late link of child after
parent cancel, raise_if_cancelled and cancel callbacks.
"""
from __future__ import annotations

import pytest

from xai_chat.base.cancellation import (
    CancellationToken,
    CancelledError,
)


def test_cancel_cascades_to_children_and_is_idempotent():
    parent = CancellationToken()
    child1 = parent.child()
    child2 = parent.child()

    parent.cancel(reason="stop")
    # idempotent second call
    parent.cancel(reason="ignored")

    assert parent.cancelled is True and parent.reason == "stop"  # nosec B101 - pytest assert in tests
    assert child1.cancelled is True and child1.reason == "stop"  # nosec B101 - pytest assert in tests
    assert child2.cancelled is True and child2.reason == "stop"  # nosec B101 - pytest assert in tests


def test_link_child_after_parent_cancel_immediately_cancels_child():
    parent = CancellationToken()
    parent.cancel("done")
    late_child = CancellationToken(parent=parent)
    assert late_child.cancelled is True and late_child.reason == "done"  # nosec B101 - pytest assert in tests


def test_raise_if_cancelled_raises_custom_error():
    token = CancellationToken()
    token.raise_if_cancelled()
    token.cancel("terminate")
    with pytest.raises(CancelledError, match="terminate"):
        token.raise_if_cancelled()


def test_on_cancel_fires_once():
    token = CancellationToken()
    calls = []
    token.on_cancel(lambda: calls.append("a"))
    token.cancel()
    token.cancel()
    assert calls == ["a"]  # nosec B101


def test_on_cancel_after_cancel_fires_immediately():
    token = CancellationToken()
    token.cancel()
    calls = []
    token.on_cancel(lambda: calls.append("late"))
    assert calls == ["late"]  # nosec B101


def test_unregistered_callback_does_not_fire():
    token = CancellationToken()
    calls = []
    unregister = token.on_cancel(lambda: calls.append("x"))
    unregister()
    unregister()
    token.cancel()
    assert calls == []  # nosec B101


def test_child_callbacks_fire_on_parent_cancel():
    parent = CancellationToken()
    child = parent.child()
    calls = []
    child.on_cancel(lambda: calls.append(child.reason))
    parent.cancel("shutdown")
    assert calls == ["shutdown"]  # nosec B101
