"""Unit tests for cooperative cancellation and deadline contexts.

Covers idempotent cancel, cascade to children, late link of child after
parent cancel, and deadline expiry on ``CallContext``.
"""
from __future__ import annotations

import time

import pytest

from orka_chat_plugin.base.cancellation import CancellationToken, CancelledError
from orka_chat_plugin.base.context import CallContext


def test_cancel_cascades_to_children_and_is_idempotent():
    parent = CancellationToken()
    child1 = parent.child()
    child2 = parent.child()

    parent.cancel(reason="stop")
    parent.cancel(reason="ignored")

    assert parent.cancelled is True and parent.reason == "stop"  # nosec B101 - pytest assert in tests
    assert child1.cancelled is True and child1.reason == "stop"  # nosec B101 - pytest assert in tests
    assert child2.cancelled is True and child2.reason == "stop"  # nosec B101 - pytest assert in tests


def test_link_child_after_parent_cancel_immediately_cancels_child():
    parent = CancellationToken()
    parent.cancel("done")
    late_child = CancellationToken(parent=parent)
    assert late_child.cancelled is True and late_child.reason == "done"  # nosec B101 - pytest assert in tests


def test_raise_if_cancelled_and_wait():
    token = CancellationToken()
    assert token.wait(0.01) is False  # nosec B101 - pytest assert in tests
    token.cancel("terminate")
    assert token.wait(0.01) is True  # nosec B101 - pytest assert in tests
    with pytest.raises(CancelledError, match="terminate"):
        token.raise_if_cancelled()


def test_context_deadline_and_remaining():
    ctx = CallContext.with_timeout(60)
    assert 0 < ctx.remaining() <= 60  # nosec B101 - pytest assert in tests
    assert ctx.expired is False  # nosec B101 - pytest assert in tests
    ctx.raise_if_done()

    expired = CallContext(deadline=time.monotonic() - 1)
    assert expired.remaining() == 0.0 and expired.expired is True  # nosec B101 - pytest assert in tests
    with pytest.raises(TimeoutError, match="context deadline exceeded"):
        expired.raise_if_done()


def test_background_context_has_no_deadline():
    ctx = CallContext.background()
    assert ctx.remaining() is None and ctx.expired is False  # nosec B101 - pytest assert in tests


def test_context_follows_parent_token():
    parent = CancellationToken()
    ctx = CallContext.with_timeout(60, parent=parent)
    parent.cancel("caller went away")
    assert ctx.cancelled is True  # nosec B101 - pytest assert in tests
    with pytest.raises(CancelledError):
        ctx.raise_if_done()
