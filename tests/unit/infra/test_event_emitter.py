from __future__ import annotations

"""
Unit tests for the synchronous EventEmitter.
"""

from unittest.mock import MagicMock

import pytest

from testreader.infra.events import EventEmitter


def test_emit_calls_listeners_in_order() -> None:
    emitter = EventEmitter()
    seen = []
    emitter.on("e", lambda x: seen.append(("a", x)))
    emitter.on("e", lambda x: seen.append(("b", x)))

    assert emitter.emit("e", 1) is True
    assert seen == [("a", 1), ("b", 1)]


def test_emit_without_listeners() -> None:
    assert EventEmitter().emit("nothing") is False


def test_once_fires_a_single_time() -> None:
    emitter = EventEmitter()
    listener = MagicMock()
    emitter.once("e", listener)

    emitter.emit("e", "x")
    emitter.emit("e", "y")

    listener.assert_called_once_with("x")
    assert emitter.listeners("e") == []


def test_off_removes_plain_and_once_listeners() -> None:
    emitter = EventEmitter()
    plain, single = MagicMock(), MagicMock()
    emitter.on("e", plain).once("e", single)

    emitter.off("e", plain).off("e", single)
    emitter.emit("e")

    plain.assert_not_called()
    single.assert_not_called()


def test_listener_added_during_emit_waits_for_next_emit() -> None:
    emitter = EventEmitter()
    late = MagicMock()
    emitter.on("e", lambda: emitter.on("e", late))

    emitter.emit("e")
    late.assert_not_called()


def test_listener_errors_propagate() -> None:
    emitter = EventEmitter()

    def boom() -> None:
        raise ValueError("boom")

    emitter.on("e", boom)
    with pytest.raises(ValueError):
        emitter.emit("e")
