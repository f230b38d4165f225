from __future__ import annotations

"""
Synchronous Event Emitter.

Minimal fan-out notification primitive shared by the definition engine's
suites and the tree compiler. Delivery is synchronous and in registration
order; there is no buffering, so a listener attached after an emission
never observes it. Exceptions raised by listeners propagate to the emitter.
"""

from typing import Any, Callable, Dict, List

Listener = Callable[..., Any]


class EventEmitter:
    """
    Registry of per-event listener lists.
    """

    def __init__(self) -> None:
        self._listeners: Dict[str, List[Listener]] = {}

    def on(self, event: str, listener: Listener) -> "EventEmitter":
        """
        Register a listener for an event.

        Args:
            event: Event identifier.
            listener: Callable invoked with the emitted arguments.

        Returns:
            EventEmitter: self, for chaining.
        """
        self._listeners.setdefault(event, []).append(listener)
        return self

    def once(self, event: str, listener: Listener) -> "EventEmitter":
        """Register a listener that is removed right before its first call."""

        def _wrapper(*args: Any) -> Any:
            self.off(event, _wrapper)
            return listener(*args)

        _wrapper.listener = listener  # type: ignore[attr-defined]
        return self.on(event, _wrapper)

    def off(self, event: str, listener: Listener) -> "EventEmitter":
        """Remove a listener (or a once-wrapper around it) if registered."""
        listeners = self._listeners.get(event, [])
        for registered in list(listeners):
            if registered is listener or getattr(registered, "listener", None) is listener:
                listeners.remove(registered)
                break
        return self

    def emit(self, event: str, *args: Any) -> bool:
        """
        Deliver an event to every listener registered at emission time.

        Returns:
            bool: True if at least one listener was called.
        """
        listeners = list(self._listeners.get(event, []))
        for listener in listeners:
            listener(*args)
        return bool(listeners)

    def listeners(self, event: str) -> List[Listener]:
        return list(self._listeners.get(event, []))
