"""Event bus for client lifecycle notifications"""

from collections.abc import Callable
from typing import Any

from loguru import logger

from nexus_client.domain.models.event import ClientEvent

Listener = Callable[..., Any]


def _event_name(event: ClientEvent | str) -> str:
    return event.value if isinstance(event, ClientEvent) else str(event)


class EventBus:
    """Synchronous publish/subscribe registry

    Listeners are kept per event name in registration order. Emission calls
    each listener in turn on the caller's stack; a listener that raises is
    logged and skipped so the remaining listeners still run.
    """

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = {}

    def on(self, event: ClientEvent | str, listener: Listener) -> None:
        """Register listener for event

        Registering the same listener twice results in two invocations per
        emission.

        Args:
            event: Event name to subscribe to
            listener: Callable taking one argument, the emitted payload
                (None for payload-less events)
        """
        name = _event_name(event)
        self._listeners.setdefault(name, []).append(listener)
        logger.debug(f"Subscribed listener to event: {name}")

    def off(self, event: ClientEvent | str, listener: Listener) -> None:
        """Remove one registration of listener from event

        Args:
            event: Event name to unsubscribe from
            listener: Listener to remove (matched by identity)
        """
        name = _event_name(event)
        listeners = self._listeners.get(name)
        if not listeners:
            return

        for index, registered in enumerate(listeners):
            if registered is listener:
                del listeners[index]
                logger.debug(f"Unsubscribed listener from event: {name}")
                break

        if not listeners:
            del self._listeners[name]

    def emit(self, event: ClientEvent | str, payload: Any = None) -> bool:
        """Invoke every listener registered for event

        Args:
            event: Event name to emit
            payload: Optional value passed to each listener

        Returns:
            True if at least one listener was invoked
        """
        name = _event_name(event)
        listeners = list(self._listeners.get(name, ()))
        self._dispatch(name, listeners, payload)
        return bool(listeners)

    def listener_count(self, event: ClientEvent | str) -> int:
        """Number of registrations for event"""
        return len(self._listeners.get(_event_name(event), ()))

    def close(self) -> None:
        """Remove every listener, then announce the disconnect

        The disconnected notification reaches listeners registered before
        this call; the registry is already empty when they run.
        """
        name = ClientEvent.DISCONNECTED.value
        disconnect_listeners = list(self._listeners.get(name, ()))
        self._listeners.clear()
        logger.debug("Event bus cleared")
        self._dispatch(name, disconnect_listeners, None)

    def _dispatch(
        self, name: str, listeners: list[Listener], payload: Any
    ) -> None:
        for listener in listeners:
            try:
                listener(payload)
            except Exception:
                logger.exception(f"Listener failed for event: {name}")
