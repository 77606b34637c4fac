"""Events the marker core emits for the surrounding form layer."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Callable

log = logging.getLogger(__name__)

POSITION_CHANGED = "position-changed"  # (lat, lng), both None when cleared
ZOOM_CHANGED = "zoom-changed"  # (zoom,)
STATUS_CHANGED = "status-changed"  # (code, label)
ADDRESS_RESOLVED = "address-resolved"  # (address,)

EVENT_NAMES = (POSITION_CHANGED, ZOOM_CHANGED, STATUS_CHANGED, ADDRESS_RESOLVED)


class MarkerEvents:
    """Subscribe/emit hub for marker events."""

    def __init__(self) -> None:
        self._listeners: dict[str, list[Callable[..., Any]]] = defaultdict(list)

    def subscribe(self, name: str, callback: Callable[..., Any]) -> Callable[[], None]:
        """Register a listener; returns a function that unsubscribes it."""
        if name not in EVENT_NAMES:
            raise ValueError(f"Unknown marker event: {name}")
        self._listeners[name].append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners[name]:
                self._listeners[name].remove(callback)

        return unsubscribe

    def emit(self, name: str, *args: Any) -> None:
        for callback in list(self._listeners[name]):
            callback(*args)
