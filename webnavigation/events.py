"""Named-channel event dispatch used for href resolution."""

from __future__ import annotations

import itertools
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Tuple

from .models import Page
from .tracing import log_event

if TYPE_CHECKING:  # pragma: no cover
    from .service import Navigation

EVENT_GET_HREF = "get.href"
EVENT_IS_ACTIVE = "is.active"

_LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class NavigationEvent:
    """Value passed to every handler of a navigation channel."""

    navigation: Optional["Navigation"] = None
    target: Optional[Page] = None
    name: Optional[str] = None
    result: Optional[str] = None
    params: Dict[str, Any] = field(default_factory=dict)


Handler = Callable[[NavigationEvent], Optional[str]]


class EventManager:
    """Ordered handler registry keyed by channel name.

    Handlers run by descending ``priority`` and, within one priority, in the
    order they were attached. The first handler producing a non-empty result
    ends the dispatch. A handler may either return its result or write it to
    ``event.result``.
    """

    def __init__(self) -> None:
        self._listeners: Dict[str, List[Tuple[int, int, Handler]]] = {}
        self._sequence = itertools.count()

    def attach(self, name: str, handler: Handler, priority: int = 1) -> Handler:
        entries = self._listeners.setdefault(name, [])
        entries.append((priority, next(self._sequence), handler))
        return handler

    def detach(self, name: str, handler: Handler) -> bool:
        entries = self._listeners.get(name, [])
        for index, (_priority, _seq, candidate) in enumerate(entries):
            if candidate == handler:
                del entries[index]
                return True
        return False

    def listeners(self, name: str) -> List[Handler]:
        entries = sorted(self._listeners.get(name, []), key=lambda entry: (-entry[0], entry[1]))
        return [handler for _priority, _seq, handler in entries]

    def clear_listeners(self, name: Optional[str] = None) -> None:
        if name is None:
            self._listeners.clear()
        else:
            self._listeners.pop(name, None)

    def trigger(self, name: str, event: NavigationEvent) -> Optional[str]:
        """Dispatch ``event`` on channel ``name`` and return the winning result."""

        event.name = name
        event.result = None
        for handler in self.listeners(name):
            returned = handler(event)
            result = returned if returned else event.result
            if result:
                result = str(result)
                event.result = result
                log_event(
                    _LOGGER,
                    logging.DEBUG,
                    "navigation.event.resolved",
                    channel=name,
                    handler=getattr(handler, "__qualname__", repr(handler)),
                )
                return result
            event.result = None
        return None


class ListenerAggregate(ABC):
    """Bundle of handlers attached and detached as a unit."""

    def __init__(self) -> None:
        self._handles: List[Tuple[str, Handler]] = []

    @abstractmethod
    def attach(self, events: EventManager) -> None:
        """Attach this aggregate's handlers to ``events``."""

        raise NotImplementedError

    def _listen(self, events: EventManager, name: str, handler: Handler, priority: int = 1) -> None:
        events.attach(name, handler, priority)
        self._handles.append((name, handler))

    def detach(self, events: EventManager) -> None:
        for name, handler in self._handles:
            events.detach(name, handler)
        self._handles.clear()


__all__ = [
    "EVENT_GET_HREF",
    "EVENT_IS_ACTIVE",
    "EventManager",
    "Handler",
    "ListenerAggregate",
    "NavigationEvent",
]
