"""Built-in listeners for the navigation channels."""

from __future__ import annotations

import logging
from typing import Optional

from .events import EVENT_GET_HREF, EventManager, ListenerAggregate, NavigationEvent
from .tracing import log_event

_LOGGER = logging.getLogger(__name__)


class HrefListener(ListenerAggregate):
    """Resolve hrefs from page properties.

    A literal ``uri`` property wins. Otherwise the ``route`` property is
    assembled with the optional ``params`` property through the router held by
    the navigation service. Pages with neither, or a service without a router,
    are left for other listeners.
    """

    def __init__(self, priority: int = 1) -> None:
        super().__init__()
        self._priority = priority

    def attach(self, events: EventManager) -> None:
        self._listen(events, EVENT_GET_HREF, self.on_get_href, self._priority)

    def on_get_href(self, event: NavigationEvent) -> Optional[str]:
        page = event.target
        if page is None:
            return None

        uri = page.get_property("uri")
        if uri:
            return str(uri)

        route = page.route
        if not route:
            return None

        router = event.navigation.router if event.navigation is not None else None
        if router is None:
            log_event(_LOGGER, logging.DEBUG, "navigation.href.no_router", page=page)
            return None

        params = page.get_property("params") or {}
        return router.assemble(route, params)


__all__ = ["HrefListener"]
