"""Navigation service: container registry, active state and href resolution."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from .errors import DuplicateNameError, HrefResolutionError, NotFoundError
from .events import EVENT_GET_HREF, EVENT_IS_ACTIVE, EventManager, NavigationEvent
from .listeners import HrefListener
from .models import Container, Page
from .routing import RouteMatch, Router
from .tracing import log_event

_LOGGER = logging.getLogger(__name__)


class Navigation:
    """Request-scoped view over one or more navigation containers.

    ``is_active`` and ``get_href`` results are memoised per page for the
    lifetime of the instance. Mutating a page tree after it has been queried
    leaves those results stale until :meth:`clear_cache` is called.
    """

    EVENT_GET_HREF = EVENT_GET_HREF
    EVENT_IS_ACTIVE = EVENT_IS_ACTIVE

    def __init__(
        self,
        events: Optional[EventManager] = None,
        *,
        router: Optional[Router] = None,
        route_match: Optional[RouteMatch] = None,
        is_active_recursion: bool = True,
        attach_default_listeners: bool = True,
    ) -> None:
        self._events = events if events is not None else EventManager()
        self._router = router
        self._route_match = route_match
        self._is_active_recursion = bool(is_active_recursion)
        self._containers: Dict[str, Container] = {}
        self._href_cache: Dict[str, str] = {}
        self._is_active_cache: Dict[str, bool] = {}
        if attach_default_listeners:
            HrefListener().attach(self._events)

    # ------------------------------------------------------------------
    # Collaborators
    # ------------------------------------------------------------------
    @property
    def events(self) -> EventManager:
        return self._events

    @property
    def router(self) -> Optional[Router]:
        return self._router

    def set_router(self, router: Optional[Router]) -> "Navigation":
        self._router = router
        return self

    @property
    def route_match(self) -> Optional[RouteMatch]:
        return self._route_match

    def set_route_match(self, route_match: Optional[RouteMatch], *, reset_cache: bool = False) -> "Navigation":
        self._route_match = route_match
        if reset_cache:
            self._is_active_cache.clear()
        return self

    @property
    def is_active_recursion(self) -> bool:
        return self._is_active_recursion

    def set_is_active_recursion(self, enabled: bool) -> "Navigation":
        """Toggle descent into children for ``is_active``.

        Cached active states are dropped only when the value actually changes.
        """

        enabled = bool(enabled)
        if enabled != self._is_active_recursion:
            self._is_active_recursion = enabled
            self._is_active_cache.clear()
        return self

    def clear_cache(self) -> "Navigation":
        self._href_cache.clear()
        self._is_active_cache.clear()
        return self

    # ------------------------------------------------------------------
    # Active state
    # ------------------------------------------------------------------
    def is_active(self, page: Page) -> bool:
        """Return whether ``page`` (or, with recursion, a descendant) is the matched route."""

        cached = self._is_active_cache.get(page.uid)
        if cached is not None:
            return cached

        active = False
        if self._route_match is not None:
            matched = self._route_match.get_matched_route_name()
            route = page.route
            if route is not None and route == matched:
                active = True
            elif self._is_active_recursion:
                active = any(self.is_active(descendant) for descendant in page.walk())

        self._is_active_cache[page.uid] = active
        return active

    # ------------------------------------------------------------------
    # Href resolution
    # ------------------------------------------------------------------
    def get_href(self, page: Page) -> str:
        """Return the href for ``page``.

        Raises :class:`HrefResolutionError` when no listener on the
        ``get.href`` channel produced a value. Failures are not cached.
        """

        cached = self._href_cache.get(page.uid)
        if cached is not None:
            return cached

        event = NavigationEvent(navigation=self, target=page)
        href = self._events.trigger(self.EVENT_GET_HREF, event)

        if not href:
            log_event(_LOGGER, logging.DEBUG, "navigation.href.unresolved", page=page)
            raise HrefResolutionError(page)

        self._href_cache[page.uid] = href
        log_event(_LOGGER, logging.DEBUG, "navigation.href.resolved", page=page, href=href)
        return href

    # ------------------------------------------------------------------
    # Container registry
    # ------------------------------------------------------------------
    def add_container(self, name: str, container: Container) -> "Navigation":
        if self.has_container(name):
            raise DuplicateNameError(name)
        self._containers[name] = container
        log_event(_LOGGER, logging.DEBUG, "navigation.container.added", container=name)
        return self

    def get_container(self, name: str) -> Container:
        if not self.has_container(name):
            raise NotFoundError(name)
        return self._containers[name]

    def has_container(self, name: str) -> bool:
        return name in self._containers

    def get_containers(self) -> Mapping[str, Container]:
        return MappingProxyType(self._containers)

    def remove_container(self, name: str) -> "Navigation":
        if not self.has_container(name):
            raise NotFoundError(name)
        del self._containers[name]
        log_event(_LOGGER, logging.DEBUG, "navigation.container.removed", container=name)
        return self

    def clear_containers(self) -> "Navigation":
        self._containers.clear()
        return self


__all__ = ["Navigation"]
