"""FastAPI integration.

Provides a router backed by the application's named routes and a dependency
that builds one :class:`~webnavigation.service.Navigation` per request::

    navigation = NavigationProvider({"main": [{"name": "Home", "properties": {"route": "home"}}]})

    @app.get("/", name="home")
    def home(nav: Navigation = Depends(navigation)):
        ...
"""

# No postponed annotations here: FastAPI resolves the annotations of
# NavigationProvider.__call__ without module globals, so they must be real types.
import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from fastapi import FastAPI, Request
from starlette.routing import NoMatchFound

from .errors import NotFoundError
from .events import EventManager, ListenerAggregate
from .factory import create_container
from .routing import SimpleRouteMatch
from .service import Navigation

_LOGGER = logging.getLogger(__name__)


class StarletteRouter:
    """Assemble hrefs through ``app.url_path_for``."""

    def __init__(self, app: FastAPI) -> None:
        self._app = app

    def assemble(self, name: str, params: Optional[Mapping[str, Any]] = None) -> str:
        path_params = {key: str(value) for key, value in (params or {}).items()}
        try:
            return str(self._app.url_path_for(name, **path_params))
        except NoMatchFound as exc:
            raise NotFoundError(name, kind="route") from exc


def route_match_from_request(request: Request) -> Optional[SimpleRouteMatch]:
    """Return the matched route of ``request``, or ``None`` outside a named route."""

    route = request.scope.get("route")
    endpoint = request.scope.get("endpoint")
    if route is None and endpoint is not None:
        for candidate in request.app.router.routes:
            if getattr(candidate, "endpoint", None) is endpoint:
                route = candidate
                break

    name = getattr(route, "name", None)
    if not name:
        return None
    params = {key: str(value) for key, value in request.path_params.items()}
    return SimpleRouteMatch(route_name=name, params=params)


class NavigationProvider:
    """FastAPI dependency yielding a fresh navigation service per request."""

    def __init__(
        self,
        containers: Mapping[str, Sequence[Mapping[str, Any]]],
        *,
        is_active_recursion: bool = True,
        listeners: Sequence[Callable[[], ListenerAggregate]] = (),
        events_factory: Callable[[], EventManager] = EventManager,
    ) -> None:
        self._containers: Dict[str, List[Mapping[str, Any]]] = {
            name: list(specs) for name, specs in containers.items()
        }
        self._is_active_recursion = is_active_recursion
        self._listeners = list(listeners)
        self._events_factory = events_factory

    def __call__(self, request: Request) -> Navigation:
        events = self._events_factory()
        navigation = Navigation(
            events,
            router=StarletteRouter(request.app),
            route_match=route_match_from_request(request),
            is_active_recursion=self._is_active_recursion,
        )
        for listener_factory in self._listeners:
            listener_factory().attach(events)
        for name, specs in self._containers.items():
            navigation.add_container(name, create_container(specs))
        _LOGGER.debug("Built navigation for %s with %d containers", request.url.path, len(self._containers))
        return navigation


__all__ = ["NavigationProvider", "StarletteRouter", "route_match_from_request"]
