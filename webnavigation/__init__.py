"""Navigation menus for web applications.

Page trees are built with :func:`create`, registered on a
:class:`Navigation` service as named containers, and queried per request for
their active state and href.
"""

from .errors import (
    DuplicateNameError,
    HrefResolutionError,
    InvalidArgumentError,
    NavigationError,
    NotFoundError,
    ValidationError,
)
from .events import EVENT_GET_HREF, EVENT_IS_ACTIVE, EventManager, ListenerAggregate, NavigationEvent
from .factory import create, create_container
from .listeners import HrefListener
from .models import Container, Page
from .routing import RouteMatch, Router, SimpleRouteMatch, StaticRouter
from .service import Navigation

__all__ = [
    "Container",
    "DuplicateNameError",
    "EVENT_GET_HREF",
    "EVENT_IS_ACTIVE",
    "EventManager",
    "HrefListener",
    "HrefResolutionError",
    "InvalidArgumentError",
    "ListenerAggregate",
    "Navigation",
    "NavigationError",
    "NavigationEvent",
    "NotFoundError",
    "Page",
    "RouteMatch",
    "Router",
    "SimpleRouteMatch",
    "StaticRouter",
    "ValidationError",
    "create",
    "create_container",
]
