"""Route-match and router collaborators.

The navigation service never builds URLs itself. It only needs something that
can name the matched route (:class:`RouteMatch`) and something listeners can
ask to assemble a URL for a named route (:class:`Router`). ``StaticRouter``
covers applications that describe their routes as path templates such as
``/courses/:course_id``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Protocol, Tuple, runtime_checkable
from urllib.parse import quote

from .errors import InvalidArgumentError, NotFoundError


@runtime_checkable
class RouteMatch(Protocol):
    def get_matched_route_name(self) -> Optional[str]:
        ...


@runtime_checkable
class Router(Protocol):
    def assemble(self, name: str, params: Optional[Mapping[str, Any]] = None) -> str:
        ...


@dataclass(slots=True)
class SimpleRouteMatch:
    """Matched route name plus the parameters extracted from the path."""

    route_name: Optional[str]
    params: Dict[str, str] = field(default_factory=dict)

    def get_matched_route_name(self) -> Optional[str]:
        return self.route_name

    def get_param(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.params.get(key, default)


def _split(path: str) -> List[str]:
    return [segment for segment in path.strip("/").split("/") if segment]


def _specificity(parts: List[str]) -> Tuple[int, int]:
    return len(parts), sum(1 for part in parts if not part.startswith(":"))


class StaticRouter:
    """Router over a fixed mapping of route name to path template."""

    def __init__(self, routes: Optional[Mapping[str, str]] = None) -> None:
        self._routes: Dict[str, str] = dict(routes or {})

    @property
    def routes(self) -> Dict[str, str]:
        return dict(self._routes)

    def add_route(self, name: str, template: str) -> "StaticRouter":
        self._routes[name] = template
        return self

    def has_route(self, name: str) -> bool:
        return name in self._routes

    def assemble(self, name: str, params: Optional[Mapping[str, Any]] = None) -> str:
        """Fill the template of route ``name`` with ``params``."""

        if name not in self._routes:
            raise NotFoundError(name, kind="route")

        values = dict(params or {})
        parts: List[str] = []
        for segment in _split(self._routes[name]):
            if segment.startswith(":"):
                key = segment[1:]
                if key not in values or values[key] is None:
                    raise InvalidArgumentError(
                        f"Missing parameter '{key}' for route '{name}'"
                    )
                parts.append(quote(str(values[key]), safe=""))
            else:
                parts.append(segment)
        return "/" + "/".join(parts)

    def match(self, path: str) -> Optional[SimpleRouteMatch]:
        """Return the route matching ``path``.

        Longer templates are tried first; at equal length, templates with more
        literal segments win over placeholders.
        """

        clean = path.split("?")[0].split("#")[0]
        path_parts = _split(clean)
        candidates = sorted(
            self._routes.items(),
            key=lambda item: _specificity(_split(item[1])),
            reverse=True,
        )
        for name, template in candidates:
            params = self._extract_params(_split(template), path_parts)
            if params is not None:
                return SimpleRouteMatch(route_name=name, params=params)
        return None

    @staticmethod
    def _extract_params(template_parts: List[str], path_parts: List[str]) -> Optional[Dict[str, str]]:
        if len(template_parts) != len(path_parts):
            return None

        params: Dict[str, str] = {}
        for template_part, path_part in zip(template_parts, path_parts):
            if template_part.startswith(":"):
                params[template_part[1:]] = path_part
            elif template_part != path_part:
                return None
        return params


__all__ = ["RouteMatch", "Router", "SimpleRouteMatch", "StaticRouter"]
