"""Data models for navigation trees."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional


def _new_uid() -> str:
    return uuid.uuid4().hex


@dataclass(slots=True, eq=False)
class Page:
    """A single menu entry.

    Pages compare and hash by ``uid`` rather than by name, since names may
    repeat inside one tree. The ``uid`` is assigned once at construction and
    travels with shallow copies, which is what the navigation caches key on.
    """

    name: str
    attributes: Dict[str, Any] = field(default_factory=dict)
    properties: Dict[str, Any] = field(default_factory=dict)
    children: List["Page"] = field(default_factory=list)
    uid: str = field(default_factory=_new_uid)

    def __hash__(self) -> int:
        return hash(self.uid)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Page):
            return NotImplemented
        return self.uid == other.uid

    def __iter__(self) -> Iterator["Page"]:
        return iter(list(self.children))

    @property
    def route(self) -> Optional[str]:
        """Return the route name this page represents, if any."""

        return self.properties.get("route")

    @property
    def has_children(self) -> bool:
        return bool(self.children)

    def add_child(self, page: "Page") -> "Page":
        self.children.append(page)
        return self

    def remove_child(self, page: "Page") -> bool:
        """Remove ``page`` from the direct children; return whether it was present."""

        for index, child in enumerate(self.children):
            if child is page or child == page:
                del self.children[index]
                return True
        return False

    def set_attributes(self, attributes: Dict[str, Any]) -> "Page":
        self.attributes = dict(attributes)
        return self

    def get_attribute(self, key: str, default: Any = None) -> Any:
        return self.attributes.get(key, default)

    def set_properties(self, properties: Dict[str, Any]) -> "Page":
        self.properties = dict(properties)
        return self

    def get_property(self, key: str, default: Any = None) -> Any:
        return self.properties.get(key, default)

    def walk(self) -> Iterator["Page"]:
        """Yield every descendant children-first (post-order).

        The child list of each node is copied before it is visited, so
        mutating the tree while iterating does not disturb the walk.
        """

        for child in list(self.children):
            yield from child.walk()
            yield child

    def to_dict(self) -> Dict[str, Any]:
        """Return the page as a specification mapping accepted by the factory."""

        payload: Dict[str, Any] = {"name": self.name}
        if self.children:
            payload["pages"] = [child.to_dict() for child in self.children]
        if self.attributes:
            payload["attributes"] = dict(self.attributes)
        if self.properties:
            payload["properties"] = dict(self.properties)
        return payload


@dataclass(slots=True, eq=False)
class Container:
    """Root-level collection of pages making up one menu."""

    pages: List[Page] = field(default_factory=list)

    def __iter__(self) -> Iterator[Page]:
        return iter(list(self.pages))

    def __len__(self) -> int:
        return len(self.pages)

    def add_page(self, page: Page) -> "Container":
        self.pages.append(page)
        return self

    def remove_page(self, page: Page) -> bool:
        for index, candidate in enumerate(self.pages):
            if candidate is page or candidate == page:
                del self.pages[index]
                return True
        return False

    def walk(self) -> Iterator[Page]:
        """Yield every page of the container, children before their parent."""

        for page in list(self.pages):
            yield from page.walk()
            yield page

    def find_by_name(self, name: str) -> Optional[Page]:
        return next((page for page in self.walk() if page.name == name), None)

    def find_by_route(self, route: str) -> Optional[Page]:
        return next((page for page in self.walk() if page.route == route), None)

    def to_dict(self) -> Dict[str, Any]:
        return {"pages": [page.to_dict() for page in self.pages]}


__all__ = ["Container", "Page"]
