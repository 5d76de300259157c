"""Integration tests for :mod:`webnavigation.web` with a FastAPI application."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from webnavigation.errors import NotFoundError
from webnavigation.events import EVENT_GET_HREF, EventManager, ListenerAggregate, NavigationEvent
from webnavigation.models import Page
from webnavigation.service import Navigation
from webnavigation.web import NavigationProvider, StarletteRouter

MENU = {
    "main": [
        {"name": "Home", "properties": {"route": "home"}},
        {
            "name": "Courses",
            "properties": {"route": "courses"},
            "pages": [
                {"name": "Course 7", "properties": {"route": "course", "params": {"course_id": 7}}},
            ],
        },
        {"name": "Help", "properties": {"anchor": "help"}},
    ]
}


class _AnchorListener(ListenerAggregate):
    def attach(self, events: EventManager) -> None:
        self._listen(events, EVENT_GET_HREF, self.on_get_href)

    def on_get_href(self, event: NavigationEvent) -> Optional[str]:
        anchor = event.target.get_property("anchor")
        return f"#{anchor}" if anchor else None


def _describe(navigation: Navigation) -> List[Dict[str, Any]]:
    items: List[Dict[str, Any]] = []
    for page in navigation.get_container("main").walk():
        items.append({"name": page.name, "href": navigation.get_href(page), "active": navigation.is_active(page)})
    return items


@pytest.fixture
def app() -> FastAPI:
    application = FastAPI()
    provider = NavigationProvider(MENU, listeners=[_AnchorListener])

    @application.get("/", name="home")
    def home(navigation: Navigation = Depends(provider)) -> List[Dict[str, Any]]:
        return _describe(navigation)

    @application.get("/courses", name="courses")
    def courses(navigation: Navigation = Depends(provider)) -> List[Dict[str, Any]]:
        return _describe(navigation)

    @application.get("/courses/{course_id}", name="course")
    def course(course_id: int, navigation: Navigation = Depends(provider)) -> Dict[str, Any]:
        return {
            "route": navigation.route_match.get_matched_route_name(),
            "params": navigation.route_match.params,
            "items": _describe(navigation),
        }

    return application


def _by_name(items: List[Dict[str, Any]]) -> Dict[str, Dict[str, Any]]:
    return {item["name"]: item for item in items}


def test_home_route_marks_home_active(app: FastAPI) -> None:
    """Given a request to / When the menu is described Then only Home is active."""

    with TestClient(app) as client:
        response = client.get("/")

    assert response.status_code == 200
    items = _by_name(response.json())
    assert items["Home"] == {"name": "Home", "href": "/", "active": True}
    assert items["Courses"]["active"] is False
    assert items["Help"]["href"] == "#help"


def test_child_route_marks_parent_active(app: FastAPI) -> None:
    """Given a request to a course When the menu is described Then the parent is active too."""

    with TestClient(app) as client:
        response = client.get("/courses/7")

    payload = response.json()
    items = _by_name(payload["items"])
    assert payload["route"] == "course"
    assert payload["params"] == {"course_id": "7"}
    assert items["Course 7"] == {"name": "Course 7", "href": "/courses/7", "active": True}
    assert items["Courses"]["active"] is True
    assert items["Home"]["active"] is False


def test_each_request_gets_fresh_navigation(app: FastAPI) -> None:
    """Given consecutive requests When routes differ Then active state is not carried over."""

    with TestClient(app) as client:
        first = _by_name(client.get("/courses").json())
        second = _by_name(client.get("/").json())

    assert first["Courses"]["active"] is True
    assert second["Courses"]["active"] is False


def test_starlette_router_unknown_route(app: FastAPI) -> None:
    """Given an unknown route name When assembled Then a not-found error is raised."""

    router = StarletteRouter(app)

    assert router.assemble("course", {"course_id": 3}) == "/courses/3"
    with pytest.raises(NotFoundError):
        router.assemble("missing")


def test_navigation_without_request_context(app: FastAPI) -> None:
    """Given a service built by hand with the app router When resolving Then hrefs still work."""

    navigation = Navigation(router=StarletteRouter(app))

    assert navigation.get_href(Page(name="Courses", properties={"route": "courses"})) == "/courses"
