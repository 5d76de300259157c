"""Tests for :mod:`webnavigation.events` and :mod:`webnavigation.listeners`."""

from __future__ import annotations

from typing import List, Optional

from webnavigation.events import EVENT_GET_HREF, EventManager, ListenerAggregate, NavigationEvent
from webnavigation.listeners import HrefListener
from webnavigation.models import Page
from webnavigation.routing import StaticRouter
from webnavigation.service import Navigation


class _AnchorListener(ListenerAggregate):
    def attach(self, events: EventManager) -> None:
        self._listen(events, EVENT_GET_HREF, self.on_get_href, priority=5)

    def on_get_href(self, event: NavigationEvent) -> Optional[str]:
        anchor = event.target.get_property("anchor")
        return f"#{anchor}" if anchor else None


def test_trigger_without_listeners_returns_none() -> None:
    """Given an empty manager When triggered Then no result is produced."""

    event = NavigationEvent(target=Page(name="p"))

    assert EventManager().trigger("get.href", event) is None
    assert event.name == "get.href"
    assert event.result is None


def test_listeners_ordered_by_priority_then_registration() -> None:
    """Given mixed priorities When listed Then higher priority runs first, ties keep order."""

    events = EventManager()
    order: List[str] = []

    def make(label: str):
        def handler(event: NavigationEvent) -> None:
            order.append(label)

        return handler

    events.attach("x", make("a"))
    events.attach("x", make("b"), priority=3)
    events.attach("x", make("c"))
    events.trigger("x", NavigationEvent())

    assert order == ["b", "a", "c"]


def test_detach_removes_handler() -> None:
    """Given an attached handler When detached Then it no longer runs."""

    events = EventManager()
    handler = events.attach("x", lambda event: "value")

    assert events.detach("x", handler) is True
    assert events.detach("x", handler) is False
    assert events.trigger("x", NavigationEvent()) is None


def test_channels_are_independent() -> None:
    """Given handlers on two channels When one is triggered Then only its handlers run."""

    events = EventManager()
    events.attach("get.href", lambda event: "/href")
    events.attach("is.active", lambda event: "yes")

    assert events.trigger("get.href", NavigationEvent()) == "/href"
    events.clear_listeners("get.href")
    assert events.listeners("get.href") == []
    assert len(events.listeners("is.active")) == 1


def test_aggregate_attach_and_detach(static_router: StaticRouter) -> None:
    """Given a listener aggregate When attached and detached Then its handlers come and go."""

    navigation = Navigation(router=static_router)
    anchors = _AnchorListener()
    page = Page(name="Top", properties={"anchor": "top", "route": "home"})

    anchors.attach(navigation.events)
    assert navigation.get_href(page) == "#top"

    anchors.detach(navigation.events)
    assert len(navigation.events.listeners(EVENT_GET_HREF)) == 1
    assert navigation.clear_cache().get_href(page) == "/"


def test_href_listener_ignores_pages_without_route_or_uri(static_router: StaticRouter) -> None:
    """Given a bare page When the href listener runs Then it yields nothing."""

    navigation = Navigation(router=static_router, attach_default_listeners=False)
    listener = HrefListener()

    event = NavigationEvent(navigation=navigation, target=Page(name="bare"))

    assert listener.on_get_href(event) is None
    assert listener.on_get_href(NavigationEvent(navigation=navigation)) is None


def test_navigation_attaches_href_listener_by_default() -> None:
    """Given a default service When inspected Then exactly one href listener is attached."""

    navigation = Navigation()

    assert len(navigation.events.listeners(Navigation.EVENT_GET_HREF)) == 1
    assert navigation.events.listeners(Navigation.EVENT_IS_ACTIVE) == []


def test_injected_event_manager_is_used() -> None:
    """Given an injected manager When the service is built Then it is exposed unchanged."""

    events = EventManager()

    navigation = Navigation(events)

    assert navigation.events is events
    assert len(events.listeners(EVENT_GET_HREF)) == 1


class _UrlLike:
    def __init__(self, path: str) -> None:
        self._path = path

    def __str__(self) -> str:
        return self._path


def test_non_string_results_are_coerced() -> None:
    """Given a listener returning a URL-like object When get_href is called Then a string is cached."""

    navigation = Navigation(attach_default_listeners=False)
    navigation.events.attach(EVENT_GET_HREF, lambda event: _UrlLike("/courses"))
    page = Page(name="Courses")

    href = navigation.get_href(page)

    assert href == "/courses"
    assert isinstance(href, str)
    assert isinstance(navigation.get_href(page), str)
