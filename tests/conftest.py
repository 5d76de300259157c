"""Shared pytest fixtures for the webnavigation test-suite."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Dict

import sys

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from webnavigation.factory import create, create_container
from webnavigation.models import Container, Page
from webnavigation.routing import SimpleRouteMatch, StaticRouter
from webnavigation.service import Navigation


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the root directory containing reusable fixture files."""

    return Path(__file__).parent / "fixtures"


@pytest.fixture
def json_fixture(fixtures_dir: Path) -> Callable[[str], Dict[str, Any]]:
    """Return a callable that loads JSON fixture payloads by name."""

    def _load(name: str) -> Dict[str, Any]:
        path = fixtures_dir / "json" / name
        return json.loads(path.read_text(encoding="utf-8"))

    return _load


@pytest.fixture
def site_tree() -> Page:
    """Return a three-level tree: root > courses > course detail > lessons."""

    return create(
        {
            "name": "root",
            "pages": [
                {"name": "Home", "properties": {"route": "home"}},
                {
                    "name": "Courses",
                    "properties": {"route": "courses"},
                    "pages": [
                        {
                            "name": "Course",
                            "properties": {"route": "course", "params": {"course_id": 7}},
                            "pages": [
                                {
                                    "name": "Lessons",
                                    "properties": {"route": "lessons", "params": {"course_id": 7}},
                                }
                            ],
                        }
                    ],
                },
                {"name": "Docs", "properties": {"uri": "https://docs.example.com"}},
            ],
        }
    )


@pytest.fixture
def static_router() -> StaticRouter:
    """Return a router knowing the routes used by ``site_tree``."""

    return StaticRouter(
        {
            "home": "/",
            "courses": "/courses",
            "course": "/courses/:course_id",
            "lessons": "/courses/:course_id/lessons",
        }
    )


@pytest.fixture
def navigation(static_router: StaticRouter) -> Navigation:
    """Return a navigation service wired to ``static_router``."""

    return Navigation(router=static_router)


@pytest.fixture
def route_match() -> Callable[[str], SimpleRouteMatch]:
    """Return a callable producing route matches by route name."""

    def _match(name: str) -> SimpleRouteMatch:
        return SimpleRouteMatch(route_name=name)

    return _match


@pytest.fixture
def main_container() -> Container:
    """Return a two-page container."""

    return create_container(
        [
            {"name": "Home", "properties": {"route": "home"}},
            {"name": "About", "properties": {"route": "about"}},
        ]
    )
