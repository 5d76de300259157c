"""Configuration loading for navigation definitions."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from .errors import ValidationError
from .factory import create_container
from .routing import RouteMatch, StaticRouter
from .service import Navigation
from .tracing import trace

_LOGGER = logging.getLogger(__name__)

ENV_IS_ACTIVE_RECURSION = "WEBNAVIGATION_IS_ACTIVE_RECURSION"
ENV_LOG_LEVEL = "WEBNAVIGATION_LOG_LEVEL"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


class NavigationConfig(BaseModel):
    """Declarative description of every menu in an application."""

    containers: Dict[str, List[Dict[str, Any]]] = Field(
        default_factory=dict,
        description="Container name mapped to its list of page specifications",
    )
    routes: Dict[str, str] = Field(
        default_factory=dict,
        description="Route name mapped to a path template such as /courses/:course_id",
    )
    is_active_recursion: bool = Field(
        default=True,
        description="Whether parents are active when a descendant matches",
    )
    log_level: str = Field(default="INFO", description="Desired logging verbosity")

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalise_log_level(cls, value: str | None) -> str:
        return (value or "INFO").strip().upper()

    @classmethod
    def load(cls, path: Path | None = None) -> "NavigationConfig":
        """Load configuration from ``path`` and apply environment overrides."""

        data: Dict[str, Any] = {}

        if path is not None and path.exists():
            try:
                data = json.loads(path.read_text(encoding="utf-8"))
            except json.JSONDecodeError as exc:
                _LOGGER.warning("Unable to decode navigation config at %s: %s", path, exc)
                data = {}

        env_recursion = os.environ.get(ENV_IS_ACTIVE_RECURSION)
        if env_recursion is not None:
            flag = env_recursion.strip().lower()
            if flag in _TRUTHY:
                data["is_active_recursion"] = True
            elif flag in _FALSY:
                data["is_active_recursion"] = False
            else:
                _LOGGER.warning("Ignoring %s=%r; expected a boolean", ENV_IS_ACTIVE_RECURSION, env_recursion)

        env_level = os.environ.get(ENV_LOG_LEVEL)
        if env_level:
            data["log_level"] = env_level

        try:
            return cls.model_validate(data)
        except PydanticValidationError as exc:
            first = exc.errors()[0]
            location = ".".join(str(part) for part in first.get("loc", ())) or "config"
            raise ValidationError(
                f"Invalid navigation config for '{location}': {first.get('msg')}",
                path="config",
            ) from exc


def load_navigation_config(path: Path | None = None) -> NavigationConfig:
    """Helper to load the navigation configuration."""

    return NavigationConfig.load(path)


def build_navigation(
    config: NavigationConfig,
    *,
    route_match: Optional[RouteMatch] = None,
    navigation: Optional[Navigation] = None,
) -> Navigation:
    """Return a navigation service with every configured container registered."""

    with trace("navigation.build", logger=_LOGGER, containers=sorted(config.containers)) as span:
        service = navigation if navigation is not None else Navigation()
        service.set_router(StaticRouter(config.routes))
        service.set_route_match(route_match)
        service.set_is_active_recursion(config.is_active_recursion)
        for name, page_specs in config.containers.items():
            container = create_container(page_specs)
            service.add_container(name, container)
            span.note(container=name, pages=len(container))
    return service


__all__ = [
    "ENV_IS_ACTIVE_RECURSION",
    "ENV_LOG_LEVEL",
    "NavigationConfig",
    "build_navigation",
    "load_navigation_config",
]
