"""Exception hierarchy for the navigation component."""

from __future__ import annotations

from typing import Any, Optional


class NavigationError(Exception):
    """Base class for every error raised by :mod:`webnavigation`."""


class InvalidArgumentError(NavigationError, ValueError):
    """Raised when a caller passes an argument the component cannot accept."""


class ValidationError(InvalidArgumentError):
    """Raised by the page factory for a malformed page specification."""

    def __init__(self, message: str, *, path: str = "root") -> None:
        super().__init__(f"{message} (at {path})")
        self.path = path


class DuplicateNameError(InvalidArgumentError):
    """Raised when a container name is registered twice."""

    def __init__(self, name: str) -> None:
        super().__init__(f'A container with name "{name}" already exists.')
        self.name = name


class NotFoundError(InvalidArgumentError):
    """Raised when a named container or route does not exist."""

    def __init__(self, name: str, *, kind: str = "container") -> None:
        super().__init__(f'No {kind} with name "{name}" could be found.')
        self.name = name
        self.kind = kind


class HrefResolutionError(NavigationError, RuntimeError):
    """Raised when no listener produced an href for a page."""

    def __init__(self, page: Optional[Any] = None) -> None:
        label = getattr(page, "name", None)
        message = "Unable to construct href"
        if label:
            message = f"{message} for page '{label}'"
        super().__init__(message)
        self.page = page


__all__ = [
    "DuplicateNameError",
    "HrefResolutionError",
    "InvalidArgumentError",
    "NavigationError",
    "NotFoundError",
    "ValidationError",
]
