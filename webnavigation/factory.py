"""Build page trees from declarative specifications.

A specification is a nested mapping::

    {
        "name": "root",
        "pages": [{"name": "home", "properties": {"route": "home"}}],
        "attributes": {"class": "menu"},
        "properties": {},
    }

Only ``name`` is required. Each level is validated on its own so that an
error points at the exact node that is malformed.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Sequence

from pydantic import BaseModel, Field, ValidationInfo, field_validator
from pydantic import ValidationError as PydanticValidationError

from .errors import ValidationError
from .models import Container, Page


class PageSpec(BaseModel):
    """Validated view over one level of a page specification."""

    name: str
    pages: List[Any] = Field(default_factory=list)
    attributes: Dict[str, Any] = Field(default_factory=dict)
    properties: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("pages", "attributes", "properties", mode="before")
    @classmethod
    def _none_means_unset(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return [] if info.field_name == "pages" else {}
        return value


def _describe(exc: PydanticValidationError) -> str:
    for error in exc.errors():
        if tuple(error.get("loc", ())) == ("name",):
            if error.get("type") == "missing" or error.get("input") is None:
                return "Every page must have a name"
            return f"Page name is invalid: {error.get('msg')}"
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ())) or "spec"
    return f"Invalid page specification for '{location}': {first.get('msg')}"


def _parse(spec: Any, path: str) -> PageSpec:
    if not isinstance(spec, Mapping):
        raise ValidationError(
            f"Page specification must be a mapping, got {type(spec).__name__}",
            path=path,
        )
    try:
        return PageSpec.model_validate(dict(spec))
    except PydanticValidationError as exc:
        raise ValidationError(_describe(exc), path=path) from exc


def create(spec: Mapping[str, Any], *, path: str = "root") -> Page:
    """Create a page tree from ``spec``.

    Raises :class:`~webnavigation.errors.ValidationError` when any level of
    the specification lacks a ``name``; no partial tree is returned.
    """

    parsed = _parse(spec, path)
    page = Page(name=parsed.name)

    for index, child_spec in enumerate(parsed.pages):
        page.add_child(create(child_spec, path=f"{path}.pages[{index}]"))

    if parsed.attributes:
        page.set_attributes(parsed.attributes)
    if parsed.properties:
        page.set_properties(parsed.properties)

    return page


def create_container(spec: Sequence[Mapping[str, Any]] | Mapping[str, Any]) -> Container:
    """Create a :class:`Container` from a list of page specs or ``{"pages": [...]}``."""

    if isinstance(spec, Mapping):
        if "pages" not in spec:
            raise ValidationError("Container specification requires 'pages'", path="container")
        page_specs = spec.get("pages") or []
    else:
        page_specs = spec

    if isinstance(page_specs, (str, bytes)) or not isinstance(page_specs, Sequence):
        raise ValidationError("Container pages must be a list", path="container")

    container = Container()
    for index, page_spec in enumerate(page_specs):
        container.add_page(create(page_spec, path=f"container.pages[{index}]"))
    return container


__all__ = ["PageSpec", "create", "create_container"]
