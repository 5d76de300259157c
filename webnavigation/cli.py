"""Command line entrypoint for inspecting a navigation configuration."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from dotenv import load_dotenv

from .config import NavigationConfig, build_navigation
from .errors import NavigationError
from .logging_config import configure_logging
from .models import Page
from .routing import SimpleRouteMatch, StaticRouter
from .service import Navigation

_LOGGER = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Show the pages, hrefs and active state of a navigation config")
    parser.add_argument("config", type=Path, help="Path to the JSON navigation configuration.")
    parser.add_argument(
        "--container",
        dest="containers",
        action="append",
        default=[],
        metavar="NAME",
        help="Only show the named container (repeatable). Defaults to all containers.",
    )
    target = parser.add_mutually_exclusive_group()
    target.add_argument("--route", help="Name of the matched route used for active state.")
    target.add_argument("--path", help="Request path matched against the configured routes.")
    parser.add_argument(
        "--no-recursion",
        action="store_true",
        help="Only mark pages active on an exact route match.",
    )
    parser.add_argument("--log-level", help="Python logging level (default: from config, INFO)")
    return parser.parse_args(argv)


def _outline(navigation: Navigation, page: Page, depth: int, out: TextIO) -> None:
    try:
        href = navigation.get_href(page)
    except NavigationError as exc:
        _LOGGER.debug("No href for %s: %s", page.name, exc)
        href = "-"
    marker = "*" if navigation.is_active(page) else " "
    out.write(f"{'  ' * depth}{marker} {page.name} -> {href}\n")
    for child in page:
        _outline(navigation, child, depth + 1, out)


def render_outline(navigation: Navigation, names: Optional[List[str]] = None, out: Optional[TextIO] = None) -> None:
    """Write an indented outline of the selected containers to ``out`` (default: ``sys.stdout``)."""

    out = out if out is not None else sys.stdout
    selected = names or list(navigation.get_containers())
    for name in selected:
        container = navigation.get_container(name)
        out.write(f"[{name}]\n")
        for page in container:
            _outline(navigation, page, 1, out)


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = parse_args(argv)

    if not args.config.exists():
        configure_logging(args.log_level or logging.INFO)
        _LOGGER.error("Navigation config %s does not exist", args.config)
        return 2

    try:
        config = NavigationConfig.load(args.config)
    except NavigationError as exc:
        configure_logging(args.log_level or logging.INFO)
        _LOGGER.error("%s", exc)
        return 1
    configure_logging(args.log_level or config.log_level)

    if args.no_recursion:
        config.is_active_recursion = False

    route_match = None
    if args.route:
        route_match = SimpleRouteMatch(route_name=args.route)
    elif args.path:
        route_match = StaticRouter(config.routes).match(args.path)
        if route_match is None:
            _LOGGER.warning("No configured route matches %s", args.path)

    try:
        navigation = build_navigation(config, route_match=route_match)
        render_outline(navigation, args.containers)
    except NavigationError as exc:
        _LOGGER.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
