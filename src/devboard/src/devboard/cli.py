"""Command line entry point: render a dashboard file in the terminal."""

from __future__ import annotations

import argparse
import json
import sys
import time
from functools import partial
from pathlib import Path
from typing import Callable, Iterable

from loguru import logger
from rich.console import Console, Group
from rich.live import Live

from devboard import settings
from devboard.errors import DevboardError
from devboard.models import WidgetSpec
from devboard.providers import LocalHostProvider
from devboard.surface import RichSurface
from devboard.widgets import Dispatcher, build_dispatcher


def _install_loguru_null_sink() -> None:
    """Silence loguru while the live screen owns the terminal."""
    logger.remove()
    logger.add(lambda message: None)


def _install_stderr_sink(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level)


def load_dashboard(path: Path) -> list[WidgetSpec]:
    """Read widget declarations from a JSON file.

    The file holds either a list of ``{"name", "options"}`` objects or an
    object with such a list under ``"widgets"``.
    """
    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as exc:
        raise ValueError(f"{path} is not valid JSON: {exc}") from exc

    declarations = data.get("widgets") if isinstance(data, dict) else data
    if not isinstance(declarations, list):
        raise ValueError(f"{path} must contain a list of widgets")

    specs = []
    for index, declaration in enumerate(declarations):
        if not isinstance(declaration, dict) or "name" not in declaration:
            raise ValueError(f"widget #{index + 1} in {path} needs a 'name'")
        specs.append(WidgetSpec.from_declaration(declaration))
    return specs


def collect(dispatcher: Dispatcher, specs: Iterable[WidgetSpec], surface: RichSurface) -> list[Callable[[], None]]:
    """Fetch phase: build every widget, replacing failed ones by an error panel."""
    draws: list[Callable[[], None]] = []
    for spec in specs:
        try:
            draws.append(dispatcher.dispatch(spec))
        except Exception as e:
            # dispatch already logged and counted the failure
            draws.append(partial(surface.draw_error, spec.kind, e))
    return draws


def refresh(dispatcher: Dispatcher, specs: list[WidgetSpec], surface: RichSurface) -> Group:
    """Run one fetch phase then one draw pass."""
    draws = collect(dispatcher, specs, surface)
    for draw in draws:
        try:
            draw()
        except DevboardError as e:
            logger.warning(f"Drawing failed: {e}")
    return surface.flush()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Render a terminal dashboard from a widget file.")
    parser.add_argument(
        "--config",
        dest="config",
        default=settings.DASHBOARD_CONFIG,
        help="JSON file declaring the widgets (default: %(default)s).",
    )
    parser.add_argument(
        "--watch",
        dest="watch",
        action="store_true",
        help="Keep the dashboard on screen and refresh it periodically.",
    )
    parser.add_argument(
        "--refresh",
        dest="refresh",
        type=float,
        default=settings.REFRESH_INTERVAL,
        help="Seconds between refreshes in --watch mode (default: %(default)s).",
    )
    parser.add_argument(
        "--no-host",
        dest="host_widgets",
        action="store_false",
        help="Do not register the rh.* widgets for the local host.",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        default=settings.LOG_LEVEL,
        help="Loguru level for stderr output (default: %(default)s).",
    )
    parser.set_defaults(host_widgets=settings.HOST_WIDGETS)
    args = parser.parse_args(argv)

    _install_stderr_sink(args.log_level.upper())
    console = Console()

    try:
        specs = load_dashboard(Path(args.config))
    except (OSError, ValueError, TypeError) as e:
        console.print(f"[red]Could not load {args.config}: {e}[/]")
        return 1

    surface = RichSurface()
    dispatcher = build_dispatcher(surface, host=LocalHostProvider() if args.host_widgets else None)

    if not args.watch:
        console.print(refresh(dispatcher, specs, surface))
        return 0

    _install_loguru_null_sink()
    try:
        with Live(refresh(dispatcher, specs, surface), console=console, screen=True) as live:
            while True:
                time.sleep(args.refresh)
                # Dispatch is stateless, every refresh starts from scratch.
                live.update(refresh(dispatcher, specs, surface))
    except KeyboardInterrupt:
        console.print("\n[bold yellow]Dashboard stopped.[/]")
    return 0


if __name__ == "__main__":
    sys.exit(main())
