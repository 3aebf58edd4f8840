"""Color names accepted in widget options, mapped to Rich color names."""

from __future__ import annotations

DEFAULT = "default"

COLOR_LOOKUP: dict[str, str] = {
    "default": DEFAULT,
    "black": "black",
    "red": "red",
    "green": "green",
    "yellow": "yellow",
    "blue": "blue",
    "magenta": "magenta",
    "cyan": "cyan",
    "white": "white",
    "grey": "grey50",
    "gray": "grey50",
    "orange": "dark_orange",
    "purple": "purple",
    "pink": "hot_pink",
    "bright_red": "bright_red",
    "bright_green": "bright_green",
    "bright_yellow": "bright_yellow",
    "bright_blue": "bright_blue",
    "bright_magenta": "bright_magenta",
    "bright_cyan": "bright_cyan",
    "bright_white": "bright_white",
}

# Stacked bars only ship five palette slots; first_color..fifth_color override them.
STACKED_PALETTE = ("blue", "green", "yellow", "red", "magenta")
COLOR_OPTIONS = ("first_color", "second_color", "third_color", "fourth_color", "fifth_color")


def color_lookup(name: str | None) -> str:
    """Return the Rich color for a configured color name, ``default`` when unknown."""
    if not name:
        return DEFAULT
    return COLOR_LOOKUP.get(name.strip().lower(), DEFAULT)
