"""CLI colors.

Every style the CLI prints with is derived from ThemeColors. Users can
override single colors in a ``[colors]`` table of
~/.config/vaultsweep/theme.toml.
"""

import logging
import re
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.theme import Theme

from vaultsweep.core.paths import get_config_dir

logger = logging.getLogger(__name__)

HEX_COLOR_PATTERN = re.compile(r"#(?:[0-9a-fA-F]{3}){1,2}")

# Styles rendered bold on top of their color
_BOLD_STYLES = frozenset({"error", "folder"})


class ThemeColors(BaseModel):
    """Hex colors (#RGB or #RRGGBB) for each style name."""

    model_config = ConfigDict(extra="forbid")

    text: str = "#ffffff"
    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"

    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"

    # One color per kind of cleanup candidate
    attachment: str = "#0e8ac8"
    document: str = "#c1ff62"
    canvas: str = "#faf870"
    folder: str = "#d44ebc"

    @field_validator("*", mode="before")
    @classmethod
    def check_hex(cls, value: object, info: Any) -> str:
        if not isinstance(value, str):
            raise ValueError(f"{info.field_name}: color must be a string")
        color = value.strip()
        if not color.startswith("#"):
            raise ValueError(f"{info.field_name}: color must start with '#'")
        if not HEX_COLOR_PATTERN.fullmatch(color):
            raise ValueError(f"{info.field_name}: invalid hex color '{color}'")
        return color


def get_user_theme_path() -> Path:
    return get_config_dir() / "theme.toml"


def read_theme_file(path: Path) -> dict[str, Any] | None:
    """Read the ``[colors]`` table of a theme file.

    Returns:
        The table, or None if the file is missing or unusable.
    """
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return None

    colors = data.get("colors", {})
    if not isinstance(colors, dict):
        logger.warning("Ignoring theme file %s: [colors] is not a table", path)
        return None
    return colors


def load_theme() -> ThemeColors:
    """Default colors merged with the user's overrides.

    An invalid override discards the whole file.
    """
    overrides = read_theme_file(get_user_theme_path())
    if not overrides:
        return ThemeColors()
    try:
        return ThemeColors.model_validate(overrides)
    except ValidationError as e:
        logger.warning("Invalid theme colors, using defaults: %s", e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build the Rich theme, one style per color plus a few composites."""
    colors = colors if colors is not None else load_theme()
    styles = {
        name: f"bold {color}" if name in _BOLD_STYLES else color
        for name, color in colors.model_dump().items()
    }
    styles["bold_header"] = f"bold {colors.header}"
    styles["dim"] = colors.muted
    return Theme(styles)


@lru_cache(maxsize=1)
def get_theme() -> Theme:
    """Rich theme for the shared consoles, built once per process."""
    return get_rich_theme()
