"""Color theme for console output.

Colors come from the bundled ``data/theme.toml``. A ``theme.toml`` in the
user config directory may override any subset of them; an invalid
override falls back to the built-in colors.
"""

import logging
import tomllib
from functools import cache
from importlib import resources
from pathlib import Path
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, ValidationError
from rich.theme import Theme

from nodecleaner.core.paths import get_user_theme_path

logger = logging.getLogger(__name__)


def _check_hex(value: str) -> str:
    color = value.strip()
    if not color.startswith("#"):
        msg = f"color must start with '#', got {color!r}"
        raise ValueError(msg)
    digits = color[1:]
    if len(digits) not in (3, 6):
        msg = f"color must be #RGB or #RRGGBB, got {color!r}"
        raise ValueError(msg)
    try:
        int(digits, 16)
    except ValueError:
        msg = f"invalid hex color {color!r}"
        raise ValueError(msg) from None
    return color


HexColor = Annotated[str, AfterValidator(_check_hex)]


class ThemeColors(BaseModel):
    """Named colors used by tables, panels and messages."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    text: HexColor = "#ffffff"
    muted: HexColor = "#b2bec3"
    header: HexColor = "#69B9A1"
    border: HexColor = "#29526d"

    success: HexColor = "#03b971"
    warning: HexColor = "#f5b332"
    error: HexColor = "#f53263"
    info: HexColor = "#0ec1c8"

    path: HexColor = "#ffffff"
    size: HexColor = "#0ec1c8"
    size_large: HexColor = "#f5b332"


def get_bundled_theme_path() -> Path:
    """Return the location of the theme file shipped with the package."""
    return Path(str(resources.files("nodecleaner.data").joinpath("theme.toml")))


def _load_toml_colors(path: Path) -> dict[str, str] | None:
    """Read the ``[colors]`` table of a theme file.

    Args:
        path: Theme file to read.

    Returns:
        Mapping of color name to value (non-string values are dropped),
        or None if the file is missing, unreadable or malformed.
    """
    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return None
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return None

    colors = data.get("colors", {})
    if not isinstance(colors, dict):
        logger.warning("Ignoring theme file %s: 'colors' is not a table", path)
        return None
    return {name: value for name, value in colors.items() if isinstance(value, str)}


def load_theme() -> ThemeColors:
    """Merge the bundled colors with the user's overrides.

    Returns:
        Validated ThemeColors. Built-in defaults are used if the merged
        colors do not validate.
    """
    colors = _load_toml_colors(get_bundled_theme_path())
    if colors is None:
        logger.error("Bundled theme is missing or unreadable, using built-in colors")
        colors = {}

    user_path = get_user_theme_path()
    overrides = _load_toml_colors(user_path)
    if overrides:
        logger.debug("Applying theme overrides from %s", user_path)
        colors |= overrides

    try:
        return ThemeColors.model_validate(colors)
    except ValidationError as e:
        logger.warning("Invalid theme colors, using defaults: %s", e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build the Rich theme from a set of colors.

    Every color becomes a style of the same name. Errors, large sizes and
    table headers are additionally bolded.

    Args:
        colors: Colors to use. Loaded from the theme files when omitted.
    """
    colors = colors or load_theme()

    styles = colors.model_dump()
    styles["error"] = f"bold {colors.error}"
    styles["size_large"] = f"bold {colors.size_large}"
    styles["bold_header"] = f"bold {colors.header}"
    styles["dim"] = colors.muted
    return Theme(styles)


@cache
def get_theme() -> Theme:
    """Return the process-wide Rich theme, loading it on first use."""
    return get_rich_theme()


def reload_theme() -> Theme:
    """Discard the cached theme and load it again from disk."""
    get_theme.cache_clear()
    return get_theme()
