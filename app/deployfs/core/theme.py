"""Console styles for deployfs output.

The bundled ``data/theme.toml`` maps each style name used in deployfs
output (plan steps, commands, paths, status messages) to a Rich style
string such as ``"bold #0e8ac8"``.
"""

import logging
import tomllib
from functools import cache
from importlib import resources

from rich.errors import StyleSyntaxError
from rich.style import Style
from rich.theme import Theme

logger = logging.getLogger(__name__)

# Style names referenced by tables and print helpers
STYLE_NAMES: tuple[str, ...] = (
    "muted",
    "border",
    "bold_header",
    "success",
    "warning",
    "error",
    "info",
    "step",
    "command",
    "path",
)


def load_styles(package: str = "deployfs.data", name: str = "theme.toml") -> dict[str, str]:
    """Read the [styles] table of a packaged theme file.

    Unknown names are ignored. A name that is missing or carries an
    unparsable style falls back to plain text, so markup that refers to
    it still renders.

    Args:
        package: Package holding the theme file.
        name: Theme file name inside the package.

    Returns:
        A style string for every name in STYLE_NAMES.
    """
    styles = dict.fromkeys(STYLE_NAMES, "none")

    try:
        with resources.files(package).joinpath(name).open("rb") as f:
            table = tomllib.load(f).get("styles", {})
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Cannot load theme %s/%s: %s", package, name, e)
        return styles

    for style_name in STYLE_NAMES:
        value = table.get(style_name)
        if value is None:
            logger.debug("Theme has no style for %s", style_name)
            continue
        try:
            Style.parse(str(value))
        except StyleSyntaxError as e:
            logger.warning("Ignoring style %s = %r: %s", style_name, value, e)
            continue
        styles[style_name] = str(value)

    return styles


@cache
def get_theme() -> Theme:
    """Rich theme built from the bundled styles, loaded once."""
    return Theme(load_styles())
