"""Stylesheets defining the ANSI colors for each dialect.

The CSS and the LaTeX preamble are rendered from Jinja2 templates using the
same 16 color table the renderers use, so class/color names always match.
"""

import functools
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .config import FilterConfig
from .models import ANSI_COLORS, Dialect

# RGB hex values of the 16 named colors, in ANSI_COLORS order
ANSI_COLOR_VALUES: tuple[str, ...] = (
    "3E424D",
    "E75C58",
    "00A250",
    "DDB62B",
    "208FFB",
    "D160C4",
    "60C6C8",
    "C5C1B4",
    "282C36",
    "B22B31",
    "007427",
    "B27D12",
    "0065CA",
    "A03196",
    "258F8F",
    "A1A6B2",
)

# Colors used for inverse video when no explicit color is set
DEFAULT_INVERSE_FG = "FFFFFF"
DEFAULT_INVERSE_BG = "000000"

_TEMPLATES = {
    Dialect.HTML: "ansicolor.css",
    Dialect.LATEX: "ansicolor.tex",
}


@functools.lru_cache(maxsize=1)
def get_template_environment() -> Environment:
    """Get the cached Jinja2 environment for the stylesheet templates.

    Templates use ``((* *))`` blocks and ``((( )))`` variables instead of
    the default braces, which clash with LaTeX groups.
    """
    templates_dir = Path(__file__).parent / "templates"
    return Environment(
        loader=FileSystemLoader(templates_dir),
        autoescape=select_autoescape(["html", "xml"]),
        block_start_string="((*",
        block_end_string="*))",
        variable_start_string="(((",
        variable_end_string=")))",
        comment_start_string="((=",
        comment_end_string="=))",
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def render_stylesheet(
    dialect: Dialect, config: Optional[FilterConfig] = None
) -> str:
    """Render the CSS (HTML) or preamble (LaTeX) for ``dialect``."""
    config = config or FilterConfig()
    template = get_template_environment().get_template(_TEMPLATES[dialect])
    return template.render(
        colors=list(zip(ANSI_COLORS, ANSI_COLOR_VALUES)),
        inverse_fg=DEFAULT_INVERSE_FG,
        inverse_bg=DEFAULT_INVERSE_BG,
        config=config,
    )


def header_include(dialect: Dialect, config: Optional[FilterConfig] = None) -> str:
    """Return the stylesheet ready for a document's ``header-includes``."""
    stylesheet = render_stylesheet(dialect, config)
    if dialect == Dialect.HTML:
        return f"<style>\n{stylesheet}</style>"
    return stylesheet
