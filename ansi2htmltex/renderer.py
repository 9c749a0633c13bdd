"""Dialect renderers for styled output.

A renderer turns one StyleState into the start/end markup wrapping a run of
literal text, and wraps a converted fragment into the block that is embedded
in the document. Subclasses implement the HTML and LaTeX dialects.
"""

from typing import Any, Optional

from .config import FilterConfig
from .models import Color, Dialect, StyleState


class MarkupRenderer:
    """Base class for markup dialect renderers.

    The method-based dispatcher pattern:
    - color_{ClassName}(color, role) renders one color for role "fg" or "bg"
    - inverse_placeholder(role) renders an unset color while inverse is on
    - tags() combines them with bold/underline into start and end tags

    Nesting order, outermost first: foreground, background, bold,
    underline, text.
    """

    dialect: Dialect

    def __init__(self, config: Optional[FilterConfig] = None):
        self.config = config or FilterConfig()

    def _dispatch_color(self, color: Color, role: str, inverse: bool) -> Any:
        """Dispatch to color_{ClassName} based on the color variant."""
        if color is None:
            return self.inverse_placeholder(role) if inverse else None
        for cls in type(color).__mro__:
            if cls is object:
                break
            if method := getattr(self, f"color_{cls.__name__}", None):
                return method(color, role)
        return None

    def tags(self, state: StyleState) -> tuple[str, str]:
        """Return (start, end) markup for text rendered in ``state``.

        ``state`` is taken as is; callers pass ``state.effective()`` so bold
        promotion has been applied. A plain state gives ("", "").
        """
        raise NotImplementedError

    def inverse_placeholder(self, role: str) -> Any:
        raise NotImplementedError

    def escape(self, text: str) -> str:
        """Escape literal text for embedding in the dialect's raw output."""
        return text

    def escapes_block(self, has_ansi: bool, is_stderr: bool) -> bool:
        """True if literal text of such a block must go through escape()."""
        return True

    def wrap_block(self, markup: str, has_ansi: bool, is_stderr: bool) -> str:
        """Wrap a converted fragment into the dialect's output block."""
        raise NotImplementedError

    def stylesheet(self) -> str:
        """Return the stylesheet / preamble defining the dialect's colors."""
        from .stylesheets import render_stylesheet

        return render_stylesheet(self.dialect, self.config)


def get_renderer(
    dialect: Dialect, config: Optional[FilterConfig] = None
) -> MarkupRenderer:
    """Get a renderer instance for the specified dialect.

    Raises:
        ValueError: If the dialect is not supported.
    """
    if dialect == Dialect.HTML:
        from .html.renderer import HtmlRenderer

        return HtmlRenderer(config)
    if dialect == Dialect.LATEX:
        from .latex.renderer import LatexRenderer

        return LatexRenderer(config)
    raise ValueError(f"Unsupported dialect: {dialect}")
