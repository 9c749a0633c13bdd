"""LaTeX dialect: xcolor commands nested inside verbatim output environments."""

from .renderer import LatexRenderer

__all__ = ["LatexRenderer"]
