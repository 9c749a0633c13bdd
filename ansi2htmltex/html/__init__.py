"""HTML dialect: CSS classes for named colors, inline styles for RGB."""

from .renderer import HtmlRenderer

__all__ = ["HtmlRenderer"]
