"""HTML renderer for ANSI styled output.

Named colors become CSS classes (``ansi-red-fg``, ``ansi-blue-intense-bg``),
RGB colors inline ``style`` declarations. All attributes of a run share a
single ``<span>``.
"""

import html
from typing import Optional

from ..models import Dialect, NamedColor, RgbColor, StyleState
from ..renderer import MarkupRenderer

_CSS_PROPERTY = {"fg": "color", "bg": "background-color"}


class HtmlRenderer(MarkupRenderer):
    """Render StyleStates as ``<span class=... style=...>`` tags."""

    dialect = Dialect.HTML

    def color_NamedColor(self, color: NamedColor, role: str) -> tuple[str, str]:
        return "class", f"{color.name}-{role}"

    def color_RgbColor(self, color: RgbColor, role: str) -> tuple[str, str]:
        return "style", (
            f"{_CSS_PROPERTY[role]}: rgb({color.r},{color.g},{color.b})"
        )

    def inverse_placeholder(self, role: str) -> tuple[str, str]:
        return "class", f"ansi-default-inverse-{role}"

    def tags(self, state: StyleState) -> tuple[str, str]:
        if state.is_plain():
            return "", ""

        classes: list[str] = []
        styles: list[str] = []
        fg, bg = state.render_colors()
        for color, role in ((fg, "fg"), (bg, "bg")):
            rendered: Optional[tuple[str, str]] = self._dispatch_color(
                color, role, state.inverse
            )
            if rendered is None:
                continue
            kind, value = rendered
            (classes if kind == "class" else styles).append(value)

        if state.bold:
            classes.append("ansi-bold")
        if state.underline:
            classes.append("ansi-underline")

        attrs: list[str] = []
        if classes:
            attrs.append(f'class="{" ".join(classes)}"')
        if styles:
            attrs.append(f'style="{"; ".join(styles)}"')
        return f"<span {' '.join(attrs)}>", "</span>"

    def escape(self, text: str) -> str:
        return html.escape(text, quote=False)

    def wrap_block(self, markup: str, has_ansi: bool, is_stderr: bool) -> str:
        classes: list[str] = []
        if has_ansi:
            classes.append("ansi")
        if is_stderr:
            classes.append(self.config.stderr_class)
        code_classes = classes if "ansi" in classes else [*classes, "ansi"]

        pre_attr = f' class="{" ".join(classes)}"' if classes else ""
        return (
            f"<pre{pre_attr}>"
            f'<code class="{" ".join(code_classes)}">{markup}</code></pre>'
        )
