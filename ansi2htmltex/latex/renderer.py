"""LaTeX renderer for ANSI styled output.

Colors use xcolor: ``\\textcolor`` for the foreground and ``\\colorbox``
for the background. RGB values go through ``\\detokenize`` so the commands
also work inside verbatim environments with command characters, see
http://tex.stackexchange.com/a/291102/13684.
"""

from ..models import Dialect, NamedColor, RgbColor, StyleState
from ..renderer import MarkupRenderer

# Backgrounds zero the box padding so adjacent boxes tile, and close with a
# strut to keep the line height
_BOX_SEP = r"\setlength{\fboxsep}{0pt}"
_BOX_END = r"\strut}"

# Characters that act as commands inside the commandchars=\\\{\} environments
_COMMAND_CHARS = str.maketrans(
    {"\\": r"\textbackslash{}", "{": r"\{", "}": r"\}"}
)


class LatexRenderer(MarkupRenderer):
    """Render StyleStates as nested LaTeX color/style commands."""

    dialect = Dialect.LATEX

    def color_NamedColor(self, color: NamedColor, role: str) -> tuple[str, str]:
        if role == "fg":
            return rf"\textcolor{{{color.name}}}{{", "}"
        return rf"{_BOX_SEP}\colorbox{{{color.name}}}{{", _BOX_END

    def color_RgbColor(self, color: RgbColor, role: str) -> tuple[str, str]:
        rgb = f"{color.r},{color.g},{color.b}"
        if role == "fg":
            return (
                r"\def\tcRGB{\textcolor[RGB]}\expandafter"
                rf"\tcRGB\expandafter{{\detokenize{{{rgb}}}}}{{",
                "}",
            )
        return (
            _BOX_SEP + r"\def\cbRGB{\colorbox[RGB]}\expandafter"
            rf"\cbRGB\expandafter{{\detokenize{{{rgb}}}}}{{",
            _BOX_END,
        )

    def inverse_placeholder(self, role: str) -> tuple[str, str]:
        if role == "fg":
            return r"\textcolor{ansi-default-inverse-fg}{", "}"
        return rf"{_BOX_SEP}\colorbox{{ansi-default-inverse-bg}}{{", _BOX_END

    def tags(self, state: StyleState) -> tuple[str, str]:
        if state.is_plain():
            return "", ""

        starttag = ""
        endtag = ""
        fg, bg = state.render_colors()
        for color, role in ((fg, "fg"), (bg, "bg")):
            rendered = self._dispatch_color(color, role, state.inverse)
            if rendered is None:
                continue
            start, end = rendered
            starttag += start
            endtag = end + endtag

        if state.bold:
            starttag += r"\textbf{"
            endtag = "}" + endtag
        if state.underline:
            starttag += r"\underline{"
            endtag = "}" + endtag
        return starttag, endtag

    def escape(self, text: str) -> str:
        return text.translate(_COMMAND_CHARS)

    def escapes_block(self, has_ansi: bool, is_stderr: bool) -> bool:
        # The plain environment is a Verbatim without command characters
        return has_ansi or is_stderr

    def environment(self, has_ansi: bool, is_stderr: bool) -> str:
        """Pick the output environment; stderr wins over ANSI styling."""
        if is_stderr:
            return self.config.stderr_environment
        if has_ansi:
            return self.config.ansi_environment
        return self.config.plain_environment

    def wrap_block(self, markup: str, has_ansi: bool, is_stderr: bool) -> str:
        env = self.environment(has_ansi, is_stderr)
        shade = self.config.shade_environment
        return (
            rf"\vspace{{-\parskip}}\begin{{{shade}}}" + "\n"
            rf"\begin{{{env}}}" + "\n"
            f"{markup}\n"
            rf"\end{{{env}}}" + "\n"
            rf"\end{{{shade}}}"
        )
