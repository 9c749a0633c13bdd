"""Data models for ANSI escape conversion.

Format-neutral types shared by the converter, the block merger and the
dialect renderers:
- Dialect / FragmentKind enums
- Color variants (NamedColor, RgbColor; None means unset)
- StyleState, the running attribute set of one conversion
- OutputFragment, one block of captured program output
- Diagnostic, a non-fatal problem found while scanning
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, PrivateAttr


class Dialect(str, Enum):
    """Target markup dialect of a conversion."""

    HTML = "html"
    LATEX = "latex"

    @classmethod
    def from_format(cls, fmt: Optional[str]) -> Optional["Dialect"]:
        """Map a Pandoc/Quarto output format name to a dialect.

        Format extensions ("html5+smart", "latex-raw_tex") and custom format
        prefixes ("julia-html", "julia-pdf") are ignored. Returns None for
        formats that are neither HTML nor LaTeX based.
        """
        if not fmt:
            return None
        name = fmt.lower().split("+", 1)[0]
        # "-" separates both a disabled extension and a custom format prefix
        candidates = [name, name.rsplit("-", 1)[-1], name.split("-", 1)[0]]
        for candidate in candidates:
            if candidate in _HTML_FORMATS or candidate.startswith("epub"):
                return cls.HTML
            if candidate in _LATEX_FORMATS:
                return cls.LATEX
        return None


_HTML_FORMATS = frozenset({"html", "html4", "html5", "revealjs"})
_LATEX_FORMATS = frozenset({"latex", "pdf", "beamer"})


class FragmentKind(str, Enum):
    """Kind of captured output carried by a fragment."""

    STDOUT = "stdout"
    STDERR = "stderr"
    ECHO = "echo"  # echoed input
    DISPLAY = "display"  # cell result that is neither stdout nor stderr


class DiagnosticKind(str, Enum):
    UNSUPPORTED_TERMINATOR = "unsupported_terminator"
    UNKNOWN_SGR_CODE = "unknown_sgr_code"
    MALFORMED_EXTENDED_COLOR = "malformed_extended_color"


# =============================================================================
# Colors
# =============================================================================

# The 16 named terminal colors, indexed 0-15 (8 normal + 8 intense)
ANSI_COLORS: tuple[str, ...] = (
    "ansi-black",
    "ansi-red",
    "ansi-green",
    "ansi-yellow",
    "ansi-blue",
    "ansi-magenta",
    "ansi-cyan",
    "ansi-white",
    "ansi-black-intense",
    "ansi-red-intense",
    "ansi-green-intense",
    "ansi-yellow-intense",
    "ansi-blue-intense",
    "ansi-magenta-intense",
    "ansi-cyan-intense",
    "ansi-white-intense",
)


@dataclass(frozen=True)
class NamedColor:
    """One of the 16 fixed terminal colors."""

    index: int

    @property
    def name(self) -> str:
        return ANSI_COLORS[self.index]

    @property
    def is_intense(self) -> bool:
        return self.index >= 8

    def promoted(self) -> "NamedColor":
        """Return the bright variant of a normal color (bold rendering)."""
        if self.index < 8:
            return NamedColor(self.index + 8)
        return self


@dataclass(frozen=True)
class RgbColor:
    """An explicit 24-bit color, from 38;2 / 48;2 or the 256-color palette."""

    r: int
    g: int
    b: int


Color = Union[NamedColor, RgbColor, None]


@dataclass
class StyleState:
    """Attribute set active at one point of a fragment scan.

    ``inverse`` only affects rendering: the stored foreground and background
    are never swapped, so turning inverse off restores the original roles.
    """

    foreground: Color = None
    background: Color = None
    bold: bool = False
    underline: bool = False
    inverse: bool = False

    def reset(self) -> None:
        self.foreground = None
        self.background = None
        self.bold = False
        self.underline = False
        self.inverse = False

    def is_plain(self) -> bool:
        """True when no attribute is set and no wrapper markup is needed."""
        return not (
            self.foreground is not None
            or self.background is not None
            or self.bold
            or self.underline
            or self.inverse
        )

    def effective(self) -> "StyleState":
        """Return the state as rendered, with bold promoting named colors < 8."""
        if self.bold and isinstance(self.foreground, NamedColor):
            return replace(self, foreground=self.foreground.promoted())
        return replace(self)

    def render_colors(self) -> tuple[Color, Color]:
        """Return (foreground, background) with inverse applied."""
        if self.inverse:
            return self.background, self.foreground
        return self.foreground, self.background


@dataclass(frozen=True)
class MarkupSpan:
    """A literal run of text together with the state it is rendered in."""

    text: str
    style: StyleState


@dataclass(frozen=True)
class Diagnostic:
    """A recovered, non-fatal problem found while scanning a fragment."""

    kind: DiagnosticKind
    message: str
    context: str = ""


@dataclass
class ConversionResult:
    """Markup produced for one fragment plus what was reported on the way."""

    markup: str
    has_ansi: bool = False
    diagnostics: list[Diagnostic] = field(default_factory=list)


# =============================================================================
# Output fragments
# =============================================================================


class OutputFragment(BaseModel):
    """One block of captured program output.

    ``composite`` marks fragments that hold more than a single code chunk;
    those are never merged. ``classes`` keeps the CSS classes of the block
    the fragment was read from.
    """

    kind: FragmentKind = FragmentKind.STDOUT
    text: str = ""
    composite: bool = False
    classes: list[str] = []

    # Document node the fragment was built from (set by the pandoc layer)
    _source: Any = PrivateAttr(default=None)

    @property
    def is_stderr(self) -> bool:
        return self.kind == FragmentKind.STDERR

    @property
    def source(self) -> Any:
        return self._source

    def with_source(self, source: Any) -> "OutputFragment":
        self._source = source
        return self
