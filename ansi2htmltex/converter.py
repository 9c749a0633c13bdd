"""ANSI escape sequence to markup conversion.

Scans captured program output left to right. Literal text between escape
sequences is emitted wrapped in the markup of the StyleState active at that
point; SGR sequences (``ESC [ ... m``) update the state and every escape
sequence is removed from the output. ESC is expected as the private
sentinel configured in FilterConfig; a literal ESC character is accepted
as well.

Only the SGR color/style subset is interpreted. Other sequences (cursor
movement, erasing, ...) are reported and dropped.
"""

import logging
import re
from dataclasses import replace
from typing import Iterator, Optional

from .config import FilterConfig
from .models import (
    ConversionResult,
    Diagnostic,
    DiagnosticKind,
    Dialect,
    MarkupSpan,
    StyleState,
)
from .renderer import MarkupRenderer, get_renderer
from .sgr import apply_sgr_codes, parse_sgr_params

logger = logging.getLogger(__name__)


def _escape_prefix(sentinel: str) -> str:
    return f"(?:{re.escape(sentinel)}|\x1b)\\["


class AnsiMarkupConverter:
    """Convert text with embedded SGR sequences into one markup dialect.

    A converter can be reused; every call to convert() starts from a fresh
    StyleState, and ``diagnostics`` holds what the last call reported.
    With ``dialect=None`` text passes through unmodified.
    """

    def __init__(
        self,
        dialect: Optional[Dialect],
        config: Optional[FilterConfig] = None,
        escape: bool = False,
    ):
        self.dialect = dialect
        self.config = config or FilterConfig()
        self.escape = escape
        self.renderer: Optional[MarkupRenderer] = (
            get_renderer(dialect, self.config) if dialect is not None else None
        )
        self.diagnostics: list[Diagnostic] = []

        prefix = _escape_prefix(self.config.sentinel)
        self._sequence = re.compile(prefix + r"(.*?)([@-~])", re.DOTALL)
        self._marker = re.compile(prefix)

    def has_ansi(self, text: str) -> bool:
        """True if ``text`` contains at least one escape sequence introducer."""
        return self._marker.search(text) is not None

    def _report(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)
        if diagnostic.context:
            logger.warning("%s before: %r", diagnostic.message, diagnostic.context)
        else:
            logger.warning("%s", diagnostic.message)

    def scan(self, text: str) -> Iterator[MarkupSpan]:
        """Yield the literal runs of ``text`` with the state each is shown in.

        A sequence with no terminating character before the end of the text
        is kept as literal text.
        """
        state = StyleState()
        pos = 0
        for match in self._sequence.finditer(text):
            chunk = text[pos : match.start()]
            if chunk:
                yield MarkupSpan(chunk, replace(state))

            params, terminator = match.group(1), match.group(2)
            if terminator == "m":
                apply_sgr_codes(
                    state, parse_sgr_params(params), self._report, context=chunk
                )
            else:
                self._report(
                    Diagnostic(
                        DiagnosticKind.UNSUPPORTED_TERMINATOR,
                        f"Unsupported ANSI sequence ESC[{params}{terminator} ignored",
                        chunk,
                    )
                )
            pos = match.end()

        rest = text[pos:]
        if rest:
            yield MarkupSpan(rest, replace(state))

    def convert(self, text: str) -> str:
        """Convert ``text`` to markup in the converter's dialect."""
        self.diagnostics = []
        if self.renderer is None:
            return text

        out: list[str] = []
        for span in self.scan(text):
            starttag, endtag = self.renderer.tags(span.style.effective())
            chunk = self.renderer.escape(span.text) if self.escape else span.text
            out.append(starttag + chunk + endtag)
        return "".join(out)

    def render_block(self, text: str, is_stderr: bool = False) -> ConversionResult:
        """Convert ``text`` and wrap it in the dialect's output block.

        Text without escape sequences is not scanned, only wrapped (and
        escaped where its block needs it). Without a dialect the text is
        returned unchanged.
        """
        if self.renderer is None:
            self.diagnostics = []
            return ConversionResult(markup=text)

        has_ansi = self.has_ansi(text)
        if has_ansi:
            body = self.convert(text)
        else:
            self.diagnostics = []
            escape = self.escape and self.renderer.escapes_block(False, is_stderr)
            body = self.renderer.escape(text) if escape else text
        return ConversionResult(
            markup=self.renderer.wrap_block(body, has_ansi, is_stderr),
            has_ansi=has_ansi,
            diagnostics=list(self.diagnostics),
        )


def convert_ansi(
    text: str,
    dialect: Optional[Dialect],
    config: Optional[FilterConfig] = None,
    escape: bool = False,
) -> str:
    """Convert ANSI escape codes in ``text`` to HTML or LaTeX markup.

    Args:
        text: Captured output, ESC given as the configured sentinel
        dialect: Target dialect, or None to return ``text`` unchanged
        config: Optional FilterConfig (sentinel)
        escape: Escape literal text for the dialect (HTML entities, LaTeX
            command characters)

    Returns:
        Markup string with every escape sequence removed
    """
    return AnsiMarkupConverter(dialect, config, escape=escape).convert(text)
