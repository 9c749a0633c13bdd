"""SGR (Select Graphic Rendition) parameter handling.

Parses the parameter list of one ``ESC [ ... m`` sequence and applies the
codes, left to right, to a StyleState. Extended colors (38/48) consume their
operands from the same queue.
"""

from collections import deque
from typing import Callable, Optional

from .models import (
    Color,
    Diagnostic,
    DiagnosticKind,
    NamedColor,
    RgbColor,
    StyleState,
)

Report = Callable[[Diagnostic], None]


# Larger parameters are clamped; every SGR code and operand is far below it
PARAM_LIMIT = 999_999


def parse_sgr_param(part: str) -> Optional[int]:
    """Read one parameter as an integer, None for empty or non-numeric ones.

    Only ASCII digits count. Values above PARAM_LIMIT are clamped to it
    without converting the full digit string.
    """
    if not (part.isascii() and part.isdigit()):
        return None
    digits = part.lstrip("0") or "0"
    if len(digits) > len(str(PARAM_LIMIT)):
        return PARAM_LIMIT
    return min(int(digits), PARAM_LIMIT)


def parse_sgr_params(params: str) -> deque[int]:
    """Split a ``;``-delimited parameter string into a queue of integers.

    Empty and non-numeric entries are skipped, so ``"1;;31"`` gives [1, 31]
    and an empty string gives an empty queue.
    """
    values = (parse_sgr_param(part) for part in params.split(";"))
    return deque(value for value in values if value is not None)


def cube_component(level: int) -> int:
    """Scale a 6x6x6 color cube coordinate (0-5) to 0-255."""
    return max(0, 55 + level * 40)


def parse_extended_color(
    codes: deque[int], report: Optional[Report] = None
) -> Color:
    """Consume an extended color specification following 38 or 48.

    ``2;r;g;b`` gives an explicit RGB color, ``5;idx`` a 256-color palette
    entry: 0-15 are the named colors, 16-231 the color cube and 232-255 the
    grayscale ramp. The selector is always consumed; with missing operands
    or an out of range index the color is left unset and nothing else is
    consumed.
    """
    selector = codes.popleft() if codes else None

    if selector == 2 and len(codes) >= 3:
        return RgbColor(codes.popleft(), codes.popleft(), codes.popleft())

    if selector == 5 and len(codes) >= 1:
        idx = codes.popleft()
        if idx < 16:
            return NamedColor(idx)
        if idx < 232:
            offset = idx - 16
            return RgbColor(
                cube_component(offset // 36),
                cube_component((offset % 36) // 6),
                cube_component(offset % 6),
            )
        if idx < 256:
            level = (idx - 232) * 10 + 8
            return RgbColor(level, level, level)

    if report is not None:
        report(
            Diagnostic(
                DiagnosticKind.MALFORMED_EXTENDED_COLOR,
                f"Malformed extended color (selector {selector}) ignored",
            )
        )
    return None


def apply_sgr_codes(
    state: StyleState,
    codes: deque[int],
    report: Optional[Report] = None,
    context: str = "",
) -> StyleState:
    """Apply a queue of SGR codes to ``state`` in place and return it.

    Unknown codes are reported and skipped; the remaining codes of the
    sequence are still applied.
    """
    while codes:
        n = codes.popleft()
        if n == 0:
            state.reset()
        elif n in (1, 5):
            # 5 is "blink", rendered as bold
            state.bold = True
        elif n == 4:
            state.underline = True
        elif n == 7:
            state.inverse = True
        elif n in (21, 22):
            state.bold = False
        elif n == 24:
            state.underline = False
        elif n == 27:
            state.inverse = False
        elif 30 <= n <= 37:
            state.foreground = NamedColor(n - 30)
        elif n == 38:
            state.foreground = parse_extended_color(codes, report)
        elif n == 39:
            state.foreground = None
        elif 40 <= n <= 47:
            state.background = NamedColor(n - 40)
        elif n == 48:
            state.background = parse_extended_color(codes, report)
        elif n == 49:
            state.background = None
        elif 90 <= n <= 97:
            state.foreground = NamedColor(n - 90 + 8)
        elif 100 <= n <= 107:
            state.background = NamedColor(n - 100 + 8)
        elif report is not None:
            report(
                Diagnostic(
                    DiagnosticKind.UNKNOWN_SGR_CODE,
                    f"ESC sequence with unknown code {n} ignored",
                    context,
                )
            )
    return state
