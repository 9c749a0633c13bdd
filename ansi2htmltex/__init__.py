"""Convert ANSI escape sequences in captured program output to HTML or LaTeX."""

from .converter import AnsiMarkupConverter, convert_ansi
from .merger import merge_fragments
from .models import Dialect, FragmentKind, OutputFragment, StyleState

__all__ = [
    "AnsiMarkupConverter",
    "convert_ansi",
    "merge_fragments",
    "Dialect",
    "FragmentKind",
    "OutputFragment",
    "StyleState",
]
