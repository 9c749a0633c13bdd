"""Pytest configuration and shared fixtures."""

from typing import Any

import pytest

from ansi2htmltex.converter import AnsiMarkupConverter
from ansi2htmltex.models import Dialect


@pytest.fixture
def html_converter() -> AnsiMarkupConverter:
    """Converter for the HTML dialect without entity escaping."""
    return AnsiMarkupConverter(Dialect.HTML)


@pytest.fixture
def latex_converter() -> AnsiMarkupConverter:
    """Converter for the LaTeX dialect."""
    return AnsiMarkupConverter(Dialect.LATEX)


def attr(*classes: str) -> list[Any]:
    return ["", list(classes), []]


def code_block(text: str, *classes: str) -> dict[str, Any]:
    return {"t": "CodeBlock", "c": [attr(*classes), text]}


def div(*blocks: dict[str, Any], classes: tuple[str, ...] = ()) -> dict[str, Any]:
    return {"t": "Div", "c": [attr(*classes), list(blocks)]}


def header(level: int, text: str) -> dict[str, Any]:
    return {"t": "Header", "c": [level, attr(), [{"t": "Str", "c": text}]]}


def pandoc_doc(*blocks: dict[str, Any], meta: Any = None) -> dict[str, Any]:
    return {
        "pandoc-api-version": [1, 23, 1],
        "meta": meta if meta is not None else {},
        "blocks": list(blocks),
    }


@pytest.fixture
def make_doc():
    """Builders for small Pandoc JSON documents."""

    class Builders:
        attr = staticmethod(attr)
        code_block = staticmethod(code_block)
        div = staticmethod(div)
        header = staticmethod(header)
        doc = staticmethod(pandoc_doc)

    return Builders
