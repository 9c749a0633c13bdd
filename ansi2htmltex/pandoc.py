"""Pandoc JSON filter for captured Julia output.

Runs over a Pandoc JSON AST (``pandoc -t json``) in five passes:
1. CodeBlocks inside ``cell-output-stderr`` Divs get the stderr class
2. Inside ``cell-output`` Divs, Headers are demoted to level 6 and the
   ``jldoctest`` class is dropped from CodeBlocks
3. Adjacent ``cell-output`` Divs are merged (see merger.py)
4. Output CodeBlocks are converted to raw HTML/LaTeX blocks
5. The dialect stylesheet is appended to ``header-includes``

Every pass walks the whole document bottom-up, children before parents.
"""

import copy
import logging
from typing import Any, Callable, Optional

from .config import FilterConfig
from .converter import AnsiMarkupConverter
from .merger import merge_fragments
from .models import Dialect, FragmentKind, OutputFragment
from .stylesheets import header_include

logger = logging.getLogger(__name__)

Element = dict[str, Any]
ElementFn = Callable[[Element], Optional[Element]]
ListFn = Callable[[list[Any]], list[Any]]

CELL_OUTPUT = "cell-output"
CELL_OUTPUT_STDOUT = "cell-output-stdout"
CELL_OUTPUT_STDERR = "cell-output-stderr"
JLDOCTEST = "jldoctest"


# =============================================================================
# AST helpers
# =============================================================================


def is_element(node: Any) -> bool:
    return isinstance(node, dict) and "t" in node


def walk(
    node: Any,
    element_fn: Optional[ElementFn] = None,
    list_fn: Optional[ListFn] = None,
) -> Any:
    """Walk a Pandoc JSON node bottom-up.

    ``element_fn`` may return a replacement element (or None to keep it);
    ``list_fn`` receives every list of elements after its items were walked
    and returns the new list.
    """
    if isinstance(node, list):
        items = [walk(item, element_fn, list_fn) for item in node]
        if list_fn is not None and items and all(is_element(i) for i in items):
            items = list_fn(items)
        return items
    if isinstance(node, dict):
        walked = {key: walk(value, element_fn, list_fn) for key, value in node.items()}
        if element_fn is not None and is_element(walked):
            replacement = element_fn(walked)
            if replacement is not None:
                return replacement
        return walked
    return node


def get_classes(element: Element) -> list[str]:
    """Return the class list of a Div, CodeBlock or Header (empty otherwise)."""
    kind = element.get("t")
    if kind in ("Div", "CodeBlock"):
        return element["c"][0][1]
    if kind == "Header":
        return element["c"][1][1]
    return []


def div_content(div: Element) -> list[Any]:
    return div["c"][1]


def code_text(block: Element) -> str:
    return block["c"][1]


def raw_block(fmt: str, text: str) -> Element:
    return {"t": "RawBlock", "c": [fmt, text]}


# =============================================================================
# Passes
# =============================================================================


def tag_stderr_blocks(element: Element, config: FilterConfig) -> None:
    """Give CodeBlocks of a ``cell-output-stderr`` Div the stderr class."""
    if element["t"] != "Div" or CELL_OUTPUT_STDERR not in get_classes(element):
        return None
    for child in div_content(element):
        if is_element(child) and child["t"] == "CodeBlock":
            classes = get_classes(child)
            if config.stderr_class not in classes:
                classes.append(config.stderr_class)
    return None


def repair_cell_output(element: Element) -> None:
    """Demote Headers and drop ``jldoctest`` inside ``cell-output`` Divs.

    Help output (``?sin``) is Markdown whose headers would otherwise enter
    the book's section numbering.
    """
    if element["t"] != "Div" or CELL_OUTPUT not in get_classes(element):
        return None
    for child in div_content(element):
        if not is_element(child):
            continue
        if child["t"] == "Header":
            child["c"][0] = 6
        elif child["t"] == "CodeBlock":
            classes = get_classes(child)
            if JLDOCTEST in classes:
                classes.remove(JLDOCTEST)
    return None


def fragment_from_div(div: Element) -> Optional[OutputFragment]:
    """Read a ``cell-output`` Div as an OutputFragment (None for other blocks)."""
    if div.get("t") != "Div":
        return None
    classes = get_classes(div)
    if CELL_OUTPUT not in classes:
        return None

    if CELL_OUTPUT_STDERR in classes:
        kind = FragmentKind.STDERR
    elif CELL_OUTPUT_STDOUT in classes:
        kind = FragmentKind.STDOUT
    else:
        kind = FragmentKind.DISPLAY

    content = div_content(div)
    single = (
        len(content) == 1 and is_element(content[0]) and content[0]["t"] == "CodeBlock"
    )
    fragment = OutputFragment(
        kind=kind,
        text=code_text(content[0]) if single else "",
        composite=not single,
        classes=list(classes),
    )
    return fragment.with_source(div)


def div_from_fragment(fragment: OutputFragment) -> Element:
    div = fragment.source
    if not fragment.composite:
        div_content(div)[0]["c"][1] = fragment.text
    return div


def merge_output_divs(blocks: list[Any]) -> list[Any]:
    """Merge adjacent single-CodeBlock ``cell-output`` Divs of a block list."""
    items: list[Any] = []
    for block in blocks:
        fragment = fragment_from_div(block)
        items.append(block if fragment is None else fragment)
    if not any(isinstance(item, OutputFragment) for item in items):
        return blocks
    merged = merge_fragments(items)
    return [
        div_from_fragment(item) if isinstance(item, OutputFragment) else item
        for item in merged
    ]


def is_output_block(block: Element, config: FilterConfig) -> bool:
    """True for CodeBlocks holding captured output rather than source code."""
    classes = get_classes(block)
    if any(c in classes for c in config.input_classes):
        return False
    return not classes or config.stderr_class in classes


def convert_code_block(
    block: Element, converter: AnsiMarkupConverter, config: FilterConfig
) -> Optional[Element]:
    """Turn an output CodeBlock into a raw block of the converter's dialect."""
    if block["t"] != "CodeBlock" or converter.dialect is None:
        return None
    if not is_output_block(block, config):
        return None

    is_stderr = config.stderr_class in get_classes(block)
    result = converter.render_block(code_text(block), is_stderr=is_stderr)
    return raw_block(converter.dialect.value, result.markup)


def add_header_include(meta: dict[str, Any], include: Element) -> dict[str, Any]:
    """Append a raw block to the ``header-includes`` metadata field."""
    entry = {"t": "MetaBlocks", "c": [include]}
    existing = meta.get("header-includes")
    if existing is None:
        meta["header-includes"] = {"t": "MetaList", "c": [entry]}
    elif existing.get("t") == "MetaList":
        existing["c"].append(entry)
    else:
        meta["header-includes"] = {"t": "MetaList", "c": [existing, entry]}
    return meta


def apply_filter(
    doc: dict[str, Any],
    fmt: Optional[str],
    config: Optional[FilterConfig] = None,
) -> dict[str, Any]:
    """Run all filter passes over a Pandoc JSON document.

    Args:
        doc: Parsed Pandoc JSON AST; it is not modified
        fmt: Pandoc output format (``html``, ``latex``, ...). Formats that map
            to no dialect leave output blocks unconverted.
        config: Optional FilterConfig

    Returns:
        The filtered document

    Raises:
        ValueError: If ``doc`` is not a Pandoc JSON document
    """
    if not isinstance(doc, dict) or not isinstance(doc.get("blocks"), list):
        raise ValueError("Input is not a Pandoc JSON document")

    config = config or FilterConfig()
    dialect = Dialect.from_format(fmt)
    if dialect is None:
        logger.debug("No dialect for format %r, output blocks left unchanged", fmt)

    doc = copy.deepcopy(doc)
    blocks = doc["blocks"]
    blocks = walk(blocks, lambda e: tag_stderr_blocks(e, config))
    blocks = walk(blocks, repair_cell_output)
    blocks = walk(blocks, list_fn=merge_output_divs)

    converter = AnsiMarkupConverter(dialect, config, escape=True)
    blocks = walk(blocks, lambda e: convert_code_block(e, converter, config))
    doc["blocks"] = blocks

    if dialect is not None and config.include_styles:
        include = raw_block(dialect.value, header_include(dialect, config))
        doc["meta"] = add_header_include(doc.get("meta") or {}, include)
    return doc
