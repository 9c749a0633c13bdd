#!/usr/bin/env python3
"""CLI interface for ansi2htmltex."""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click

from .config import load_config
from .converter import AnsiMarkupConverter
from .models import Dialect
from .pandoc import apply_filter
from .stylesheets import render_stylesheet

DIALECT_CHOICE = click.Choice([d.value for d in Dialect])


def _configure_logging(debug: bool) -> None:
    # Warnings go to stderr; stdout carries the filtered document
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )


def _debug_enabled(debug: bool) -> bool:
    """True if --debug was given to the command or to the ansi2htmltex group."""
    root = click.get_current_context().find_root()
    return debug or bool(root.params.get("debug"))


def _fail(message: str, debug: bool) -> None:
    click.echo(message, err=True)
    if debug:
        import traceback

        traceback.print_exc()
    sys.exit(1)


@click.command("filter")
@click.argument("target_format", required=False)
@click.option(
    "-i",
    "--input",
    "input_path",
    type=click.Path(path_type=Path),
    help="Pandoc JSON file to read (default: stdin)",
)
@click.option(
    "-o",
    "--output",
    "output_path",
    type=click.Path(path_type=Path),
    help="File to write the filtered JSON to (default: stdout)",
)
@click.option(
    "--no-styles",
    is_flag=True,
    default=False,
    help="Do not add the ANSI color stylesheet to header-includes",
)
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Show debug logging and full traceback on errors.",
)
def filter_command(
    target_format: Optional[str],
    input_path: Optional[Path],
    output_path: Optional[Path],
    no_styles: bool,
    debug: bool,
) -> None:
    """Run as a Pandoc JSON filter.

    TARGET_FORMAT is the output format pandoc passes to filters (html, latex, ...).
    Output blocks of other formats are left unchanged.
    """
    debug = _debug_enabled(debug)
    _configure_logging(debug)
    config = load_config(include_styles=False if no_styles else None)

    try:
        if input_path is not None:
            source = input_path.read_text(encoding="utf-8")
        else:
            source = click.get_text_stream("stdin", encoding="utf-8").read()

        doc = apply_filter(json.loads(source), target_format, config)
        result = json.dumps(doc, ensure_ascii=False)

        if output_path is not None:
            output_path.write_text(result, encoding="utf-8")
        else:
            click.echo(result)
    except FileNotFoundError as e:
        _fail(f"Error: {e}", debug)
    except json.JSONDecodeError as e:
        _fail(f"Error: invalid Pandoc JSON: {e}", debug)
    except Exception as e:
        _fail(f"Error filtering document: {e}", debug)


@click.command("convert")
@click.argument("input_path", type=click.Path(path_type=Path))
@click.option(
    "-t",
    "--to",
    "dialect",
    type=DIALECT_CHOICE,
    default="html",
    help="Target markup (default: html)",
)
@click.option(
    "--stderr",
    "is_stderr",
    is_flag=True,
    help="Render the text as stderr output",
)
@click.option(
    "--bare",
    is_flag=True,
    help="Emit only the converted text, without the output block around it",
)
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Show debug logging and full traceback on errors.",
)
def convert_command(
    input_path: Path, dialect: str, is_stderr: bool, bare: bool, debug: bool
) -> None:
    """Convert a captured output text file to HTML or LaTeX.

    INPUT_PATH: Text file with ANSI escape sequences (ESC or its sentinel).
    """
    debug = _debug_enabled(debug)
    _configure_logging(debug)
    config = load_config()
    target = Dialect(dialect)

    try:
        text = input_path.read_text(encoding="utf-8")
        converter = AnsiMarkupConverter(target, config, escape=True)
        if bare:
            click.echo(converter.convert(text), nl=False)
        else:
            click.echo(converter.render_block(text, is_stderr=is_stderr).markup)
    except FileNotFoundError as e:
        _fail(f"Error: {e}", debug)
    except Exception as e:
        _fail(f"Error converting file: {e}", debug)


@click.command("stylesheet")
@click.option(
    "-t",
    "--to",
    "dialect",
    type=DIALECT_CHOICE,
    default="html",
    help="Stylesheet flavour: html (CSS) or latex (preamble)",
)
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Show debug logging and full traceback on errors.",
)
def stylesheet_command(dialect: str, debug: bool) -> None:
    """Print the stylesheet defining the ANSI colors and output environments."""
    debug = _debug_enabled(debug)
    _configure_logging(debug)

    try:
        click.echo(render_stylesheet(Dialect(dialect), load_config()), nl=False)
    except Exception as e:
        _fail(f"Error rendering stylesheet: {e}", debug)


@click.group()
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Show debug logging and full traceback on errors in every command.",
)
def main(debug: bool) -> None:
    """Convert ANSI colored program output to HTML or LaTeX markup."""


main.add_command(filter_command)
main.add_command(convert_command)
main.add_command(stylesheet_command)


if __name__ == "__main__":
    main()
