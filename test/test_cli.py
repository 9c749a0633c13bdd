#!/usr/bin/env python3
"""Tests for CLI functionality."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from ansi2htmltex.cli import filter_command, main
from ansi2htmltex.config import ESC_SENTINEL

STDOUT = ("cell-output", "cell-output-stdout")


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def sample_doc(make_doc) -> dict:
    text = f"{ESC_SENTINEL}[32mok{ESC_SENTINEL}[0m"
    return make_doc.doc(make_doc.div(make_doc.code_block(text), classes=STDOUT))


class TestFilterCommand:
    """Tests for running as a Pandoc JSON filter."""

    def test_filter_from_stdin(self, runner, sample_doc):
        result = runner.invoke(main, ["filter", "html"], input=json.dumps(sample_doc))
        assert result.exit_code == 0, result.output
        doc = json.loads(result.stdout)
        raw = doc["blocks"][0]["c"][1][0]
        assert raw["c"] == [
            "html",
            '<pre class="ansi"><code class="ansi">'
            '<span class="ansi-green-fg">ok</span></code></pre>',
        ]
        assert "header-includes" in doc["meta"]

    def test_standalone_filter_no_styles(self, runner, sample_doc):
        result = runner.invoke(
            filter_command, ["latex", "--no-styles"], input=json.dumps(sample_doc)
        )
        assert result.exit_code == 0, result.output
        doc = json.loads(result.stdout)
        assert "\\textcolor{ansi-green}{ok}" in doc["blocks"][0]["c"][1][0]["c"][1]
        assert "header-includes" not in doc["meta"]

    def test_filter_files(self, runner, sample_doc, tmp_path: Path):
        input_file = tmp_path / "doc.json"
        output_file = tmp_path / "out.json"
        input_file.write_text(json.dumps(sample_doc), encoding="utf-8")

        result = runner.invoke(
            main,
            ["filter", "html", "-i", str(input_file), "-o", str(output_file)],
        )
        assert result.exit_code == 0, result.output
        doc = json.loads(output_file.read_text(encoding="utf-8"))
        assert doc["blocks"][0]["c"][1][0]["t"] == "RawBlock"

    def test_unknown_format_passes_through(self, runner, sample_doc):
        result = runner.invoke(main, ["filter", "docx"], input=json.dumps(sample_doc))
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["blocks"] == sample_doc["blocks"]

    def test_invalid_json(self, runner):
        result = runner.invoke(main, ["filter", "html"], input="{not json")
        assert result.exit_code == 1
        assert "invalid Pandoc JSON" in result.output

    def test_missing_input_file(self, runner, tmp_path: Path):
        result = runner.invoke(
            main, ["filter", "html", "-i", str(tmp_path / "missing.json")]
        )
        assert result.exit_code == 1
        assert "Error" in result.output


class TestConvertCommand:
    """Tests for converting captured output files."""

    def test_convert_bare_html(self, runner, tmp_path: Path):
        path = tmp_path / "out.txt"
        path.write_text(f"{ESC_SENTINEL}[31mred{ESC_SENTINEL}[0m plain", encoding="utf-8")
        result = runner.invoke(main, ["convert", str(path), "--bare"])
        assert result.exit_code == 0, result.output
        assert result.stdout == '<span class="ansi-red-fg">red</span> plain'

    def test_convert_latex_stderr_block(self, runner, tmp_path: Path):
        path = tmp_path / "err.txt"
        path.write_text("\x1b[33mWarning\x1b[0m", encoding="utf-8")
        result = runner.invoke(
            main, ["convert", str(path), "--to", "latex", "--stderr"]
        )
        assert result.exit_code == 0, result.output
        assert "\\begin{StderrOutputCell}" in result.stdout
        assert "\\textcolor{ansi-yellow}{Warning}" in result.stdout

    def test_convert_latex_escapes_braces(self, runner, tmp_path: Path):
        path = tmp_path / "err.txt"
        path.write_text("MethodError: f(::Vector{Int64})", encoding="utf-8")
        result = runner.invoke(
            main, ["convert", str(path), "--to", "latex", "--stderr"]
        )
        assert result.exit_code == 0, result.output
        assert "f(::Vector\\{Int64\\})" in result.stdout

    def test_convert_missing_file(self, runner, tmp_path: Path):
        result = runner.invoke(main, ["convert", str(tmp_path / "missing.txt")])
        assert result.exit_code == 1
        assert "Traceback" not in result.output


class TestGlobalDebug:
    """Tests for --debug given before the command name."""

    def test_traceback_with_group_debug(self, runner, tmp_path: Path):
        result = runner.invoke(
            main, ["--debug", "convert", str(tmp_path / "missing.txt")]
        )
        assert result.exit_code == 1
        assert "Traceback" in result.output

    def test_accepted_by_every_command(self, runner, sample_doc):
        result = runner.invoke(
            main, ["--debug", "filter", "html"], input=json.dumps(sample_doc)
        )
        assert result.exit_code == 0, result.output
        result = runner.invoke(main, ["--debug", "stylesheet", "--to", "latex"])
        assert result.exit_code == 0, result.output
        result = runner.invoke(main, ["stylesheet", "--debug"])
        assert result.exit_code == 0, result.output


class TestStylesheetCommand:
    """Tests for printing stylesheets."""

    def test_css(self, runner):
        result = runner.invoke(main, ["stylesheet"])
        assert result.exit_code == 0
        assert ".ansi-red-fg { color: #E75C58; }" in result.stdout

    def test_latex(self, runner):
        result = runner.invoke(main, ["stylesheet", "--to", "latex"])
        assert result.exit_code == 0
        assert "\\definecolor{ansi-red}{HTML}{E75C58}" in result.stdout

    def test_invalid_dialect(self, runner):
        result = runner.invoke(main, ["stylesheet", "--to", "rtf"])
        assert result.exit_code != 0
