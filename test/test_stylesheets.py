#!/usr/bin/env python3
"""Tests for the generated CSS and LaTeX preamble."""

from ansi2htmltex.config import FilterConfig
from ansi2htmltex.models import ANSI_COLORS, Dialect
from ansi2htmltex.renderer import get_renderer
from ansi2htmltex.stylesheets import header_include, render_stylesheet


class TestCss:
    """Tests for the HTML stylesheet."""

    def test_all_color_classes_defined(self):
        css = render_stylesheet(Dialect.HTML)
        for name in ANSI_COLORS:
            assert f".{name}-fg {{" in css
            assert f".{name}-bg {{" in css

    def test_values_and_styles(self):
        css = render_stylesheet(Dialect.HTML)
        assert ".ansi-white-intense-bg { background-color: #A1A6B2; }" in css
        assert ".ansi-default-inverse-fg { color: #FFFFFF; }" in css
        assert ".ansi-bold { font-weight: bold; }" in css
        assert ".ansi-underline { text-decoration: underline; }" in css

    def test_header_include_wraps_style(self):
        include = header_include(Dialect.HTML)
        assert include.startswith("<style>\n")
        assert include.endswith("</style>")

    def test_renderer_stylesheet(self):
        assert get_renderer(Dialect.HTML).stylesheet() == render_stylesheet(
            Dialect.HTML
        )


class TestLatexPreamble:
    """Tests for the LaTeX preamble."""

    def test_colors_defined(self):
        tex = render_stylesheet(Dialect.LATEX)
        for name in ANSI_COLORS:
            assert f"\\definecolor{{{name}}}{{HTML}}" in tex
        assert "\\definecolor{ansi-default-inverse-bg}{HTML}{000000}" in tex

    def test_environments_follow_config(self):
        config = FilterConfig(ansi_environment="ColorOutput")
        tex = render_stylesheet(Dialect.LATEX, config)
        assert "\\DefineVerbatimEnvironment{ColorOutput}" in tex
        assert "\\DefineVerbatimEnvironment{OutputCell}" in tex
        assert "\\DefineVerbatimEnvironment{StderrOutputCell}" in tex
        assert "\\newenvironment{ShadedLight}" in tex

    def test_header_include_is_preamble(self):
        assert header_include(Dialect.LATEX) == render_stylesheet(Dialect.LATEX)
