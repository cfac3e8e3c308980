"""
Front end tests - Formatter objects and format() destinations
"""

import io

import pytest

import clformat
from clformat import Formatter, format
from clformat.lib.engine import Renderer
from clformat.lib.errors import InvalidDirective, MissingArgument
from clformat.lib.parser import parse


class TestDestinations:
    """None, True and stream destinations"""

    def test_none_returns_string(self):
        assert format(None, "Hello, ~A", "Dr Ponk") == "Hello, Dr Ponk"

    def test_stream_appends(self):
        stream = io.StringIO()
        stream.write("> ")
        assert format(stream, "~:D", 4200) is None
        assert stream.getvalue() == "> 4,200"

    def test_true_writes_stdout(self, capsys):
        assert format(True, "~{~A~^, ~}~%", ["ook", "onk"]) is None
        assert capsys.readouterr().out == "ook, onk\n"

    def test_no_arguments(self):
        assert format(None, "plain") == "plain"

    def test_parse_error_before_any_output(self):
        """A bad control string fails before the stream is touched"""
        stream = io.StringIO()
        with pytest.raises(InvalidDirective):
            format(stream, "ok ~Z", 1)
        assert stream.getvalue() == ""

    def test_render_error_propagates(self):
        with pytest.raises(MissingArgument):
            format(None, "~A ~A", 1)


class TestFormatter:
    """Parse-once Formatter objects"""

    def test_reuse(self):
        money = Formatter("~10,'_:D")
        assert money(None, -4200) == "____-4,200"
        assert money(None, 42) == "________42"

    def test_directives_kept(self):
        assert Formatter("~A").directives == parse("~A")

    def test_from_tree(self):
        formatter = Formatter(parse("~@D"))
        assert formatter.control is None
        assert formatter(None, 3) == "+3"

    def test_format_accepts_formatter(self):
        assert format(None, Formatter("<~A>"), "x") == "<x>"

    def test_format_accepts_tree(self):
        assert format(None, parse("~S"), "x") == "'x'"

    def test_custom_renderer(self):
        formatter = Formatter("a~%b", renderer=Renderer(line_terminator="|"))
        assert formatter(None) == "a|b"

    def test_repr(self):
        assert repr(Formatter("~A")) == "Formatter('~A')"
        assert repr(Formatter(parse("x~A"))) == "Formatter(<2 directives>)"

    @pytest.mark.parametrize("control", [42, None, b"~A", ["~A"]])
    def test_bad_control_type(self, control):
        with pytest.raises(TypeError):
            Formatter(control)


class TestPackageSurface:
    """Names re-exported from the top-level package"""

    def test_version(self):
        assert clformat.__version__ == "1.0.0"

    def test_exports(self):
        for name in ("parse", "render", "Parser", "Renderer", "Formatter", "format", "ParseError", "RenderError"):
            assert hasattr(clformat, name)

    def test_parse_then_render(self):
        stream = io.StringIO()
        clformat.render(clformat.parse("~:[no~;yes~]"), [True], stream)
        assert stream.getvalue() == "yes"
