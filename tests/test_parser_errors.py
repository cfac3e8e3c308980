"""
Parser error tests

Every malformed control string fails at parse time with a specific
ParseError subclass carrying the offending offset.
"""

import pytest

from clformat.lib.errors import (
    BreakOutsideLoop,
    InvalidDirective,
    InvalidParameter,
    MalformedConditional,
    ParseError,
    UnterminatedDirective,
)
from clformat.lib.parser import parse


class TestInvalidDirective:
    """Unknown characters and stray delimiters"""

    def test_unknown_letter(self):
        with pytest.raises(InvalidDirective) as excinfo:
            parse("~Z")
        assert excinfo.value.directive == "Z"

    def test_unknown_lowercase_letter(self):
        """Letters are reported as written"""
        with pytest.raises(InvalidDirective) as excinfo:
            parse("~z")
        assert excinfo.value.directive == "z"
        assert "~z" in str(excinfo.value)

    def test_unknown_punctuation(self):
        with pytest.raises(InvalidDirective, match="~\\?"):
            parse("abc~?")

    @pytest.mark.parametrize("control, char", [
        ("~}", "}"),
        ("~>", ">"),
        ("~]", "]"),
        ("a~;b", ";"),
        ("~{a~]", "]"),
        ("~<a~}", "}"),
        ("~[a~>", ">"),
    ])
    def test_stray_delimiter(self, control, char):
        with pytest.raises(InvalidDirective) as excinfo:
            parse(control)
        assert excinfo.value.directive == char

    def test_delimiter_with_modifier(self):
        """Only ~; may carry a colon"""
        with pytest.raises(InvalidParameter, match="takes no parameters"):
            parse("~{~A~:}")


class TestUnterminatedDirective:
    """Input ending inside a single-character directive"""

    @pytest.mark.parametrize("control", ["~", "abc~", "~10", "~10,", "~:@", "~10,'"])
    def test_unterminated(self, control):
        with pytest.raises(UnterminatedDirective):
            parse(control)

    def test_position_is_tilde(self):
        with pytest.raises(UnterminatedDirective) as excinfo:
            parse("abc~10,")
        assert excinfo.value.position == 3


class TestBreakOutsideLoop:
    """~^ must be lexically inside an iteration"""

    @pytest.mark.parametrize("control", ["~^", "a~^b", "~[~^~]", "~10<~A~^~>", "~{~}~^"])
    def test_break_outside(self, control):
        with pytest.raises(BreakOutsideLoop):
            parse(control)


class TestMalformedConditional:
    """Clause counts must match the conditional form"""

    @pytest.mark.parametrize("control", [
        "~:[a~]",
        "~:[a~;b~;c~]",
        "~:[a~;b~:;c~]",
        "~@[a~;b~]",
        "~@[a~:;b~]",
        "~:@[a~]",
        "~[a~:;b~;c~]",
        "~1:[a~;b~]",
        "~:[a",
    ])
    def test_malformed(self, control):
        with pytest.raises(MalformedConditional):
            parse(control)

    def test_reason_kept(self):
        with pytest.raises(MalformedConditional) as excinfo:
            parse("~:[only one~]")
        assert "exactly two clauses" in excinfo.value.reason


class TestErrorReporting:
    """Error objects carry context for display"""

    def test_parse_error_is_syntax_error(self):
        assert issubclass(ParseError, SyntaxError)
        assert issubclass(InvalidDirective, ParseError)

    def test_position_and_context(self):
        with pytest.raises(InvalidDirective) as excinfo:
            parse("ab ~Z cd")
        err = excinfo.value
        assert err.position == 3
        assert err.control == "ab ~Z cd"
        assert "Position 3" in str(err)
        assert "Context: ...ab ~Z cd..." in str(err)

    def test_caret_under_offending_tilde(self):
        with pytest.raises(InvalidDirective) as excinfo:
            parse("ab ~Z")
        lines = str(excinfo.value).splitlines()
        context_line, caret_line = lines[-2], lines[-1]
        assert context_line.index("~Z") == caret_line.index("^")
