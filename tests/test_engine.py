"""
Execution engine tests

Renders parsed trees against argument lists and checks the exact output,
the argument accounting, and the errors raised for bad arguments or sinks.
"""

import io
from decimal import Decimal
from fractions import Fraction

import pytest

from clformat.lib.arguments import ArgumentCursor
from clformat.lib.engine import Renderer, render
from clformat.lib.errors import MissingArgument, RenderError, RenderIOError, TypeMismatch
from clformat.lib.parser import parse


def rendered(control, *args, renderer=None):
    """Parse control, render it against args, return the text"""
    sink = io.StringIO()
    (renderer or Renderer()).render(parse(control), args, sink)
    return sink.getvalue()


class RecordingSink:
    """Sink that keeps every individual write"""

    def __init__(self):
        self.writes = []

    def write(self, text):
        self.writes.append(text)


class BrokenSink:
    """Sink that fails after a number of successful writes"""

    def __init__(self, allowed=0):
        self.allowed = allowed
        self.text = ""

    def write(self, text):
        if self.allowed <= 0:
            raise OSError("disk full")
        self.allowed -= 1
        self.text += text


class TestReferenceOutputs:
    """Known control strings and their exact output"""

    def test_display(self):
        assert rendered("Hello, ~A", "Dr Ponk") == "Hello, Dr Ponk"

    def test_decimal_plain(self):
        assert rendered("~D", 4200) == "4200"

    def test_decimal_grouped(self):
        assert rendered("~:D", 4200) == "4,200"
        assert rendered("~:D", -4200) == "-4,200"

    def test_decimal_padded(self):
        assert rendered("~10,'_:D", -4200) == "____-4,200"

    def test_iteration_with_break(self):
        """~^ suppresses the trailing separator"""
        assert rendered("~{~A~^, ~}", ["ook", "onk", "nork", "nonk"]) == "ook, onk, nork, nonk"

    def test_iteration_with_skip(self):
        """~* discards every other element"""
        assert rendered("~{~A~*~^, ~}", ["ook", "onk", "nork", "nonk"]) == "ook, nork"

    def test_centre_alignment(self):
        assert rendered("~13:@<~A~>", "zogwobble") == "  zogwobble  "

    def test_left_alignment_with_pad(self):
        assert rendered("~13,0,0,'-<~A~>", "zogwobble") == "zogwobble----"

    def test_index_conditional(self):
        assert rendered("~[zork~;plork~;nork~:;gork~]", 2) == "nork"

    def test_index_conditional_default(self):
        assert rendered("~[zork~;plork~;nork~:;gork~]", 100) == "gork"

    def test_boolean_conditional(self):
        assert rendered("~:[nork~;zoggle~]", True) == "zoggle"
        assert rendered("~:[nork~;zoggle~]", False) == "nork"


class TestPrinting:
    """~A, ~S, ~%, ~~ and ~F"""

    def test_debug_uses_repr(self):
        assert rendered("~S", "x") == "'x'"

    def test_display_uses_str(self):
        assert rendered("~A/~A", None, 1.5) == "None/1.5"

    def test_newline(self):
        assert rendered("a~%b") == "a\nb"

    def test_line_terminator_override(self):
        assert rendered("a~%b", renderer=Renderer(line_terminator="\r\n")) == "a\r\nb"

    def test_tilde(self):
        assert rendered("100~~") == "100~"

    def test_float_places(self):
        assert rendered("~8,2F", 3.14159) == "    3.14"

    def test_float_pad(self):
        assert rendered("~8,2,,,'*F", 3.14159) == "****3.14"

    def test_float_accepts_int(self):
        assert rendered("~,1F", 3) == "3.0"

    def test_sign_modifier(self):
        assert rendered("~@D ~@D", 5, -5) == "+5 -5"


class TestNumericArguments:
    """Numeric types accepted by ~D and ~F"""

    def test_decimal_truncates_floats(self):
        assert rendered("~D", 1.5) == "1"
        assert rendered("~D", -2.7) == "-2"

    def test_decimal_grouping_after_truncation(self):
        assert rendered("~:D", 4200.9) == "4,200"

    def test_decimal_accepts_fraction_and_decimal(self):
        assert rendered("~D ~D", Fraction(7, 2), Decimal("-9.9")) == "3 -9"

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), Decimal("NaN")])
    def test_decimal_rejects_non_finite(self, value):
        with pytest.raises(TypeMismatch):
            rendered("~D", value)

    def test_float_large_magnitude(self):
        """No exponent notation in the natural form"""
        assert rendered("~F", 1e16) == "10000000000000000"

    def test_float_small_magnitude(self):
        assert rendered("~F", 1e-7) == "0.0000001"

    def test_float_fraction(self):
        assert rendered("~,2F", Fraction(1, 3)) == "0.33"
        assert rendered("~F", Fraction(1, 4)) == "0.25"

    def test_float_decimal(self):
        assert rendered("~,2F", Decimal("1.25")) == "1.25"
        assert rendered("~6F", Decimal("1E+3")) == "  1000"


class TestAlignment:
    """Two-pass ~< rendering"""

    def test_centre_odd_padding(self):
        """The extra pad character goes after the text"""
        assert rendered("~12:@<~A~>", "zogwobble") == " zogwobble  "

    def test_right(self):
        assert rendered("~6:<~D~>", 42) == "    42"

    def test_overflow_not_truncated(self):
        assert rendered("~3<~A~>", "longer") == "longer"

    def test_measuring_does_not_consume(self):
        """The argument used inside the block is consumed exactly once"""
        assert rendered("~10<~A~>|~A", "a", "b") == "a         |b"

    def test_nested_alignment(self):
        assert rendered("[~8:<~3@<~A~>~>]", "x") == "[     x  ]"

    def test_alignment_around_iteration(self):
        assert rendered("~12:<~{~A~^,~}~>", [1, 2, 3]) == "       1,2,3"

    def test_one_shot_iterator_inside_block(self):
        """An iterator walked while measuring still has its elements when rendering"""
        assert rendered("~10<~{~A~}~>", iter([1, 2, 3])) == "123       "

    def test_nested_one_shot_iterators(self):
        assert rendered("~8:<~{~{~A~}.~}~>", iter([iter("ab"), (c for c in "cd")])) == "  ab.cd."

    def test_same_iterator_twice_in_block(self):
        """A repeated argument object yields the same elements each time"""
        numbers = iter([1, 2])
        assert rendered("~6<~{~A~}|~{~A~}~>", numbers, numbers) == "12|12 "


class TestIterationControl:
    """Loop termination rules"""

    def test_empty_sequence(self):
        assert rendered("~{~A~^, ~}", []) == ""

    def test_tuple_argument(self):
        assert rendered("~{<~A>~}", ("a", "b")) == "<a><b>"

    def test_generator_argument(self):
        assert rendered("~{~A~}", (n * n for n in range(4))) == "0149"

    def test_nested_iterations(self):
        assert rendered("~{~{~A~}~^;~}", [[1, 2], [3]]) == "12;3"

    def test_no_progress_body_runs_once(self):
        """A body that consumes nothing stops after one pass"""
        assert rendered("~{x~}", [1, 2]) == "x"

    def test_break_inside_conditional(self):
        """~^ inside a clause still ends the loop"""
        assert rendered("~{~A~0[~^~], ~}", ["a", "b"]) == "a, b"

    def test_break_inside_alignment(self):
        """Padding of the block is written before the loop stops"""
        assert rendered("~{~3<~A~^~>|~}", ["a", "b"]) == "a  |b  "

    def test_outer_arguments_untouched(self):
        """The loop consumes only its one sequence argument"""
        assert rendered("~{~A~}~A", ["x", "y"], "z") == "xyz"


class TestConditionals:
    """Selector handling of ~[, ~:[ and ~@["""

    def test_constant_index(self):
        """~1[ does not consume an argument"""
        assert rendered("~1[Zero~;One~]~A", "tail") == "Onetail"

    def test_out_of_range_without_default(self):
        assert rendered("[~[a~;b~]]", 5) == "[]"

    def test_negative_index_uses_default(self):
        assert rendered("~[a~;b~:;other~]", -1) == "other"

    def test_consuming_truthy(self):
        """A truthy value is left for the clause to print"""
        assert rendered("~@[~A~]~A", "x", "y") == "xy"

    def test_consuming_falsy(self):
        """A falsy value is consumed and nothing is printed"""
        assert rendered("~@[~A~]~A", None, "y") == "y"
        assert rendered("~@[~A~]~A", 0, "y") == "y"

    def test_clause_consumes_arguments(self):
        assert rendered("~:[~A~;~D~]!", True, 1234) == "1234!"


class TestRenderReturn:
    """Renderer.render() hands back the cursor"""

    def test_cursor_position(self):
        cursor = Renderer().render(parse("~A"), [1, 2], io.StringIO())
        assert cursor.remaining == 1

    def test_existing_cursor_is_used(self):
        cursor = ArgumentCursor([1, 2])
        Renderer().render(parse("~*"), cursor, io.StringIO())
        assert cursor.pop() == 2

    def test_module_render(self):
        sink = io.StringIO()
        assert render(parse("~:D"), [4200], sink) is None
        assert sink.getvalue() == "4,200"

    def test_renderer_reuse(self):
        renderer = Renderer()
        tree = parse("~{~A~^-~}")
        assert rendered("~{~A~^-~}", [1, 2], renderer=renderer) == "1-2"
        sink = io.StringIO()
        renderer.render(tree, [[3]], sink)
        assert sink.getvalue() == "3"


class TestStreaming:
    """Output goes straight to the sink"""

    def test_decimal_written_per_character(self):
        sink = RecordingSink()
        Renderer().render(parse("~:D"), [4200], sink)
        assert sink.writes == ["4", ",", "2", "0", "0"]

    def test_partial_output_kept_on_type_error(self):
        sink = io.StringIO()
        with pytest.raises(TypeMismatch):
            Renderer().render(parse("ok ~D"), ["x"], sink)
        assert sink.getvalue() == "ok "

    def test_partial_output_kept_on_missing_argument(self):
        sink = io.StringIO()
        with pytest.raises(MissingArgument):
            Renderer().render(parse("~A ~A"), [1], sink)
        assert sink.getvalue() == "1 "


class TestRenderErrors:
    """Bad arguments and failing sinks"""

    @pytest.mark.parametrize("control", ["~A", "~S", "~D", "~F", "~*", "~{~}", "~[a~]", "~:[a~;b~]", "~@[a~]"])
    def test_missing_argument(self, control):
        with pytest.raises(MissingArgument):
            rendered(control)

    def test_missing_argument_names_directive(self):
        with pytest.raises(MissingArgument) as excinfo:
            rendered("~D")
        assert excinfo.value.directive == "~D"

    @pytest.mark.parametrize("control, value", [
        ("~D", "12"),
        ("~D", True),
        ("~F", "1.5"),
        ("~F", False),
        ("~{~A~}", "abc"),
        ("~{~A~}", b"abc"),
        ("~{~A~}", 5),
        ("~:[a~;b~]", 1),
        ("~[a~;b~]", "0"),
        ("~[a~;b~]", True),
    ])
    def test_type_mismatch(self, control, value):
        with pytest.raises(TypeMismatch) as excinfo:
            rendered(control, value)
        assert excinfo.value.value is value

    def test_errors_share_base(self):
        assert issubclass(MissingArgument, RenderError)
        assert issubclass(TypeMismatch, RenderError)
        assert issubclass(RenderIOError, RenderError)

    def test_sink_oserror(self):
        with pytest.raises(RenderIOError) as excinfo:
            Renderer().render(parse("text"), [], BrokenSink())
        assert isinstance(excinfo.value.error, OSError)

    def test_sink_fails_mid_render(self):
        sink = BrokenSink(allowed=1)
        with pytest.raises(RenderIOError):
            Renderer().render(parse("a~Ab"), ["x"], sink)
        assert sink.text == "a"

    def test_closed_stream(self):
        sink = io.StringIO()
        sink.close()
        with pytest.raises(RenderIOError):
            Renderer().render(parse("text"), [], sink)
