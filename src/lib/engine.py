"""
Execution engine for directive trees

Interprets a parsed directive tree against an ArgumentCursor, streaming text
to a sink (any object with a write(str) method) as it goes.  Nothing is
buffered: when rendering fails part way, text already written stays written.

Each directive type maps to one handler method.  A handler returns True
when a ~^ fired and the enclosing iteration must stop; the flag travels up
through nested alignment and conditional bodies until the iteration that
owns it consumes it.
"""

import decimal
from numbers import Integral, Real
from typing import Any, Callable, Dict, Iterable, Optional, Union

from ..config import appsettings
from ..models.directives import (
    Align,
    Alignment,
    Break,
    Conditional,
    DebugValue,
    Decimal,
    DirectiveList,
    DisplayValue,
    Float,
    Iteration,
    Literal,
    Newline,
    Skip,
)
from .arguments import ArgumentCursor
from .errors import MissingArgument, RenderIOError, TypeMismatch
from .log import LOG
from .numeric import decimal_generate, float_format
from .ruler import Ruler


def number_is(value: Any) -> bool:
    """True for real numbers and decimal.Decimal; bool does not count"""
    if isinstance(value, bool):
        return False
    return isinstance(value, (Real, decimal.Decimal))


class Renderer:
    """
    Renders directive trees to a sink

    A Renderer holds no per-render state; one instance may render any number
    of trees, including the same tree concurrently from several threads.
    """

    def __init__(self, line_terminator: Optional[str] = None) -> None:
        """
        Initialize renderer

        Args:
            line_terminator: Text written for ~%; defaults to
                             appsettings.line_terminator
        """
        if line_terminator is None:
            line_terminator = appsettings.line_terminator
        self.line_terminator = line_terminator
        self.handlers: Dict[type, Callable[[Any, ArgumentCursor, Any], Optional[bool]]] = {
            Literal: self.literal_render,
            DisplayValue: self.display_render,
            DebugValue: self.debug_render,
            Skip: self.skip_render,
            Newline: self.newline_render,
            Break: self.break_render,
            Decimal: self.decimal_render,
            Float: self.float_render,
            Align: self.align_render,
            Iteration: self.iteration_render,
            Conditional: self.conditional_render,
        }

    def render(
        self, tree: DirectiveList, arguments: Union[ArgumentCursor, Iterable[Any]], sink: Any
    ) -> ArgumentCursor:
        """
        Render a directive tree against arguments into sink

        Args:
            tree: Parsed directive tree
            arguments: Values for the directives, or an existing cursor
            sink: Object with a write(str) method

        Returns:
            The argument cursor, positioned after the last consumed value

        Raises:
            MissingArgument: A directive needed a value and none remained
            TypeMismatch: A value had the wrong kind for its directive
            RenderIOError: The sink rejected a write
        """
        cursor = arguments if isinstance(arguments, ArgumentCursor) else ArgumentCursor(arguments)
        LOG(f"Rendering {len(tree)} directives against {cursor.remaining} arguments", level=3)
        self.directives_render(tree, cursor, sink)
        return cursor

    def directives_render(self, directives: DirectiveList, cursor: ArgumentCursor, sink: Any) -> bool:
        """
        Render a directive list in order

        Returns:
            True if a ~^ fired and the enclosing iteration should stop
        """
        for directive in directives:
            if self.handlers[type(directive)](directive, cursor, sink):
                return True
        return False

    def write(self, sink: Any, text: str) -> None:
        """Write text to sink, translating stream failures to RenderIOError"""
        try:
            sink.write(text)
        except (OSError, ValueError) as err:
            raise RenderIOError(err) from err

    def argument_pop(self, cursor: ArgumentCursor, directive: str) -> Any:
        """Consume the next argument for a directive"""
        if not cursor.has_next():
            raise MissingArgument(directive)
        return cursor.pop()

    def literal_render(self, directive: Literal, cursor: ArgumentCursor, sink: Any) -> None:
        self.write(sink, directive.text)

    def display_render(self, directive: DisplayValue, cursor: ArgumentCursor, sink: Any) -> None:
        self.write(sink, str(self.argument_pop(cursor, "~A")))

    def debug_render(self, directive: DebugValue, cursor: ArgumentCursor, sink: Any) -> None:
        self.write(sink, repr(self.argument_pop(cursor, "~S")))

    def skip_render(self, directive: Skip, cursor: ArgumentCursor, sink: Any) -> None:
        self.argument_pop(cursor, "~*")

    def newline_render(self, directive: Newline, cursor: ArgumentCursor, sink: Any) -> None:
        self.write(sink, self.line_terminator)

    def break_render(self, directive: Break, cursor: ArgumentCursor, sink: Any) -> bool:
        return not cursor.has_next()

    def decimal_render(self, directive: Decimal, cursor: ArgumentCursor, sink: Any) -> None:
        """
        Stream a grouped integer one character at a time

        Non-integral numbers are truncated toward zero.
        """
        value = self.argument_pop(cursor, "~D")
        if not number_is(value):
            raise TypeMismatch("~D", "a number", value)
        try:
            number = int(value)
        except (ValueError, OverflowError):
            raise TypeMismatch("~D", "a finite number", value) from None

        for char in decimal_generate(
            number,
            min_columns=directive.min_columns,
            pad_char=directive.pad_char,
            comma_char=directive.comma_char,
            comma_interval=directive.comma_interval,
            print_commas=directive.print_commas,
            print_sign=directive.print_sign,
        ):
            self.write(sink, char)

    def float_render(self, directive: Float, cursor: ArgumentCursor, sink: Any) -> None:
        value = self.argument_pop(cursor, "~F")
        if not number_is(value):
            raise TypeMismatch("~F", "a real number", value)
        self.write(
            sink,
            float_format(value, directive.width, directive.num_decimal_places, directive.pad_char),
        )

    def align_render(self, directive: Align, cursor: ArgumentCursor, sink: Any) -> bool:
        """
        Render an ~< block in two passes

        Pass 1 renders the body into a Ruler using a copy of the cursor, so
        the real cursor does not move.  Pass 2 renders the body for real,
        with padding before and/or after depending on direction.
        """
        ruler = Ruler()
        self.directives_render(directive.inner, cursor.copy(), ruler)

        pad = max(0, directive.min_columns - ruler.length)
        if directive.direction == Alignment.LEFT:
            before, after = 0, pad
        elif directive.direction == Alignment.RIGHT:
            before, after = pad, 0
        else:
            before = pad // 2
            after = pad - before

        if before:
            self.write(sink, directive.pad_char * before)
        stopped = self.directives_render(directive.inner, cursor, sink)
        if after:
            self.write(sink, directive.pad_char * after)
        return stopped

    def iteration_render(self, directive: Iteration, cursor: ArgumentCursor, sink: Any) -> None:
        """
        Render the body once per element of a sequence argument

        The body draws its arguments from the elements.  The loop ends when
        the elements run out, when ~^ fires, or after a pass that consumed
        no element (a body without argument directives would never finish).
        """
        if not cursor.has_next():
            raise MissingArgument("~{")
        value = cursor.peek()
        if isinstance(value, (str, bytes)):
            raise TypeMismatch("~{", "a non-string iterable", value)
        try:
            elements = cursor.sequence_pop()
        except TypeError:
            raise TypeMismatch("~{", "an iterable", value) from None

        while elements.has_next():
            start = elements.index
            if self.directives_render(directive.inner, elements, sink):
                break
            if elements.index == start:
                break

    def conditional_render(self, directive: Conditional, cursor: ArgumentCursor, sink: Any) -> bool:
        """
        Select and render one clause of a ~[ block

        ~@[ leaves a truthy selector on the cursor for the clause to use,
        and consumes a falsy one without rendering anything.
        """
        if directive.consumes:
            if not cursor.has_next():
                raise MissingArgument("~@[")
            if cursor.peek():
                return self.directives_render(directive.choices[0], cursor, sink)
            cursor.pop()
            return False

        if directive.boolean:
            value = self.argument_pop(cursor, "~:[")
            if not isinstance(value, bool):
                raise TypeMismatch("~:[", "a bool", value)
            return self.directives_render(directive.choices[1 if value else 0], cursor, sink)

        if directive.index is not None:
            index = directive.index
        else:
            index = self.argument_pop(cursor, "~[")
            if isinstance(index, bool) or not isinstance(index, Integral):
                raise TypeMismatch("~[", "an integer", index)

        if 0 <= index < len(directive.choices):
            return self.directives_render(directive.choices[index], cursor, sink)
        if directive.default is not None:
            return self.directives_render(directive.default, cursor, sink)
        return False


def render(tree: DirectiveList, arguments: Iterable[Any], sink: Any) -> None:
    """
    Render a parsed directive tree into sink

    Convenience wrapper around Renderer().render().

    Example:
        >>> import io
        >>> out = io.StringIO()
        >>> render(parse("~:D"), [4200], out)
        >>> out.getvalue()
        '4,200'
    """
    Renderer().render(tree, arguments, sink)
