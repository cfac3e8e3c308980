"""
Error taxonomy for clformat

Two independent families:

    ParseError   raised by the parser; the control string is wrong
    RenderError  raised by the engine; the arguments or the sink are wrong

Parse errors subclass SyntaxError so callers that already treat malformed
source as a SyntaxError keep working.
"""

from typing import Any, Optional


def context_describe(control: str, position: int) -> str:
    """
    Build a source excerpt with a caret under the offending position

    Shows up to 40 characters either side of position.

    Example:
        >>> print(context_describe("~10Z", 3))
        Position 3
        Context: ...~10Z...
                       ^
    """
    context_start = max(0, position - 40)
    context_end = min(len(control), position + 40)
    context = control[context_start:context_end]
    return (
        f"Position {position}\n"
        f"Context: ...{context}...\n"
        f"            {' ' * (position - context_start)}^"
    )


class ParseError(SyntaxError):
    """Raised when a control string is malformed"""

    def __init__(self, message: str, control: str = "", position: int = 0) -> None:
        self.reason = message
        self.control = control
        self.position = position
        if control:
            message = f"{message}\n{context_describe(control, position)}"
        super().__init__(message)


class InvalidDirective(ParseError):
    """Raised for an unknown directive character, or a stray block delimiter"""

    def __init__(self, directive: str, control: str = "", position: int = 0) -> None:
        self.directive = directive
        super().__init__(f"Invalid directive: ~{directive}", control, position)


class UnterminatedDirective(ParseError):
    """Raised when the control string ends inside a single-character directive"""

    def __init__(self, control: str = "", position: int = 0) -> None:
        super().__init__("Unterminated directive", control, position)


class BreakOutsideLoop(ParseError):
    """Raised when ~^ appears outside any ~{...~} body"""

    def __init__(self, control: str = "", position: int = 0) -> None:
        super().__init__("Break directive ~^ outside of an iteration", control, position)


class MalformedConditional(ParseError):
    """Raised when a ~[...~] block has the wrong shape for its modifiers"""


class InvalidParameter(ParseError):
    """Raised when a directive parameter has the wrong kind or range"""


class UnsupportedParameter(ParseError):
    """Raised when a reserved parameter slot is given a value"""


class RenderError(Exception):
    """Raised when a directive tree cannot be rendered against its arguments"""
    pass


class MissingArgument(RenderError):
    """Raised when a directive needs an argument and none remain"""

    def __init__(self, directive: str) -> None:
        self.directive = directive
        super().__init__(f"No argument left for {directive}")


class TypeMismatch(RenderError):
    """Raised when an argument has the wrong kind for its directive"""

    def __init__(self, directive: str, expected: str, value: Any) -> None:
        self.directive = directive
        self.expected = expected
        self.value = value
        super().__init__(
            f"{directive} expects {expected}, got {type(value).__name__}: {value!r}"
        )


class RenderIOError(RenderError):
    """Raised when the sink rejects a write"""

    def __init__(self, error: Optional[BaseException] = None) -> None:
        self.error = error
        super().__init__(f"Write to output failed: {error}")
