"""
clformat - Common Lisp FORMAT-style control strings for Python

A compact ~directive grammar embedded in a string, interpreted against a
positional sequence of values:

    >>> from clformat import format
    >>> format(None, "~{~A~^, ~}", ["ook", "onk", "nork"])
    'ook, onk, nork'
"""

__version__ = "1.0.0"

from .lib import (
    Parser,
    parse,
    Renderer,
    render,
    Formatter,
    format,
    ParseError,
    InvalidDirective,
    UnterminatedDirective,
    BreakOutsideLoop,
    MalformedConditional,
    InvalidParameter,
    UnsupportedParameter,
    RenderError,
    MissingArgument,
    TypeMismatch,
    RenderIOError,
    LOG,
    state_connectToLogger,
)

__all__ = [
    "Parser",
    "parse",
    "Renderer",
    "render",
    "Formatter",
    "format",
    "ParseError",
    "InvalidDirective",
    "UnterminatedDirective",
    "BreakOutsideLoop",
    "MalformedConditional",
    "InvalidParameter",
    "UnsupportedParameter",
    "RenderError",
    "MissingArgument",
    "TypeMismatch",
    "RenderIOError",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
