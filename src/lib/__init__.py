"""
clformat - Common Lisp FORMAT-style control strings for Python

Parser, execution engine and front end for ~directive control strings.
"""

__version__ = "1.0.0"

from .parser import Parser, parse
from .engine import Renderer, render
from .formatter import Formatter, format
from .directives import DirectiveRegistry
from .errors import (
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
)
from .log import LOG, logger_configure, state_connectToLogger

__all__ = [
    "Parser",
    "parse",
    "Renderer",
    "render",
    "Formatter",
    "format",
    "DirectiveRegistry",
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
    "logger_configure",
    "state_connectToLogger",
    "__version__",
]
