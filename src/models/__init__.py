"""
Models package for clformat

Contains the directive tree, parameter types and pipeline state.
"""

from .state import ProgramState, pipeline
from .job import ParsedJob
from .directives import (
    Align,
    Alignment,
    Break,
    Conditional,
    DebugValue,
    Decimal,
    Directive,
    DirectiveCategory,
    DirectiveList,
    DirectiveSpec,
    DisplayValue,
    Float,
    Iteration,
    Literal,
    Newline,
    Skip,
)
from .parser import Char, DirectiveHeader, Missing, MISSING, Modifiers, Number, Parameter

__all__ = [
    "ProgramState",
    "pipeline",
    "ParsedJob",
    "Align",
    "Alignment",
    "Break",
    "Conditional",
    "DebugValue",
    "Decimal",
    "Directive",
    "DirectiveCategory",
    "DirectiveList",
    "DirectiveSpec",
    "DisplayValue",
    "Float",
    "Iteration",
    "Literal",
    "Newline",
    "Skip",
    "Char",
    "DirectiveHeader",
    "Missing",
    "MISSING",
    "Modifiers",
    "Number",
    "Parameter",
]
