"""
Parser-specific data models

Type-safe structures for directive parameters and the decoded prefix of a
single ~ directive.
"""

from dataclasses import dataclass
from typing import Tuple, Union


@dataclass(frozen=True)
class Number:
    """
    Numeric directive parameter

    Attributes:
        value: Signed integer as written in the control string

    Example:
        "~10D" -> Number(value=10) in slot 0
    """
    value: int


@dataclass(frozen=True)
class Char:
    """
    Character directive parameter, written as a quote followed by the character

    Example:
        "~10,'_D" -> Char(value="_") in slot 1
    """
    value: str


@dataclass(frozen=True)
class Missing:
    """Empty parameter slot; keeps later slots at their position"""


MISSING = Missing()

Parameter = Union[Number, Char, Missing]


@dataclass(frozen=True)
class Modifiers:
    """
    The colon and at-sign flags written between parameters and letter

    Attributes:
        colon: ':' was present
        at: '@' was present
    """
    colon: bool = False
    at: bool = False


@dataclass(frozen=True)
class DirectiveHeader:
    """
    Decoded prefix of a single ~ directive

    Returned by Parser.header_parse() after reading the parameters, the
    modifiers and the directive character that follows a tilde.

    Attributes:
        params: Parameters in slot order (Missing keeps empty slots)
        modifiers: Colon / at-sign flags
        letter: Directive character as written (lookup is case-insensitive)
        position: Offset of the introducing tilde in the control string

    Example:
        For "~10,,'_:D" at position 0:
        DirectiveHeader(
            params=(Number(10), MISSING, Char("_")),
            modifiers=Modifiers(colon=True, at=False),
            letter="D",
            position=0
        )
    """
    params: Tuple[Parameter, ...]
    modifiers: Modifiers
    letter: str
    position: int
