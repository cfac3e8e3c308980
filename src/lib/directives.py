"""
Directive registry for clformat

Maps each directive character to a DirectiveSpec holding its metadata and
the builder that turns a decoded DirectiveHeader into a tree node.  Block
and delimiter characters are registered without a builder; the parser
assembles those itself because they span several tokens.
"""

from typing import Dict, Iterable, List, Optional

from ..config import appsettings
from ..models.directives import (
    Break,
    DebugValue,
    Decimal,
    DirectiveCategory,
    DirectiveSpec,
    DisplayValue,
    Float,
    Literal,
    Newline,
    Skip,
)
from ..models.parser import Char, DirectiveHeader, Missing, Number
from .errors import InvalidParameter, UnsupportedParameter


def number_get(
    header: DirectiveHeader, index: int, default: int, control: str = "", minimum: int = 0
) -> int:
    """
    Read a numeric parameter slot

    Args:
        header: Decoded directive prefix
        index: Parameter slot
        default: Value used when the slot is absent or empty
        control: Control string, for error context
        minimum: Smallest accepted value

    Raises:
        InvalidParameter: If the slot holds a character or is below minimum
    """
    if index >= len(header.params):
        return default
    param = header.params[index]
    if isinstance(param, Missing):
        return default
    if not isinstance(param, Number):
        raise InvalidParameter(
            f"~{header.letter} parameter {index} must be a number", control, header.position
        )
    if param.value < minimum:
        raise InvalidParameter(
            f"~{header.letter} parameter {index} must be at least {minimum}, got {param.value}",
            control,
            header.position,
        )
    return param.value


def char_get(header: DirectiveHeader, index: int, default: str, control: str = "") -> str:
    """
    Read a character parameter slot

    Raises:
        InvalidParameter: If the slot holds a number
    """
    if index >= len(header.params):
        return default
    param = header.params[index]
    if isinstance(param, Missing):
        return default
    if not isinstance(param, Char):
        raise InvalidParameter(
            f"~{header.letter} parameter {index} must be a quoted character",
            control,
            header.position,
        )
    return param.value


def slots_requireEmpty(header: DirectiveHeader, indices: Iterable[int], control: str = "") -> None:
    """
    Reject values in reserved parameter slots

    Raises:
        UnsupportedParameter: If any of the given slots is non-empty
    """
    for index in indices:
        if index < len(header.params) and not isinstance(header.params[index], Missing):
            raise UnsupportedParameter(
                f"~{header.letter} parameter {index} is not supported",
                control,
                header.position,
            )


class DirectiveRegistry:
    """
    Registry of directive specifications and builders

    Maps directive characters to DirectiveSpec objects containing metadata
    and node builders.
    """

    def __init__(self) -> None:
        """Initialize the directive registry and register all built-in directives"""
        self.specs: Dict[str, DirectiveSpec] = {}
        self.printingDirectives_register()
        self.numericDirectives_register()
        self.layoutDirectives_register()
        self.controlDirectives_register()
        self.blockDirectives_register()

    def register(self, spec: DirectiveSpec) -> None:
        """Register a directive specification"""
        self.specs[spec.letter] = spec

    def get(self, char: str) -> Optional[DirectiveSpec]:
        """
        Get directive specification by character

        Letters are looked up case-insensitively.

        Args:
            char: Directive character following parameters and modifiers

        Returns:
            DirectiveSpec or None if the character is not a directive
        """
        return self.specs.get(char.upper())

    def directives_listByCategory(self, category: DirectiveCategory) -> List[DirectiveSpec]:
        """Get all directives in a category"""
        return [spec for spec in self.specs.values() if spec.category == category]

    def printingDirectives_register(self) -> None:
        """Register ~A and ~S"""
        self.register(DirectiveSpec(
            letter='A',
            category=DirectiveCategory.PRINTING,
            description="Print the next argument with str()",
            builder=lambda header, control: DisplayValue(),
            examples=["Hello, ~A!"],
        ))
        self.register(DirectiveSpec(
            letter='S',
            category=DirectiveCategory.PRINTING,
            description="Print the next argument with repr()",
            builder=lambda header, control: DebugValue(),
            examples=["value=~S"],
        ))

    def numericDirectives_register(self) -> None:
        """Register ~D and ~F"""

        def decimal_build(header: DirectiveHeader, control: str) -> Decimal:
            """Handle ~mincol,padchar,commachar,comma-interval:@D"""
            return Decimal(
                min_columns=number_get(header, 0, 0, control),
                pad_char=char_get(header, 1, appsettings.decimal_pad_char, control),
                comma_char=char_get(header, 2, appsettings.decimal_comma_char, control),
                comma_interval=number_get(
                    header, 3, appsettings.decimal_comma_interval, control, minimum=1
                ),
                print_commas=header.modifiers.colon,
                print_sign=header.modifiers.at,
            )

        def float_build(header: DirectiveHeader, control: str) -> Float:
            """Handle ~width,places,,,padcharF; slots 2 and 3 are reserved"""
            slots_requireEmpty(header, (2, 3), control)
            return Float(
                width=number_get(header, 0, 0, control),
                num_decimal_places=number_get(header, 1, 0, control),
                pad_char=char_get(header, 4, appsettings.float_pad_char, control),
            )

        self.register(DirectiveSpec(
            letter='D',
            category=DirectiveCategory.NUMERIC,
            description="Print an integer in decimal; ':' groups digits, '@' forces a sign",
            builder=decimal_build,
            max_params=4,
            examples=["~D", "~:D", "~10,'_:D", "~,,'.,4:D"],
        ))
        self.register(DirectiveSpec(
            letter='F',
            category=DirectiveCategory.NUMERIC,
            description="Print a real number in fixed-point notation",
            builder=float_build,
            max_params=5,
            examples=["~F", "~8,2F", "~8,2,,,'*F"],
        ))

    def layoutDirectives_register(self) -> None:
        """Register ~% and ~~"""
        self.register(DirectiveSpec(
            letter='%',
            category=DirectiveCategory.LAYOUT,
            description="Write the line terminator",
            builder=lambda header, control: Newline(),
            examples=["first~%second"],
        ))
        self.register(DirectiveSpec(
            letter='~',
            category=DirectiveCategory.LAYOUT,
            description="Write a literal tilde",
            builder=lambda header, control: Literal("~"),
            examples=["100~~"],
        ))

    def controlDirectives_register(self) -> None:
        """Register ~* and ~^"""
        self.register(DirectiveSpec(
            letter='*',
            category=DirectiveCategory.CONTROL,
            description="Consume the next argument without printing it",
            builder=lambda header, control: Skip(),
            examples=["~{~A~*~^, ~}"],
        ))
        self.register(DirectiveSpec(
            letter='^',
            category=DirectiveCategory.CONTROL,
            description="Leave the enclosing iteration when no elements remain",
            builder=lambda header, control: Break(),
            examples=["~{~A~^, ~}"],
        ))

    def blockDirectives_register(self) -> None:
        """Register block openers and their delimiters (parsed by Parser)"""
        self.register(DirectiveSpec(
            letter='<',
            category=DirectiveCategory.BLOCK,
            description="Justify the enclosed text; ':' right, ':@' centre",
            max_params=4,
            examples=["~13:@<~A~>", "~13,0,0,'-<~A~>"],
        ))
        self.register(DirectiveSpec(
            letter='{',
            category=DirectiveCategory.BLOCK,
            description="Iterate the enclosed directives over a sequence argument",
            examples=["~{~A~^, ~}"],
        ))
        self.register(DirectiveSpec(
            letter='[',
            category=DirectiveCategory.BLOCK,
            description="Select a clause by index; ':' by boolean, '@' if truthy",
            max_params=1,
            examples=["~[zero~;one~:;many~]", "~:[no~;yes~]", "~@[~A~]"],
        ))
        for letter, description in (
            ('>', "End of ~<"),
            ('}', "End of ~{"),
            (']', "End of ~["),
            (';', "Clause separator inside ~["),
        ):
            self.register(DirectiveSpec(
                letter=letter,
                category=DirectiveCategory.DELIMITER,
                description=description,
            ))
