"""
Directive tree and directive specification models

Defines the immutable nodes a control string is parsed into, plus the
metadata the registry keeps for each directive character.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple, Union


class DirectiveCategory(Enum):
    """
    Categories of control-string directives

    Used for organization, documentation generation, and parser dispatch.
    """
    PRINTING = "printing"      # ~A, ~S
    NUMERIC = "numeric"        # ~D, ~F
    LAYOUT = "layout"          # ~%, ~~
    CONTROL = "control"        # ~*, ~^
    BLOCK = "block"            # ~<, ~{, ~[
    DELIMITER = "delimiter"    # ~>, ~}, ~], ~;


class Alignment(Enum):
    """Justification direction of an ~< block"""
    LEFT = "left"
    RIGHT = "right"
    CENTRE = "centre"


@dataclass(frozen=True)
class Literal:
    """Text copied to the output verbatim"""
    text: str


@dataclass(frozen=True)
class DisplayValue:
    """~A - writes str() of the next argument"""


@dataclass(frozen=True)
class DebugValue:
    """~S - writes repr() of the next argument"""


@dataclass(frozen=True)
class Skip:
    """~* - consumes the next argument without output"""


@dataclass(frozen=True)
class Newline:
    """~% - writes the line terminator"""


@dataclass(frozen=True)
class Break:
    """~^ - leaves the enclosing iteration once its elements are exhausted"""


@dataclass(frozen=True)
class Decimal:
    """
    ~D - integer with optional padding, grouping and forced sign

    Attributes:
        min_columns: Minimum output width; shorter output is left-padded
        pad_char: Character used for padding
        comma_char: Group separator
        comma_interval: Digits per group, counted from the right
        print_commas: Grouping enabled (':' modifier)
        print_sign: '+' printed for non-negative values ('@' modifier)
    """
    min_columns: int = 0
    pad_char: str = " "
    comma_char: str = ","
    comma_interval: int = 3
    print_commas: bool = False
    print_sign: bool = False


@dataclass(frozen=True)
class Float:
    """
    ~F - fixed-point real number

    Attributes:
        width: Minimum output width (0 means no padding)
        num_decimal_places: Digits after the point (0 means natural str())
        pad_char: Character used for left padding
    """
    width: int = 0
    num_decimal_places: int = 0
    pad_char: str = " "


@dataclass(frozen=True)
class Align:
    """
    ~<...~> - pads the rendered body out to min_columns

    The body is rendered twice: once against a Ruler to measure it, then for
    real with padding placed according to direction.
    """
    min_columns: int
    pad_char: str
    direction: Alignment
    inner: Tuple["Directive", ...]


@dataclass(frozen=True)
class Iteration:
    """~{...~} - runs inner once per element of a sequence argument"""
    inner: Tuple["Directive", ...]


@dataclass(frozen=True)
class Conditional:
    """
    ~[...~] - selects one of several clauses

    Attributes:
        boolean: ~:[ form, two choices selected by a bool argument
        consumes: ~@[ form, one choice entered when the argument is truthy
        choices: Clause bodies in order
        default: Body after ~:; (index form only)
        index: Constant selector from the first parameter, if given
    """
    boolean: bool
    consumes: bool
    choices: Tuple[Tuple["Directive", ...], ...]
    default: Optional[Tuple["Directive", ...]] = None
    index: Optional[int] = None


Directive = Union[
    Literal,
    DisplayValue,
    DebugValue,
    Skip,
    Newline,
    Break,
    Decimal,
    Float,
    Align,
    Iteration,
    Conditional,
]

DirectiveList = Tuple[Directive, ...]


@dataclass
class DirectiveSpec:
    """
    Specification for a control-string directive

    Defines metadata and the node builder for a directive character.
    Used by DirectiveRegistry to manage available directives.

    Attributes:
        letter: Directive character (upper case for letters)
        category: Category for organization and parser dispatch
        description: Human-readable description
        builder: Function (DirectiveHeader, control) -> Directive, None for block
                 and delimiter characters that the parser handles itself
        max_params: Number of parameter slots accepted
        examples: Example control strings
    """
    letter: str
    category: DirectiveCategory
    description: str
    builder: Optional[Callable] = None
    max_params: int = 0
    examples: List[str] = field(default_factory=list)
