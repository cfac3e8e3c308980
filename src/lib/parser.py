"""
Parser for ~directive control strings

Transforms a Common-Lisp-FORMAT-style control string into an immutable
directive tree.

The grammar is a sequence of segments.  A segment is literal text, a
single-character directive (~[params][:@]X) or a block (~<...~>, ~{...~},
~[...~;...~]) whose body is itself a sequence of segments.  Blocks are
parsed by recursive descent; the characters that close or separate a block
come back to the caller that opened it.

Key features:
- Positional parameters: numbers, quoted characters, empty slots
- Colon / at-sign modifiers
- Unterminated blocks are closed implicitly at end of input
- All errors carry the offending offset and a caret-marked excerpt

Example:
    >>> tree = Parser("~{~A~^, ~}").parse()
    >>> tree[0]
    Iteration(inner=(DisplayValue(), Break(), Literal(text=', ')))
"""

from string import digits
from typing import List, Optional, Set, Tuple

from ..config import appsettings
from ..models.directives import (
    Align,
    Alignment,
    Conditional,
    Directive,
    DirectiveCategory,
    DirectiveList,
    Iteration,
    Literal,
)
from ..models.parser import Char, DirectiveHeader, MISSING, Modifiers, Number, Parameter
from .directives import DirectiveRegistry, char_get, number_get
from .errors import (
    BreakOutsideLoop,
    InvalidDirective,
    InvalidParameter,
    MalformedConditional,
    UnterminatedDirective,
)
from .log import LOG


class Parser:
    """
    Recursive-descent parser for control strings

    A Parser instance walks one control string; parse() may be called more
    than once and always produces an equal tree.
    """

    def __init__(self, source: str, registry: Optional[DirectiveRegistry] = None):
        """
        Initialize parser with a control string

        Args:
            source: Control string to parse
            registry: Optional DirectiveRegistry; the built-in one is used
                      when not given

        Attributes:
            source: Control string being parsed
            position: Current character offset in source
            loop_depth: Number of enclosing ~{ bodies at position
            registry: DirectiveRegistry used to resolve directive characters
        """
        if not isinstance(source, str):
            raise TypeError(f"control string must be a str, got {type(source).__name__}")
        self.source = source
        self.position = 0
        self.loop_depth = 0

        if registry is None:
            registry = DirectiveRegistry()
        self.registry = registry

    def parse(self) -> DirectiveList:
        """
        Parse the control string into a directive tree

        Returns:
            Tuple of top-level directives.  An empty control string gives
            an empty tuple.

        Raises:
            ParseError: If the control string is malformed (see errors.py)

        Example:
            >>> Parser("Hello, ~A!").parse()
            (Literal(text='Hello, '), DisplayValue(), Literal(text='!'))
        """
        self.position = 0
        self.loop_depth = 0

        directives, _ = self.segments_parse(set())
        LOG(f"Parsed {len(directives)} top-level directives from {self.source!r}", level=3)
        return tuple(directives)

    def segments_parse(self, closers: Set[str]) -> Tuple[List[Directive], Optional[DirectiveHeader]]:
        """
        Parse segments until a closing delimiter or end of input

        Args:
            closers: Delimiter characters that end the current block

        Returns:
            (directives, closer) where closer is the header of the delimiter
            that ended the run, or None at end of input

        Raises:
            InvalidDirective: On a delimiter that does not belong here
        """
        directives: List[Directive] = []

        while self.position < len(self.source):
            if self.source[self.position] != '~':
                directives.append(self.literal_parse())
                continue

            header = self.header_parse()
            spec = self.registry.get(header.letter)
            if spec is None:
                raise InvalidDirective(header.letter, self.source, header.position)

            if spec.category == DirectiveCategory.DELIMITER:
                if header.letter not in closers:
                    raise InvalidDirective(header.letter, self.source, header.position)
                self.delimiter_check(header)
                return directives, header

            if len(header.params) > spec.max_params:
                raise InvalidParameter(
                    f"~{header.letter} accepts at most {spec.max_params} parameter(s)",
                    self.source,
                    header.position,
                )

            if spec.category == DirectiveCategory.BLOCK:
                directives.append(self.block_parse(header))
                continue

            if header.letter == '^' and self.loop_depth == 0:
                raise BreakOutsideLoop(self.source, header.position)

            directives.append(spec.builder(header, self.source))

        return directives, None

    def literal_parse(self) -> Literal:
        """Consume the maximal run of text up to the next tilde"""
        end = self.source.find('~', self.position)
        if end == -1:
            end = len(self.source)
        text = self.source[self.position:end]
        self.position = end
        return Literal(text)

    def header_parse(self) -> DirectiveHeader:
        """
        Decode ~[params][modifiers]X starting at the tilde under position

        Raises:
            UnterminatedDirective: If input ends before the directive character
        """
        start = self.position
        self.position += 1

        params = self.params_parse(start)
        modifiers = self.modifiers_parse()

        if self.position >= len(self.source):
            raise UnterminatedDirective(self.source, start)

        letter = self.source[self.position]
        self.position += 1
        return DirectiveHeader(
            params=tuple(params),
            modifiers=modifiers,
            letter=letter,
            position=start,
        )

    def params_parse(self, start: int) -> List[Parameter]:
        """
        Decode the comma-separated parameter list

        Each slot is an optionally signed integer, a quote followed by one
        character, or nothing.  Empty slots are kept as MISSING so later
        slots keep their index.

        Args:
            start: Offset of the directive's tilde, for error context

        Returns:
            Parameters in slot order

        Example:
            "~,,'.,4:D" -> [MISSING, MISSING, Char('.'), Number(4)]
        """
        params: List[Parameter] = []
        source = self.source

        while self.position < len(source):
            char = source[self.position]

            if char == ',':
                params.append(MISSING)
                self.position += 1
                continue

            if char in digits or char in '+-':
                mark = self.position
                self.position += 1
                while self.position < len(source) and source[self.position] in digits:
                    self.position += 1
                text = source[mark:self.position]
                if text in ('+', '-'):
                    raise InvalidParameter(f"Expected digits after '{text}'", source, mark)
                params.append(Number(int(text)))
            elif char == "'":
                if self.position + 1 >= len(source):
                    raise UnterminatedDirective(source, start)
                params.append(Char(source[self.position + 1]))
                self.position += 2
            else:
                break

            if self.position < len(source) and source[self.position] == ',':
                self.position += 1
                continue
            break

        return params

    def modifiers_parse(self) -> Modifiers:
        """Consume any ':' and '@' flags, in either order"""
        colon = at = False
        while self.position < len(self.source) and self.source[self.position] in ':@':
            if self.source[self.position] == ':':
                colon = True
            else:
                at = True
            self.position += 1
        return Modifiers(colon=colon, at=at)

    def delimiter_check(self, header: DirectiveHeader) -> None:
        """
        Delimiters take no parameters; only ~; may carry a colon (~:;)

        Raises:
            InvalidParameter: On parameters or unexpected modifiers
        """
        modifiers = header.modifiers
        if header.params or modifiers.at or (modifiers.colon and header.letter != ';'):
            raise InvalidParameter(
                f"~{header.letter} takes no parameters or modifiers",
                self.source,
                header.position,
            )

    def block_parse(self, header: DirectiveHeader) -> Directive:
        """Dispatch ~<, ~{ and ~[ to their block parsers"""
        if header.letter == '<':
            return self.alignment_parse(header)
        if header.letter == '{':
            return self.iteration_parse(header)
        return self.conditional_parse(header)

    def alignment_parse(self, header: DirectiveHeader) -> Align:
        """
        Parse ~mincol,colinc,minpad,padchar<...~>

        colinc and minpad are accepted for compatibility and ignored.
        Direction: ':@' centre, ':' right, otherwise left.
        """
        min_columns = number_get(header, 0, 0, self.source)
        pad_char = char_get(header, 3, appsettings.align_pad_char, self.source)

        modifiers = header.modifiers
        if modifiers.colon and modifiers.at:
            direction = Alignment.CENTRE
        elif modifiers.colon:
            direction = Alignment.RIGHT
        else:
            direction = Alignment.LEFT

        inner, _ = self.segments_parse({'>'})
        return Align(
            min_columns=min_columns,
            pad_char=pad_char,
            direction=direction,
            inner=tuple(inner),
        )

    def iteration_parse(self, header: DirectiveHeader) -> Iteration:
        """Parse ~{...~}; a missing ~} at end of input closes the body"""
        self.loop_depth += 1
        inner, _ = self.segments_parse({'}'})
        self.loop_depth -= 1
        return Iteration(inner=tuple(inner))

    def conditional_parse(self, header: DirectiveHeader) -> Conditional:
        """
        Parse ~[choice~;choice~:;default~]

        Forms:
            ~[   index form; any number of choices and an optional default
            ~:[  boolean form; exactly two choices
            ~@[  consuming form; exactly one choice

        Raises:
            MalformedConditional: If the clauses do not fit the form
        """
        boolean = header.modifiers.colon
        consumes = header.modifiers.at

        if boolean and consumes:
            raise MalformedConditional(
                "~:@[ is not a valid conditional; use ~:[ or ~@[", self.source, header.position
            )

        index = None
        if header.params:
            if boolean or consumes:
                raise MalformedConditional(
                    "a constant index is only allowed on ~[", self.source, header.position
                )
            index = number_get(header, 0, None, self.source)

        choices = []
        default = None
        in_default = False

        while True:
            body, closer = self.segments_parse({']', ';'})
            if in_default:
                if closer is not None and closer.letter == ';':
                    raise MalformedConditional(
                        "the ~:; default clause must be the last clause",
                        self.source,
                        closer.position,
                    )
                default = tuple(body)
                break
            choices.append(tuple(body))
            if closer is None or closer.letter == ']':
                break
            in_default = closer.modifiers.colon

        if boolean and (len(choices) != 2 or default is not None):
            raise MalformedConditional(
                "~:[ requires exactly two clauses and no default", self.source, header.position
            )
        if consumes and (len(choices) != 1 or default is not None):
            raise MalformedConditional(
                "~@[ requires exactly one clause and no default", self.source, header.position
            )

        return Conditional(
            boolean=boolean,
            consumes=consumes,
            choices=tuple(choices),
            default=default,
            index=index,
        )


def parse(control: str) -> DirectiveList:
    """
    Parse a control string into a directive tree

    Convenience wrapper around Parser(control).parse().

    Raises:
        ParseError: If the control string is malformed
    """
    return Parser(control).parse()
