"""
Custom Pygments lexer for control-string syntax highlighting

Used by the CLI to echo control strings in colour and by anything else that
wants to display a control string readably.

Token types:
- Text: Literal text between directives
- Punctuation: The introducing tilde, parameter commas, block delimiters
- Number.Integer: Numeric parameters
- String.Char: Quoted character parameters
- Name.Decorator: ':' and '@' modifiers
- Name.Function: Printing and numeric directives (A S D F)
- Keyword: Block directives (< { [) and control directives (* ^)
- String.Escape: ~% and ~~
"""

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexer import RegexLexer
from pygments.token import (
    Text,
    Punctuation,
    Name,
    String,
    Keyword,
    Number,
    Error,
)


class ControlStringLexer(RegexLexer):
    """
    Lexer for FORMAT control strings

    Example:
        ~10,'_:D

    Tokens:
        ~    → Punctuation
        10   → Number.Integer
        ,    → Punctuation
        '_   → String.Char
        :    → Name.Decorator
        D    → Name.Function
    """

    name = 'FORMAT control string'
    aliases = ['clformat', 'control-string']
    filenames = []

    tokens = {
        'root': [
            # Literal tilde
            (r'~~', String.Escape),

            # Directive introducer; parameters follow
            (r'~', Punctuation, 'directive'),

            # Everything up to the next tilde is literal text
            (r'[^~]+', Text),
        ],

        'directive': [
            (r'[+-]?\d+', Number.Integer),
            (r"'.", String.Char),
            (r',', Punctuation),
            (r'[:@]+', Name.Decorator),

            (r'[AaSsDdFf]', Name.Function, '#pop'),
            (r'%', String.Escape, '#pop'),
            (r'[<{\[*^]', Keyword, '#pop'),
            (r'[>}\];]', Punctuation, '#pop'),

            # Anything else is not a directive the parser accepts
            (r'.', Error, '#pop'),
        ],
    }


def get_lexer() -> ControlStringLexer:
    """
    Get the ControlStringLexer instance

    Returns:
        ControlStringLexer instance ready for use with Pygments
    """
    return ControlStringLexer()


def control_highlight(control: str) -> str:
    """
    Highlight a control string with ANSI colours for terminal display

    Args:
        control: Control string (need not be valid)

    Returns:
        The control string wrapped in terminal escape sequences
    """
    return highlight(control, get_lexer(), TerminalFormatter()).rstrip("\n")
