"""
Front end: parse-once Formatter objects and the format() entry point

format() chooses the sink the way Common Lisp FORMAT chooses its
destination:

    None   render into a new string and return it
    True   write to sys.stdout
    other  any object with write(str), appended to in place
"""

import io
import sys
from typing import Any, Optional, Union

from ..models.directives import DirectiveList
from .arguments import ArgumentCursor
from .engine import Renderer
from .parser import Parser


class Formatter:
    """
    A control string parsed once and rendered on demand

    Example:
        >>> money = Formatter("~10,'_:D")
        >>> money(None, -4200)
        '____-4,200'
    """

    def __init__(self, control: Union[str, DirectiveList], renderer: Optional[Renderer] = None) -> None:
        """
        Args:
            control: Control string, or an already parsed directive tree
            renderer: Renderer to use; a default one is created if omitted
        """
        if isinstance(control, str):
            self.control: Optional[str] = control
            self.directives = Parser(control).parse()
        elif isinstance(control, tuple):
            self.control = None
            self.directives = control
        else:
            raise TypeError(
                f"control must be a str or a parsed directive tree, got {type(control).__name__}"
            )
        self.renderer = renderer or Renderer()

    def __repr__(self) -> str:
        if self.control is not None:
            return f"Formatter({self.control!r})"
        return f"Formatter(<{len(self.directives)} directives>)"

    def __call__(self, destination: Any, *args: Any) -> Optional[str]:
        """
        Render into destination (see module docstring)

        Returns:
            The rendered string when destination is None, otherwise None
        """
        if destination is None:
            stream = io.StringIO()
            try:
                self.renderer.render(self.directives, ArgumentCursor(args), stream)
                return stream.getvalue()
            finally:
                stream.close()

        stream = sys.stdout if destination is True else destination
        self.renderer.render(self.directives, ArgumentCursor(args), stream)
        return None


def format(destination: Any, control: Union[str, DirectiveList, Formatter], *args: Any) -> Optional[str]:
    """
    Format arguments according to a control string

    Args:
        destination: None for a new string, True for stdout, or a writable
        control: Control string, parsed tree, or Formatter
        *args: Values consumed by the directives

    Returns:
        The rendered string when destination is None, otherwise None

    Example:
        >>> format(None, "~{~A~^, ~}", ["ook", "onk", "nork"])
        'ook, onk, nork'
    """
    formatter = control if isinstance(control, Formatter) else Formatter(control)
    return formatter(destination, *args)
