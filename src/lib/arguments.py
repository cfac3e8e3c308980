"""
Argument cursor for the execution engine

The cursor walks a tuple of caller-supplied values front to back.  Values
are never revisited except through copy(), which alignment uses to measure
its body without advancing the real cursor.

Sequence arguments (for ~{) are turned into tuples the first time they are
popped.  The resulting tuples live in a table shared by a cursor, its copies
and the cursors made from its sequences, so an iterator that can only be
walked once yields the same elements to the measuring pass and the real one.
"""

from typing import Any, Dict, Iterable, Optional, Tuple


class ArgumentCursor:
    """
    Index-based, consume-once view over format arguments

    Copies share the underlying tuple and differ only in their index, so
    copying is cheap and a copy observes exactly the values the original
    would observe next.

    Example:
        >>> args = ArgumentCursor([1, 2])
        >>> args.pop()
        1
        >>> ahead = args.copy()
        >>> ahead.pop(), args.pop()
        (2, 2)
    """

    def __init__(
        self,
        values: Iterable[Any],
        start: int = 0,
        sequences: Optional[Dict[int, Tuple[Any, ...]]] = None,
    ) -> None:
        self.values: Tuple[Any, ...] = values if isinstance(values, tuple) else tuple(values)
        self.index = start
        # id(argument) -> its elements; argument objects stay alive in values
        self.sequences: Dict[int, Tuple[Any, ...]] = {} if sequences is None else sequences

    def __len__(self) -> int:
        return len(self.values)

    def __repr__(self) -> str:
        return f"ArgumentCursor(index={self.index}, remaining={self.remaining})"

    @property
    def remaining(self) -> int:
        return len(self.values) - self.index

    def has_next(self) -> bool:
        """True if at least one value is still pending"""
        return self.index < len(self.values)

    def peek(self) -> Any:
        """
        Return the next value without consuming it

        Raises:
            IndexError: If the cursor is exhausted
        """
        if not self.has_next():
            raise IndexError("argument cursor exhausted")
        return self.values[self.index]

    def pop(self) -> Any:
        """
        Consume and return the next value

        Raises:
            IndexError: If the cursor is exhausted
        """
        value = self.peek()
        self.index += 1
        return value

    def sequence_pop(self) -> "ArgumentCursor":
        """
        Consume the next value and return a cursor over its elements

        The elements are collected once per argument object; later pops of
        the same object, from this cursor or a copy, reuse them.

        Raises:
            IndexError: If the cursor is exhausted
            TypeError: If the value is not iterable
        """
        value = self.peek()
        key = id(value)
        if key not in self.sequences:
            self.sequences[key] = tuple(value)
        self.index += 1
        return ArgumentCursor(self.sequences[key], sequences=self.sequences)

    def copy(self) -> "ArgumentCursor":
        """Independent cursor positioned at the same pending value"""
        return ArgumentCursor(self.values, self.index, self.sequences)
