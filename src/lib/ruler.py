"""
Length-only output sink

Used by the alignment directive to measure its body before rendering it.
"""


class Ruler:
    """
    Sink that counts written characters and discards the text

    Behaves like a text stream for write(); length is in code points, the
    same unit used for every column count in clformat.

    Example:
        >>> ruler = Ruler()
        >>> ruler.write("zog")
        3
        >>> ruler.length
        3
    """

    def __init__(self) -> None:
        self.length = 0

    def write(self, text: str) -> int:
        count = len(text)
        self.length += count
        return count

    def flush(self) -> None:
        pass
