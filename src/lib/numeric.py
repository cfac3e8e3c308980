"""
Numeric formatters for ~D and ~F

decimal_generate() produces the characters of a grouped integer lazily,
one at a time, so the engine can stream them into a sink without building
the string first.  float_format() is the plain fixed-point renderer.
"""

import decimal
import math
from fractions import Fraction
from numbers import Integral, Rational
from typing import Iterator, Tuple


def divisor_find(magnitude: int) -> Tuple[int, int]:
    """
    Find the largest power of ten not exceeding magnitude, and the digit count

    Args:
        magnitude: Non-negative integer

    Returns:
        (divisor, digits); zero is treated as one digit

    Example:
        >>> divisor_find(4200)
        (1000, 4)
        >>> divisor_find(0)
        (1, 1)
    """
    divisor = 1
    digits = 1
    while magnitude // divisor >= 10:
        divisor *= 10
        digits += 1
    return divisor, digits


def decimal_columns(
    digits: int,
    negative: bool,
    print_sign: bool,
    print_commas: bool,
    comma_interval: int,
) -> int:
    """Width of a formatted integer before padding: sign, digits and separators"""
    columns = digits
    if negative or print_sign:
        columns += 1
    if print_commas:
        columns += (digits - 1) // comma_interval
    return columns


def decimal_generate(
    number: int,
    min_columns: int = 0,
    pad_char: str = " ",
    comma_char: str = ",",
    comma_interval: int = 3,
    print_commas: bool = False,
    print_sign: bool = False,
) -> Iterator[str]:
    """
    Lazily yield the characters of a formatted integer

    Output order is: leading pad characters, the sign, then digits from the
    most significant end with comma_char before every digit that starts a
    new group.  Pad count already accounts for the sign and every separator.

    Args:
        number: Integer to format
        min_columns: Minimum total width
        pad_char: Character used for left padding
        comma_char: Group separator
        comma_interval: Digits per group, counted from the right
        print_commas: Insert separators
        print_sign: Print '+' for non-negative numbers

    Returns:
        Single-use iterator of one-character strings

    Raises:
        ValueError: If comma_interval is less than one

    Example:
        >>> "".join(decimal_generate(-4200, 10, "_", print_commas=True))
        '____-4,200'
    """
    if comma_interval < 1:
        raise ValueError(f"comma interval must be positive, got {comma_interval}")

    magnitude = abs(number)
    divisor, digits = divisor_find(magnitude)
    columns = decimal_columns(digits, number < 0, print_sign, print_commas, comma_interval)
    pad = max(0, min_columns - columns)

    def characters() -> Iterator[str]:
        for _ in range(pad):
            yield pad_char

        if number < 0:
            yield "-"
        elif print_sign:
            yield "+"

        remaining = digits
        current = divisor
        while current:
            # No separator before the very first digit
            if print_commas and remaining != digits and remaining % comma_interval == 0:
                yield comma_char
            yield str(magnitude // current % 10)
            current //= 10
            remaining -= 1

    return characters()


def natural_format(value) -> str:
    """
    Shortest fixed-point text for a number, never in exponent notation

    Floats keep the digits of their shortest round-trip repr().  Values that
    are neither integers, floats nor decimal.Decimal go through float().

    Example:
        >>> natural_format(1e16)
        '10000000000000000'
        >>> natural_format(1e-7)
        '0.0000001'
    """
    if isinstance(value, Integral):
        return str(int(value))
    if not isinstance(value, decimal.Decimal):
        value = float(value)
        if not math.isfinite(value):
            return str(value)
        value = decimal.Decimal(repr(value))
    if not value.is_finite():
        return str(value)
    return format(value, "f")


def fixed_format(value, num_decimal_places: int) -> str:
    """
    Round value to num_decimal_places and write it in fixed-point notation

    Fractions are rounded exactly (half to even) rather than through float.
    """
    if isinstance(value, Rational) and not isinstance(value, Integral):
        scaled = round(Fraction(value.numerator, value.denominator) * 10 ** num_decimal_places)
        sign = "-" if scaled < 0 else ""
        digits = str(abs(scaled)).rjust(num_decimal_places + 1, "0")
        return f"{sign}{digits[:-num_decimal_places]}.{digits[-num_decimal_places:]}"
    return format(value, f".{num_decimal_places}f")


def float_format(value, width: int = 0, num_decimal_places: int = 0, pad_char: str = " ") -> str:
    """
    Render a real number in fixed-point notation

    Zero in either field means no constraint: num_decimal_places=0 keeps the
    natural form and width=0 adds no padding.

    Example:
        >>> float_format(3.14159, 8, 2, "*")
        '****3.14'
        >>> float_format(2.5)
        '2.5'
    """
    if num_decimal_places:
        text = fixed_format(value, num_decimal_places)
    else:
        text = natural_format(value)
    return text.rjust(width, pad_char)
