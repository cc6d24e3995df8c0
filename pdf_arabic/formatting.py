"""Numbers, percentages and currency as left-to-right islands.

Each value is rendered with Latin digits and en-US grouping, then wrapped in
an LRI/PDI isolate so its digits keep their order inside right-to-left text.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Union

from pdf_arabic.shaping.isolates import wrap_ltr, wrap_rtl

Number = Union[int, float, Decimal, str, None]

EGP_LABEL = "ج.م"

MAX_FRACTION_DIGITS = 20


def _to_decimal(value: Number) -> Decimal:
    if value is None or value == "":
        return Decimal(0)
    if isinstance(value, Decimal):
        number = value
    elif isinstance(value, int):
        number = Decimal(value)
    elif isinstance(value, float):
        if not math.isfinite(value):
            return Decimal(0)
        number = Decimal(value)
    else:
        try:
            number = Decimal(str(value).strip())
        except ArithmeticError:
            return Decimal(0)
    if not number.is_finite():
        return Decimal(0)
    return number


def format_number(value: Number, fraction_digits: int = 2) -> str:
    """Format ``value`` as ``1,234.50`` without any direction marks.

    Rounds half away from zero on the exact value. ``None``, empty strings
    and non-finite values format as zero.
    """
    if not 0 <= fraction_digits <= MAX_FRACTION_DIGITS:
        raise ValueError(
            f"fraction_digits must be between 0 and {MAX_FRACTION_DIGITS}, "
            f"got {fraction_digits}"
        )
    number = _to_decimal(value)
    with localcontext() as ctx:
        ctx.prec = max(28, number.adjusted() + fraction_digits + 2)
        quantum = Decimal(1).scaleb(-fraction_digits)
        rounded = number.quantize(quantum, rounding=ROUND_HALF_UP)
    if rounded.is_zero():
        rounded = abs(rounded)
    return f"{rounded:,.{fraction_digits}f}"


def fmt_number_ltr(value: Number, fraction_digits: int = 2) -> str:
    return wrap_ltr(format_number(value, fraction_digits))


def fmt_percent_ltr(value: Number, fraction_digits: int = 1) -> str:
    return wrap_ltr(f"{format_number(value, fraction_digits)}%")


def fmt_currency_mix_egp(
    value: Number, fraction_digits: int = 2, label: str = EGP_LABEL
) -> str:
    """Amount as an LTR isolate followed by the currency label as an RTL isolate.

    The two isolates are siblings separated by one space, e.g.
    ``LRI 100.00 PDI + " " + RLI ج.م PDI``.
    """
    return f"{fmt_number_ltr(value, fraction_digits)} {wrap_rtl(label)}"
