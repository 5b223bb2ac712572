"""
Value-change percentage of a book: how far its market value has moved from
what was paid for it.

The rounding rule is part of the public contract. The server applies it when
serializing a book and the client applies it for live previews, so both use
this single function.
"""

import math
from decimal import Context, Decimal, ROUND_HALF_UP

OUT_OF_RANGE_MESSAGE = "Market value is out of range for this purchase price"

_TWO_PLACES = Decimal("0.01")
# wide enough for the integer digits of any finite float plus two decimals
_ROUNDING_CONTEXT = Context(prec=400)


def round2(value: float) -> float:
    """Round half away from zero to two decimals, working on the shortest decimal repr of `value`."""
    return float(Decimal(repr(value)).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP, context=_ROUNDING_CONTEXT))


def _raw_change(purchase_price: float, market_value: float) -> float:
    return (market_value - purchase_price) / purchase_price * 100


def has_finite_value_change(purchase_price: float, market_value: float) -> bool:
    """True when the percentage of this price pair is a finite number."""
    if purchase_price == 0:
        return True
    try:
        return math.isfinite(_raw_change(purchase_price, market_value))
    except OverflowError:
        return False


def value_change_percentage(purchase_price: float, market_value: float) -> float:
    """
    Computes the percentage change from purchase price to market value.

    Args:
        purchase_price (float): Price paid for the book (>= 0).
        market_value (float): Current market value of the book (>= 0).

    Returns:
        float: Percentage rounded to 2 decimals, or exactly 0 when nothing was
        paid or when the pair has no finite percentage.
    """
    if not purchase_price or not has_finite_value_change(purchase_price, market_value):
        return 0.0
    result = round2(_raw_change(purchase_price, market_value))
    # avoid -0.0 leaking into JSON
    return result + 0.0
