from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, Dict, Tuple

D = Decimal

PERCENTAGE_DISCOUNT = "percentage_discount"
FIXED_PRICE = "fixed_price"
PRICE_DISCOUNT = "price_discount"

# (base_price, amount, pieces_per_carton) -> (discount_pct, unit_price)
DiscountCalculator = Callable[[D, D, int], Tuple[D, D]]


def round_percent(value: D) -> D:
    """Whole percent, half away from zero."""
    return value.quantize(D("1"), rounding=ROUND_HALF_UP)


def calc_percentage_discount(base_price: D, amount: D, pieces: int) -> Tuple[D, D]:
    """
    amount = percentage off the carton price; shown as given.
    """
    discounted = base_price - (base_price * amount / D("100"))
    return amount, discounted / D(pieces)


def calc_fixed_price(base_price: D, amount: D, pieces: int) -> Tuple[D, D]:
    """
    amount = new carton price.
    """
    if base_price <= 0:
        pct = D("0")
    else:
        pct = round_percent((base_price - amount) / base_price * D("100"))
    return pct, amount / D(pieces)


def calc_price_discount(base_price: D, amount: D, pieces: int) -> Tuple[D, D]:
    """
    amount = money off the carton price.
    """
    if base_price <= 0:
        pct = D("0")
    else:
        pct = round_percent(amount / base_price * D("100"))
    return pct, (base_price - amount) / D(pieces)


discount_calculators: Dict[str, DiscountCalculator] = {
    PERCENTAGE_DISCOUNT: calc_percentage_discount,
    FIXED_PRICE: calc_fixed_price,
    PRICE_DISCOUNT: calc_price_discount,
}


def calc_tier_price(tier_type: str, base_price: D, amount: D, pieces: int) -> Tuple[D, D]:
    try:
        calc = discount_calculators[tier_type]
    except KeyError:
        raise KeyError(
            f"Unknown tier type '{tier_type}'. Known: {sorted(discount_calculators.keys())}"
        )
    return calc(base_price, amount, max(int(pieces), 1))
