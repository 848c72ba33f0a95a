from .discounts import (  # noqa
    FIXED_PRICE,
    PERCENTAGE_DISCOUNT,
    PRICE_DISCOUNT,
    calc_tier_price,
    discount_calculators,
    round_percent,
)
