from __future__ import annotations

from typing import Any, Callable, Optional

from pricing_table.core.logging_config import logger
from pricing_table.domain.models import Product, to_decimal

# Optional min/max-quantities integration: product -> cap (0/None = not set)
MaxQuantityResolver = Callable[[Product], Optional[int]]

MAX_QTY_META = "maximum_allowed_quantity"
VARIATION_MAX_QTY_META = "variation_maximum_allowed_quantity"


def absint(v: Any) -> int:
    d = to_decimal(v)
    if d is None:
        return 0
    return abs(int(d))


def resolve_max_order_quantity(
    product: Product, resolver: Optional[MaxQuantityResolver] = None
) -> int:
    """
    Maximum order quantity for a product, 0 = unbounded.

    resolver -> product meta -> (variations) variation meta -> 0
    A missing resolver, a resolver returning None and a failing resolver are
    treated the same.
    """
    if resolver is not None:
        try:
            resolved = resolver(product)
        except Exception as e:
            logger.warning(
                "max_quantity_resolver_failed", product_id=product.id, error=repr(e)
            )
        else:
            if resolved is not None:
                return absint(resolved)

    max_qty = absint(product.get_meta(MAX_QTY_META))

    if max_qty == 0 and product.is_variation:
        max_qty = absint(product.get_meta(VARIATION_MAX_QTY_META))

    return max_qty
