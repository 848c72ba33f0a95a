from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from pricing_table.i18n import ntranslate, translate
from pricing_table.web.formatting import format_number, format_plain

OPEN_ENDED_THRESHOLD = 1_000_000


@dataclass(frozen=True)
class QuantityLabels:
    cartons: str
    units: str


def _units(n: int, thousand_sep: str) -> str:
    return format_number(n, 0, thousand_sep=thousand_sep)


def format_quantity_labels(
    from_qty: int,
    to_qty: Optional[int],
    from_units: int,
    to_units: Optional[int],
    max_order: int = 0,
    *,
    lang: Optional[str] = None,
    thousand_sep: str = ".",
    open_ended_threshold: int = OPEN_ENDED_THRESHOLD,
) -> QuantityLabels:
    """
    Human-readable carton + unit labels for one tier.

    - no `to` (or to == from): single quantity, singular/plural per count
    - `to` reaches the max order quantity, or is absurdly large: "From N+"
    - otherwise: "From N to T"
    """
    if not to_qty or to_qty == from_qty:
        return QuantityLabels(
            cartons=ntranslate("qty.cartons", from_qty, lang, n=from_qty),
            units=ntranslate("qty.units", from_units, lang, n=_units(from_units, thousand_sep)),
        )

    if (max_order > 0 and to_qty >= max_order) or to_qty > open_ended_threshold:
        return QuantityLabels(
            cartons=translate("qty.cartons_open", lang, start=from_qty),
            units=translate("qty.units_open", lang, start=_units(from_units, thousand_sep)),
        )

    return QuantityLabels(
        cartons=translate("qty.cartons_range", lang, start=from_qty, end=to_qty),
        units=translate(
            "qty.units_range",
            lang,
            start=_units(from_units, thousand_sep),
            end=_units(to_units or 0, thousand_sep),
        ),
    )


def format_discount(pct) -> str:
    """Discount cell: "20%", "12.5%"."""
    return f"{format_plain(pct)}%"
