from __future__ import annotations

import json
from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List, Optional

from jsonschema import Draft7Validator

from pricing_table.calculators import calc_tier_price
from pricing_table.core.logging_config import logger
from pricing_table.domain.models import Product, RuleSet, Tier, to_decimal
from pricing_table.explain.formatter import (
    OPEN_ENDED_THRESHOLD,
    format_discount,
    format_quantity_labels,
)
from pricing_table.i18n import translate
from pricing_table.web.formatting import format_money, format_plain

D = Decimal

_TIER_SCHEMA_PATH = Path(__file__).resolve().parents[1] / "domain" / "tier.schema.json"
_TIER_VALIDATOR = Draft7Validator(json.loads(_TIER_SCHEMA_PATH.read_text(encoding="utf-8")))


# -----------------------------
# Output models
# -----------------------------


@dataclass(frozen=True)
class TierRowV1:
    """
    One table row. Raw bounds/type/amount are kept for client-side scripting.
    """

    from_qty: int
    to_qty: Optional[int]
    type: str
    amount: str
    cartons_label: str
    units_label: str
    discount: str
    unit_price: D
    unit_price_display: str


@dataclass(frozen=True)
class TableHeadersV1:
    cartons: str
    discount: str
    unit_price: str


@dataclass(frozen=True)
class PricingTableV1:
    product_id: int
    rule_set_key: str
    pieces_per_carton: int
    max_order_quantity: int
    headers: TableHeadersV1
    rows: List[TierRowV1] = field(default_factory=list)


# -----------------------------
# Builder
# -----------------------------


def pieces_per_carton(product: Product, attribute_key: str) -> int:
    """Conversion factor cartons -> units. Absent / non-numeric / < 1 -> 1."""
    d = to_decimal(product.attribute(attribute_key))
    if d is None:
        return 1
    n = int(d)
    return n if n >= 1 else 1


@dataclass(frozen=True)
class MoneyFormat:
    currency_symbol: str = "€"
    decimals: int = 2
    decimal_sep: str = ","
    thousand_sep: str = "."

    def __call__(self, value: D) -> str:
        return format_money(
            value,
            currency_symbol=self.currency_symbol,
            decimals=self.decimals,
            decimal_sep=self.decimal_sep,
            thousand_sep=self.thousand_sep,
        )


class TableBuilder:
    """
    Rule set + product -> PricingTableV1 (pure data, no markup).
    """

    def __init__(
        self,
        *,
        money: Optional[MoneyFormat] = None,
        unit_price_label: str = "€/pizza",
        lang: Optional[str] = None,
        open_ended_threshold: int = OPEN_ENDED_THRESHOLD,
    ):
        self.money = money or MoneyFormat()
        self.unit_price_label = unit_price_label
        self.lang = lang
        self.open_ended_threshold = open_ended_threshold

    def headers(self) -> TableHeadersV1:
        return TableHeadersV1(
            cartons=translate("header.cartons", self.lang),
            discount=translate("header.discount", self.lang),
            unit_price=self.unit_price_label,
        )

    def parse_tiers(self, rule_set: RuleSet) -> List[Tier]:
        tiers: List[Tier] = []
        for index, raw in enumerate(rule_set.tiers):
            # schema only knows JSON numbers
            instance = {k: str(v) if isinstance(v, Decimal) else v for k, v in raw.items()}
            errors = list(_TIER_VALIDATOR.iter_errors(instance))
            if errors:
                logger.warning(
                    "tier_skipped",
                    rule_set=rule_set.key,
                    index=index,
                    errors=[e.message for e in errors],
                )
                continue
            try:
                tiers.append(Tier.from_dict(raw))
            except ValueError as e:
                logger.warning("tier_skipped", rule_set=rule_set.key, index=index, errors=[str(e)])
        return tiers

    def build_row(self, tier: Tier, base_price: D, pieces: int, max_order: int) -> TierRowV1:
        from_units = tier.from_qty * pieces
        to_units = tier.to_qty * pieces if tier.to_qty else None

        labels = format_quantity_labels(
            tier.from_qty,
            tier.to_qty,
            from_units,
            to_units,
            max_order,
            lang=self.lang,
            thousand_sep=self.money.thousand_sep,
            open_ended_threshold=self.open_ended_threshold,
        )

        pct, unit_price = calc_tier_price(tier.type, base_price, tier.amount, pieces)

        return TierRowV1(
            from_qty=tier.from_qty,
            to_qty=tier.to_qty or None,
            type=tier.type,
            amount=format_plain(tier.amount),
            cartons_label=labels.cartons,
            units_label=labels.units,
            discount=format_discount(pct),
            unit_price=unit_price,
            unit_price_display=self.money(unit_price),
        )

    def build(
        self,
        rule_set: RuleSet,
        product: Product,
        pieces: int,
        max_order: int = 0,
    ) -> PricingTableV1:
        rows = [
            self.build_row(tier, product.regular_price, pieces, max_order)
            for tier in self.parse_tiers(rule_set)
        ]
        return PricingTableV1(
            product_id=product.id,
            rule_set_key=rule_set.key,
            pieces_per_carton=pieces,
            max_order_quantity=max_order,
            headers=self.headers(),
            rows=rows,
        )

    def describe(self, table: PricingTableV1) -> List[Dict[str, Any]]:
        """Plain dict rows (logging / JSON)."""
        return [
            {
                "from": r.from_qty,
                "to": r.to_qty,
                "type": r.type,
                "discount": r.discount,
                "unitPrice": str(r.unit_price),
            }
            for r in table.rows
        ]
