from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

D = Decimal

# Collector type used by category-wide rule sets (never rendered here)
CATEGORY_COLLECTOR = "cat_product"

MODE_CONTINUOUS = "continuous"

CONDITIONS_ALL = "all"
CONDITIONS_ANY = "any"


def to_decimal(v: Any, default: Optional[D] = None) -> Optional[D]:
    if v is None:
        return default
    if isinstance(v, bool):
        return default
    if isinstance(v, Decimal):
        return v if v.is_finite() else default
    s = str(v).strip()
    if s == "":
        return default
    try:
        d = D(s)
    except InvalidOperation:
        return default
    return d if d.is_finite() else default


def stock_amount(v: Any) -> Optional[int]:
    """Quantity as an integer (truncated), or None when blank / not numeric."""
    d = to_decimal(v)
    if d is None:
        return None
    return int(d)


# -----------------------------
# Product
# -----------------------------


@dataclass(frozen=True)
class Product:
    id: int
    regular_price: D = D("0")
    type: str = "simple"
    attributes: Dict[str, Any] = field(default_factory=dict)
    meta: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_variation(self) -> bool:
        return self.type == "variation"

    def attribute(self, key: str) -> Any:
        """
        Attribute value; accepts both {"value": ...} records and plain values.
        """
        raw = self.attributes.get(key)
        if isinstance(raw, dict):
            return raw.get("value")
        return raw

    def get_meta(self, key: str) -> Any:
        return self.meta.get(key)

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "Product":
        return Product(
            id=int(d["id"]),
            regular_price=to_decimal(d.get("regular_price"), D("0")),
            type=str(d.get("type") or "simple"),
            attributes=dict(d.get("attributes") or {}),
            meta=dict(d.get("meta") or {}),
        )


# -----------------------------
# Rule sets
# -----------------------------


@dataclass(frozen=True)
class Condition:
    type: Optional[str]
    args: Dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "Condition":
        ctype = d.get("type")
        args = d.get("args")
        return Condition(
            type=str(ctype) if ctype else None,
            args=dict(args) if isinstance(args, dict) else {},
        )


@dataclass(frozen=True)
class Tier:
    from_qty: int
    to_qty: Optional[int]  # None = single value
    type: str
    amount: D

    @property
    def is_single_value(self) -> bool:
        return not self.to_qty or self.to_qty == self.from_qty

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "Tier":
        from_qty = stock_amount(d.get("from"))
        if from_qty is None:
            raise ValueError(f"tier 'from' is missing or not numeric: {d.get('from')!r}")

        amount = to_decimal(d.get("amount"))
        if amount is None:
            raise ValueError(f"tier 'amount' is missing or not numeric: {d.get('amount')!r}")

        ttype = d.get("type")
        if not ttype:
            raise ValueError("tier 'type' is missing")

        return Tier(
            from_qty=from_qty,
            to_qty=stock_amount(d.get("to")),
            type=str(ttype),
            amount=amount,
        )


@dataclass(frozen=True)
class RuleSet:
    """
    One pricing campaign as stored on the product.

    Tiers stay raw here: the table builder validates them one by one so a
    broken tier does not take the whole rule set down.
    """

    key: str
    scope_type: Optional[str] = None
    mode: Optional[str] = None
    date_from: Any = None
    date_to: Any = None
    conditions: List[Condition] = field(default_factory=list)
    conditions_type: str = CONDITIONS_ALL
    tiers: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def is_category_scoped(self) -> bool:
        return self.scope_type == CATEGORY_COLLECTOR

    @property
    def is_continuous(self) -> bool:
        return self.mode == MODE_CONTINUOUS

    @staticmethod
    def from_dict(d: Dict[str, Any], key: str = "") -> "RuleSet":
        collector = d.get("collector") or {}
        scope_type = collector.get("type") if isinstance(collector, dict) else None

        raw_conditions = d.get("conditions") or []
        if isinstance(raw_conditions, dict):
            raw_conditions = list(raw_conditions.values())

        raw_tiers = d.get("rules") or []
        if isinstance(raw_tiers, dict):
            raw_tiers = list(raw_tiers.values())

        return RuleSet(
            key=str(key),
            scope_type=scope_type,
            mode=d.get("mode"),
            date_from=d.get("date_from") or None,
            date_to=d.get("date_to") or None,
            conditions=[
                Condition.from_dict(c) for c in raw_conditions if isinstance(c, dict)
            ],
            conditions_type=str(d.get("conditions_type") or CONDITIONS_ALL),
            tiers=[t for t in raw_tiers if isinstance(t, dict)],
        )
