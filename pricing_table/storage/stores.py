from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol

from pricing_table.domain.models import Product


class ProductStore(Protocol):
    def get_product(self, product_id: int) -> Optional[Product]: ...


class RuleStorage(Protocol):
    def get_rule_sets(self, product_id: int) -> List[tuple[str, Dict[str, Any]]]: ...


def normalize_rule_sets(raw: Any) -> List[tuple[str, Dict[str, Any]]]:
    """
    Rule sets are stored either as a list or as a mapping keyed by set id
    (e.g. "set_1"). Returns (key, record) pairs in storage order.
    """
    if not raw:
        return []
    if isinstance(raw, dict):
        items = [(str(k), v) for k, v in raw.items()]
    elif isinstance(raw, list):
        items = [(f"set_{i}", v) for i, v in enumerate(raw)]
    else:
        return []
    return [(k, v) for k, v in items if isinstance(v, dict)]


@dataclass
class InMemoryCatalog:
    """
    Products + per-product pricing rules held in memory.
    Implements both ProductStore and RuleStorage.
    """

    products: Dict[int, Product] = field(default_factory=dict)
    pricing_rules: Dict[int, Any] = field(default_factory=dict)

    def get_product(self, product_id: int) -> Optional[Product]:
        return self.products.get(int(product_id))

    def get_rule_sets(self, product_id: int) -> List[tuple[str, Dict[str, Any]]]:
        return normalize_rule_sets(self.pricing_rules.get(int(product_id)))

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "InMemoryCatalog":
        products: Dict[int, Product] = {}
        for raw in d.get("products") or []:
            p = Product.from_dict(raw)
            products[p.id] = p

        pricing_rules = {int(k): v for k, v in (d.get("pricing_rules") or {}).items()}
        return InMemoryCatalog(products=products, pricing_rules=pricing_rules)
