from __future__ import annotations

from typing import Callable, Optional

from pricing_table.core.logging_config import logger
from pricing_table.engine.max_quantity import MaxQuantityResolver, resolve_max_order_quantity
from pricing_table.engine.rule_selector import RuleSelector
from pricing_table.engine.table_builder import PricingTableV1, TableBuilder, pieces_per_carton
from pricing_table.storage.stores import ProductStore
from pricing_table.templates import render_template

# PricingTableV1 -> markup
Presenter = Callable[[PricingTableV1], str]


def html_presenter(table: PricingTableV1) -> str:
    return render_template("pricing_table.html", {"table": table})


class TableRenderer:
    """
    product id -> pricing table.

    Every short-circuit (unknown product, no active rule set, unsupported
    mode, no usable tiers) yields None / "" rather than an error.
    """

    def __init__(
        self,
        products: ProductStore,
        selector: RuleSelector,
        builder: TableBuilder,
        *,
        pieces_attribute: str = "pezzi-a-cartone",
        max_quantity_resolver: Optional[MaxQuantityResolver] = None,
        presenter: Presenter = html_presenter,
    ):
        self.products = products
        self.selector = selector
        self.builder = builder
        self.pieces_attribute = pieces_attribute
        self.max_quantity_resolver = max_quantity_resolver
        self.presenter = presenter

    def has_active_rules(self, product_id: int) -> bool:
        return bool(self.selector.active_rule_sets(product_id))

    def build_table(self, product_id: int) -> Optional[PricingTableV1]:
        if not product_id or int(product_id) <= 0:
            return None

        product = self.products.get_product(product_id)
        if product is None:
            return None

        rule_set = self.selector.select_active_rule_set(product.id)
        if rule_set is None:
            return None

        # Only continuous (bulk) pricing mode
        if not rule_set.is_continuous:
            logger.debug("rule_set_mode_unsupported", product_id=product.id, mode=rule_set.mode)
            return None

        pieces = pieces_per_carton(product, self.pieces_attribute)
        max_order = resolve_max_order_quantity(product, self.max_quantity_resolver)

        table = self.builder.build(rule_set, product, pieces, max_order)
        if not table.rows:
            return None

        logger.debug(
            "pricing_table_built",
            product_id=product.id,
            rule_set=rule_set.key,
            rows=self.builder.describe(table),
        )
        return table

    def render(self, product_id: int) -> str:
        table = self.build_table(product_id)
        if table is None:
            return ""
        return self.presenter(table)
