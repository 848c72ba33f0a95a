from __future__ import annotations

from datetime import datetime
from typing import Optional

from pricing_table.conditions import FallbackHook, default_fallback
from pricing_table.config import Settings, get_settings
from pricing_table.engine.context import SiteClock, Viewer
from pricing_table.engine.max_quantity import MaxQuantityResolver
from pricing_table.engine.rule_selector import RuleSelector
from pricing_table.engine.table_builder import MoneyFormat, TableBuilder
from pricing_table.renderer import Presenter, TableRenderer, html_presenter
from pricing_table.shortcodes import ShortcodeRegistry, register_pricing_table_shortcodes
from pricing_table.storage.stores import ProductStore, RuleStorage


def build_renderer(
    products: ProductStore,
    rules: RuleStorage,
    viewer: Optional[Viewer] = None,
    *,
    settings: Optional[Settings] = None,
    lang: Optional[str] = None,
    now: Optional[datetime] = None,
    max_quantity_resolver: Optional[MaxQuantityResolver] = None,
    fallback: FallbackHook = default_fallback,
    presenter: Presenter = html_presenter,
) -> TableRenderer:
    """
    Composition root: wires stores, clock, viewer and formatting settings.
    Cheap enough to do per request.
    """
    s = settings or get_settings()

    selector = RuleSelector(
        rules,
        SiteClock(s.site_timezone, now=now),
        viewer or Viewer.anonymous(),
        fallback=fallback,
        date_to_inclusive_day=s.date_to_inclusive_day,
    )
    builder = TableBuilder(
        money=MoneyFormat(
            currency_symbol=s.currency_symbol,
            decimals=s.price_decimals,
            decimal_sep=s.decimal_separator,
            thousand_sep=s.thousand_separator,
        ),
        unit_price_label=s.unit_price_label,
        lang=lang or s.default_language,
        open_ended_threshold=s.open_ended_threshold,
    )
    return TableRenderer(
        products,
        selector,
        builder,
        pieces_attribute=s.pieces_attribute,
        max_quantity_resolver=max_quantity_resolver,
        presenter=presenter,
    )


def build_shortcodes(renderer: TableRenderer) -> ShortcodeRegistry:
    registry = ShortcodeRegistry()
    register_pricing_table_shortcodes(registry, renderer)
    return registry
