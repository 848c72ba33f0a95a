from __future__ import annotations

from datetime import datetime

import pytest

from pricing_table.config import Settings
from pricing_table.engine.context import SiteClock, Viewer
from pricing_table.engine.rule_selector import RuleSelector
from pricing_table.service import build_renderer
from pricing_table.storage.stores import InMemoryCatalog

from .factories import ROME, make_product, make_rule_set


@pytest.fixture
def fixed_now():
    return datetime(2025, 6, 15, 12, 0, 0, tzinfo=ROME)


@pytest.fixture
def settings(tmp_path):
    # explicit values, no .env influence
    return Settings(
        catalog_path=str(tmp_path / "catalog.yaml"),
        site_timezone="Europe/Rome",
        default_language="en",
        pieces_attribute="pezzi-a-cartone",
        currency_symbol="€",
        decimal_separator=",",
        thousand_separator=".",
        price_decimals=2,
        unit_price_label="€/pizza",
        open_ended_threshold=1_000_000,
        date_to_inclusive_day=False,
    )


@pytest.fixture
def sample_catalog():
    return InMemoryCatalog(
        products={
            1: make_product(1, price="100", pieces=10),
            2: make_product(2, price="100", pieces=5),
        },
        pricing_rules={
            1: {
                "set_1": make_rule_set(
                    [
                        {"from": 1, "to": 4, "type": "percentage_discount", "amount": "20"},
                        {"from": 5, "to": 9, "type": "price_discount", "amount": "30"},
                        {"from": 10, "type": "fixed_price", "amount": "80"},
                    ]
                )
            },
        },
    )


@pytest.fixture
def anonymous():
    return Viewer.anonymous()


@pytest.fixture
def wholesale():
    return Viewer.of("42", ["customer", "wholesale_customer"])


@pytest.fixture
def make_selector(fixed_now):
    def _make(catalog, viewer=None, now=None, **kwargs):
        return RuleSelector(
            catalog,
            SiteClock("Europe/Rome", now=now or fixed_now),
            viewer or Viewer.anonymous(),
            **kwargs,
        )

    return _make


@pytest.fixture
def make_renderer(settings, fixed_now):
    def _make(catalog, viewer=None, now=None, **kwargs):
        return build_renderer(
            catalog,
            catalog,
            viewer,
            settings=settings,
            now=now or fixed_now,
            **kwargs,
        )

    return _make
