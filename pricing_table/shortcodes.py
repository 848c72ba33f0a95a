from __future__ import annotations

from typing import Any, Callable, Dict, Mapping, Optional

from pricing_table.engine.max_quantity import absint
from pricing_table.renderer import TableRenderer

# (atts, current_product_id) -> markup; ids may arrive as raw strings
ShortcodeFn = Callable[[Mapping[str, Any], Any], str]

PRICING_TABLE_SHORTCODES = ("dynamic_pricing_table", "pricing_table")
PRICING_TABLE_DEFAULTS: Dict[str, Any] = {"product_id": 0}


def shortcode_atts(defaults: Mapping[str, Any], atts: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Known attributes only, defaults for the missing ones."""
    atts = atts or {}
    return {k: atts.get(k, v) for k, v in defaults.items()}


class ShortcodeRegistry:
    def __init__(self) -> None:
        self._shortcodes: Dict[str, ShortcodeFn] = {}

    def register(self, name: str, fn: ShortcodeFn) -> None:
        if name in self._shortcodes:
            raise ValueError(f"Shortcode already registered: {name}")
        self._shortcodes[name] = fn

    def get(self, name: str) -> ShortcodeFn:
        try:
            return self._shortcodes[name]
        except KeyError:
            raise KeyError(f"Unknown shortcode '{name}'. Registered: {sorted(self._shortcodes.keys())}")

    def names(self) -> list[str]:
        return sorted(self._shortcodes.keys())

    def render(
        self,
        name: str,
        atts: Optional[Mapping[str, Any]] = None,
        current_product_id: Any = None,
    ) -> str:
        return self.get(name)(atts or {}, current_product_id)


def pricing_table_shortcode(renderer: TableRenderer) -> ShortcodeFn:
    def _render(atts: Mapping[str, Any], current_product_id: Any) -> str:
        parsed = shortcode_atts(PRICING_TABLE_DEFAULTS, atts)

        product_id = absint(parsed["product_id"])
        # No product_id attribute -> the product the page is about
        if not product_id:
            product_id = absint(current_product_id)
        if not product_id:
            return ""

        if not renderer.has_active_rules(product_id):
            return ""
        return renderer.render(product_id)

    return _render


def register_pricing_table_shortcodes(registry: ShortcodeRegistry, renderer: TableRenderer) -> None:
    fn = pricing_table_shortcode(renderer)
    for name in PRICING_TABLE_SHORTCODES:
        registry.register(name, fn)
