from __future__ import annotations

from datetime import timedelta
from typing import List, Optional

from pricing_table.conditions import FallbackHook, default_fallback, evaluate_condition
from pricing_table.core.logging_config import logger
from pricing_table.domain.models import CONDITIONS_ANY, RuleSet
from pricing_table.storage.stores import RuleStorage

from .context import SiteClock, Viewer


class RuleSelector:
    """
    Picks the rule set that currently applies to a product.

    - category-scoped rule sets are never eligible
    - date window: from-day midnight <= now <= to-day midnight (site time)
    - conditions: all (default) or any, evaluated for the injected viewer
    - first eligible rule set in storage order wins; the rest are ignored
    """

    def __init__(
        self,
        rules: RuleStorage,
        clock: SiteClock,
        viewer: Viewer,
        *,
        fallback: FallbackHook = default_fallback,
        date_to_inclusive_day: bool = False,
    ):
        self.rules = rules
        self.clock = clock
        self.viewer = viewer
        self.fallback = fallback
        self.date_to_inclusive_day = date_to_inclusive_day

    def active_rule_sets(self, product_id: int) -> List[RuleSet]:
        raw_sets = self.rules.get_rule_sets(product_id)
        if not raw_sets:
            return []

        valid: List[RuleSet] = []
        for key, raw in raw_sets:
            rule_set = RuleSet.from_dict(raw, key=key)

            # Only product-specific rules, not category rules
            if rule_set.is_category_scoped:
                continue

            if self.is_date_valid(rule_set) and self.is_condition_valid(rule_set):
                valid.append(rule_set)

        return valid

    def select_active_rule_set(self, product_id: int) -> Optional[RuleSet]:
        valid = self.active_rule_sets(product_id)
        if not valid:
            return None

        if len(valid) > 1:
            logger.info(
                "multiple_active_rule_sets",
                product_id=product_id,
                used=valid[0].key,
                ignored=[r.key for r in valid[1:]],
            )
        return valid[0]

    def is_date_valid(self, rule_set: RuleSet) -> bool:
        from_start = self.clock.day_start(rule_set.date_from)
        to_start = self.clock.day_start(rule_set.date_to)
        now = self.clock.now()

        if rule_set.date_from and from_start is None:
            logger.warning(
                "rule_date_unparseable", rule_set=rule_set.key, field="date_from", value=str(rule_set.date_from)
            )
        # an end date we cannot read counts as already passed
        if rule_set.date_to and to_start is None:
            logger.warning(
                "rule_date_unparseable", rule_set=rule_set.key, field="date_to", value=str(rule_set.date_to)
            )
            return False

        to_limit = to_start
        if to_start is not None and self.date_to_inclusive_day:
            to_limit = to_start + timedelta(days=1) - timedelta(microseconds=1)

        if from_start is not None and now < from_start:
            return False
        if to_limit is not None and now > to_limit:
            return False
        return True

    def is_condition_valid(self, rule_set: RuleSet) -> bool:
        if not rule_set.conditions:
            return True

        met = sum(
            1
            for c in rule_set.conditions
            if evaluate_condition(c, self.viewer, self.fallback)
        )

        if rule_set.conditions_type == CONDITIONS_ANY:
            return met > 0
        return met == len(rule_set.conditions)
