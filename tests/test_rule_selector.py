from datetime import datetime, timedelta

from pricing_table.storage.stores import InMemoryCatalog

from .factories import ROME, make_rule_set

TIERS = [{"from": 1, "to": 4, "type": "percentage_discount", "amount": "10"}]


def catalog_with(*rule_sets):
    return InMemoryCatalog(
        pricing_rules={1: {f"set_{i}": rs for i, rs in enumerate(rule_sets, start=1)}}
    )


def at(*args):
    return datetime(*args, tzinfo=ROME)


# -----------------------
# selection
# -----------------------


def test_no_rule_sets_returns_none(make_selector):
    assert make_selector(InMemoryCatalog()).select_active_rule_set(1) is None


def test_category_collector_is_never_selected(make_selector):
    catalog = catalog_with(
        make_rule_set(TIERS, collector={"type": "cat_product"}, conditions=[]),
    )
    selector = make_selector(catalog)
    assert selector.select_active_rule_set(1) is None
    assert selector.active_rule_sets(1) == []


def test_first_eligible_rule_set_wins(make_selector):
    catalog = catalog_with(
        make_rule_set(TIERS, collector={"type": "cat_product"}),
        make_rule_set(TIERS, date_to="2025-01-01"),  # expired
        make_rule_set(TIERS),
        make_rule_set(TIERS, mode="fixed"),
    )
    selector = make_selector(catalog)

    chosen = selector.select_active_rule_set(1)
    assert chosen.key == "set_3"
    assert [r.key for r in selector.active_rule_sets(1)] == ["set_3", "set_4"]


def test_rule_sets_as_list_keep_storage_order(make_selector):
    catalog = InMemoryCatalog(
        pricing_rules={1: [make_rule_set(TIERS, mode="a"), make_rule_set(TIERS, mode="b")]}
    )
    assert make_selector(catalog).select_active_rule_set(1).mode == "a"


# -----------------------
# date window
# -----------------------


def test_date_window_closed_interval(make_selector):
    catalog = catalog_with(make_rule_set(TIERS, date_from="2025-06-01", date_to="2025-06-30"))

    assert make_selector(catalog, now=at(2025, 6, 1, 0, 0)).select_active_rule_set(1)
    assert make_selector(catalog, now=at(2025, 6, 15, 12, 0)).select_active_rule_set(1)
    # exactly midnight of the to-day is still inside
    assert make_selector(catalog, now=at(2025, 6, 30, 0, 0)).select_active_rule_set(1)


def test_date_window_outside(make_selector):
    catalog = catalog_with(make_rule_set(TIERS, date_from="2025-06-01", date_to="2025-06-30"))

    before = at(2025, 6, 1, 0, 0) - timedelta(seconds=1)
    after = at(2025, 6, 30, 0, 0) + timedelta(microseconds=1)
    assert make_selector(catalog, now=before).select_active_rule_set(1) is None
    assert make_selector(catalog, now=after).select_active_rule_set(1) is None


def test_date_to_inclusive_day_setting(make_selector):
    catalog = catalog_with(make_rule_set(TIERS, date_to="2025-06-30"))

    late = at(2025, 6, 30, 23, 0)
    assert make_selector(catalog, now=late).select_active_rule_set(1) is None
    assert make_selector(catalog, now=late, date_to_inclusive_day=True).select_active_rule_set(1)
    assert (
        make_selector(catalog, now=at(2025, 7, 1, 0, 0), date_to_inclusive_day=True)
        .select_active_rule_set(1)
        is None
    )


def test_only_from_or_only_to(make_selector, fixed_now):
    only_from_future = catalog_with(make_rule_set(TIERS, date_from="2025-07-01"))
    only_from_past = catalog_with(make_rule_set(TIERS, date_from="2025-01-01"))
    only_to_past = catalog_with(make_rule_set(TIERS, date_to="2025-06-14"))
    only_to_future = catalog_with(make_rule_set(TIERS, date_to="2025-12-31"))

    assert make_selector(only_from_future).select_active_rule_set(1) is None
    assert make_selector(only_from_past).select_active_rule_set(1)
    assert make_selector(only_to_past).select_active_rule_set(1) is None
    assert make_selector(only_to_future).select_active_rule_set(1)


def test_dates_with_time_part_use_day_start(make_selector):
    catalog = catalog_with(make_rule_set(TIERS, date_from="2025-06-15 18:30:00"))
    # 12:00 on the from-day is after its midnight
    assert make_selector(catalog).select_active_rule_set(1)


def test_unparseable_from_date_is_ignored(make_selector):
    catalog = catalog_with(make_rule_set(TIERS, date_from="not a date"))
    assert make_selector(catalog).select_active_rule_set(1)


def test_unparseable_to_date_deactivates(make_selector):
    catalog = catalog_with(make_rule_set(TIERS, date_to="not a date"))
    assert make_selector(catalog).select_active_rule_set(1) is None


def test_non_iso_end_dates_expire(make_selector):
    # now is 2025-06-15
    for value in ("2025/01/31", "31-01-2025", "01/31/2025"):
        catalog = catalog_with(make_rule_set(TIERS, date_to=value))
        assert make_selector(catalog).select_active_rule_set(1) is None, value

    for value in ("2025/12/31", "31-12-2025", "12/31/2025"):
        catalog = catalog_with(make_rule_set(TIERS, date_to=value))
        assert make_selector(catalog).select_active_rule_set(1), value


# -----------------------
# conditions
# -----------------------

EVERYONE = {"type": "apply_to", "args": {"applies_to": "everyone"}}
LOGGED_IN = {"type": "apply_to", "args": {"applies_to": "authenticated"}}
WHOLESALE = {"type": "apply_to", "args": {"applies_to": "roles", "roles": ["wholesale_customer"]}}


def test_no_conditions_always_valid(make_selector):
    catalog = catalog_with(make_rule_set(TIERS, conditions=[]))
    assert make_selector(catalog).select_active_rule_set(1)


def test_all_conditions_must_hold(make_selector, anonymous, wholesale):
    catalog = catalog_with(make_rule_set(TIERS, conditions=[EVERYONE, LOGGED_IN, WHOLESALE]))

    assert make_selector(catalog, viewer=anonymous).select_active_rule_set(1) is None
    assert make_selector(catalog, viewer=wholesale).select_active_rule_set(1)


def test_any_condition_is_enough(make_selector, anonymous):
    catalog = catalog_with(
        make_rule_set(TIERS, conditions_type="any", conditions=[LOGGED_IN, EVERYONE])
    )
    assert make_selector(catalog, viewer=anonymous).select_active_rule_set(1)


def test_any_with_none_matching(make_selector, anonymous):
    catalog = catalog_with(
        make_rule_set(TIERS, conditions_type="any", conditions=[LOGGED_IN, WHOLESALE])
    )
    assert make_selector(catalog, viewer=anonymous).select_active_rule_set(1) is None


def test_unknown_conditions_type_means_all(make_selector, anonymous):
    catalog = catalog_with(
        make_rule_set(TIERS, conditions_type="whatever", conditions=[EVERYONE, LOGGED_IN])
    )
    assert make_selector(catalog, viewer=anonymous).select_active_rule_set(1) is None


def test_fallback_hook_decides_unknown_conditions(make_selector, anonymous):
    catalog = catalog_with(make_rule_set(TIERS, conditions=[{"type": "cart_total", "args": {}}]))

    assert make_selector(catalog, viewer=anonymous).select_active_rule_set(1) is None
    assert make_selector(
        catalog, viewer=anonymous, fallback=lambda c, v: c.type == "cart_total"
    ).select_active_rule_set(1)
