from spending_tracker.categories import (
    CATEGORIES,
    FALLBACK_CATEGORY,
    category_ids,
    color_of,
    icon_of,
    normalize_category_id,
    resolve,
)


def test_resolve_known_category():
    category = resolve('groceries')
    assert category.name == 'Groceries'
    assert category.color == '#4CAF50'
    assert category.icon == 'ShoppingBag'


def test_resolve_unknown_and_empty_fall_back_to_other():
    for category_id in ('crypto', '', None):
        assert resolve(category_id) is FALLBACK_CATEGORY
    assert FALLBACK_CATEGORY.id == 'other'
    assert FALLBACK_CATEGORY.name == 'Other'


def test_color_and_icon_delegate_to_resolve():
    assert color_of('dining') == '#FF9800'
    assert icon_of('dining') == 'Utensils'
    assert color_of('unknown') == FALLBACK_CATEGORY.color
    assert icon_of('unknown') == FALLBACK_CATEGORY.icon


def test_registry_order_ends_with_fallback():
    ids = category_ids()
    assert len(ids) == len(CATEGORIES) == 12
    assert ids[0] == 'groceries'
    assert ids[-1] == 'other'
    assert len(set(ids)) == len(ids)


def test_normalize_category_id():
    assert normalize_category_id('') == 'other'
    assert normalize_category_id(None) == 'other'
    # unknown ids are kept as-is; only display lookups fall back
    assert normalize_category_id('crypto') == 'crypto'
