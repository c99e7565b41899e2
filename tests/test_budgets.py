from spending_tracker.budgets import budget_amounts_for, build_budget_entries, save_budgets
from spending_tracker.models import Budget


def _existing():
    return [
        Budget('groceries', 80.0, '2024-05'),
        Budget('groceries', 90.0, '2024-06'),
        Budget('dining', 40.0, '2024-06'),
        Budget('travel', 300.0, '2024-07'),
    ]


def test_save_budgets_replaces_only_the_period():
    new_entries = [Budget('groceries', 100.0, '2024-06'), Budget('health', 25.0, '2024-06')]

    result = save_budgets(_existing(), new_entries, '2024-06')

    june = [b for b in result if b.month == '2024-06']
    assert sorted((b.category_id, b.amount) for b in june) == [('groceries', 100.0), ('health', 25.0)]
    others = [b for b in result if b.month != '2024-06']
    assert others == [Budget('groceries', 80.0, '2024-05'), Budget('travel', 300.0, '2024-07')]


def test_save_budgets_with_no_entries_clears_the_period():
    result = save_budgets(_existing(), [], '2024-06')
    assert all(b.month != '2024-06' for b in result)
    assert len(result) == 2


def test_save_budgets_keeps_one_entry_per_category():
    new_entries = [Budget('groceries', 100.0, '2024-06'), Budget('groceries', 120.0, '2024-06')]
    result = save_budgets([], new_entries, '2024-06')
    assert result == [Budget('groceries', 120.0, '2024-06')]


def test_save_budgets_does_not_mutate_input():
    existing = _existing()
    save_budgets(existing, [Budget('groceries', 1.0, '2024-06')], '2024-06')
    assert existing == _existing()


def test_build_budget_entries_drops_non_positive_amounts():
    entries = build_budget_entries({'groceries': 250, 'dining': 0, 'travel': -5, 'bills': 99.5}, '2024-06')
    assert entries == [Budget('groceries', 250.0, '2024-06'), Budget('bills', 99.5, '2024-06')]


def test_budget_amounts_for_period():
    assert budget_amounts_for(_existing(), '2024-06') == {'groceries': 90.0, 'dining': 40.0}
    assert budget_amounts_for(_existing(), '2025-01') == {}
