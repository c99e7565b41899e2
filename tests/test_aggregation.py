from datetime import date

import pytest

from spending_tracker.aggregation import (
    budget_comparison,
    category_breakdown,
    current_period,
    group_by_month,
    period_of,
    sum_by_category,
    summary_stats,
    total_spent,
)
from spending_tracker.models import Budget, Transaction


def _tx(tx_id, amount, category, day, description='Expense'):
    return Transaction(
        id=tx_id,
        amount=amount,
        description=description,
        date=day,
        category=category,
        created_at='2024-06-01T00:00:00.000Z',
    )


def _sample():
    return [
        _tx('t1', 50.0, 'groceries', '2024-06-01'),
        _tx('t2', 150.0, 'groceries', '2024-06-15'),
        _tx('t3', 20.0, 'dining', '2024-05-20'),
        _tx('t4', 75.5, '', '2024-06-03'),
        _tx('t5', 12.25, 'crypto', '2024-04-30'),
    ]


def test_sum_by_category_groups_and_defaults_empty_to_other():
    totals = sum_by_category(_sample())
    assert totals == {
        'groceries': 200.0,
        'dining': 20.0,
        'other': 75.5,
        'crypto': 12.25,
    }
    assert list(totals) == ['groceries', 'dining', 'other', 'crypto']


def test_sum_by_category_conserves_total():
    transactions = _sample()
    assert sum(sum_by_category(transactions).values()) == pytest.approx(
        sum(t.amount for t in transactions)
    )
    assert total_spent(transactions) == pytest.approx(307.75)


def test_sum_by_category_with_period_filter():
    totals = sum_by_category(_sample(), '2024-06')
    assert totals == {'groceries': 200.0, 'other': 75.5}
    assert sum_by_category(_sample(), '2023-01') == {}


def test_group_by_month_is_chronological_regardless_of_input_order():
    transactions = [
        _tx('a', 10.0, 'dining', '2024-03-05'),
        _tx('b', 5.0, 'dining', '2023-12-31'),
        _tx('c', 7.0, 'dining', '2024-01-15'),
        _tx('d', 3.0, 'dining', '2024-03-20'),
    ]
    monthly = group_by_month(transactions)
    assert [m.period for m in monthly] == ['2023-12', '2024-01', '2024-03']
    assert [m.label for m in monthly] == ['Dec 2023', 'Jan 2024', 'Mar 2024']
    assert [m.amount for m in monthly] == [5.0, 7.0, 13.0]


def test_group_by_month_empty():
    assert group_by_month([]) == []


def test_summary_stats_empty():
    stats = summary_stats([])
    assert stats.total_spent == 0
    assert stats.average_transaction == 0
    assert stats.largest_transaction == 0
    assert stats.top_category.id == 'other'
    assert stats.top_category.name == 'Other'
    assert stats.top_category.amount == 0
    assert stats.recent_transactions == []


def test_summary_stats_average_largest_and_top():
    transactions = _sample()
    stats = summary_stats(transactions)
    assert stats.total_spent == pytest.approx(307.75)
    assert stats.average_transaction == pytest.approx(307.75 / 5)
    assert stats.largest_transaction == 150.0
    assert stats.top_category.id == 'groceries'
    assert stats.top_category.amount == 200.0


def test_summary_stats_top_category_tie_goes_to_first_encountered():
    transactions = [
        _tx('a', 40.0, 'travel', '2024-06-01'),
        _tx('b', 40.0, 'health', '2024-06-02'),
    ]
    assert summary_stats(transactions).top_category.id == 'travel'


def test_summary_stats_unknown_top_category_reports_fallback():
    transactions = [
        _tx('a', 90.0, 'crypto', '2024-06-01'),
        _tx('b', 10.0, 'dining', '2024-06-02'),
    ]
    top = summary_stats(transactions).top_category
    assert (top.id, top.name, top.amount) == ('other', 'Other', 90.0)


def test_summary_stats_recent_transactions_newest_first_limited_to_four():
    stats = summary_stats(_sample())
    assert [t.id for t in stats.recent_transactions] == ['t2', 't4', 't1', 't3']


def test_aggregations_are_idempotent():
    transactions = _sample()
    budgets = [Budget('groceries', 100.0, '2024-06')]
    assert summary_stats(transactions) == summary_stats(transactions)
    assert group_by_month(transactions) == group_by_month(transactions)
    assert sum_by_category(transactions) == sum_by_category(transactions)
    assert budget_comparison(transactions, budgets, '2024-06') == budget_comparison(
        transactions, budgets, '2024-06'
    )


def test_budget_comparison_groceries_example():
    transactions = [
        _tx('t1', 50.0, 'groceries', '2024-06-01'),
        _tx('t2', 150.0, 'groceries', '2024-06-15'),
    ]
    budgets = [Budget('groceries', 100.0, '2024-06')]
    rows = budget_comparison(transactions, budgets, '2024-06')
    assert len(rows) == 1
    row = rows[0]
    assert row.category_id == 'groceries'
    assert row.budget_amount == 100.0
    assert row.spent_amount == 200.0
    assert row.is_over_budget
    assert row.remaining == 0
    assert row.percent_used == 100


def test_budget_comparison_filters_rows_and_follows_registry_order():
    transactions = [
        _tx('t1', 30.0, 'travel', '2024-06-02'),
        _tx('t2', 10.0, 'groceries', '2024-05-02'),  # other period
    ]
    budgets = [
        Budget('housing', 900.0, '2024-06'),
        Budget('groceries', 0.0, '2024-06'),
        Budget('dining', 50.0, '2024-05'),  # other period
    ]
    rows = budget_comparison(transactions, budgets, '2024-06')
    assert [r.category_id for r in rows] == ['housing', 'travel']
    housing, travel = rows
    assert (housing.budget_amount, housing.spent_amount) == (900.0, 0.0)
    assert housing.remaining == 900.0
    assert housing.percent_used == 0
    assert (travel.budget_amount, travel.spent_amount) == (0.0, 30.0)
    assert travel.percent_used == 0


def test_empty_inputs_produce_empty_views():
    assert sum_by_category([]) == {}
    assert budget_comparison([], [], '2024-06') == []
    assert category_breakdown([]) == []


def test_category_breakdown_resolves_names_and_colors():
    slices = category_breakdown(_sample())
    assert [s.category_id for s in slices] == ['groceries', 'dining', 'other', 'crypto']
    crypto = slices[-1]
    assert crypto.name == 'Other'
    assert crypto.color == '#9E9E9E'
    assert crypto.amount == 12.25


def test_period_helpers():
    assert period_of('2024-06-15') == '2024-06'
    assert current_period(date(2024, 2, 29)) == '2024-02'
