import pytest
from pydantic import ValidationError

from spending_tracker.models import Transaction
from spending_tracker.schemas import TransactionForm


def test_valid_form_builds_new_transaction():
    form = TransactionForm(amount='42.50', description='  Weekly shop  ', date='2024-06-01', category='groceries')
    tx = form.to_transaction()
    assert tx.amount == 42.5
    assert tx.description == 'Weekly shop'
    assert tx.date == '2024-06-01'
    assert tx.category == 'groceries'
    assert tx.id


def test_form_edit_keeps_identity():
    existing = Transaction('keep-me', 10.0, 'Old', '2024-05-01', 'dining', '2024-05-01T00:00:00.000Z')
    form = TransactionForm(amount=12, description='Dinner out', date='2024-05-02', category='dining')
    edited = form.to_transaction(existing)
    assert edited.id == 'keep-me'
    assert edited.created_at == existing.created_at
    assert edited.amount == 12.0
    assert edited.date == '2024-05-02'


@pytest.mark.parametrize('field, value', [
    ('amount', 0),
    ('amount', -3),
    ('description', 'ab'),
    ('description', '   '),
    ('date', 'not-a-date'),
    ('date', '2024-02-30'),
    ('category', ''),
    ('category', 'crypto'),
])
def test_invalid_form_values_are_rejected(field, value):
    values = {'amount': 10, 'description': 'Valid text', 'date': '2024-06-01', 'category': 'groceries'}
    values[field] = value
    with pytest.raises(ValidationError) as excinfo:
        TransactionForm(**values)
    assert excinfo.value.errors()[0]['loc'][0] == field
