"""Shared builders for test ledgers."""

from datetime import date, timedelta


def txn(day, amount, category='Other', merchant=None, description=''):
    """Build a transaction dict; ``day`` is an ISO string or a date."""
    return {
        'date': day,
        'amount': amount,
        'category': category,
        'merchant': merchant,
        'description': description or (merchant or ''),
    }


def linear_month(year, month, days, per_day, category='Groceries', merchant='Market'):
    """One expense of ``per_day`` on each of the first ``days`` days of a month."""
    start = date(year, month, 1)
    return [
        txn(start + timedelta(days=i), -per_day, category, merchant)
        for i in range(days)
    ]


def half_year_history():
    """
    Jan-Jun 2024: rent on the 1st, groceries weekly, Netflix on the 5th and a
    salary; July 2024 adds a grocery spike and one large purchase. The latest
    transaction is 2024-07-12.
    """
    rows = []
    for month in range(1, 8):
        rows.append(txn(f'2024-{month:02d}-01', 4000, 'Income', 'Acme Payroll'))
        rows.append(txn(f'2024-{month:02d}-01', -1200, 'Rent', 'Landlord LLC'))
        rows.append(txn(f'2024-{month:02d}-05', -15.99, 'Entertainment', 'Netflix'))
        grocery_days = (3, 10, 17, 24) if month < 7 else (3, 10)
        for day in grocery_days:
            rows.append(txn(f'2024-{month:02d}-{day:02d}', -100, 'Groceries', 'Market'))

    rows.append(txn('2024-07-11', -600, 'Groceries', 'Market'))
    rows.append(txn('2024-07-12', -1500, 'Shopping', 'Best Buy'))
    return rows
