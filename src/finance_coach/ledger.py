"""
In-memory transaction ledger and the aggregates the analytics run on.

A ``Ledger`` is an immutable snapshot of one user's transactions held in a
pandas DataFrame. Expenses are rows with a negative amount; ``spend`` is the
absolute amount.
"""
import pandas as pd

from .dates import month_start, shift_months, to_date
from .models import Transaction

COLUMNS = ['date', 'amount', 'category', 'merchant', 'description']


class Ledger:
    """Snapshot of a single user's transactions."""

    def __init__(self, transactions=()):
        rows = [self._normalize(t) for t in transactions]
        frame = pd.DataFrame(rows, columns=COLUMNS)
        frame['date'] = pd.to_datetime(frame['date'])
        frame['amount'] = frame['amount'].astype(float)
        frame['spend'] = frame['amount'].abs()
        frame['month'] = frame['date'].dt.strftime('%Y-%m')
        self.frame = frame.sort_values(['date', 'merchant']).reset_index(drop=True)

    @classmethod
    def from_session(cls, session, user_id=1):
        """Load a user's transactions from the database."""
        transactions = session.query(Transaction).filter(
            Transaction.user_id == user_id
        ).order_by(Transaction.date, Transaction.id).all()
        return cls(transactions)

    @staticmethod
    def _normalize(t):
        if not isinstance(t, dict):
            t = {
                'date': t.date,
                'amount': t.amount,
                'category': t.category,
                'merchant': t.merchant,
                'description': t.description,
            }
        description = t.get('description') or ''
        return {
            'date': to_date(t['date']),
            'amount': float(t['amount']),
            'category': t.get('category') or 'Other',
            'merchant': t.get('merchant') or description or 'Unknown',
            'description': description,
        }

    def __len__(self):
        return len(self.frame)

    def max_date(self):
        """Latest transaction date; the anchor for every "current" calculation."""
        if self.frame.empty:
            return None
        return self.frame['date'].max().date()

    def _expenses(self):
        return self.frame[self.frame['amount'] < 0]

    def _records(self, frame):
        return [
            {
                'date': row.date.date(),
                'amount': float(row.amount),
                'category': row.category,
                'merchant': row.merchant,
                'description': row.description,
            }
            for row in frame.itertuples(index=False)
        ]

    def expense_records(self):
        return self._records(self._expenses())

    def expenses_in_month(self, year, month):
        expenses = self._expenses()
        return self._records(expenses[expenses['month'] == f'{year:04d}-{month:02d}'])

    def recent_expenses(self, anchor, days=30):
        """Expenses from ``days`` before ``anchor`` through ``anchor``, inclusive."""
        end = pd.Timestamp(to_date(anchor))
        start = end - pd.Timedelta(days=days)
        expenses = self._expenses()
        return self._records(expenses[(expenses['date'] >= start) & (expenses['date'] <= end)])

    def monthly_expense_totals(self, before, limit=6):
        """
        Total spend per month for the last ``limit`` months strictly before
        ``before``'s month, oldest first. Months without spend are absent.
        """
        start = pd.Timestamp(month_start(to_date(before)))
        expenses = self._expenses()
        totals = expenses[expenses['date'] < start].groupby('month')['spend'].sum().sort_index()
        return [float(total) for total in totals.tail(limit)]

    def trailing_average(self, before, months=3):
        """Average monthly spend over the previous ``months`` months, or None."""
        totals = self.monthly_expense_totals(before, limit=months)
        if not totals:
            return None
        return sum(totals) / len(totals)

    def category_history(self, before, months=6):
        """Category -> monthly spend totals for the ``months`` months before ``before``'s month."""
        end = month_start(to_date(before))
        start = shift_months(end, -months)
        expenses = self._expenses()
        window = expenses[
            (expenses['date'] >= pd.Timestamp(start)) & (expenses['date'] < pd.Timestamp(end))
        ]

        history = {}
        for (category, _month), total in window.groupby(['category', 'month'])['spend'].sum().items():
            history.setdefault(category, []).append(float(total))
        return history

    def category_totals(self, year, month):
        expenses = self._expenses()
        month_rows = expenses[expenses['month'] == f'{year:04d}-{month:02d}']
        return {category: float(total) for category, total in month_rows.groupby('category')['spend'].sum().items()}

    def category_flows(self, year, month):
        """Per-category income and expense for one month."""
        month_rows = self.frame[self.frame['month'] == f'{year:04d}-{month:02d}']
        flows = []
        for category, group in month_rows.groupby('category'):
            flows.append({
                'category': category,
                'income': float(group.loc[group['amount'] > 0, 'amount'].sum()),
                'expense': float(group.loc[group['amount'] < 0, 'spend'].sum()),
            })
        return flows

    def daily_expense_totals(self, start, end):
        """(date, spend) for each day with spend in [start, end]."""
        expenses = self._expenses()
        window = expenses[
            (expenses['date'] >= pd.Timestamp(to_date(start))) & (expenses['date'] <= pd.Timestamp(to_date(end)))
        ]
        daily = window.groupby('date')['spend'].sum()
        return [(day.date(), float(total)) for day, total in daily.items()]
