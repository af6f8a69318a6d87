"""
Recurring subscription detection.

A merchant is treated as a subscription when its charges arrive on a regular
schedule (low coefficient of variation between charge dates) for a near
identical amount. "Now" is the latest date in the data, not the wall clock, so
historical imports replay the same way every time.
"""
from collections import defaultdict

from . import stats
from .config import merge_config
from .dates import to_date
from .logging_setup import get_logger

logger = get_logger('finance_coach.subscriptions')


class SubscriptionDetector:
    """Detect recurring charges in a user's expense history."""

    CONFIG = {
        'min_occurrences': 2,
        'max_interval_cv': 0.25,
        'max_amount_stddev': 1.0,
        'yearly_after_days': 350,
        'monthly_after_days': 25,
        'active_within_days': 45,
        'gray_new_within_days': 60,
        'gray_max_amount': 20,
        'cv_penalty_factor': 200,
        'amount_penalty_stddev': 5,
        'amount_penalty': 10,
    }

    def __init__(self, config=None):
        self.config = merge_config(self.CONFIG, config)

    def detect(self, transactions, dismissed_merchants=(), reference_date=None):
        """
        Find subscription candidates.

        Args:
            transactions: iterable of dicts with ``merchant`` (or
                ``description``), ``amount`` and ``date``. Income rows are
                ignored.
            dismissed_merchants: merchants the user marked as not a
                subscription; never reported.
            reference_date: date to measure recency from. Defaults to the
                latest date among ``transactions``.

        Returns:
            List of subscription dicts sorted by amount, largest first.
        """
        rows = []
        latest = None
        for t in transactions:
            day = to_date(t['date'])
            latest = day if latest is None or day > latest else latest
            if t['amount'] < 0:
                merchant = t.get('merchant') or t.get('description') or 'Unknown'
                rows.append((merchant, day, abs(t['amount'])))

        if reference_date is None:
            reference_date = latest
        else:
            reference_date = to_date(reference_date)

        if not rows:
            return []

        rows.sort(key=lambda r: (r[0], r[1]))
        groups = defaultdict(list)
        for merchant, day, amount in rows:
            groups[merchant].append((day, amount))

        dismissed = set(dismissed_merchants)
        detected = []
        for merchant, charges in groups.items():
            if len(charges) < self.config['min_occurrences']:
                continue
            if merchant in dismissed:
                logger.debug("Skipping dismissed merchant %s", merchant)
                continue

            candidate = self._evaluate(merchant, charges, reference_date)
            if candidate:
                detected.append(candidate)

        detected.sort(key=lambda s: s['amount'], reverse=True)
        return detected

    def _evaluate(self, merchant, charges, reference_date):
        cfg = self.config
        dates = [day for day, _ in charges]
        amounts = [amount for _, amount in charges]

        intervals = [(later - earlier).days for earlier, later in zip(dates, dates[1:])]
        avg_interval = stats.mean(intervals)
        cv = stats.coefficient_of_variation(intervals)

        avg_amount = stats.mean(amounts)
        amount_std = stats.stddev(amounts)

        if cv >= cfg['max_interval_cv'] or amount_std >= cfg['max_amount_stddev']:
            return None

        if avg_interval > cfg['yearly_after_days']:
            frequency = 'yearly'
        elif avg_interval > cfg['monthly_after_days']:
            frequency = 'monthly'
        else:
            frequency = 'weekly'

        first_charge, last_charge = dates[0], dates[-1]
        days_since_last = (reference_date - last_charge).days
        days_since_start = (reference_date - first_charge).days

        is_new = days_since_start < cfg['gray_new_within_days']
        is_small = avg_amount < cfg['gray_max_amount']

        score = 100 - cv * cfg['cv_penalty_factor']
        if amount_std > cfg['amount_penalty_stddev']:
            score -= cfg['amount_penalty']
        confidence = int(round(max(0, min(100, score))))

        return {
            'merchant': merchant,
            'amount': avg_amount,
            'frequency': frequency,
            'last_charge_date': last_charge.isoformat(),
            'is_active': days_since_last < cfg['active_within_days'],
            'is_gray_charge': is_new and is_small,
            'confidence': confidence,
        }

