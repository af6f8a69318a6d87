"""
Insights Engine for the finance coach.

Runs the analytics components over a ledger snapshot and assembles their
results into the structures the dashboard and the advice layer consume.

KEY PRINCIPLES:
1. ANCHOR DATE: "today" is the latest transaction date in the ledger, so an
   imported history replays exactly as it did when it was current.
2. STATELESS: every call recomputes from the snapshot it is given.
"""
from datetime import date

from .anomalies import AnomalyDetector
from .budget import BudgetClassifier
from .burn_rate import BurnRateProjector
from .config import merge_config
from .dates import month_start, to_date
from .forecast import Forecaster
from .insight_types import make_insight
from .logging_setup import get_logger
from . import stats
from .subscriptions import SubscriptionDetector

logger = get_logger('finance_coach.insights')


class InsightsEngine:
    """Orchestrates subscriptions, forecasts, anomalies, budget and burn rate."""

    CONFIG = {
        'summary_days': 30,
        'forecast_months': 6,
        'anomaly_history_months': 6,
        'burn_rate_history_months': 3,
        'large_transaction_multiple': 3,
        'default_transaction_size': 50,
        'large_purchase_min': 200,
    }

    def __init__(self, subscription_detector=None, forecaster=None, anomaly_detector=None,
                 budget_classifier=None, burn_rate_projector=None, config=None):
        self.subscription_detector = subscription_detector or SubscriptionDetector()
        self.forecaster = forecaster or Forecaster()
        self.anomaly_detector = anomaly_detector or AnomalyDetector()
        self.budget_classifier = budget_classifier or BudgetClassifier()
        self.burn_rate_projector = burn_rate_projector or BurnRateProjector()
        self.config = merge_config(self.CONFIG, config)

    def _target_month(self, ledger, year, month):
        if year and month:
            return int(year), int(month)
        anchor = ledger.max_date()
        if anchor is None:
            return None
        return anchor.year, anchor.month

    def get_ml_insights(self, ledger, year=None, month=None):
        """Prediction, category anomalies and budget split for one month."""
        target = self._target_month(ledger, year, month)
        if target is None:
            return {
                'prediction': self.forecaster.predict([]),
                'anomalies': [],
                'budget': self.budget_classifier.classify([]),
            }

        year, month = target
        first_day = date(year, month, 1)

        monthly_totals = ledger.monthly_expense_totals(first_day, limit=self.config['forecast_months'])
        history = ledger.category_history(first_day, months=self.config['anomaly_history_months'])

        return {
            'prediction': self.forecaster.predict(monthly_totals),
            'anomalies': self.anomaly_detector.detect(history, ledger.category_totals(year, month)),
            'budget': self.budget_classifier.classify(ledger.category_flows(year, month)),
        }

    def detect_subscriptions(self, ledger, dismissed=()):
        return self.subscription_detector.detect(
            ledger.expense_records(), dismissed, reference_date=ledger.max_date()
        )

    def burn_rate(self, ledger, anchor=None):
        """Burn-rate insight for the anchor month, or None."""
        anchor = to_date(anchor) if anchor else ledger.max_date()
        if anchor is None:
            return None

        daily = ledger.daily_expense_totals(month_start(anchor), anchor)
        average = ledger.trailing_average(anchor, months=self.config['burn_rate_history_months'])
        return self.burn_rate_projector.insight(anchor, daily, average)

    def _spending_anomaly(self, ledger, anchor):
        """First recent expense far larger than the typical expense."""
        amounts = [abs(t['amount']) for t in ledger.expense_records()]
        typical = stats.mean(amounts) or self.config['default_transaction_size']
        threshold = typical * self.config['large_transaction_multiple']

        for t in ledger.recent_expenses(anchor, days=self.config['summary_days']):
            if abs(t['amount']) > threshold:
                return t
        return None

    def build_context(self, ledger, goals=(), dismissed=(), subscriptions=None):
        """
        Summarize the last 30 days for the advice layer.

        Returns:
            dict with anchorDate and a summary of spend, top category,
            largest transaction, subscriptions, goals and potential anomaly.
        """
        anchor = ledger.max_date()
        if subscriptions is None:
            subscriptions = self.detect_subscriptions(ledger, dismissed)

        recent = ledger.recent_expenses(anchor, days=self.config['summary_days']) if anchor else []
        total_spend = sum(abs(t['amount']) for t in recent)

        by_category = {}
        for t in recent:
            by_category[t['category']] = by_category.get(t['category'], 0) + abs(t['amount'])
        top_category = max(by_category.items(), key=lambda kv: kv[1]) if by_category else None

        largest = min(recent, key=lambda t: t['amount']) if recent else None
        anomaly = self._spending_anomaly(ledger, anchor) if anchor else None

        active_goals = [g for g in goals if g['current_amount'] < g['target_amount']]

        return {
            'anchorDate': anchor.isoformat() if anchor else None,
            'summary': {
                'total_spend_last_30_days': f"{total_spend:.2f}",
                'top_category': f"{top_category[0]} (${top_category[1]:.2f})" if top_category else "N/A",
                'largest_transaction': (
                    f"{largest['merchant'] or largest['description']} (${abs(largest['amount']):.2f})"
                    if largest else "N/A"
                ),
                'active_subscriptions_count': len(subscriptions),
                'subscriptions_total': f"{sum(s['amount'] for s in subscriptions):.2f}",
                'gray_charges_detected': [s['merchant'] for s in subscriptions if s['is_gray_charge']],
                'active_goals': [
                    f"{g['name']}: ${g['current_amount']}/${g['target_amount']} (Due: {g.get('deadline')})"
                    for g in active_goals
                ],
                'potential_anomaly': (
                    f"Unusual spent: ${abs(anomaly['amount']):.2f} at {anomaly['merchant']}"
                    if anomaly else "None"
                ),
            },
        }

    def generate_insights(self, ledger, goals=(), dismissed=()):
        """
        Build the insight list shown on the dashboard.

        Returns:
            dict with ``insights`` (list of insight dicts) and ``context``
            (the summary handed to the advice layer).
        """
        goals = list(goals)
        anchor = ledger.max_date()
        context = self.build_context(ledger, goals, dismissed)
        if anchor is None:
            return {'insights': [], 'context': context}

        insights = []

        anomaly = self._spending_anomaly(ledger, anchor)
        if anomaly:
            amount = abs(anomaly['amount'])
            insights.append(make_insight(
                'ml_anomaly', 'alert', 'Spending Anomaly Detected',
                f"Unusual transaction of ${amount:.2f} at {anomaly['merchant']}. Is this correct?",
                amount,
            ))

        burn_rate = self.burn_rate(ledger, anchor)
        if burn_rate:
            insights.append(burn_rate)

        if not insights:
            insights = self._static_insights(ledger, anchor, goals)

        logger.debug("Generated %d insights anchored at %s", len(insights), anchor)
        return {'insights': insights, 'context': context}

    def _static_insights(self, ledger, anchor, goals):
        insights = []

        large = [
            t for t in ledger.expenses_in_month(anchor.year, anchor.month)
            if t['amount'] < -self.config['large_purchase_min']
        ]
        if large:
            largest = min(large, key=lambda t: t['amount'])
            amount = abs(largest['amount'])
            insights.append(make_insight(
                'large_purchase', 'alert', 'Large Purchase Detected',
                f"You spent ${amount:.2f} at {largest['merchant'] or largest['description']}.",
                amount,
            ))

        if goals:
            goal = goals[0]
            target = goal['target_amount']
            progress = min(100.0, goal['current_amount'] / target * 100) if target > 0 else 100.0
            insights.append(make_insight(
                'goal_insight', 'opportunity', 'Goal Progress',
                f"You are {progress:.0f}% of the way to your \"{goal['name']}\" goal! Keep going!",
                0,
            ))

        return insights


_engine = None


def get_insights_engine():
    global _engine
    if _engine is None:
        _engine = InsightsEngine()
    return _engine
