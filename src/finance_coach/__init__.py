"""Spending analytics for the finance coach."""
from .anomalies import AnomalyDetector
from .budget import BudgetClassifier
from .burn_rate import BurnRateProjector
from .forecast import Forecaster
from .insights import InsightsEngine, get_insights_engine
from .ledger import Ledger
from .subscriptions import SubscriptionDetector

__all__ = [
    'AnomalyDetector', 'BudgetClassifier', 'BurnRateProjector', 'Forecaster',
    'InsightsEngine', 'get_insights_engine', 'Ledger', 'SubscriptionDetector',
]
