"""
Category spending anomalies via z-scores against trailing months.
"""
from . import stats
from .config import merge_config


class AnomalyDetector:
    """Flag categories whose spend this month is far above their history."""

    CONFIG = {
        'min_history': 3,
        'z_threshold': 2.0,
        'min_amount': 100,
    }

    def __init__(self, config=None):
        self.config = merge_config(self.CONFIG, config)

    def detect(self, history, current):
        """
        Args:
            history: category -> list of monthly totals (current month excluded)
            current: category -> this month's total

        Returns:
            List of anomaly dicts sorted by z_score, highest first.
        """
        anomalies = []
        for category in sorted(current):
            past = history.get(category, [])
            if len(past) < self.config['min_history']:
                continue

            amount = current[category]
            average = stats.mean(past)
            z_score = (amount - average) / max(stats.stddev(past), 1.0)

            if z_score > self.config['z_threshold'] and amount > self.config['min_amount']:
                anomalies.append({
                    'category': category,
                    'amount': amount,
                    'z_score': round(z_score, 2),
                    'average': round(average, 2),
                })

        anomalies.sort(key=lambda a: a['z_score'], reverse=True)
        return anomalies
