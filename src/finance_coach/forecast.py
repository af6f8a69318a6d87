"""
Next-month spending forecast.
"""
from . import stats
from .config import merge_config
from .logging_setup import get_logger

logger = get_logger('finance_coach.forecast')


class Forecaster:
    """Linear trend over recent monthly expense totals."""

    CONFIG = {
        'min_months': 3,
        'trend_slope': 50,
    }

    def __init__(self, config=None):
        self.config = merge_config(self.CONFIG, config)

    def predict(self, monthly_totals):
        """
        Project next month's total spend.

        Args:
            monthly_totals: completed monthly expense totals, oldest first

        Returns:
            dict with next_month_amount, trend (up/down/stable) and
            confidence (R squared, 0..1)
        """
        totals = list(monthly_totals)
        if len(totals) < self.config['min_months']:
            logger.debug("Forecast skipped: %d months of history", len(totals))
            return self._neutral()

        points = list(enumerate(totals))
        fit = stats.linear_regression(points)
        if fit is None:
            return self._neutral()
        slope, intercept = fit

        n = len(points)
        prediction = slope * n + intercept

        trend = 'stable'
        if slope > self.config['trend_slope']:
            trend = 'up'
        elif slope < -self.config['trend_slope']:
            trend = 'down'

        return {
            'next_month_amount': max(0.0, prediction),
            'trend': trend,
            'confidence': stats.r_squared(points, slope, intercept),
        }

    @staticmethod
    def _neutral():
        return {'next_month_amount': 0.0, 'trend': 'stable', 'confidence': 0.0}
