"""
Month-end spend projection from this month's cumulative daily spend.
"""
from . import stats
from .config import merge_config
from .dates import days_in_month, to_date
from .insight_types import make_insight
from .logging_setup import get_logger

logger = get_logger('finance_coach.burn_rate')


class BurnRateProjector:
    """Project the anchor month's total and compare it with recent months."""

    CONFIG = {
        'min_days': 5,
        'high_ratio': 1.15,
        'low_ratio': 0.85,
    }

    def __init__(self, config=None):
        self.config = merge_config(self.CONFIG, config)

    def project(self, anchor, daily_totals, trailing_average=None):
        """
        Fit cumulative spend against day of month.

        Args:
            anchor: reference date; its month is projected
            daily_totals: (date, total spend) pairs from the 1st of the
                anchor month through the anchor date
            trailing_average: average monthly spend of the previous months,
                or None when there is no history

        Returns:
            dict with slope, projected_total, average and days_in_month, or
            None when there are too few days to fit.
        """
        anchor = to_date(anchor)
        days = sorted((to_date(day), total) for day, total in daily_totals)
        if len({day for day, _ in days}) < self.config['min_days']:
            logger.debug("Burn rate skipped: %d days of spend", len(days))
            return None

        cumulative = 0.0
        points = []
        for day, total in days:
            cumulative += total
            points.append((day.day, cumulative))

        fit = stats.linear_regression(points)
        if fit is None:
            return None
        slope, intercept = fit

        month_days = days_in_month(anchor)
        projected = slope * month_days + intercept
        average = trailing_average if trailing_average else projected

        return {
            'slope': slope,
            'projected_total': projected,
            'average': average,
            'days_in_month': month_days,
        }

    def insight(self, anchor, daily_totals, trailing_average=None):
        """Return an alert/achievement insight, or None when spend is on pace."""
        projection = self.project(anchor, daily_totals, trailing_average)
        if projection is None:
            return None

        slope = projection['slope']
        projected = projection['projected_total']
        average = projection['average']

        if projected > average * self.config['high_ratio']:
            return make_insight(
                'burn_rate_warning', 'alert', 'High Burn Rate Projected',
                f"At your current pace (${slope:.0f}/day), you're projected to spend "
                f"${projected:.0f} this month, which is higher than your average of ${average:.0f}.",
                projected - average,
            )
        if projected < average * self.config['low_ratio']:
            return make_insight(
                'burn_rate_good', 'achievement', 'On Track to Save',
                f"Great job! You're projected to spend only ${projected:.0f} this month, "
                f"saving ~${average - projected:.0f} vs your average.",
                average - projected,
            )
        return None
