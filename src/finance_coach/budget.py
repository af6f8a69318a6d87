"""
Needs / wants / savings classification of a month's spending.

Categories are free text, so buckets are assigned by substring match against a
keyword table. Savings in the result is what is left of income after needs and
wants, not the total of savings-named categories.
"""
from .config import merge_config

MESSAGES = {
    'needs_high': "Needs are high (>60%). Look for cheaper utilities or rent.",
    'wants_high': "Wants are high (>40%). Cut back on Shopping/Dining.",
    'savings_low': "Savings are low (<10%). Try to save at least 20%.",
    'on_track': "Great job! You are following the 50/30/20 rule closely.",
    'default': "Your budget looks balanced.",
}


class BudgetClassifier:
    """Split monthly expenses into 50/30/20 buckets."""

    # bucket -> (substrings, case sensitive); checked in order, first match wins
    KEYWORDS = {
        'needs': (['Rent', 'Utilities', 'Groceries', 'Health', 'Transport', 'Insurance'], True),
        'savings': (['saving', 'invest'], False),
    }

    CONFIG = {
        'needs_max_pct': 60,
        'wants_max_pct': 40,
        'savings_min_pct': 10,
    }

    def __init__(self, keywords=None, config=None):
        self.keywords = dict(keywords) if keywords is not None else dict(self.KEYWORDS)
        self.config = merge_config(self.CONFIG, config)

    def bucket_for(self, category):
        """Return the bucket a category belongs to ('wants' when nothing matches)."""
        for bucket, (substrings, case_sensitive) in self.keywords.items():
            name = category if case_sensitive else category.lower()
            for keyword in substrings:
                needle = keyword if case_sensitive else keyword.lower()
                if needle in name:
                    return bucket
        return 'wants'

    def classify(self, rows):
        """
        Args:
            rows: iterable of dicts with category, income and expense totals
                for the month (expense as a positive number)

        Returns:
            dict with needs, wants, savings and recommendation
        """
        totals = {'needs': 0.0, 'wants': 0.0, 'savings': 0.0}
        total_income = 0.0

        for row in rows:
            total_income += row.get('income', 0) or 0
            expense = row.get('expense', 0) or 0
            if expense > 0:
                bucket = self.bucket_for(row['category'])
                totals[bucket] = totals.get(bucket, 0.0) + expense

        needs, wants = totals['needs'], totals['wants']
        real_savings = max(0.0, total_income - (needs + wants))

        return {
            'needs': needs,
            'wants': wants,
            'savings': real_savings,
            'recommendation': self._recommend(total_income, needs, wants, real_savings),
        }

    def _recommend(self, income, needs, wants, savings):
        if income <= 0:
            return MESSAGES['default']

        cfg = self.config
        if needs / income * 100 > cfg['needs_max_pct']:
            return MESSAGES['needs_high']
        if wants / income * 100 > cfg['wants_max_pct']:
            return MESSAGES['wants_high']
        if savings < income * cfg['savings_min_pct'] / 100:
            return MESSAGES['savings_low']
        return MESSAGES['on_track']
