"""Tests for the needs / wants / savings classifier."""

import pytest

from finance_coach.budget import MESSAGES, BudgetClassifier


def flows(income, **expenses):
    rows = [{'category': 'Income', 'income': income, 'expense': 0}]
    rows += [{'category': name.replace('_', ' '), 'income': 0, 'expense': amount}
             for name, amount in expenses.items()]
    return rows


class TestRecommendation:
    """Threshold order: needs, wants, savings, balanced."""

    def setup_method(self):
        self.classifier = BudgetClassifier()

    def test_needs_high(self):
        result = self.classifier.classify(flows(1000, Rent=700))
        assert result['recommendation'] == MESSAGES['needs_high']
        assert result['needs'] == 700
        assert result['wants'] == 0
        assert result['savings'] == 300

    def test_wants_high(self):
        result = self.classifier.classify(flows(1000, Rent=100, Shopping=450))
        assert result['recommendation'] == MESSAGES['wants_high']

    def test_savings_low(self):
        result = self.classifier.classify(flows(1000, Rent=550, Dining=380))
        assert result['recommendation'] == MESSAGES['savings_low']
        assert result['savings'] == pytest.approx(70)

    def test_balanced(self):
        result = self.classifier.classify(flows(1000, Rent=400, Dining=200))
        assert result['recommendation'] == MESSAGES['on_track']

    def test_no_income_uses_default_message(self):
        result = self.classifier.classify(flows(0, Rent=900))
        assert result['recommendation'] == MESSAGES['default']
        assert result['savings'] == 0

    def test_empty_month(self):
        assert self.classifier.classify([]) == {
            'needs': 0.0, 'wants': 0.0, 'savings': 0.0, 'recommendation': MESSAGES['default'],
        }

    def test_savings_categories_are_excluded_from_needs_and_wants(self):
        result = self.classifier.classify(flows(1000, Rent=400, Savings_Transfer=300))
        assert result['needs'] == 400
        assert result['wants'] == 0
        assert result['savings'] == 600


class TestBuckets:
    """Keyword table lookups."""

    def test_needs_match_is_case_sensitive(self):
        classifier = BudgetClassifier()
        assert classifier.bucket_for('Monthly Rent') == 'needs'
        assert classifier.bucket_for('rent') == 'wants'

    def test_savings_match_ignores_case(self):
        classifier = BudgetClassifier()
        assert classifier.bucket_for('Investments') == 'savings'
        assert classifier.bucket_for('HIGH YIELD SAVINGS') == 'savings'

    def test_needs_take_precedence(self):
        assert BudgetClassifier().bucket_for('Health Savings') == 'needs'

    def test_custom_keyword_table(self):
        classifier = BudgetClassifier(keywords={'needs': (['coffee'], False)})
        assert classifier.bucket_for('Coffee') == 'needs'
        assert classifier.bucket_for('Rent') == 'wants'
