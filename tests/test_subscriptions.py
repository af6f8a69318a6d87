"""Tests for recurring subscription detection."""

import pytest

from finance_coach.subscriptions import SubscriptionDetector

from helpers import txn


def monthly_charges(merchant, amount, dates):
    return [txn(d, -amount, 'Entertainment', merchant) for d in dates]


@pytest.fixture
def detector():
    return SubscriptionDetector()


class TestClassification:
    """Which merchants qualify as subscriptions."""

    def test_identical_monthly_charges(self, detector):
        """Same amount every 30 days is a monthly subscription with full confidence."""
        rows = monthly_charges('Spotify', 9.99, ['2024-01-01', '2024-01-31', '2024-03-01'])
        [sub] = detector.detect(rows)

        assert sub['merchant'] == 'Spotify'
        assert sub['frequency'] == 'monthly'
        assert sub['amount'] == pytest.approx(9.99)
        assert sub['confidence'] == 100
        assert sub['last_charge_date'] == '2024-03-01'
        assert sub['is_active'] is True

    def test_two_charges_are_enough(self, detector):
        rows = monthly_charges('Spotify', 9.99, ['2024-01-01', '2024-01-31'])
        [sub] = detector.detect(rows)
        assert sub['confidence'] == 100

    def test_single_charge_never_qualifies(self, detector):
        assert detector.detect(monthly_charges('Gym', 40, ['2024-01-01'])) == []

    def test_dismissed_merchant_is_suppressed(self, detector):
        rows = monthly_charges('Spotify', 9.99, ['2024-01-01', '2024-01-31', '2024-03-01'])
        assert detector.detect(rows, dismissed_merchants={'Spotify'}) == []

    def test_irregular_timing_is_rejected(self, detector):
        rows = monthly_charges('Cafe', 5, ['2024-01-01', '2024-01-06', '2024-02-15', '2024-02-25'])
        assert detector.detect(rows) == []

    def test_varying_amounts_are_rejected(self, detector):
        rows = [
            txn('2024-01-01', -10, 'Utilities', 'Power Co'),
            txn('2024-01-31', -15, 'Utilities', 'Power Co'),
            txn('2024-03-01', -20, 'Utilities', 'Power Co'),
        ]
        assert detector.detect(rows) == []

    def test_income_is_ignored(self, detector):
        rows = [
            txn('2024-01-01', 500, 'Income', 'Client'),
            txn('2024-01-31', 500, 'Income', 'Client'),
        ]
        assert detector.detect(rows) == []

    def test_merchant_falls_back_to_description(self, detector):
        rows = [
            {'date': '2024-01-01', 'amount': -12, 'description': 'HULU 877'},
            {'date': '2024-01-31', 'amount': -12, 'description': 'HULU 877'},
        ]
        [sub] = detector.detect(rows)
        assert sub['merchant'] == 'HULU 877'


class TestFrequencyAndRecency:
    """Frequency labels, activity and gray charges."""

    def test_yearly(self, detector):
        rows = monthly_charges('Domain', 12, ['2021-03-01', '2022-03-01', '2023-03-01'])
        [sub] = detector.detect(rows)
        assert sub['frequency'] == 'yearly'

    def test_weekly(self, detector):
        rows = monthly_charges('Paper', 3, ['2024-05-01', '2024-05-08', '2024-05-15'])
        [sub] = detector.detect(rows)
        assert sub['frequency'] == 'weekly'

    def test_recency_uses_latest_date_in_data(self, detector):
        """Activity is measured from the newest transaction, not today."""
        rows = monthly_charges('Spotify', 9.99, ['2024-01-01', '2024-01-31', '2024-03-01'])
        rows.append(txn('2024-06-01', 2000, 'Income', 'Payroll'))
        [sub] = detector.detect(rows)
        assert sub['is_active'] is False

    def test_explicit_reference_date(self, detector):
        rows = monthly_charges('Spotify', 9.99, ['2024-01-01', '2024-01-31', '2024-03-01'])
        [sub] = detector.detect(rows, reference_date='2024-04-10')
        assert sub['is_active'] is True

    def test_new_small_charge_is_gray(self, detector):
        rows = monthly_charges('Tiny App', 4.99, ['2024-05-01', '2024-05-08', '2024-05-15'])
        [sub] = detector.detect(rows)
        assert sub['is_gray_charge'] is True

    def test_established_charge_is_not_gray(self, detector):
        rows = monthly_charges('Spotify', 9.99, ['2024-01-01', '2024-01-31', '2024-03-01'])
        [sub] = detector.detect(rows)
        assert sub['is_gray_charge'] is False

    def test_new_large_charge_is_not_gray(self, detector):
        rows = monthly_charges('Gym', 45, ['2024-05-01', '2024-05-08', '2024-05-15'])
        [sub] = detector.detect(rows)
        assert sub['is_gray_charge'] is False


class TestConfidenceAndOrdering:
    """Confidence score and output order."""

    def test_timing_jitter_lowers_confidence(self, detector):
        # gaps of 30 and 31 days: cv ~0.0232
        rows = monthly_charges('Spotify', 9.99, ['2024-01-01', '2024-01-31', '2024-03-02'])
        [sub] = detector.detect(rows)
        assert sub['confidence'] == 95

    def test_amount_penalty_when_configured_tolerance_allows_it(self):
        detector = SubscriptionDetector(config={'max_amount_stddev': 100})
        rows = [
            txn('2024-01-01', -50, 'Utilities', 'Water'),
            txn('2024-01-31', -60, 'Utilities', 'Water'),
        ]
        [sub] = detector.detect(rows)
        assert sub['confidence'] == 90

    def test_sorted_by_amount_descending(self, detector):
        dates = ['2024-01-01', '2024-01-31', '2024-03-01']
        rows = (
            monthly_charges('Spotify', 9.99, dates)
            + monthly_charges('Gym', 45, dates)
            + monthly_charges('Cloud', 2.99, dates)
        )
        assert [s['merchant'] for s in detector.detect(rows)] == ['Gym', 'Spotify', 'Cloud']

    def test_empty_input(self, detector):
        assert detector.detect([]) == []

    def test_repeated_calls_are_identical(self, detector):
        rows = monthly_charges('Spotify', 9.99, ['2024-01-01', '2024-01-31', '2024-03-01'])
        assert detector.detect(rows) == detector.detect(rows)

    def test_unknown_config_key_is_rejected(self):
        with pytest.raises(ValueError):
            SubscriptionDetector(config={'max_cv': 0.5})
