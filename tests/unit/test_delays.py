"""Unit tests for payment delay calculations"""

from datetime import date, datetime, timedelta
from tuition_risk.domain.delays import average_delay_days, calculate_delay_days, is_late_payment


def test_calculate_delay_days_on_due_date():
    """Paying on the due date is not a delay"""
    due = date(2026, 1, 10)
    assert calculate_delay_days(due, due) == 0


def test_calculate_delay_days_before_due_date():
    """Early payments never produce negative delays"""
    due = date(2026, 1, 10)
    assert calculate_delay_days(due, due - timedelta(days=4)) == 0


def test_calculate_delay_days_after_due_date():
    """Delay equals whole days past due"""
    due = date(2026, 1, 10)
    for days in (1, 7, 45):
        assert calculate_delay_days(due, due + timedelta(days=days)) == days


def test_calculate_delay_days_unpaid():
    """Unpaid records contribute zero delay"""
    assert calculate_delay_days(date(2025, 6, 1), None) == 0


def test_calculate_delay_days_partial_day_rounds_up():
    """Partial days past due count as a full day"""
    due = datetime(2026, 1, 10, 0, 0)
    assert calculate_delay_days(due, datetime(2026, 1, 11, 6, 0)) == 2  # 30 hours
    assert calculate_delay_days(date(2026, 1, 10), datetime(2026, 1, 10, 9, 0)) == 1


def test_is_late_payment_threshold_is_exclusive():
    """A payment is late only when the delay exceeds the threshold"""
    due = date(2026, 2, 1)
    assert is_late_payment(due, due + timedelta(days=5), 5) is False
    assert is_late_payment(due, due + timedelta(days=6), 5) is True


def test_is_late_payment_unpaid_never_late():
    """Missing payment date is never late, whatever the threshold"""
    due = date(2024, 1, 1)
    for threshold in (-1, 0, 5, 100):
        assert is_late_payment(due, None, threshold) is False


def test_average_delay_days_rounds_half_up(paid):
    """Average covers every payment and rounds .5 upward"""
    due = date(2026, 1, 10)
    payments = [paid(1, due, 0), paid(1, due, 3)]  # mean 1.5
    assert average_delay_days(payments) == 2


def test_average_delay_days_empty():
    """No payments means no delay"""
    assert average_delay_days([]) == 0
