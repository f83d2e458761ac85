"""Payment delay calculations over raw payment history"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

from tuition_risk.domain.models import DateLike, PaymentRecord
from tuition_risk.utils.date_utils import days_between_ceil


def calculate_delay_days(due_date: DateLike, payment_date: Optional[DateLike]) -> int:
    """
    Days a payment was made after its due date.

    Returns 0 for unpaid records and for payments made on or before the due
    date; otherwise the difference in days, rounded up for partial days.
    """
    if payment_date is None:
        return 0
    return max(days_between_ceil(due_date, payment_date), 0)


def is_late_payment(
    due_date: DateLike,
    payment_date: Optional[DateLike],
    late_threshold_days: int,
) -> bool:
    """A paid record whose delay exceeds the threshold"""
    if payment_date is None:
        return False
    return calculate_delay_days(due_date, payment_date) > late_threshold_days


def average_delay_days(payments: Iterable[PaymentRecord]) -> int:
    """Mean delay over every payment (on-time ones included), rounded half up"""
    delays = [calculate_delay_days(p.due_date, p.payment_date) for p in payments]
    if not delays:
        return 0
    mean = Decimal(sum(delays)) / Decimal(len(delays))
    return int(mean.quantize(Decimal(1), rounding=ROUND_HALF_UP))
