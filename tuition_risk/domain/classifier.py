"""Risk classification engine - deterministic tiers from payment and debt history"""

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from tuition_risk.domain.delays import average_delay_days, is_late_payment
from tuition_risk.domain.models import (
    DateLike,
    PaymentRecord,
    PaymentStatus,
    ReminderRecord,
    RiskClassification,
    RiskLevel,
    RiskSummary,
    RiskThresholds,
    StudentRef,
)
from tuition_risk.utils.date_utils import is_before

DEFAULT_THRESHOLDS = RiskThresholds()

ACTION_CONTACT_IMMEDIATELY = "Contact immediately"
ACTION_SEND_REMINDER = "Send reminder"
ACTION_REGULAR_MONITORING = "Regular monitoring"


@dataclass(frozen=True)
class RiskSignals:
    """Aggregates a rule is evaluated against"""

    late_payments: int
    overdue_debts: int
    average_delay_days: int


@dataclass(frozen=True)
class RiskRule:
    """Tier assigned when the predicate holds"""

    level: RiskLevel
    action: str
    predicate: Callable[[RiskSignals, RiskThresholds], bool]


def _is_high_risk(signals: RiskSignals, thresholds: RiskThresholds) -> bool:
    return signals.overdue_debts >= thresholds.high_risk_overdue_debts_count or (
        signals.late_payments > thresholds.medium_risk_late_payments_count
        and signals.average_delay_days > thresholds.high_risk_average_delay_days
    )


def _is_medium_risk(signals: RiskSignals, thresholds: RiskThresholds) -> bool:
    return (
        signals.late_payments >= thresholds.medium_risk_late_payments_count
        or signals.overdue_debts == 1
    )


# Evaluated in order, first match wins. The last rule always matches.
RISK_RULES: Tuple[RiskRule, ...] = (
    RiskRule(RiskLevel.HIGH, ACTION_CONTACT_IMMEDIATELY, _is_high_risk),
    RiskRule(RiskLevel.MEDIUM, ACTION_SEND_REMINDER, _is_medium_risk),
    RiskRule(RiskLevel.LOW, ACTION_REGULAR_MONITORING, lambda signals, thresholds: True),
)


def is_overdue_debt(debt: PaymentRecord, now: DateLike) -> bool:
    """Debt past its due date (strictly) and not yet paid"""
    return is_before(debt.due_date, now) and debt.status != PaymentStatus.PAID


def match_rule(signals: RiskSignals, thresholds: RiskThresholds) -> RiskRule:
    """Return the first rule whose predicate holds"""
    for rule in RISK_RULES:
        if rule.predicate(signals, thresholds):
            return rule
    # Unreachable while the last rule is unconditional
    return RISK_RULES[-1]


def classify_student_risk(
    student_id: int,
    student_name: str,
    payments: Sequence[PaymentRecord],
    debts: Sequence[PaymentRecord],
    reminders: Optional[Sequence[ReminderRecord]] = None,
    thresholds: Optional[RiskThresholds] = None,
    now: Optional[DateLike] = None,
) -> RiskClassification:
    """
    Classify one student's payment risk.

    Payments and debts may cover the whole school; only the records of
    ``student_id`` are considered. ``reminders`` is accepted but does not
    influence the tier yet.

    Tiers:
    - high:   overdue debts >= high_risk_overdue_debts_count, or more than
              medium_risk_late_payments_count late payments with an average
              delay above high_risk_average_delay_days
    - medium: at least medium_risk_late_payments_count late payments, or
              exactly one overdue debt
    - low:    everything else
    """
    thresholds = thresholds or DEFAULT_THRESHOLDS
    now = now or datetime.now()

    student_payments = [p for p in payments if p.student_id == student_id]
    student_debts = [d for d in debts if d.student_id == student_id]

    late_payments = [
        p for p in student_payments
        if is_late_payment(p.due_date, p.payment_date, thresholds.medium_risk_delay_threshold)
    ]
    overdue_debts = [d for d in student_debts if is_overdue_debt(d, now)]

    signals = RiskSignals(
        late_payments=len(late_payments),
        overdue_debts=len(overdue_debts),
        average_delay_days=average_delay_days(student_payments),
    )
    rule = match_rule(signals, thresholds)

    return RiskClassification(
        student_id=student_id,
        student_name=student_name,
        total_payments=len(student_payments),
        total_debts=len(student_debts),
        late_payments=signals.late_payments,
        current_overdue_debts=signals.overdue_debts,
        risk_level=rule.level,
        suggested_action=rule.action,
        average_delay_days=signals.average_delay_days,
    )


def classify_all_students_risk(
    students: Iterable[StudentRef],
    payments: Sequence[PaymentRecord],
    debts: Sequence[PaymentRecord],
    reminders: Optional[Sequence[ReminderRecord]] = None,
    thresholds: Optional[RiskThresholds] = None,
    now: Optional[DateLike] = None,
) -> List[RiskClassification]:
    """Classify a roster, keeping roster order (no dedup, no sorting)"""
    now = now or datetime.now()
    return [
        classify_student_risk(
            student.id,
            student.full_name,
            payments,
            debts,
            reminders=reminders,
            thresholds=thresholds,
            now=now,
        )
        for student in students
    ]


def summarize_risk(classifications: Sequence[RiskClassification]) -> RiskSummary:
    """Count students per tier with rounded percentages"""
    total = len(classifications)
    counts = {level: 0 for level in RiskLevel}
    for classification in classifications:
        counts[classification.risk_level] += 1

    def percentage(count: int) -> int:
        return int(count * 100 / total + 0.5) if total else 0

    return RiskSummary(
        total=total,
        low=counts[RiskLevel.LOW],
        medium=counts[RiskLevel.MEDIUM],
        high=counts[RiskLevel.HIGH],
        low_percentage=percentage(counts[RiskLevel.LOW]),
        medium_percentage=percentage(counts[RiskLevel.MEDIUM]),
        high_percentage=percentage(counts[RiskLevel.HIGH]),
    )


def filter_by_student_name(
    classifications: Sequence[RiskClassification],
    query: Optional[str],
) -> List[RiskClassification]:
    """Case-insensitive substring match on the student name"""
    if not query:
        return list(classifications)
    needle = query.lower()
    return [c for c in classifications if needle in c.student_name.lower()]
