"""Financial profile aggregation - turns raw records into predictor input"""

import json
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List, Optional, Sequence

from tuition_risk.domain.classifier import is_overdue_debt
from tuition_risk.domain.delays import average_delay_days, calculate_delay_days
from tuition_risk.domain.models import (
    DateLike,
    FinancialProfile,
    PaymentRecord,
    PaymentStatus,
    StudentRef,
)

STATUS_COMPLETED = "Completed"
STATUS_COMPLETED_LATE = "Completed with delay"
STATUS_PENDING = "Pending"

STRUCTURED_INSTRUCTION = (
    "Analyze this student's payment history and assess the risk that they will not "
    "pay on time in the next cycle. Classify the risk as: Low, Medium or High. "
    "Briefly justify your decision based on the data."
)


def _payment_status_label(payment: PaymentRecord) -> str:
    if payment.payment_date is None:
        return STATUS_PENDING
    if calculate_delay_days(payment.due_date, payment.payment_date) > 0:
        return STATUS_COMPLETED_LATE
    return STATUS_COMPLETED


def percentage_on_time(payments: Sequence[PaymentRecord]) -> int:
    """Share of payments settled on or before their due date, 0-100"""
    if not payments:
        return 0
    on_time = sum(1 for p in payments if _payment_status_label(p) == STATUS_COMPLETED)
    ratio = Decimal(on_time * 100) / Decimal(len(payments))
    return int(ratio.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def total_overdue_amount(debts: Sequence[PaymentRecord], now: DateLike) -> Decimal:
    """Sum of the amounts of unpaid debts already past due"""
    return sum((Decimal(d.amount) for d in debts if is_overdue_debt(d, now)), Decimal("0"))


def summarize_history(payments: Sequence[PaymentRecord]) -> str:
    """One-line textual history for the natural-language prompt"""
    if not payments:
        return "No payment history"
    labels = [_payment_status_label(p) for p in payments]
    late = labels.count(STATUS_COMPLETED_LATE)
    pending = labels.count(STATUS_PENDING)
    return f"{len(payments)} payments recorded, {late} paid late, {pending} pending"


def build_structured_payload(
    student: StudentRef,
    payments: Sequence[PaymentRecord],
    debts: Sequence[PaymentRecord],
    group_name: str,
    school_level: str,
    now: DateLike,
) -> Dict[str, Any]:
    """
    Structured prompt payload embedded verbatim in the model instruction.

    Each history entry carries a status; late payments are marked
    "Completed with delay", which is what the simulator counts.
    """
    history: List[Dict[str, Any]] = [
        {
            "date": (p.payment_date or p.due_date).isoformat(),
            "amount": p.amount,
            "concept": p.concept,
            "status": _payment_status_label(p),
        }
        for p in payments
    ]
    late = sum(1 for entry in history if entry["status"] == STATUS_COMPLETED_LATE)
    return {
        "instruction": STRUCTURED_INSTRUCTION,
        "student_data": {
            "name": student.full_name,
            "school_level": school_level,
            "group": group_name,
            "payment_history": history,
            "financial_summary": {
                "total_overdue": str(total_overdue_amount(debts, now)),
                "late_payments": late,
                "percentage_on_time": f"{percentage_on_time(payments)}%",
                "average_delay_days": average_delay_days(payments),
            },
        },
    }


def build_financial_profile(
    student: StudentRef,
    payments: Sequence[PaymentRecord],
    debts: Sequence[PaymentRecord],
    group_name: str = "Not specified",
    school_level: str = "Not specified",
    group_risk_level: str = "medium",
    now: Optional[DateLike] = None,
    structured: bool = True,
) -> FinancialProfile:
    """
    Aggregate one student's records into a FinancialProfile.

    Records of other students are ignored. With ``structured`` the profile
    also carries the JSON payload used by the structured prompt mode.
    """
    now = now or datetime.now()
    student_payments = [p for p in payments if p.student_id == student.id]
    student_debts = [d for d in debts if d.student_id == student.id]

    structured_prompt = None
    if structured:
        payload = build_structured_payload(
            student, student_payments, student_debts, group_name, school_level, now
        )
        structured_prompt = json.dumps(payload, ensure_ascii=False)

    return FinancialProfile(
        student_id=student.id,
        student_name=student.full_name,
        total_debt=str(total_overdue_amount(student_debts, now)),
        percentage_on_time=percentage_on_time(student_payments),
        average_delay_days=average_delay_days(student_payments),
        active_debts=sum(1 for d in student_debts if d.status != PaymentStatus.PAID),
        payment_history=summarize_history(student_payments),
        group_risk_level=group_risk_level,
        group_name=group_name,
        school_level=school_level,
        structured_prompt=structured_prompt,
    )
