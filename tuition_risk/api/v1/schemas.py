"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from datetime import date, datetime
from typing import List, Optional, Union

from tuition_risk.domain.models import (
    FinancialProfile,
    PaymentRecord,
    PaymentStatus,
    PredictionSource,
    ReminderRecord,
    RiskLevel,
    RiskThresholds,
    StudentRef,
)


class StudentSchema(BaseModel):
    """Roster entry"""

    id: int
    full_name: str

    def to_domain(self) -> StudentRef:
        return StudentRef(id=self.id, full_name=self.full_name)


class PaymentRecordSchema(BaseModel):
    """Payment or debt record"""

    student_id: int
    due_date: Union[date, datetime]
    payment_date: Optional[Union[date, datetime]] = None
    amount: str = Field(..., pattern=r"^-?\d+(\.\d+)?$", description="Decimal amount")
    status: PaymentStatus
    concept: Optional[str] = None

    def to_domain(self) -> PaymentRecord:
        return PaymentRecord(
            student_id=self.student_id,
            due_date=self.due_date,
            payment_date=self.payment_date,
            amount=self.amount,
            status=self.status,
            concept=self.concept,
        )


class ReminderSchema(BaseModel):
    """Reminder sent to a family"""

    student_id: int
    status: str
    sent_at: datetime

    def to_domain(self) -> ReminderRecord:
        return ReminderRecord(student_id=self.student_id, status=self.status, sent_at=self.sent_at)


class ThresholdsSchema(BaseModel):
    """Classifier threshold overrides"""

    medium_risk_delay_threshold: int = Field(5, ge=0)
    medium_risk_late_payments_count: int = Field(2, ge=0)
    high_risk_overdue_debts_count: int = Field(2, ge=1)
    high_risk_average_delay_days: int = Field(10, ge=0)

    def to_domain(self) -> RiskThresholds:
        return RiskThresholds(**self.model_dump())


class ClassificationRequest(BaseModel):
    """Request body for POST /v1/risk/classify"""

    students: List[StudentSchema]
    payments: List[PaymentRecordSchema] = []
    debts: List[PaymentRecordSchema] = []
    reminders: List[ReminderSchema] = []
    thresholds: Optional[ThresholdsSchema] = None


class ClassificationSchema(BaseModel):
    """Deterministic classification of one student"""

    student_id: int
    student_name: str
    total_payments: int
    total_debts: int
    late_payments: int
    current_overdue_debts: int
    risk_level: RiskLevel
    suggested_action: str
    average_delay_days: int


class RiskSummarySchema(BaseModel):
    """Tier distribution"""

    total: int
    low: int
    medium: int
    high: int
    low_percentage: int
    medium_percentage: int
    high_percentage: int


class ClassificationResponse(BaseModel):
    """Response for POST /v1/risk/classify"""

    classifications: List[ClassificationSchema]
    summary: RiskSummarySchema


class PredictionRequest(BaseModel):
    """Request body for POST /v1/risk/predict and /v1/risk/simulate"""

    student_id: int
    student_name: str = Field(..., min_length=1)
    total_debt: str = "0"
    percentage_on_time: float = Field(0, ge=0, le=100)
    average_delay_days: float = Field(0, ge=0)
    active_debts: int = Field(0, ge=0)
    payment_history: str = "Not available"
    group_risk_level: str = "medium"
    group_name: str = "Not specified"
    school_level: str = "Not specified"
    structured_prompt: Optional[str] = None

    def to_domain(self) -> FinancialProfile:
        return FinancialProfile(**self.model_dump())


class PredictionResponse(BaseModel):
    """Risk prediction"""

    risk_level: RiskLevel
    justification: str
    recommended_action: Optional[str] = None
    confidence_score: Optional[float] = None
    source: PredictionSource
