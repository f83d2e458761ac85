"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional, Union


class RiskLevel(str, Enum):
    """Risk tier shared by the classifier, the predictor and the simulator"""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def normalize(cls, value: object) -> "RiskLevel":
        """
        Map free text to a tier.

        Accepts the English values and the source-locale aliases
        (bajo/medio/alto), ignoring case and surrounding whitespace.
        Anything unrecognized becomes MEDIUM.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return cls.MEDIUM
        return _RISK_LEVEL_ALIASES.get(value.strip().lower(), cls.MEDIUM)


_RISK_LEVEL_ALIASES = {
    "low": RiskLevel.LOW,
    "medium": RiskLevel.MEDIUM,
    "high": RiskLevel.HIGH,
    "bajo": RiskLevel.LOW,
    "medio": RiskLevel.MEDIUM,
    "alto": RiskLevel.HIGH,
}


class PaymentStatus(str, Enum):
    """Lifecycle of a payment or debt record"""

    PAID = "paid"
    PENDING = "pending"
    OVERDUE = "overdue"


class PredictionSource(str, Enum):
    """Which path produced a RiskPrediction"""

    AI = "ai"
    HEURISTIC = "heuristic"  # AI response could not be parsed, keywords scanned instead
    SIMULATION = "simulation"


DateLike = Union[date, datetime]


@dataclass(frozen=True)
class PaymentRecord:
    """Payment or debt tied to a student, as handed over by the caller"""

    student_id: int
    due_date: DateLike
    payment_date: Optional[DateLike]  # None = not paid yet
    amount: str  # decimal string
    status: PaymentStatus
    concept: Optional[str] = None


@dataclass(frozen=True)
class ReminderRecord:
    """Payment reminder sent to a student's family"""

    student_id: int
    status: str
    sent_at: DateLike


@dataclass(frozen=True)
class StudentRef:
    """Roster entry"""

    id: int
    full_name: str


@dataclass(frozen=True)
class RiskThresholds:
    """Classifier configuration"""

    medium_risk_delay_threshold: int = 5  # days past due before a payment counts as late
    medium_risk_late_payments_count: int = 2
    high_risk_overdue_debts_count: int = 2
    high_risk_average_delay_days: int = 10


@dataclass
class RiskClassification:
    """Output of the deterministic classifier"""

    student_id: int
    student_name: str
    total_payments: int
    total_debts: int
    late_payments: int
    current_overdue_debts: int
    risk_level: RiskLevel
    suggested_action: str
    average_delay_days: int


@dataclass
class RiskSummary:
    """Tier distribution over a classified roster"""

    total: int
    low: int
    medium: int
    high: int
    low_percentage: int
    medium_percentage: int
    high_percentage: int


@dataclass
class FinancialProfile:
    """Student financial profile fed to the predictor and the simulator"""

    student_id: int
    student_name: str
    total_debt: str = "0"
    percentage_on_time: float = 0
    average_delay_days: float = 0
    active_debts: int = 0
    payment_history: str = "Not available"
    group_risk_level: str = "medium"
    group_name: str = "Not specified"
    school_level: str = "Not specified"
    structured_prompt: Optional[str] = None  # pre-built JSON payload


@dataclass
class RiskPrediction:
    """Output of the AI predictor or the simulator"""

    risk_level: RiskLevel
    justification: str
    recommended_action: Optional[str] = None
    confidence_score: Optional[float] = None
    source: PredictionSource = PredictionSource.AI
