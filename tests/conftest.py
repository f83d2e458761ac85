"""Pytest fixtures for testing"""

import pytest
from datetime import date, datetime, timedelta
from fastapi import FastAPI
from fastapi.testclient import TestClient
from tuition_risk.api.main import create_app
from tuition_risk.domain.models import FinancialProfile, PaymentRecord, PaymentStatus


@pytest.fixture
def app() -> FastAPI:
    """Fresh application per test so dependency overrides do not leak"""
    return create_app()


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create FastAPI test client"""
    return TestClient(app)


@pytest.fixture
def now() -> datetime:
    """Fixed evaluation instant for classifier tests"""
    return datetime(2026, 3, 1, 12, 0)


def _paid(student_id: int, due: date, delay_days: int, amount: str = "1500.00") -> PaymentRecord:
    """Payment settled ``delay_days`` after its due date"""
    return PaymentRecord(
        student_id=student_id,
        due_date=due,
        payment_date=due + timedelta(days=delay_days),
        amount=amount,
        status=PaymentStatus.PAID,
        concept="Monthly tuition",
    )


def _debt(
    student_id: int,
    due: date,
    status: PaymentStatus = PaymentStatus.PENDING,
    amount: str = "1500.00",
) -> PaymentRecord:
    """Debt record; unpaid unless a status says otherwise"""
    return PaymentRecord(
        student_id=student_id,
        due_date=due,
        payment_date=None,
        amount=amount,
        status=status,
        concept="Monthly tuition",
    )


@pytest.fixture
def sample_profile() -> FinancialProfile:
    """Student with a mixed payment record"""
    return FinancialProfile(
        student_id=7,
        student_name="Carolina Méndez",
        total_debt="3000.00",
        percentage_on_time=70,
        average_delay_days=8,
        active_debts=2,
        payment_history="10 payments recorded, 3 paid late, 0 pending",
        group_risk_level="medium",
        group_name="3A",
        school_level="Secondary",
    )


@pytest.fixture
def paid():
    """Factory for settled payments"""
    return _paid


@pytest.fixture
def debt():
    """Factory for debt records"""
    return _debt
