"""Dependency injection for FastAPI endpoints"""

from typing import Optional
from fastapi import Request
from tuition_risk.config import settings
from tuition_risk.domain.models import RiskThresholds
from tuition_risk.domain.prediction import RiskPredictor
from tuition_risk.infrastructure.clients.completion import CompletionClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_completion_client() -> CompletionClient:
    """Provide text-completion client instance"""
    return CompletionClient()


def get_risk_predictor() -> Optional[RiskPredictor]:
    """AI predictor when configured; None routes predictions to the simulator"""
    if not settings.use_ai:
        return None
    return RiskPredictor(
        get_completion_client(),
        max_tokens=settings.completion_max_tokens,
        temperature=settings.completion_temperature,
    )


def get_default_thresholds() -> RiskThresholds:
    """Classifier thresholds from configuration"""
    return settings.risk_thresholds()
