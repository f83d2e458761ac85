"""Deterministic stand-in for the AI predictor (no network, no randomness)"""

import json
import logging
from typing import Any, Optional, Tuple

from tuition_risk.domain.models import FinancialProfile, PredictionSource, RiskLevel, RiskPrediction

# Status markers counted as a late payment in structured history entries
DELAY_MARKERS = ("delay", "retraso")


def _history_from_payload(structured_prompt: Optional[str]) -> Optional[list]:
    """Payment-history entries of a structured payload, None when unusable"""
    if not structured_prompt:
        return None
    try:
        payload = json.loads(structured_prompt)
        history = payload["student_data"]["payment_history"]
    except (ValueError, TypeError, KeyError, RecursionError) as e:
        logging.info(f"Structured payload unusable for simulation: {e}")
        return None
    if not isinstance(history, list) or not history:
        return None
    return history


def _is_delayed(entry: Any) -> bool:
    status = entry.get("status") if isinstance(entry, dict) else None
    if not isinstance(status, str):
        return False
    status = status.lower()
    return any(marker in status for marker in DELAY_MARKERS)


def _level_from_history(history: list) -> RiskLevel:
    delayed_percentage = sum(1 for entry in history if _is_delayed(entry)) * 100 / len(history)
    if delayed_percentage < 20:
        return RiskLevel.LOW
    if delayed_percentage > 50:
        return RiskLevel.HIGH
    return RiskLevel.MEDIUM


def _level_from_profile(profile: FinancialProfile) -> RiskLevel:
    if profile.percentage_on_time > 80 and profile.average_delay_days < 5:
        return RiskLevel.LOW
    if profile.percentage_on_time < 50 or profile.average_delay_days > 15:
        return RiskLevel.HIGH
    return RiskLevel.MEDIUM


def _justification(level: RiskLevel, profile: FinancialProfile, history_note: str) -> str:
    on_time = profile.percentage_on_time
    delay = profile.average_delay_days
    if level == RiskLevel.LOW:
        return f"{on_time:g}% of payments on time and low average delays of {delay:g} days{history_note}."
    if level == RiskLevel.MEDIUM:
        return f"Mixed payment history with {on_time:g}% on time and {delay:g} days of delay{history_note}."
    return f"Only {on_time:g}% of payments on time and delays of {delay:g} days on average{history_note}."


def simulate_prediction(profile: FinancialProfile) -> RiskPrediction:
    """
    Predict a risk tier without calling the model.

    With a structured payload holding payment history, the tier follows the
    share of entries marked as delayed (<20% low, >50% high). Otherwise the
    on-time percentage and average delay decide. Malformed payloads fall
    back to the profile rule; this function does not raise.
    """
    level, history_note = _simulate_level(profile)
    return RiskPrediction(
        risk_level=level,
        justification=_justification(level, profile, history_note),
        source=PredictionSource.SIMULATION,
    )


def _simulate_level(profile: FinancialProfile) -> Tuple[RiskLevel, str]:
    history = _history_from_payload(profile.structured_prompt)
    if history is not None:
        return _level_from_history(history), f" based on a history of {len(history)} payments"
    return _level_from_profile(profile), ""
