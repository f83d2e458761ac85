"""Parsing of model responses into RiskPrediction, with heuristic fallback"""

import json
import logging
import re
from typing import Any, Dict, Optional

from tuition_risk.domain.models import PredictionSource, RiskLevel, RiskPrediction

# Opening and closing fences matched in pairs; group 1 is the language tag
FENCED_BLOCK_PATTERN = re.compile(r"```([A-Za-z]*)[ \t]*\n?([\s\S]*?)```")

HIGH_RISK_PATTERN = re.compile(r"\b(high risk|risk level:? high|alto riesgo|riesgo alto)\b", re.IGNORECASE)
LOW_RISK_PATTERN = re.compile(r"\b(low risk|risk level:? low|bajo riesgo|riesgo bajo)\b", re.IGNORECASE)
RISK_WORD_PATTERN = re.compile(r"\b(risk|riesgo)\b", re.IGNORECASE)

MIN_JUSTIFICATION_LINE_LENGTH = 10
MAX_JUSTIFICATION_LENGTH = 120
DEFAULT_JUSTIFICATION = "Based on the analysis of the student's financial data."


class ResponseParseError(ValueError):
    """Model response did not contain a usable prediction"""


def _load_object(candidate: str) -> Optional[Dict[str, Any]]:
    try:
        parsed = json.loads(candidate)
    except (ValueError, RecursionError):
        return None
    return parsed if isinstance(parsed, dict) else None


def extract_json_payload(text: str) -> Dict[str, Any]:
    """
    Pull a JSON object out of a model response.

    Stages, first success wins:
    1. the whole response
    2. the body of each ```json fenced block
    3. the body of each fenced block without a language tag

    Raises:
        ResponseParseError: when no stage yields a JSON object
    """
    payload = _load_object(text.strip())
    if payload is not None:
        return payload

    blocks = [(tag.lower(), body.strip()) for tag, body in FENCED_BLOCK_PATTERN.findall(text)]
    for wanted_tag in ("json", ""):
        for tag, body in blocks:
            if tag != wanted_tag:
                continue
            payload = _load_object(body)
            if payload is not None:
                return payload

    raise ResponseParseError("No JSON object found in model response")


def _first(payload: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if payload.get(key) is not None:
            return payload[key]
    return None


def _confidence(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return min(max(float(value), 0.0), 1.0)


def validate_payload(payload: Dict[str, Any]) -> RiskPrediction:
    """
    Promote an untyped JSON object to a RiskPrediction.

    Requires a non-empty tier (``risk_level`` or ``riskLevel``) and a
    non-empty ``justification``. Unknown tiers are coerced to medium.

    Raises:
        ResponseParseError: when a required field is missing or not text
    """
    raw_level = _first(payload, "risk_level", "riskLevel")
    justification = payload.get("justification")

    if not isinstance(raw_level, str) or not raw_level.strip():
        raise ResponseParseError("Missing risk_level in model response")
    if not isinstance(justification, str) or not justification.strip():
        raise ResponseParseError("Missing justification in model response")

    recommended_action = _first(payload, "recommended_action", "recommendedAction")

    return RiskPrediction(
        risk_level=RiskLevel.normalize(raw_level),
        justification=justification.strip(),
        recommended_action=recommended_action if isinstance(recommended_action, str) else None,
        confidence_score=_confidence(_first(payload, "confidence_score", "confidenceScore")),
        source=PredictionSource.AI,
    )


def heuristic_prediction(text: str) -> RiskPrediction:
    """Keyword scan of a response that could not be parsed as JSON"""
    if HIGH_RISK_PATTERN.search(text):
        level = RiskLevel.HIGH
    elif LOW_RISK_PATTERN.search(text):
        level = RiskLevel.LOW
    else:
        level = RiskLevel.MEDIUM

    justification = next(
        (
            line.strip()
            for line in text.splitlines()
            if len(line.strip()) > MIN_JUSTIFICATION_LINE_LENGTH and not RISK_WORD_PATTERN.search(line)
        ),
        DEFAULT_JUSTIFICATION,
    )

    return RiskPrediction(
        risk_level=level,
        justification=justification[:MAX_JUSTIFICATION_LENGTH],
        source=PredictionSource.HEURISTIC,
    )


def parse_prediction_response(text: str) -> RiskPrediction:
    """
    Parse a model response. Never raises.

    Falls back to a keyword scan when the response holds no valid JSON
    prediction; the result's ``source`` tells which path was taken.
    """
    try:
        return validate_payload(extract_json_payload(text))
    except ResponseParseError as e:
        logging.warning(f"Falling back to heuristic parsing: {e}", extra={"response_length": len(text)})
        return heuristic_prediction(text)
