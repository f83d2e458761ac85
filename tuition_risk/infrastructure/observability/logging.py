"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from tuition_risk.config import settings
from tuition_risk.domain.models import RiskPrediction, RiskSummary


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_classification_batch(
    request_id: str,
    roster_size: int,
    summary: RiskSummary,
    duration_ms: float,
) -> None:
    """Log tier distribution of a classified roster"""
    logging.info(
        "Classification completed",
        extra={
            "request_id": request_id,
            "step": "classification_complete",
            "roster_size": roster_size,
            "low_risk": summary.low,
            "medium_risk": summary.medium,
            "high_risk": summary.high,
            "duration_ms": duration_ms,
        },
    )


def log_prediction(
    request_id: str,
    student_id: int,
    prediction: RiskPrediction,
    duration_ms: float,
) -> None:
    """Log structured prediction outcome for analysis"""
    logging.info(
        "Prediction completed",
        extra={
            "request_id": request_id,
            "student_id": student_id,
            "step": "prediction_complete",
            "risk_level": prediction.risk_level.value,
            "source": prediction.source.value,
            "duration_ms": duration_ms,
        },
    )
