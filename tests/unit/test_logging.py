"""Unit tests for structured JSON logging"""

import json
import logging
from tuition_risk.infrastructure.observability.logging import CustomJsonFormatter


def test_formatter_adds_utc_timestamp_and_service():
    """Every record carries an aware UTC timestamp, its level and the service name"""
    formatter = CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s")
    record = logging.LogRecord("tuition_risk", logging.INFO, __file__, 1, "Classification completed", None, None)

    output = json.loads(formatter.format(record))

    assert output["timestamp"].endswith("+00:00")
    assert output["level"] == "INFO"
    assert output["service"] == "tuition-risk"
    assert output["message"] == "Classification completed"
