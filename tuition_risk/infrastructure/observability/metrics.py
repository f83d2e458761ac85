"""Prometheus metrics for risk tiers, prediction sources and completion-service health"""

from prometheus_client import Counter, Histogram

from tuition_risk.domain.models import RiskClassification, RiskPrediction

# Classification metrics
classification_counter = Counter(
    "tuition_risk_classification_total",
    "Students classified by the deterministic engine",
    ["risk_level"],  # low | medium | high
)

# Prediction metrics
prediction_counter = Counter(
    "tuition_risk_prediction_total",
    "Risk predictions returned",
    ["risk_level", "source"],  # source: ai | heuristic | simulation
)

# Completion service metrics
completion_latency_histogram = Histogram(
    "completion_latency_seconds",
    "Text-completion API response time",
    buckets=[0.5, 1.0, 2.5, 5.0, 10.0, 20.0, 30.0],
)

completion_failure_counter = Counter(
    "completion_failures_total",
    "Failed text-completion API calls",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_classifications(classifications: list[RiskClassification]) -> None:
    """Count classified students per tier"""
    for classification in classifications:
        classification_counter.labels(risk_level=classification.risk_level.value).inc()


def record_prediction(prediction: RiskPrediction) -> None:
    """Count a returned prediction by tier and by the path that produced it"""
    prediction_counter.labels(
        risk_level=prediction.risk_level.value,
        source=prediction.source.value,
    ).inc()
