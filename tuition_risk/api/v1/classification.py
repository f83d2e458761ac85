"""POST /v1/risk/classify - Deterministic risk tiers for a roster"""

import time
from dataclasses import asdict
from typing import Optional
from fastapi import APIRouter, Depends, Query, Request

from tuition_risk.api.v1.schemas import (
    ClassificationRequest,
    ClassificationResponse,
    ClassificationSchema,
    RiskSummarySchema,
)
from tuition_risk.api.dependencies import get_default_thresholds, get_request_id
from tuition_risk.domain.classifier import (
    classify_all_students_risk,
    filter_by_student_name,
    summarize_risk,
)
from tuition_risk.domain.models import RiskThresholds
from tuition_risk.infrastructure.observability.metrics import record_classifications
from tuition_risk.infrastructure.observability.logging import log_classification_batch

router = APIRouter()


@router.post("/risk/classify", response_model=ClassificationResponse)
def classify_roster(
    request_body: ClassificationRequest,
    request: Request,
    query: Optional[str] = Query(None, description="Filter results by student name"),
    default_thresholds: RiskThresholds = Depends(get_default_thresholds),
):
    """
    Classify every student of the roster.

    Flow:
    1. Convert request records to domain records
    2. Classify each student in roster order
    3. Summarize the tier distribution over the whole roster
    4. Optionally filter the returned rows by student name
    """
    start_time = time.time()
    request_id = get_request_id(request)

    thresholds = (
        request_body.thresholds.to_domain()
        if request_body.thresholds is not None
        else default_thresholds
    )

    classifications = classify_all_students_risk(
        [s.to_domain() for s in request_body.students],
        [p.to_domain() for p in request_body.payments],
        [d.to_domain() for d in request_body.debts],
        reminders=[r.to_domain() for r in request_body.reminders],
        thresholds=thresholds,
    )
    summary = summarize_risk(classifications)

    duration_ms = (time.time() - start_time) * 1000
    record_classifications(classifications)
    log_classification_batch(request_id, len(classifications), summary, duration_ms)

    return ClassificationResponse(
        classifications=[
            ClassificationSchema(**asdict(c))
            for c in filter_by_student_name(classifications, query)
        ],
        summary=RiskSummarySchema(**asdict(summary)),
    )
