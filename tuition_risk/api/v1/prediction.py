"""POST /v1/risk/predict and /v1/risk/simulate - Risk prediction endpoints"""

import time
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Request

from tuition_risk.api.v1.schemas import PredictionRequest, PredictionResponse
from tuition_risk.api.dependencies import get_request_id, get_risk_predictor
from tuition_risk.config import settings
from tuition_risk.domain.exceptions import PredictionFailedError
from tuition_risk.domain.models import RiskPrediction
from tuition_risk.domain.prediction import RiskPredictor, predict_risk
from tuition_risk.domain.simulator import simulate_prediction
from tuition_risk.infrastructure.observability.metrics import record_prediction
from tuition_risk.infrastructure.observability.logging import log_prediction

router = APIRouter()


def _to_response(prediction: RiskPrediction) -> PredictionResponse:
    return PredictionResponse(
        risk_level=prediction.risk_level,
        justification=prediction.justification,
        recommended_action=prediction.recommended_action,
        confidence_score=prediction.confidence_score,
        source=prediction.source,
    )


@router.post("/risk/predict", response_model=PredictionResponse)
async def predict_student_risk(
    request_body: PredictionRequest,
    request: Request,
    predictor: Optional[RiskPredictor] = Depends(get_risk_predictor),
):
    """
    Predict a student's future payment risk.

    Uses the text-completion model when configured, the deterministic
    simulator otherwise. A failed model call returns 503 unless
    simulation fallback is enabled.
    """
    start_time = time.time()
    request_id = get_request_id(request)
    profile = request_body.to_domain()

    try:
        prediction = await predict_risk(profile, predictor)

    except PredictionFailedError as e:
        if not settings.prediction_fallback_to_simulation:
            logging.error(f"Prediction failed: {e}", extra={"request_id": request_id})
            raise HTTPException(status_code=503, detail="Prediction service unavailable")
        logging.warning(f"Prediction failed, using simulation: {e}", extra={"request_id": request_id})
        prediction = simulate_prediction(profile)

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration_ms = (time.time() - start_time) * 1000
    record_prediction(prediction)
    log_prediction(request_id, profile.student_id, prediction, duration_ms)

    return _to_response(prediction)


@router.post("/risk/simulate", response_model=PredictionResponse)
def simulate_student_risk(request_body: PredictionRequest, request: Request):
    """Deterministic prediction without calling the model"""
    start_time = time.time()
    profile = request_body.to_domain()

    prediction = simulate_prediction(profile)

    duration_ms = (time.time() - start_time) * 1000
    record_prediction(prediction)
    log_prediction(get_request_id(request), profile.student_id, prediction, duration_ms)

    return _to_response(prediction)
