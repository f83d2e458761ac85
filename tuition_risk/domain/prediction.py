"""AI risk predictor - prompt, one completion call, tolerant parsing"""

import logging
from typing import Optional, Protocol

from tuition_risk.domain.exceptions import CompletionServiceError, PredictionFailedError
from tuition_risk.domain.models import FinancialProfile, RiskPrediction
from tuition_risk.domain.parsing import parse_prediction_response
from tuition_risk.domain.prompts import SYSTEM_PROMPT, build_prompt, prompt_mode
from tuition_risk.domain.simulator import simulate_prediction


class TextCompleter(Protocol):
    async def complete(self, prompt: str, system: str, max_tokens: int, temperature: float) -> str:
        ...


class RiskPredictor:
    """Predicts a student's payment risk with a hosted text-completion model"""

    def __init__(self, client: TextCompleter, max_tokens: int = 1024, temperature: float = 0.5):
        self.client = client
        self.max_tokens = max_tokens
        self.temperature = temperature

    async def predict(self, profile: FinancialProfile) -> RiskPrediction:
        """
        Predict the risk tier for one student.

        Flow:
        1. Build the prompt from the profile
        2. One completion request (no retries)
        3. Parse the response; malformed output falls back to a keyword scan

        Raises:
            PredictionFailedError: when the completion call itself fails.
                Parse problems never raise.
        """
        prompt = build_prompt(profile)
        logging.info(
            f"Requesting risk prediction for student {profile.student_id}",
            extra={"student_id": profile.student_id, "prompt_mode": prompt_mode(profile)},
        )

        try:
            content = await self.client.complete(
                prompt,
                system=SYSTEM_PROMPT,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )
        except CompletionServiceError as e:
            logging.error(f"Completion service error: {e}", extra={"student_id": profile.student_id})
            raise PredictionFailedError("Risk prediction failed") from e

        logging.info("Model response received", extra={"student_id": profile.student_id, "response": content})
        return parse_prediction_response(content)


async def predict_risk(
    profile: FinancialProfile,
    predictor: Optional[RiskPredictor] = None,
) -> RiskPrediction:
    """Use the AI predictor when one is configured, the simulator otherwise"""
    if predictor is None:
        logging.info("Using simulation for risk prediction", extra={"student_id": profile.student_id})
        return simulate_prediction(profile)
    return await predictor.predict(profile)
