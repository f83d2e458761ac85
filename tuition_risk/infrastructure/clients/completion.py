"""Text-completion HTTP client (Anthropic Messages API)"""

import httpx
from typing import Any, Dict
from tuition_risk.domain.exceptions import CompletionServiceError
from tuition_risk.config import settings
from tuition_risk.infrastructure.observability.metrics import completion_latency_histogram, completion_failure_counter


class CompletionClient:
    """Client for the hosted text-completion model"""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (base_url or settings.completion_api_base).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.completion_api_key
        self.model = model or settings.completion_model
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    def _headers(self) -> Dict[str, str]:
        return {
            "x-api-key": self.api_key,
            "anthropic-version": settings.completion_api_version,
            "content-type": "application/json",
        }

    async def complete(
        self,
        prompt: str,
        system: str,
        max_tokens: int,
        temperature: float,
    ) -> str:
        """
        Send a single user prompt and return the completion text.

        One request, no retries.

        Raises:
            CompletionServiceError: On timeout, connection failure, non-2xx
                status, or a response without text content
        """
        body: Dict[str, Any] = {
            "model": self.model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "system": system,
            "messages": [{"role": "user", "content": prompt}],
        }
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                with completion_latency_histogram.time():
                    response = await client.post(
                        f"{self.base_url}/v1/messages",
                        headers=self._headers(),
                        json=body,
                    )
                response.raise_for_status()
                data = response.json()

                # Concatenate text blocks, ignoring any other block types
                text = "".join(
                    block.get("text", "")
                    for block in data.get("content", [])
                    if isinstance(block, dict) and block.get("type") == "text"
                )

            except httpx.TimeoutException as e:
                completion_failure_counter.inc()
                raise CompletionServiceError(f"Completion API timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                completion_failure_counter.inc()
                raise CompletionServiceError(f"Completion API error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                completion_failure_counter.inc()
                raise CompletionServiceError(f"Completion API unreachable: {e}") from e
            except (AttributeError, ValueError, TypeError) as e:
                completion_failure_counter.inc()
                raise CompletionServiceError(f"Invalid completion response: {e}") from e

        if not text:
            completion_failure_counter.inc()
            raise CompletionServiceError("Completion response contained no text")
        return text
