import logging
from typing import Any, Dict, Optional

import httpx

from src.core.errors import ModelInvocationError

logger = logging.getLogger(__name__)


class GeminiClient:
    """
    Thin async wrapper around the Gemini `generateContent` REST endpoint.

    One call per evaluation, no retries. Every failure (transport error,
    timeout, non-2xx status, empty candidate list) surfaces as
    ModelInvocationError.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: float = 30.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self._client = http_client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    @property
    def endpoint(self) -> str:
        return f"/models/{self.model}:generateContent"

    async def generate_text(self, prompt: str) -> str:
        payload = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}
        headers = {
            "Content-Type": "application/json",
            "x-goog-api-key": self.api_key,
        }

        try:
            logger.debug(f"Sending generateContent request to model {self.model}")
            response = await self._client.post(self.endpoint, json=payload, headers=headers, timeout=self.timeout)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise ModelInvocationError(f"Model {self.model} timed out after {self.timeout}s") from e
        except httpx.HTTPStatusError as e:
            raise ModelInvocationError(
                f"Model {self.model} returned HTTP {e.response.status_code}: {e.response.text}"
            ) from e
        except httpx.RequestError as e:
            raise ModelInvocationError(f"Could not reach model {self.model}: {e}") from e

        try:
            body = response.json()
        except ValueError as e:
            raise ModelInvocationError(f"Model {self.model} returned a non-JSON envelope") from e

        return self._extract_text(body)

    def _extract_text(self, body: Dict[str, Any]) -> str:
        candidates = body.get("candidates") or []
        if not candidates:
            block_reason = (body.get("promptFeedback") or {}).get("blockReason")
            raise ModelInvocationError(
                f"Model {self.model} returned no candidates" + (f" (blocked: {block_reason})" if block_reason else "")
            )

        parts = (candidates[0].get("content") or {}).get("parts") or []
        text = "".join(part.get("text", "") for part in parts if isinstance(part, dict))
        if not text:
            finish_reason = candidates[0].get("finishReason", "UNKNOWN")
            raise ModelInvocationError(f"Model {self.model} returned an empty answer (finishReason={finish_reason})")
        return text

    async def close(self):
        await self._client.aclose()
