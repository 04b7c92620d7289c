"""
Client for an OpenAI-compatible chat-completion API (OpenRouter by default).
"""

import logging
from typing import Any, Dict, List

import httpx

from sar_lookup.config import Settings
from sar_lookup.schemas.sar_schema import EnrichmentResult

logger = logging.getLogger(__name__)

AI_UNAVAILABLE = "AI interpretation unavailable due to service error."


def extract_completion_text(data: Any) -> str:
    """First choice's message content, else its legacy ``text``, else ``""``."""
    if not isinstance(data, dict):
        return ""
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
        return ""

    choice = choices[0]
    message = choice.get("message")
    content = message.get("content") if isinstance(message, dict) else None
    text = content or choice.get("text") or ""
    return text if isinstance(text, str) else str(text)


class LLMClient:
    """
    Chat-completion client used for the SAR interpretation.

    Usage:
        client = LLMClient(http_client, settings)
        result = await client.interpret(prompt)
        result.value  # explanation text, or AI_UNAVAILABLE on failure
    """

    def __init__(self, http_client: httpx.AsyncClient, settings: Settings):
        self.http_client = http_client
        self.base_url = settings.LLM_BASE_URL.rstrip("/")
        self.api_key = settings.OPEN_ROUTER_API or ""
        self.model = settings.LLM_MODEL_NAME
        self.timeout = settings.LLM_TIMEOUT

    async def call_llm(self, messages: List[Dict[str, Any]]) -> Dict[str, Any]:
        """
        POST the messages to ``/chat/completions`` and return the JSON body.

        Raises:
            httpx.HTTPError: On transport failure or non-2xx status
            ValueError: If the body is not JSON
        """
        response = await self.http_client.post(
            f"{self.base_url}/chat/completions",
            json={"model": self.model, "messages": messages},
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.json()

    async def interpret(self, prompt: str) -> EnrichmentResult[str]:
        """Submit the prompt as a single user message; never raises."""
        try:
            data = await self.call_llm([{"role": "user", "content": prompt}])
        except httpx.HTTPStatusError as e:
            error = f"{e.response.status_code} {e.response.text[:500]}"
            logger.error(f"AI call failed: {error}")
            return EnrichmentResult.fallback(AI_UNAVAILABLE, error)
        except Exception as e:
            logger.error(f"AI call failed: {e}")
            return EnrichmentResult.fallback(AI_UNAVAILABLE, str(e))

        explanation = extract_completion_text(data)
        logger.info(f"AI explanation length: {len(explanation)}")
        return EnrichmentResult.ok(explanation)
