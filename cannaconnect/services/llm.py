"""
Model client — one POST to an OpenAI-compatible /chat/completions
endpoint per call. No retries; every call has a finite timeout.
"""

import json
import logging
from typing import List, Optional

import httpx

from cannaconnect.config import (
    APP_REFERER,
    APP_TITLE,
    LLM_API_KEY,
    LLM_BASE_URL,
    LLM_TIMEOUT_SECONDS,
    is_api_key_configured,
)
from cannaconnect.errors import ModelResponseError, ModelUnavailableError

logger = logging.getLogger(__name__)


class LLMClient:
    def __init__(
        self,
        api_key: str,
        base_url: str = LLM_BASE_URL,
        timeout: float = LLM_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "HTTP-Referer": APP_REFERER,
            "X-Title": APP_TITLE,
        }

    async def complete(
        self,
        messages: List[dict],
        model: str,
        json_output: bool = False,
    ) -> Optional[str]:
        """
        Send the messages and return the first choice's text.
        Returns None when the provider answered without any text.
        """
        payload: dict = {"model": model, "messages": messages}
        if json_output:
            payload["response_format"] = {"type": "json_object"}

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.post(
                    f"{self.base_url}/chat/completions",
                    headers=self._headers(),
                    json=payload,
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning(
                "Model endpoint returned %s for model %s", e.response.status_code, model
            )
            raise ModelUnavailableError(f"model endpoint returned {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.warning("Model endpoint unreachable for model %s: %s", model, e)
            raise ModelUnavailableError(str(e)) from e

        try:
            data = response.json()
        except ValueError as e:
            raise ModelResponseError("model endpoint returned a non-JSON body") from e

        choices = data.get("choices") if isinstance(data, dict) else None
        if not isinstance(choices, list) or not choices:
            return None
        first = choices[0] if isinstance(choices[0], dict) else {}
        message = first.get("message") or {}
        content = message.get("content") if isinstance(message, dict) else None
        if not isinstance(content, str) or not content.strip():
            return None
        return content


def image_message(prompt: str, photo_data_uri: str) -> dict:
    """User message carrying the instruction text and the embedded photo."""
    return {
        "role": "user",
        "content": [
            {"type": "text", "text": prompt},
            {
                "type": "image_url",
                "image_url": {"url": photo_data_uri, "detail": "high"},
            },
        ],
    }


def parse_json_reply(raw_text: Optional[str]) -> dict:
    """Decode a JSON object reply, tolerating markdown fences around it."""
    if raw_text is None:
        raise ModelResponseError("model returned no text")
    cleaned = raw_text.strip()
    if cleaned.startswith("```"):
        cleaned = cleaned.split("\n", 1)[1] if "\n" in cleaned else ""
    if cleaned.endswith("```"):
        cleaned = cleaned.rsplit("```", 1)[0]
    try:
        parsed = json.loads(cleaned.strip())
    except json.JSONDecodeError as e:
        raise ModelResponseError(f"model reply is not JSON: {e}") from e
    if not isinstance(parsed, dict):
        raise ModelResponseError("model reply is not a JSON object")
    return parsed


def build_llm_client(api_key: str) -> Optional[LLMClient]:
    """Client for the given key, or None (demo mode) when the key is blank or a placeholder."""
    if not is_api_key_configured(api_key):
        return None
    return LLMClient(api_key=api_key.strip())


def get_llm_client() -> Optional[LLMClient]:
    """FastAPI dependency. None means demo mode."""
    return build_llm_client(LLM_API_KEY)
