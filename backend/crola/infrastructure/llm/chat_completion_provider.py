"""
OpenAI-compatible chat-completion provider.

Posts {model, messages} to the configured endpoint with a bearer API key and
reads the reply from choices[0].message.content. One attempt per call.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

import httpx

from crola.core.exceptions import LLMError
from crola.core.logger import logger
from crola.core.providers import ProviderProfile
from crola.interfaces.llm_provider import ILLMProvider
from crola.models.chat import ChatMessage

SYSTEM_PROMPT_TEMPLATE = """You are a helpful AI assistant running on the {model} model.
- Use clear, easy-to-understand language
- Answer briefly and to the point
- Use bullet points when they help
- Focus on practical solutions
- Avoid theory unless asked
- Include code examples when relevant
- If asked which model you are, say you use {model}"""


class ChatCompletionProvider(ILLMProvider):
    """Completion gateway for OpenAI-compatible endpoints."""

    def __init__(
        self,
        profile: ProviderProfile,
        api_key: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the provider.

        Args:
            profile: Active provider profile (endpoint, default model, headers)
            api_key: Bearer API key for the endpoint
            timeout: Network timeout in seconds for the single attempt
            transport: Optional httpx transport, used by tests
        """
        self._profile = profile
        self._api_key = api_key
        self._timeout = timeout
        self._transport = transport

    def get_model_name(self) -> str:
        if self._profile.endpoint:
            return f"{self._profile.display_name} ({self._profile.default_model} @ {self._profile.endpoint})"
        return f"{self._profile.display_name} ({self._profile.default_model})"

    def get_default_model(self) -> str:
        return self._profile.default_model

    def get_available_models(self) -> list[dict]:
        return [
            {"id": m.id, "name": m.name, "is_reasoning": m.is_reasoning}
            for m in self._profile.models
        ]

    def build_messages(
        self,
        user_message: str,
        history: Sequence[ChatMessage],
        model: str,
    ) -> list[dict[str, str]]:
        """System preamble, then prior turns, then the new user message."""
        messages = [{"role": "system", "content": SYSTEM_PROMPT_TEMPLATE.format(model=model)}]
        for msg in history:
            role = msg.role.value if hasattr(msg.role, "value") else str(msg.role)
            messages.append({"role": role.lower(), "content": msg.content})
        messages.append({"role": "user", "content": user_message})
        return messages

    async def complete(
        self,
        user_message: str,
        history: Sequence[ChatMessage] = (),
        model_id: Optional[str] = None,
    ) -> str:
        if not self._api_key or not self._profile.endpoint:
            logger.error("Completion API key or endpoint is not configured")
            raise LLMError("AI service is not configured")

        model = model_id or self._profile.default_model
        payload = {
            "model": model,
            "messages": self.build_messages(user_message, history, model),
        }
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
            **self._profile.extra_headers,
        }

        logger.info(f"Sending {len(payload['messages'])} messages to model {model}")
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                resp = await client.post(self._profile.endpoint, json=payload, headers=headers)
        except httpx.TimeoutException as e:
            logger.warning(f"Completion request timed out after {self._timeout}s: {e}")
            raise LLMError("AI service timed out") from e
        except httpx.HTTPError as e:
            logger.warning(f"Completion request failed: {e}")
            raise LLMError("Could not connect to the AI service") from e

        if not resp.is_success:
            logger.warning(f"Completion API error ({resp.status_code}): {resp.text[:500]}")
            raise LLMError(
                f"AI service returned status {resp.status_code}{_error_suffix(resp)}",
                status_code=resp.status_code,
            )

        try:
            data = resp.json()
        except ValueError as e:
            logger.warning(f"Completion API returned non-JSON body: {resp.text[:200]}")
            raise LLMError("AI service returned an unreadable response") from e

        content = _extract_content(data)
        if not content:
            logger.warning(f"Completion API returned no content: {str(data)[:200]}")
            raise LLMError("AI service returned an empty response")

        logger.info(f"Received completion from {model} ({len(content)} chars)")
        return content


def _extract_content(data: Any) -> Optional[str]:
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return None
    if not isinstance(content, str):
        return None
    return content.strip() or None


def _error_suffix(resp: httpx.Response) -> str:
    """Short upstream error message, when the body carries one."""
    try:
        body = resp.json()
    except ValueError:
        return ""
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict):
        error = error.get("message")
    if isinstance(error, str) and error.strip():
        return f": {error.strip()[:200]}"
    return ""
