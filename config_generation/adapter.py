"""LLM adapters for mapping configuration generation.

``OpenAILLMAdapter`` talks to any OpenAI-compatible chat completion endpoint;
``MockLLMAdapter`` returns a canned configuration for offline runs.
"""

import json
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class LLMTransportError(RuntimeError):
    """The model endpoint could not be reached or refused the request.

    No text was produced, so there is nothing to parse.
    """


class BaseLLMAdapter(ABC):
    """Interface shared by every adapter."""

    @abstractmethod
    def generate(self, prompt: str) -> str:
        """Return the model's raw text answer to ``prompt``.

        Raises:
            LLMTransportError: If the request fails in transit.
        """


class OpenAILLMAdapter(BaseLLMAdapter):
    """Chat-completion adapter running in JSON mode at temperature 0."""

    def __init__(
        self,
        model: str = "gpt-4o",
        max_tokens: int = 2048,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_seconds: float = 60.0,
    ) -> None:
        """
        Args:
            model: Model identifier understood by the endpoint.
            max_tokens: Completion token cap.
            api_key: Key for the endpoint; when None the SDK reads
                OPENAI_API_KEY itself.
            base_url: Alternate OpenAI-compatible endpoint.
            timeout_seconds: Per-request timeout.
        """
        try:
            import openai  # type: ignore[import-untyped]
        except ImportError as exc:
            raise ImportError(
                "OpenAILLMAdapter needs the openai package (pip install openai)."
            ) from exc

        self._openai = openai
        self._client_kwargs: Dict[str, Any] = {
            "api_key": api_key,
            "base_url": base_url,
            "timeout": timeout_seconds,
        }
        self._client: Optional[Any] = None
        self._model = model
        self._max_tokens = max_tokens

    def generate(self, prompt: str) -> str:
        # Client construction raises OpenAIError when no key is configured.
        try:
            if self._client is None:
                self._client = self._openai.OpenAI(**self._client_kwargs)
            completion = self._client.chat.completions.create(
                model=self._model,
                messages=[{"role": "user", "content": prompt}],
                temperature=0,
                max_tokens=self._max_tokens,
                response_format={"type": "json_object"},
            )
        except self._openai.OpenAIError as exc:
            raise LLMTransportError(f"LLM request failed: {exc}") from exc
        return completion.choices[0].message.content or ""


# Canned answer: an orders configuration for an order_id/customer_id/total/status CSV.
_MOCK_RESPONSE: Dict[str, Any] = {
    "name": "Mock order import",
    "sourceType": "csv",
    "targetRepository": "orders",
    "idField": "order_id",
    "fieldMappings": [
        {"sourceField": "order_id", "targetField": "orderId", "transform": "trim"},
        {"sourceField": "customer_id", "targetField": "customerId", "transform": "trim"},
        {"sourceField": "total", "targetField": "total", "transform": "number"},
        {"sourceField": "status", "targetField": "status", "transform": "lowercase"},
    ],
    "options": {"skipEmptyFields": True, "validateRequired": True},
}


class MockLLMAdapter(BaseLLMAdapter):
    """Deterministic adapter for tests and environments without an API key."""

    def __init__(self, response: Optional[Dict[str, Any]] = None) -> None:
        self._response_json = json.dumps(response if response is not None else _MOCK_RESPONSE)

    def generate(self, prompt: str) -> str:
        return self._response_json
