"""Retry policy for LLM config generation.

Two independent budgets apply. A transport failure (the request never
produced text) is retried with exponential backoff; generation has no side
effects so repeating the call is safe. A formatting failure (text that is
not a JSON object) triggers a fresh generation immediately.
"""

import logging
import time
from typing import Any, Callable, Dict, List

from config_generation.adapter import BaseLLMAdapter, LLMTransportError
from config_generation.validator import LLMOutputValidationError, parse_candidate_config

logger = logging.getLogger(__name__)

_RETRYABLE_STAGES = frozenset({"json_parse", "shape"})


class LLMRetryExhaustedError(Exception):
    """Every generation attempt returned unusable text.

    ``history`` holds one validation error per attempt, oldest first.
    """

    def __init__(self, history: List[LLMOutputValidationError]) -> None:
        self.history = history
        self.attempts = len(history)
        self.last_error = history[-1]
        super().__init__(
            f"LLM output validation failed after {self.attempts} attempt(s). "
            f"Last error: {self.last_error}"
        )


def _generate_with_backoff(
    adapter: BaseLLMAdapter,
    prompt: str,
    max_transport_retries: int,
    backoff_initial_seconds: float,
    backoff_multiplier: float,
    sleep: Callable[[float], None],
) -> str:
    delay = backoff_initial_seconds
    retries_left = max_transport_retries
    while True:
        try:
            return adapter.generate(prompt)
        except LLMTransportError as exc:
            if retries_left <= 0:
                raise
            retries_left -= 1
            logger.warning(
                "LLM transport failure, retrying in %.2fs (%d retries left): %s",
                delay,
                retries_left,
                exc,
            )
            sleep(delay)
            delay *= backoff_multiplier


def generate_with_retry(
    adapter: BaseLLMAdapter,
    prompt: str,
    max_retries: int = 2,
    max_transport_retries: int = 2,
    backoff_initial_seconds: float = 0.5,
    backoff_multiplier: float = 2.0,
    sleep: Callable[[float], None] = time.sleep,
) -> Dict[str, Any]:
    """Ask the model for a candidate configuration until one parses.

    Args:
        adapter: Any ``BaseLLMAdapter``.
        prompt: Prompt built by ``MappingPromptBuilder``.
        max_retries: Extra generations allowed after unusable output.
        max_transport_retries: Extra requests allowed per generation after
            a transport failure.
        backoff_initial_seconds: Delay before the first transport retry.
        backoff_multiplier: Growth factor for later delays.
        sleep: Delay function; tests pass a recorder.

    Returns:
        The parsed candidate. It has not been checked against any schema.

    Raises:
        LLMTransportError: When a generation runs out of transport retries.
        LLMRetryExhaustedError: When every generation produced unusable text.
    """
    history: List[LLMOutputValidationError] = []

    while len(history) <= max_retries:
        raw = _generate_with_backoff(
            adapter,
            prompt,
            max_transport_retries=max_transport_retries,
            backoff_initial_seconds=backoff_initial_seconds,
            backoff_multiplier=backoff_multiplier,
            sleep=sleep,
        )
        try:
            candidate = parse_candidate_config(raw)
        except LLMOutputValidationError as exc:
            if exc.stage not in _RETRYABLE_STAGES:
                raise
            history.append(exc)
            logger.warning(
                "Unusable LLM output (%s) on generation %d of %d: %s",
                exc.stage,
                len(history),
                max_retries + 1,
                "; ".join(exc.errors),
            )
            continue

        if history:
            logger.info("LLM output parsed after %d rejected generation(s)", len(history))
        return candidate

    raise LLMRetryExhaustedError(history)
