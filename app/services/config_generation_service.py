"""
app/services/config_generation_service.py

Service layer for the generate-config workflow: parse a source sample, prompt
the LLM for a mapping configuration and return it as an untrusted candidate.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any

from app.config import LLMSettings, get_llm_settings, get_mapping_settings
from app.domain.mapping_config import SourceType
from app.domain.target_schema import TargetSchemaRegistry
from app.logging_utils import log_event
from app.parsers.source_parser import parse_source
from app.services.mapping_service import get_target_schema_registry
from config_generation.adapter import BaseLLMAdapter, MockLLMAdapter, OpenAILLMAdapter
from config_generation.prompt_builder import MappingPromptBuilder
from config_generation.retry import generate_with_retry

logger = logging.getLogger(__name__)


class UnknownGenerationTargetError(ValueError):
    """
    Raised when generation is scoped to a target the registry does not know.
    """

    def __init__(self, *, target: str, valid: tuple[str, ...]) -> None:
        super().__init__(f'Unknown repository "{target}". Valid: {", ".join(valid)}')
        self.target = target
        self.valid = valid


@dataclass(frozen=True)
class SourceInfo:
    """
    What the generator learned from the source sample.
    """

    fields: list[str]
    record_count: int
    sample_records: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "fields": list(self.fields),
            "recordCount": self.record_count,
            "sampleRecords": list(self.sample_records),
        }


@dataclass(frozen=True)
class GeneratedConfig:
    """
    Candidate configuration plus the source description it was drafted from.
    """

    config: dict[str, Any]
    source_info: SourceInfo


class ConfigGenerationService:
    """
    Drafts candidate mapping configurations with an LLM.
    """

    def __init__(
        self,
        *,
        adapter: BaseLLMAdapter,
        registry: TargetSchemaRegistry,
        prompt_builder: MappingPromptBuilder | None = None,
        sample_size: int = 3,
        max_format_retries: int = 2,
        max_transport_retries: int = 2,
        backoff_initial_seconds: float = 0.5,
        backoff_multiplier: float = 2.0,
    ) -> None:
        self._adapter = adapter
        self._registry = registry
        self._prompt_builder = prompt_builder or MappingPromptBuilder()
        self._sample_size = max(1, sample_size)
        self._max_format_retries = max_format_retries
        self._max_transport_retries = max_transport_retries
        self._backoff_initial_seconds = backoff_initial_seconds
        self._backoff_multiplier = backoff_multiplier

    def generate_config(
        self,
        *,
        source_file: str,
        source_type: SourceType | str,
        target_repository: str | None = None,
    ) -> GeneratedConfig:
        """
        Parse ``source_file`` and ask the LLM for a configuration.

        Raises SourceParseError when the sample cannot be parsed,
        UnknownGenerationTargetError for an unknown ``target_repository``,
        and LLMTransportError / LLMRetryExhaustedError from the model call.
        """

        records = parse_source(source_file, source_type)
        source_fields = list(records[0].keys()) if records else []
        samples = records[: self._sample_size]

        if target_repository is None:
            targets = list(self._registry)
        else:
            schema = self._registry.lookup(target_repository)
            if schema is None:
                raise UnknownGenerationTargetError(
                    target=target_repository,
                    valid=self._registry.names,
                )
            targets = [schema]

        prompt = self._prompt_builder.build_prompt(
            source_type=SourceType(source_type).value,
            source_fields=source_fields,
            sample_records=samples,
            target_schemas=targets,
        )
        candidate = generate_with_retry(
            self._adapter,
            prompt,
            max_retries=self._max_format_retries,
            max_transport_retries=self._max_transport_retries,
            backoff_initial_seconds=self._backoff_initial_seconds,
            backoff_multiplier=self._backoff_multiplier,
        )
        log_event(
            logger,
            logging.INFO,
            "config_generated",
            source_type=SourceType(source_type).value,
            source_fields=len(source_fields),
            record_count=len(records),
            targets=[schema.name for schema in targets],
        )

        return GeneratedConfig(
            config=candidate,
            source_info=SourceInfo(
                fields=source_fields,
                record_count=len(records),
                sample_records=samples,
            ),
        )


def build_llm_adapter(settings: LLMSettings) -> BaseLLMAdapter:
    """
    Instantiate the adapter named by ``settings.adapter``.
    """

    if settings.adapter == "mock":
        return MockLLMAdapter()
    if settings.adapter == "openai":
        return OpenAILLMAdapter(
            model=settings.model,
            max_tokens=settings.max_tokens,
            api_key=settings.api_key,
            base_url=settings.base_url,
            timeout_seconds=settings.timeout_seconds,
        )
    raise ValueError(f"Unknown LLM adapter '{settings.adapter}'.")


@lru_cache(maxsize=1)
def get_config_generation_service() -> ConfigGenerationService:
    """
    Build and cache the generation service with env-driven settings.
    """

    llm_settings = get_llm_settings()
    return ConfigGenerationService(
        adapter=build_llm_adapter(llm_settings),
        registry=get_target_schema_registry(),
        sample_size=get_mapping_settings().sample_size,
        max_format_retries=llm_settings.max_format_retries,
        max_transport_retries=llm_settings.max_transport_retries,
        backoff_initial_seconds=llm_settings.backoff_initial_seconds,
        backoff_multiplier=llm_settings.backoff_multiplier,
    )
