"""
app/config.py

Environment-driven settings for mapping execution and config generation.

Values come from the process environment, with `.env` and `.env.local` in the
project root filling in anything the process does not already define.
Unparseable numbers fall back to their defaults rather than failing startup;
enumerated values are checked by ``validate_settings``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

_ALLOWED_LLM_ADAPTERS = {"openai", "mock"}
_ALLOWED_TARGET_CATALOGS = {"catalog", "orders"}
_TRUTHY = {"1", "true", "yes", "on"}


def load_env_files() -> None:
    """
    Copy KEY=VALUE pairs from `.env` then `.env.local` into ``os.environ``.

    Keys already present in the environment win, so deployment settings are
    never shadowed by a checked-out file.
    """

    project_root = Path(__file__).resolve().parents[1]
    for env_path in (project_root / ".env", project_root / ".env.local"):
        if not env_path.is_file():
            continue

        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if line.startswith("#") or "=" not in line:
                continue
            key, _, value = line.partition("=")
            key = key.strip()
            if key:
                os.environ.setdefault(key, value.strip().strip("\"'"))


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    load_env_files()


def _env(name: str) -> str | None:
    """
    Stripped value of ``name``; blank counts as unset.
    """

    _load_env_once()
    value = (os.getenv(name) or "").strip()
    return value or None


def _env_flag(name: str, default: bool) -> bool:
    value = _env(name)
    return default if value is None else value.lower() in _TRUTHY


def _env_int(name: str, default: int, *, minimum: int) -> int:
    value = _env(name)
    try:
        parsed = default if value is None else int(value)
    except ValueError:
        parsed = default
    return max(minimum, parsed)


def _env_float(name: str, default: float, *, minimum: float) -> float:
    value = _env(name)
    try:
        parsed = default if value is None else float(value)
    except ValueError:
        parsed = default
    return max(minimum, parsed)


@dataclass(frozen=True)
class MappingSettings:
    """
    Runtime settings for mapping validation and import.
    """

    target_catalog: str = "catalog"
    strict_csv: bool = False
    sample_size: int = 3


@dataclass(frozen=True)
class LLMSettings:
    """
    Settings for the language model that drafts mapping configurations.
    """

    adapter: str = "openai"
    model: str = "gpt-4o"
    api_key: str | None = None
    base_url: str | None = None
    max_tokens: int = 2048
    timeout_seconds: float = 60.0
    max_format_retries: int = 2
    max_transport_retries: int = 2
    backoff_initial_seconds: float = 0.5
    backoff_multiplier: float = 2.0


@lru_cache(maxsize=1)
def get_mapping_settings() -> MappingSettings:
    """
    Return cached mapping settings from environment variables.
    """

    return MappingSettings(
        target_catalog=(_env("MAPPING_TARGET_CATALOG") or "catalog").lower(),
        strict_csv=_env_flag("MAPPING_STRICT_CSV", False),
        sample_size=_env_int("MAPPING_SAMPLE_SIZE", 3, minimum=1),
    )


@lru_cache(maxsize=1)
def get_llm_settings() -> LLMSettings:
    """
    Return cached LLM settings from environment variables.
    """

    return LLMSettings(
        adapter=(_env("LLM_ADAPTER") or "openai").lower(),
        model=_env("LLM_MODEL") or "gpt-4o",
        api_key=_env("LLM_API_KEY") or _env("OPENAI_API_KEY"),
        base_url=_env("LLM_BASE_URL"),
        max_tokens=_env_int("LLM_MAX_TOKENS", 2048, minimum=1),
        timeout_seconds=_env_float("LLM_TIMEOUT_SECONDS", 60.0, minimum=1.0),
        max_format_retries=_env_int("LLM_MAX_FORMAT_RETRIES", 2, minimum=0),
        max_transport_retries=_env_int("LLM_MAX_TRANSPORT_RETRIES", 2, minimum=0),
        backoff_initial_seconds=_env_float("LLM_BACKOFF_INITIAL_SECONDS", 0.5, minimum=0.0),
        backoff_multiplier=_env_float("LLM_BACKOFF_MULTIPLIER", 2.0, minimum=1.0),
    )


def validate_settings() -> list[str]:
    """
    Return one message per invalid setting; empty when everything is usable.
    """

    errors: list[str] = []

    mapping = get_mapping_settings()
    if mapping.target_catalog not in _ALLOWED_TARGET_CATALOGS:
        errors.append(
            f"MAPPING_TARGET_CATALOG='{mapping.target_catalog}' is not valid. "
            f"Allowed values: {sorted(_ALLOWED_TARGET_CATALOGS)}."
        )

    llm = get_llm_settings()
    if llm.adapter not in _ALLOWED_LLM_ADAPTERS:
        errors.append(
            f"LLM_ADAPTER='{llm.adapter}' is not valid. "
            f"Allowed values: {sorted(_ALLOWED_LLM_ADAPTERS)}."
        )

    return errors


def clear_settings_cache() -> None:
    """
    Drop cached settings so the next read reflects the current environment.
    """

    get_mapping_settings.cache_clear()
    get_llm_settings.cache_clear()
