from __future__ import annotations

import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware


def _validate_env() -> None:
    """
    Validate environment-driven settings at startup.

    Raises RuntimeError listing every invalid value so the operator can fix
    all problems in one restart cycle. A missing LLM API key is only logged:
    execute-config works without one and generate-config reports the
    failure per request.
    """

    from app.config import get_llm_settings, validate_settings

    errors = validate_settings()
    if errors:
        raise RuntimeError(
            "Startup validation failed, invalid environment variables:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )

    llm_settings = get_llm_settings()
    if llm_settings.adapter == "openai" and not llm_settings.api_key:
        logging.getLogger(__name__).warning(
            "LLM API key is not set. Provide LLM_API_KEY or OPENAI_API_KEY "
            "to enable /generate/config, or set LLM_ADAPTER=mock."
        )


def _configure_logging() -> None:
    """
    Configure root logging once for the API process.
    """

    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    _configure_logging()
    _validate_env()

    application = FastAPI(
        title="Record Mapper API",
        version="1.0.0",
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Accept"],
    )

    from app.api.routers import mapping_config_router, target_schemas_router

    application.include_router(mapping_config_router)
    application.include_router(target_schemas_router)

    @application.get("/health")
    def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    return application


app = create_app()
