from __future__ import annotations  # FastAPI server exposing the interview engine

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Dict, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import install_error_handlers, router
from config import (
    EVALUATION_KEY,
    JOB_POSTING_KEY,
    QUESTION_KEY,
    bind_service,
    load_config,
    resolve_registry,
    settings,
)
from llm_gateway import text_service


logger = logging.getLogger(__name__)

CONFIG_PATH = Path(__file__).resolve().parent / settings.LLM_CONFIG_PATH
SERVICE_KEYS = (QUESTION_KEY, EVALUATION_KEY, JOB_POSTING_KEY)


def configure_services(config_path: Optional[Path] = None) -> Dict[str, str]:
    """Bind every text service named in the config; returns key -> route name.

    A missing config file leaves services unbound, so the engine runs on its
    deterministic fallbacks.
    """

    path = Path(config_path or CONFIG_PATH)
    if not path.exists():
        logger.warning("LLM config %s not found; running with fallback content only", path)
        return {}
    cfg = load_config(path)
    routes = resolve_registry(cfg, SERVICE_KEYS)
    bound: Dict[str, str] = {}
    for key, route in routes.items():
        bind_service(key, text_service(route))
        bound[key] = route.name
        logger.info("Bound %s -> %s (%s)", key, route.name, route.model)
    return bound


def create_app(config_path: Optional[Path] = None, *, bind: bool = True) -> FastAPI:
    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:  # Bind services on startup
        if bind:
            configure_services(config_path)
        yield

    application = FastAPI(title="Adaptive Interview API", lifespan=lifespan)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    install_error_handlers(application)
    application.include_router(router)
    return application


app = create_app()
