from __future__ import annotations  # Configuration package exports

from .registry import (
    EVALUATION_KEY,
    JOB_POSTING_KEY,
    QUESTION_KEY,
    TextService,
    bind_service,
    clear_services,
    get_service,
    unbind_service,
)
from .routes import AppConfig, LlmRoute, load_config, resolve_registry
from .settings import Settings, settings

__all__ = [
    "AppConfig",
    "LlmRoute",
    "load_config",
    "resolve_registry",
    "Settings",
    "settings",
    "TextService",
    "bind_service",
    "get_service",
    "unbind_service",
    "clear_services",
    "QUESTION_KEY",
    "EVALUATION_KEY",
    "JOB_POSTING_KEY",
]
