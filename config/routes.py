"""LLM route configuration loaded from the application config file."""
from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable

from pydantic import BaseModel, Field


class LlmRoute(BaseModel):
    """LLM endpoint configuration."""

    name: str
    base_url: str
    endpoint: str
    model: str
    timeout_s: float = Field(default=20.0, ge=0.1)
    api_key_env: str | None = None
    temperature: float | None = None
    extra_headers: Dict[str, str] = Field(default_factory=dict)
    sequential: bool = False


class AppConfig(BaseModel):
    """Application configuration root."""

    llm_routes: Dict[str, LlmRoute]
    registry: Dict[str, str]


def load_config(path: Path) -> AppConfig:
    """Load configuration from disk."""

    data = Path(path).read_text(encoding="utf-8")
    return AppConfig.model_validate_json(data)


def resolve_registry(cfg: AppConfig, targets: Iterable[str]) -> Dict[str, LlmRoute]:
    """Map each registry target to its route, failing on dangling references."""

    resolved: Dict[str, LlmRoute] = {}
    for target in targets:
        if target not in cfg.registry:
            raise KeyError(f"Registry entry missing for '{target}'")
        route_id = cfg.registry[target]
        if route_id not in cfg.llm_routes:
            raise KeyError(f"Route '{route_id}' missing for '{target}'")
        resolved[target] = cfg.llm_routes[route_id]
    return resolved


__all__ = ["LlmRoute", "AppConfig", "load_config", "resolve_registry"]
