import json

import pytest

from config.registry import QUESTION_KEY, bind_service, get_service, unbind_service
from config.routes import AppConfig, load_config, resolve_registry
from config.settings import Settings


def test_settings_defaults():
    settings = Settings(_env_file=None)
    assert settings.MAX_TOTAL_QUESTIONS == 20
    assert settings.DEEPEN_SCORE_THRESHOLD == 7.0
    assert settings.MAX_QUESTIONS_PER_TOPIC == 3
    assert settings.CHECKPOINT_DIR is None


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("GENERATION_TIMEOUT_S", "3.5")
    settings = Settings(_env_file=None)
    assert settings.GENERATION_TIMEOUT_S == 3.5


def test_registry_bind_and_retrieve():
    marker = "reply"
    bind_service(QUESTION_KEY, lambda prompt: marker)
    assert get_service(QUESTION_KEY)("anything") == marker
    unbind_service(QUESTION_KEY)
    with pytest.raises(KeyError):
        get_service(QUESTION_KEY)


def test_load_config_and_resolve(tmp_path):
    path = tmp_path / "app_config.json"
    path.write_text(
        json.dumps(
            {
                "llm_routes": {
                    "r1": {"name": "r1", "base_url": "http://x", "endpoint": "/v1", "model": "m"},
                },
                "registry": {QUESTION_KEY: "r1"},
            }
        ),
        encoding="utf-8",
    )
    cfg = load_config(path)
    routes = resolve_registry(cfg, [QUESTION_KEY])
    assert routes[QUESTION_KEY].model == "m"
    assert routes[QUESTION_KEY].timeout_s == 20.0


def test_resolve_registry_reports_dangling_route():
    cfg = AppConfig(llm_routes={}, registry={QUESTION_KEY: "missing"})
    with pytest.raises(KeyError):
        resolve_registry(cfg, [QUESTION_KEY])
    with pytest.raises(KeyError):
        resolve_registry(cfg, ["services.unknown"])
