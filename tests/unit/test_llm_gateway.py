import threading
import time

import pytest

from config.routes import LlmRoute
from llm_gateway import LlmGatewayError, LlmTimeoutError, call_with_timeout, complete, text_service


class _Resp:
    def __init__(self, status_code, payload):
        self.status_code = status_code
        self._payload = payload
        self.text = str(payload)

    def json(self):
        return self._payload


class _Client:
    def __init__(self, response):
        self.response = response
        self.calls = []
        self.closed = False

    def post(self, url, *, json, headers, timeout):
        self.calls.append({"url": url, "json": json, "headers": headers, "timeout": timeout})
        return self.response

    def close(self):
        self.closed = True


def _route(**overrides):
    base = dict(
        name="test-route",
        base_url="http://llm.local",
        endpoint="/v1/chat/completions",
        model="test-model",
        temperature=0.3,
    )
    base.update(overrides)
    return LlmRoute(**base)


def test_complete_posts_chat_payload_and_returns_content(monkeypatch):
    monkeypatch.setenv("TEST_LLM_KEY", "secret")
    client = _Client(_Resp(200, {"choices": [{"message": {"content": "hello"}}]}))
    out = complete("Ask something", cfg=_route(api_key_env="TEST_LLM_KEY"), client=client)
    assert out == "hello"
    call = client.calls[0]
    assert call["url"] == "http://llm.local/v1/chat/completions"
    assert call["json"]["model"] == "test-model"
    assert call["json"]["temperature"] == 0.3
    assert call["json"]["messages"] == [{"role": "user", "content": "Ask something"}]
    assert call["headers"]["Authorization"] == "Bearer secret"
    assert client.closed


def test_complete_raises_on_error_status():
    client = _Client(_Resp(503, {"error": "busy"}))
    with pytest.raises(LlmGatewayError):
        complete("x", cfg=_route(), client=client)


def test_complete_raises_when_content_missing():
    client = _Client(_Resp(200, {"choices": []}))
    with pytest.raises(LlmGatewayError):
        complete("x", cfg=_route(sequential=True), client=client)


def test_text_service_wraps_route():
    client = _Client(_Resp(200, {"content": "plain"}))
    service = text_service(_route(), client=client)
    assert service("prompt") == "plain"


def test_call_with_timeout_returns_text():
    assert call_with_timeout(lambda prompt: prompt.upper(), "ok", 1.0) == "OK"


def test_call_with_timeout_raises_on_slow_service():
    def slow(prompt):
        time.sleep(0.5)
        return "late"

    started = time.perf_counter()
    with pytest.raises(LlmTimeoutError):
        call_with_timeout(slow, "x", 0.05)
    assert time.perf_counter() - started < 0.4


def test_call_with_timeout_rejects_non_text():
    with pytest.raises(LlmGatewayError):
        call_with_timeout(lambda prompt: {"not": "text"}, "x", 1.0)


def test_hung_calls_do_not_starve_healthy_service():
    release = threading.Event()

    def hung(prompt):
        release.wait(5.0)
        return "too late"

    try:
        for _ in range(12):
            with pytest.raises(LlmTimeoutError):
                call_with_timeout(hung, "question", 0.05)
        assert call_with_timeout(lambda prompt: '{"score": 8}', "evaluate", 0.5) == '{"score": 8}'
    finally:
        release.set()


def test_call_with_timeout_propagates_service_errors():
    def broken(prompt):
        raise ConnectionError("upstream reset")

    with pytest.raises(ConnectionError, match="upstream reset"):
        call_with_timeout(broken, "x", 1.0)
