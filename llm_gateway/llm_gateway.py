from __future__ import annotations  # LLM request gateway module

import logging
import os
import threading
from concurrent.futures import Future
from concurrent.futures import TimeoutError as FutureTimeout
from typing import Any, Callable, Dict, Optional, Protocol, Tuple

import httpx

from config import LlmRoute, TextService


logger = logging.getLogger(__name__)  # Module logger setup


_MODEL_LOCKS: Dict[str, threading.Lock] = {}
_MODEL_LOCKS_GUARD = threading.Lock()


class HttpClient(Protocol):  # Minimal HTTP client protocol
    def post(self, url: str, *, json: Dict[str, Any], headers: Dict[str, str], timeout: float) -> "HttpResponse": ...


class HttpResponse(Protocol):  # Minimal HTTP response protocol
    @property
    def status_code(self) -> int: ...

    def json(self) -> Any: ...

    @property
    def text(self) -> str: ...


class LlmGatewayError(RuntimeError):  # Base gateway error
    pass


class LlmTimeoutError(LlmGatewayError):  # Service call exceeded its deadline
    pass


def _lock_for(cfg: LlmRoute) -> threading.Lock:
    key = cfg.name or f"{cfg.base_url}{cfg.endpoint}"
    with _MODEL_LOCKS_GUARD:
        lock = _MODEL_LOCKS.get(key)
        if lock is None:
            lock = threading.Lock()
            _MODEL_LOCKS[key] = lock
    return lock


def complete(prompt: str, *, cfg: LlmRoute, client: Optional[HttpClient] = None) -> str:  # Send a single-turn prompt and return raw text
    def _execute() -> str:
        payload: Dict[str, Any] = {
            "model": cfg.model,
            "messages": [{"role": "user", "content": prompt}],
        }
        if cfg.temperature is not None:
            payload["temperature"] = cfg.temperature
        headers = {"Content-Type": "application/json"}
        if cfg.api_key_env:
            api_key = os.getenv(cfg.api_key_env)
            if api_key:
                headers["Authorization"] = f"Bearer {api_key}"
        headers.update(cfg.extra_headers)
        logger.info("LLM request send route=%s model=%s preview=%s", cfg.name, cfg.model, _preview(prompt))
        try:
            response, close_cb = _post(f"{cfg.base_url}{cfg.endpoint}", payload, headers, cfg.timeout_s, client)
        except Exception as exc:  # noqa: BLE001
            logger.error("LLM transport failure: %s", exc)
            raise LlmGatewayError("LLM transport failed") from exc
        try:
            if response.status_code >= 400:
                logger.error("LLM error status: %s", response.status_code)
                raise LlmGatewayError(f"LLM returned status {response.status_code}")
            try:
                data = response.json()
            except Exception as exc:  # noqa: BLE001
                logger.error("Invalid JSON payload from LLM: %s", exc)
                raise LlmGatewayError("LLM payload was not JSON") from exc
            content = _extract_content(data)
        finally:
            _close_safely(close_cb)
        logger.info("LLM request done route=%s model=%s chars=%d", cfg.name, cfg.model, len(content))
        return content

    if cfg.sequential:
        lock = _lock_for(cfg)
        with lock:
            return _execute()
    return _execute()


def text_service(route: LlmRoute, *, client: Optional[HttpClient] = None) -> TextService:  # Adapt a route into a prompt -> text callable
    def _invoke(prompt: str) -> str:
        return complete(prompt, cfg=route, client=client)

    return _invoke


def call_with_timeout(service: TextService, prompt: str, timeout_s: float) -> str:
    """Run ``service`` on its own daemon thread and give up after ``timeout_s`` seconds.

    The deadline starts when the call starts. A timed-out call keeps running
    but its result is discarded; callers observe an ``LlmTimeoutError`` and
    continue on their fallback path. Hung calls never hold up other calls.
    """

    future: Future = Future()

    def _run() -> None:
        if not future.set_running_or_notify_cancel():
            return
        try:
            future.set_result(service(prompt))
        except Exception as exc:
            future.set_exception(exc)

    threading.Thread(target=_run, name="llm-call", daemon=True).start()
    try:
        result = future.result(timeout=timeout_s)
    except FutureTimeout as exc:
        logger.warning("LLM call timed out after %.1fs", timeout_s)
        raise LlmTimeoutError(f"LLM call exceeded {timeout_s:.1f}s") from exc
    if not isinstance(result, str):
        raise LlmGatewayError(f"LLM service returned {type(result).__name__}, expected text")
    return result


def _post(url: str, payload: Dict[str, Any], headers: Dict[str, str], timeout: float, client: Optional[HttpClient]) -> Tuple[HttpResponse, Optional[Callable[[], None]]]:  # Dispatch HTTP request
    if client is not None:
        response = client.post(url, json=payload, headers=headers, timeout=timeout)
        close_cb = getattr(client, "close", None)
        if callable(close_cb):
            return response, close_cb
        return response, None
    http_client = httpx.Client(timeout=timeout)
    response = http_client.post(url, json=payload, headers=headers)
    return response, http_client.close


def _close_safely(close_cb: Optional[Callable[[], None]]) -> None:  # Close HTTP client callback when provided
    if close_cb is not None:
        close_cb()


def _preview(text: str) -> str:  # Build preview string for logging
    stripped = text.strip()
    first = stripped.splitlines()[0] if stripped else ""
    if len(first) > 120:
        first = first[:117] + "..."
    return first


def _extract_content(data: Any) -> str:  # Extract message content from LLM response
    if isinstance(data, dict):
        choices = data.get("choices")
        if isinstance(choices, list) and choices:
            message = choices[0].get("message") if isinstance(choices[0], dict) else None
            content = message.get("content") if isinstance(message, dict) else None
            if isinstance(content, str):
                return content
        if isinstance(data.get("content"), str):
            return data["content"]
    raise LlmGatewayError("LLM response missing content")
