"""Invoke a registered text service and parse its reply without raising."""
from __future__ import annotations

import logging

from config.registry import get_service
from llm_gateway import ParsedFail, ParseResult, call_with_timeout, parse_structured
from observability import span


logger = logging.getLogger(__name__)


def ask_structured(key: str, prompt: str, *, timeout_s: float, session_id: str, name: str) -> ParseResult:
    """Return ``ParsedOk`` with the reply's JSON object, or ``ParsedFail`` with a reason.

    An unbound service, a service exception, a timeout and an unparseable reply
    all come back as ``ParsedFail``.
    """

    try:
        service = get_service(key)
    except KeyError:
        return ParsedFail(f"no service bound for {key}")
    try:
        with span(session_id, name):
            text = call_with_timeout(service, prompt, timeout_s)
    except Exception as exc:  # noqa: BLE001
        logger.warning("Service call %s failed: %s", name, exc)
        return ParsedFail(f"service error: {exc}")
    result = parse_structured(text)
    if isinstance(result, ParsedFail):
        logger.warning("Service reply for %s was not usable: %s", name, result.reason)
    return result


__all__ = ["ask_structured"]
