from __future__ import annotations  # Re-export llm_gateway public API

from .llm_gateway import (
    HttpClient,
    HttpResponse,
    LlmGatewayError,
    LlmTimeoutError,
    call_with_timeout,
    complete,
    text_service,
)
from .parsing import ParsedFail, ParsedOk, ParseResult, parse_first_object, parse_strict, parse_structured

__all__ = [
    "HttpClient",
    "HttpResponse",
    "LlmGatewayError",
    "LlmTimeoutError",
    "call_with_timeout",
    "complete",
    "text_service",
    "ParsedOk",
    "ParsedFail",
    "ParseResult",
    "parse_strict",
    "parse_first_object",
    "parse_structured",
]
