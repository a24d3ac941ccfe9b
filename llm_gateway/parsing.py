"""Structured parsing of free-text LLM output.

Two strategies are tried in order and each returns a tagged result instead of
raising: ``strict`` parses the whole reply (after removing markdown fences) and
``first_object`` scans for the first substring that decodes as a JSON object.
Neither strategy validates field contents; callers re-validate the mapping
against their own models.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Union


@dataclass(frozen=True)
class ParsedOk:
    value: Dict[str, Any]
    strategy: str


@dataclass(frozen=True)
class ParsedFail:
    reason: str


ParseResult = Union[ParsedOk, ParsedFail]

_DECODER = json.JSONDecoder()


def strip_code_fences(content: str) -> str:  # Remove common markdown fences from LLM output
    text = content.strip()
    if text.startswith("```"):
        lines = text.splitlines()
        if lines:
            lines = lines[1:]
            while lines and lines[0].strip() == "":
                lines = lines[1:]
            while lines and lines[-1].strip() == "":
                lines = lines[:-1]
            if lines and lines[-1].strip() == "```":
                lines = lines[:-1]
            text = "\n".join(lines).strip()
    return text


def parse_strict(text: str) -> ParseResult:
    cleaned = strip_code_fences(text or "")
    if not cleaned:
        return ParsedFail("empty response")
    try:
        value = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        return ParsedFail(f"strict: {exc.msg} at {exc.pos}")
    if not isinstance(value, dict):
        return ParsedFail(f"strict: expected object, got {type(value).__name__}")
    return ParsedOk(value, "strict")


def parse_first_object(text: str) -> ParseResult:
    if not text:
        return ParsedFail("empty response")
    start = text.find("{")
    while start != -1:
        try:
            value, _ = _DECODER.raw_decode(text, start)
        except json.JSONDecodeError:
            start = text.find("{", start + 1)
            continue
        if isinstance(value, dict):
            return ParsedOk(value, "first_object")
        start = text.find("{", start + 1)
    return ParsedFail("first_object: no JSON object found")


def parse_structured(text: str) -> ParseResult:
    """Try the strict strategy, then the first-object extraction."""

    strict = parse_strict(text)
    if isinstance(strict, ParsedOk):
        return strict
    extracted = parse_first_object(text)
    if isinstance(extracted, ParsedOk):
        return extracted
    return ParsedFail(f"{strict.reason}; {extracted.reason}")


__all__ = [
    "ParsedOk",
    "ParsedFail",
    "ParseResult",
    "strip_code_fences",
    "parse_strict",
    "parse_first_object",
    "parse_structured",
]
