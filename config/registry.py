"""In-memory registry of text services used by the interview engine."""
from typing import Callable, Dict

TextService = Callable[[str], str]

_REGISTRY: Dict[str, TextService] = {}


def bind_service(key: str, fn: TextService) -> None:
    """Bind a text service implementation to a registry key."""
    _REGISTRY[key] = fn


def get_service(key: str) -> TextService:
    """Retrieve a text service from the registry.

    Raises:
        KeyError: If no service has been bound for ``key``.
    """

    if key not in _REGISTRY:
        raise KeyError(f"Service not bound in registry: {key}")
    return _REGISTRY[key]


def unbind_service(key: str) -> None:
    _REGISTRY.pop(key, None)


def clear_services() -> None:
    _REGISTRY.clear()


QUESTION_KEY = "services.question_generator"
EVALUATION_KEY = "services.answer_evaluator"
JOB_POSTING_KEY = "services.job_posting_parser"
