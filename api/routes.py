"""FastAPI routes for the interview action endpoint."""
from __future__ import annotations

import logging
import re
from typing import Any, Callable, Dict, Optional

from fastapi import APIRouter, FastAPI, HTTPException, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from api.schemas import ActionReq, ErrorResp, HealthResp
from interview_session.engine import InterviewEngine
from interview_session.errors import (
    InvalidStateError,
    NotFoundError,
    QuestionGenerationError,
    ValidationError,
)
from jd_analysis import parse_job_posting
from session_reports import generate_results_pdf


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/interview")

_ENGINE: Optional[InterviewEngine] = None


def get_engine() -> InterviewEngine:
    global _ENGINE
    if _ENGINE is None:
        _ENGINE = InterviewEngine()
    return _ENGINE


def set_engine(engine: Optional[InterviewEngine]) -> None:
    global _ENGINE
    _ENGINE = engine


def _dump(model: Any) -> Any:
    return model.model_dump(mode="json", by_alias=True)


def _session_id(req: ActionReq) -> str:
    if not isinstance(req.sessionId, str) or not req.sessionId.strip():
        raise ValidationError(["sessionId is required"])
    return req.sessionId.strip()


def _start(engine: InterviewEngine, req: ActionReq) -> Dict[str, Any]:
    session, question = engine.start(req.model_dump())
    return {"session": _dump(session), "currentQuestion": _dump(question)}


def _next_question(engine: InterviewEngine, req: ActionReq) -> Dict[str, Any]:
    return {"question": _dump(engine.next_question(_session_id(req)))}


def _submit_answer(engine: InterviewEngine, req: ActionReq) -> Dict[str, Any]:
    outcome = engine.submit_answer(_session_id(req), req.answer, req.timeSpent)
    return {
        "evaluation": _dump(outcome.evaluation),
        "session": _dump(outcome.session),
        "isComplete": outcome.is_complete,
    }


def _get_results(engine: InterviewEngine, req: ActionReq) -> Dict[str, Any]:
    results = engine.get_results(_session_id(req))
    return {"results": _dump(results)}


def _pause(engine: InterviewEngine, req: ActionReq) -> Dict[str, Any]:
    return {"message": engine.pause(_session_id(req))}


def _resume(engine: InterviewEngine, req: ActionReq) -> Dict[str, Any]:
    return {"message": engine.resume(_session_id(req))}


def _parse_job_posting(engine: InterviewEngine, req: ActionReq) -> Dict[str, Any]:
    return {"jobData": _dump(parse_job_posting(req.jobPosting))}


_HANDLERS: Dict[str, Callable[[InterviewEngine, ActionReq], Dict[str, Any]]] = {
    "start": _start,
    "next-question": _next_question,
    "submit-answer": _submit_answer,
    "get-results": _get_results,
    "pause": _pause,
    "resume": _resume,
    "parse-job-posting": _parse_job_posting,
}


@router.get("", response_model=HealthResp)
def health() -> HealthResp:
    return HealthResp(message="Interview API is running")


@router.post("")
def dispatch(req: ActionReq) -> Dict[str, Any]:
    handler = _HANDLERS.get(req.action or "")
    if handler is None:
        raise HTTPException(status_code=400, detail="Invalid action")
    try:
        body = handler(get_engine(), req)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except InvalidStateError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except QuestionGenerationError as exc:
        logger.error("Question generation failed: %s", exc)
        raise HTTPException(status_code=500, detail="Failed to generate question") from exc
    except Exception as exc:  # noqa: BLE001
        logger.exception("Unexpected error during action %s", req.action)
        raise HTTPException(status_code=500, detail="Internal server error") from exc
    return {"success": True, **body}


def _safe_slug(value: str) -> str:  # Sanitize value for filenames
    return re.sub(r"[^A-Za-z0-9]+", "-", value).strip("-").lower()


@router.get("/{session_id}/report.pdf")
def results_pdf(session_id: str) -> Response:
    try:
        results = get_engine().get_results(session_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except InvalidStateError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except Exception as exc:  # noqa: BLE001
        logger.exception("Unable to build results for %s", session_id)
        raise HTTPException(status_code=500, detail="Internal server error") from exc
    payload = generate_results_pdf(results)
    filename = f"{_safe_slug(results.session.position) or 'interview'}-{_safe_slug(session_id)}.pdf"
    headers = {"Content-Disposition": f"attachment; filename=\"{filename}\""}
    return Response(content=payload, media_type="application/pdf", headers=headers)


async def _http_error(request: Request, exc: HTTPException) -> JSONResponse:
    detail = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return JSONResponse(status_code=exc.status_code, content=ErrorResp(error=detail).model_dump())


async def _body_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content=ErrorResp(error="Invalid request body").model_dump())


def install_error_handlers(app: FastAPI) -> None:
    """Render errors with the ``{success: false, error}`` envelope."""

    app.add_exception_handler(HTTPException, _http_error)
    app.add_exception_handler(RequestValidationError, _body_error)


__all__ = ["router", "get_engine", "set_engine", "install_error_handlers"]
