import logging
import uuid
from datetime import datetime, timedelta
from typing import List, Optional

from fastapi import APIRouter, Cookie, Depends, Form, Query, Response
from fastapi.responses import JSONResponse

from . import database
from .config import settings
from .engine import QuizEngine
from .globals import ActiveSession, sessions, vocab_store
from .models import (
    AnswerReceipt,
    EventRecord,
    QuestionResponse,
    SessionStatus,
    VocabularySummary,
)
from .questions import SUPPORTED_LANGUAGES

logger = logging.getLogger(__name__)

router = APIRouter()


# --- Dependencies ---
def get_session_id(
    session_id: Optional[str] = Cookie(None, alias=settings.SESSION_COOKIE_NAME)
) -> Optional[str]:
    return session_id


def get_active_session(session_id: Optional[str]) -> Optional[ActiveSession]:
    if not session_id or session_id not in sessions:
        return None
    session = sessions[session_id]
    if datetime.now() - session.created_at > timedelta(
        minutes=settings.SESSION_TIMEOUT_MINUTES
    ):
        del sessions[session_id]
        logger.info(f"Session expired: {session_id}")
        return None
    return session


def _status(engine: QuizEngine) -> SessionStatus:
    return SessionStatus(
        state=engine.state.value,
        total_questions=engine.total_questions,
        remaining_questions=engine.remaining_questions,
        answered_count=engine.answered_count,
    )


def _vocabulary_unavailable() -> JSONResponse:
    return JSONResponse({"error": "Vocabulary not loaded"}, status_code=503)


def _session_invalid() -> JSONResponse:
    return JSONResponse({"error": "Session invalid"}, status_code=401)


# --- Routes ---
@router.get("/api/vocabulary", response_model=VocabularySummary)
async def get_vocabulary_summary():
    return VocabularySummary(
        loaded=vocab_store.is_loaded,
        total_entries=len(vocab_store),
        languages=vocab_store.languages(),
        supported_languages=list(SUPPORTED_LANGUAGES),
        difficulties=vocab_store.difficulty_counts(),
    )


@router.post("/api/session", response_model=SessionStatus)
async def start_session(response: Response):
    if not vocab_store.is_loaded:
        return _vocabulary_unavailable()

    engine = QuizEngine(store=vocab_store, seed=settings.RANDOM_SEED or None)
    engine.start()

    new_id = str(uuid.uuid4())
    sessions[new_id] = ActiveSession(engine=engine)
    logger.info(f"New session: {new_id} [{engine.total_questions} entries]")

    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=new_id,
        httponly=True,
        samesite="Lax",
    )
    return _status(engine)


@router.get("/api/session", response_model=SessionStatus)
async def get_session_status(session_id: Optional[str] = Depends(get_session_id)):
    session = get_active_session(session_id)
    if not session:
        return _session_invalid()
    return _status(session.engine)


@router.get("/api/question", response_model=QuestionResponse)
async def next_question(
    difficulty: str = Query(settings.DEFAULT_DIFFICULTY),
    lang: str = Query(settings.DEFAULT_LANGUAGE),
    session_id: Optional[str] = Depends(get_session_id),
):
    session = get_active_session(session_id)
    if not session:
        return _session_invalid()
    if not vocab_store.is_loaded:
        return _vocabulary_unavailable()

    engine = session.engine
    question = engine.get_next_question(difficulty, lang)
    return QuestionResponse(
        question=question,
        complete=question is None,
        remaining_questions=engine.remaining_questions,
    )


@router.post("/api/answer", response_model=AnswerReceipt)
async def record_answer(
    question_id: str = Form(...),
    session_id: Optional[str] = Depends(get_session_id),
):
    session = get_active_session(session_id)
    if not session:
        return _session_invalid()
    if vocab_store.get(question_id) is None:
        return JSONResponse({"error": "Unknown question"}, status_code=404)

    engine = session.engine
    engine.record_answer(question_id)
    return AnswerReceipt(
        question_id=question_id,
        answered_count=engine.answered_count,
        remaining_questions=engine.remaining_questions,
    )


@router.post("/api/reset", response_model=SessionStatus)
async def reset_answered(session_id: Optional[str] = Depends(get_session_id)):
    session = get_active_session(session_id)
    if not session:
        return _session_invalid()
    if not vocab_store.is_loaded:
        return _vocabulary_unavailable()
    session.engine.reset_answered_questions_tracker()
    return _status(session.engine)


@router.post("/api/reshuffle", response_model=SessionStatus)
async def reshuffle(session_id: Optional[str] = Depends(get_session_id)):
    session = get_active_session(session_id)
    if not session:
        return _session_invalid()
    if not vocab_store.is_loaded:
        return _vocabulary_unavailable()
    session.engine.reset_session()
    return _status(session.engine)


@router.delete("/api/session")
async def end_session(response: Response, session_id: Optional[str] = Depends(get_session_id)):
    if session_id in sessions:
        del sessions[session_id]
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return {"status": "success"}


@router.get("/api/events", response_model=List[EventRecord])
async def recent_events(limit: int = Query(database.MAX_EVENTS, ge=1)):
    if not settings.EVENT_LOG_ENABLED:
        return JSONResponse({"error": "Event log disabled"}, status_code=404)
    return database.fetch_events(limit)
