from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query

from enem_api.api.dependencies import provide_documents, provide_resolver, provide_settings
from enem_api.api.schemas.question import (
    QuestionMetadataResponse,
    SimuladoQuestionsRequest,
    SimuladoQuestionsResponse,
)
from enem_api.application.presentation import present_question
from enem_api.application.resolver import QuestionResolver
from enem_api.core.config import Settings
from enem_api.domain.errors import DocumentReadError, NotFoundError
from enem_api.domain.models import Question
from enem_api.infra.ports.documents import ExamDocumentPort

router = APIRouter(prefix="/api", tags=["questions"])
logger = logging.getLogger(__name__)


def _parse_year(raw: str, detail: str) -> int:
    if not (raw.isascii() and raw.isdigit()):
        raise HTTPException(status_code=404, detail=detail)
    return int(raw)


def _present(question: Question, settings: Settings, year: int | None = None) -> Question:
    return present_question(
        question,
        context_media_base=settings.context_media_base,
        files_media_base=settings.files_media_base,
        year=year,
    )


@router.get("/exams")
async def list_exams(documents: ExamDocumentPort = Depends(provide_documents)) -> Any:
    try:
        return await documents.read_exam_index()
    except DocumentReadError as exc:
        logger.error("Failed to load exams index: %s", exc)
        raise HTTPException(status_code=500, detail="Failed to load exams data") from exc


@router.get("/exams/{year}")
async def get_exam(
    year: str,
    resolver: QuestionResolver = Depends(provide_resolver),
    settings: Settings = Depends(provide_settings),
) -> dict[str, Any]:
    exam_year = _parse_year(year, "Exam not found")
    try:
        manifest, questions = await resolver.load_exam_details(exam_year)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail="Exam not found") from exc

    return {**manifest, "questions": [_present(q, settings, year=exam_year) for q in questions]}


@router.get("/exams/{year}/questions")
async def list_exam_questions(
    year: str,
    resolver: QuestionResolver = Depends(provide_resolver),
    settings: Settings = Depends(provide_settings),
) -> list[dict[str, Any]]:
    exam_year = _parse_year(year, "Exam not found")
    questions = await resolver.load_all_for_year(exam_year)
    return [_present(q, settings, year=exam_year) for q in questions]


@router.get("/exams/{year}/questions/{questionId}")
async def get_question(
    year: str,
    questionId: str,
    language: str | None = Query(default=None),
    resolver: QuestionResolver = Depends(provide_resolver),
    settings: Settings = Depends(provide_settings),
) -> dict[str, Any]:
    exam_year = _parse_year(year, "Question not found")
    try:
        question = await resolver.resolve(exam_year, questionId, language)
    except NotFoundError as exc:
        logger.info("%s", exc)
        raise HTTPException(status_code=404, detail="Question not found") from exc

    return _present(question, settings)


@router.get("/exams/{year}/questions/{questionId}/metadata", response_model=QuestionMetadataResponse)
async def get_question_metadata(
    year: str,
    questionId: str,
    resolver: QuestionResolver = Depends(provide_resolver),
):
    exam_year = _parse_year(year, "Question not found")
    has_override, metadata = await resolver.describe_override(exam_year, questionId)

    return QuestionMetadataResponse(
        year=exam_year,
        questionId=questionId,
        hasOverride=has_override,
        metadata=metadata,
    )


@router.post("/simulados/questions", response_model=SimuladoQuestionsResponse)
async def get_simulado_questions(
    body: SimuladoQuestionsRequest,
    resolver: QuestionResolver = Depends(provide_resolver),
):
    questions = await resolver.load_selection(body.year, body.questionIds)
    return SimuladoQuestionsResponse(questions=questions)
