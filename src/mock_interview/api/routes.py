# API Routes
"""
FastAPI route handlers for the interview flow.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from mock_interview.errors import MissingInputError, SessionNotFound

from .models import (
    EndInterviewRequest,
    ErrorResponse,
    FeedbackResponse,
    NextQuestionRequest,
    NextQuestionResponse,
    SessionStatusResponse,
    StartInterviewResponse,
)
from .interview_service import InterviewService, UploadedDocument, get_interview_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["interview"])


async def _read_upload(upload: Optional[UploadFile]) -> Optional[UploadedDocument]:
    if upload is None:
        return None
    return UploadedDocument(
        media_type=upload.content_type,
        data=await upload.read(),
        filename=upload.filename
    )


# ============================================================================
# Interview Flow Endpoints
# ============================================================================

@router.post(
    "/start-interview",
    response_model=StartInterviewResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Start a new interview session",
    description="Upload a resume and a job description (PDF, DOCX or text) to generate interview questions."
)
async def start_interview(
    resume: Optional[UploadFile] = File(None),
    job_description: Optional[UploadFile] = File(None, alias="jobDescription"),
    service: InterviewService = Depends(get_interview_service)
) -> StartInterviewResponse:
    """
    Start a new interview session.

    This endpoint:
    1. Extracts text from both uploads
    2. Stores the texts under a new interview id
    3. Generates the interview questions
    4. Returns the interview id and the first question
    """
    try:
        started = await service.start_interview(
            resume=await _read_upload(resume),
            job_description=await _read_upload(job_description)
        )

        return StartInterviewResponse(
            interview_id=started.session_id,
            current_question=started.current_question
        )

    except MissingInputError as e:
        logger.warning(f"Rejected interview start: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception(f"Error starting interview: {e}")
        raise HTTPException(status_code=500, detail="Failed to generate questions")


@router.post(
    "/get-next-question",
    response_model=NextQuestionResponse,
    responses={500: {"model": ErrorResponse}},
    summary="Submit a response and get the next question",
    description="Record the candidate's response and return the question after current_question_id."
)
async def get_next_question(
    request: NextQuestionRequest,
    service: InterviewService = Depends(get_interview_service)
) -> NextQuestionResponse:
    """
    Record a response to the current question.

    The returned question is null once the client's cursor moves past the
    last question.
    """
    try:
        question, next_question_id = await service.next_question(
            session_id=request.interview_id,
            response=request.response,
            current_question_id=request.current_question_id
        )

        return NextQuestionResponse(question=question, current_question_id=next_question_id)

    except Exception as e:
        logger.exception(f"Error processing response: {e}")
        raise HTTPException(status_code=500, detail="Failed to process next question")


@router.post(
    "/end-interview",
    response_model=FeedbackResponse,
    responses={500: {"model": ErrorResponse}},
    summary="End the interview",
    description="Generate AI feedback on every response recorded so far."
)
async def end_interview(
    request: EndInterviewRequest,
    service: InterviewService = Depends(get_interview_service)
) -> FeedbackResponse:
    """End an interview at any point and return the feedback."""
    try:
        feedback = await service.end_interview(request.interview_id)
        return FeedbackResponse(feedback=feedback)

    except Exception as e:
        logger.exception(f"Error generating feedback: {e}")
        raise HTTPException(status_code=500, detail="Failed to generate feedback")


# ============================================================================
# Session Status
# ============================================================================

@router.get(
    "/interviews/{interview_id}",
    response_model=SessionStatusResponse,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Get interview status",
    description="Retrieve the lifecycle state, progress and feedback of an interview."
)
async def get_interview_status(
    interview_id: str,
    service: InterviewService = Depends(get_interview_service)
) -> SessionStatusResponse:
    try:
        return await service.get_session_status(interview_id)

    except SessionNotFound as e:
        logger.warning(str(e))
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.exception(f"Error fetching interview status: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch interview")
