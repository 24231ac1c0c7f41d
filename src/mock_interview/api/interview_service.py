# Interview Service
"""
Turn-based mock interview service for the FastAPI backend.

Session lifecycle:
1. start_interview: extract resume/JD text, store it, generate questions
2. next_question: record a response and serve the question after the
   client's cursor
3. end_interview: generate feedback from the recorded responses

Session state lives only in the datastore and is reloaded on every call.
"""

import logging
import random
import string
import time
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Tuple

from fastapi.concurrency import run_in_threadpool

from document_text.extractor import extract_text
from mock_interview.config import get_settings
from mock_interview.datastore import get_datastore
from mock_interview.errors import MissingInputError, SessionNotFound
from mock_interview.llm import InterviewLLM

from .models import InterviewStatus, SessionStatusResponse
from .session_store import InterviewSessionStore

logger = logging.getLogger(__name__)


@dataclass
class UploadedDocument:
    """An uploaded file as declared by the client."""
    media_type: Optional[str]
    data: bytes
    filename: Optional[str] = None


@dataclass
class StartedInterview:
    session_id: str
    current_question: Optional[str]


def new_session_id() -> str:
    """Opaque session token: creation time in ms plus a random base36 suffix."""
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=11))
    return f"interview_{int(time.time() * 1000)}_{suffix}"


class InterviewService:
    """
    Service class implementing the interview session state machine.

    Provides methods for:
    - Starting sessions from uploaded documents
    - Recording responses and serving the next question
    - Ending sessions with AI feedback
    - Reporting session status
    """

    def __init__(self, sessions: InterviewSessionStore, llm: InterviewLLM):
        self.sessions = sessions
        self.llm = llm

    async def start_interview(
        self,
        resume: Optional[UploadedDocument],
        job_description: Optional[UploadedDocument]
    ) -> StartedInterview:
        """
        Start a new interview session.

        Raises:
            MissingInputError: If either document is missing (nothing is stored)
            UnsupportedFileType: If a document's media type cannot be extracted
        """
        if resume is None or job_description is None:
            raise MissingInputError("Resume and job description files are required")

        logger.info(f"🚀 Preparing interview session from {resume.filename} and {job_description.filename}...")

        resume_text = await run_in_threadpool(extract_text, resume.media_type, resume.data)
        job_description_text = await run_in_threadpool(
            extract_text, job_description.media_type, job_description.data
        )

        session_id = new_session_id()
        logger.info(f"📋 Session ID: {session_id}")

        await run_in_threadpool(
            self.sessions.save_sources, session_id, resume_text, job_description_text
        )

        questions = await run_in_threadpool(
            self.llm.generate_questions, resume_text, job_description_text
        )

        session = await run_in_threadpool(self.sessions.create_session, session_id, questions)

        logger.info(f"✅ Session initialized: {session_id} with {session.total_questions} questions")
        return StartedInterview(session_id=session_id, current_question=session.question_at(0))

    async def next_question(
        self,
        session_id: str,
        response: str,
        current_question_id: int
    ) -> Tuple[Optional[str], int]:
        """
        Record a response and return the question after the client's cursor.

        The next index is always `current_question_id + 1`, independent of how
        many responses are already stored.

        Returns:
            (question or None when past the end, new cursor value)
        """
        async with self.sessions.lock(session_id):
            session = await run_in_threadpool(self.sessions.get_session_or_raise, session_id)

            responses = session.responses + [response]
            next_question_id = current_question_id + 1

            await run_in_threadpool(
                self.sessions.save_responses, session_id, responses, next_question_id
            )

        question = session.question_at(next_question_id)
        logger.info(
            f"📝 Session {session_id}: response {len(responses)} recorded, "
            f"serving question {next_question_id + 1}/{session.total_questions}"
        )
        return question, next_question_id

    async def end_interview(self, session_id: str) -> str:
        """Generate, store and return feedback on all recorded responses."""
        async with self.sessions.lock(session_id):
            session = await run_in_threadpool(self.sessions.get_session_or_raise, session_id)

            logger.info(f"🔍 Running feedback for session {session_id}...")
            feedback = await run_in_threadpool(self.llm.generate_feedback, session.responses)

            await run_in_threadpool(self.sessions.save_feedback, session_id, feedback)

        logger.info(f"✅ Feedback completed for session {session_id}")
        return feedback

    async def get_session_status(self, session_id: str) -> SessionStatusResponse:
        """Describe where a session is in its lifecycle."""
        session = await run_in_threadpool(self.sessions.get_session, session_id)

        if session is None:
            if await run_in_threadpool(self.sessions.has_sources, session_id):
                return SessionStatusResponse(interview_id=session_id, status=InterviewStatus.CREATED)
            raise SessionNotFound(session_id)

        return SessionStatusResponse(
            interview_id=session_id,
            status=session.status,
            total_questions=session.total_questions,
            responses_recorded=len(session.responses),
            current_question_id=session.current_question_id,
            current_question=session.question_at(session.current_question_id),
            feedback=session.feedback,
            created_at=session.created_at,
            updated_at=session.updated_at
        )


@lru_cache
def get_interview_service() -> InterviewService:
    """Dependency returning the interview service singleton."""
    return InterviewService(
        sessions=InterviewSessionStore(get_datastore()),
        llm=InterviewLLM(get_settings())
    )
