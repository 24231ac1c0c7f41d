# Session Store
"""
Persists interview sessions in the datastore.

Each session has two independent records keyed by the same id:
- "interview_data": the extracted resume and job description texts
- "interviews": questions, responses, cursor and feedback

The records are not written transactionally; a failure between the two writes
of a start leaves a source-text record without session state, which reports
as status "created".
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from weakref import WeakValueDictionary

from mock_interview.errors import SessionNotFound

from .models import InterviewStatus

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class InterviewSession:
    """State of an interview session as stored in the "interviews" record."""
    session_id: str
    questions: List[str] = field(default_factory=list)
    responses: List[str] = field(default_factory=list)
    current_question_id: int = 0
    feedback: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "InterviewSession":
        return cls(
            session_id=record["id"],
            questions=list(record.get("questions") or []),
            responses=list(record.get("responses") or []),
            current_question_id=record.get("current_question_id") or 0,
            feedback=record.get("feedback"),
            created_at=record.get("created_at"),
            updated_at=record.get("updated_at"),
        )

    @property
    def status(self) -> InterviewStatus:
        if self.feedback:
            return InterviewStatus.CONCLUDED
        return InterviewStatus.ACTIVE

    @property
    def total_questions(self) -> int:
        return len(self.questions)

    def question_at(self, index: int) -> Optional[str]:
        """Question at `index`, or None when out of range."""
        if 0 <= index < len(self.questions):
            return self.questions[index]
        return None


class InterviewSessionStore:
    """
    Reads and writes interview session records.

    Nothing is cached; every call goes to the datastore. `lock()` hands out one
    asyncio.Lock per session id so read-modify-write transitions inside this
    process do not interleave.
    """

    SOURCES_TABLE = "interview_data"
    SESSIONS_TABLE = "interviews"

    def __init__(self, store):
        self.store = store
        self._locks: "WeakValueDictionary[str, asyncio.Lock]" = WeakValueDictionary()

    def lock(self, session_id: str) -> asyncio.Lock:
        """Per-session lock; dropped once no request holds or awaits it."""
        lock = self._locks.get(session_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[session_id] = lock
        return lock

    def save_sources(self, session_id: str, resume_text: str, job_description: str) -> None:
        """Store the extracted source texts for a new session."""
        self.store.insert(self.SOURCES_TABLE, {
            "id": session_id,
            "resume_text": resume_text,
            "job_description": job_description,
        })
        logger.info(f"Session {session_id}: source texts stored")

    def has_sources(self, session_id: str) -> bool:
        return self.store.select_one(
            self.SOURCES_TABLE, "id", {"id": session_id}
        ) is not None

    def create_session(self, session_id: str, questions: List[str]) -> InterviewSession:
        """Write the initial session state with the cursor at 0."""
        now = _now()
        record = {
            "id": session_id,
            "current_question_id": 0,
            "questions": questions,
            "responses": [],
            "created_at": now,
            "updated_at": now,
        }
        self.store.upsert(self.SESSIONS_TABLE, record)
        logger.info(f"Created session: {session_id} with {len(questions)} questions")
        return InterviewSession.from_record(record)

    def get_session(self, session_id: str) -> Optional[InterviewSession]:
        """Load a session, or None if it has no state record."""
        record = self.store.select_one(self.SESSIONS_TABLE, "*", {"id": session_id})
        if record is None:
            return None
        return InterviewSession.from_record(record)

    def get_session_or_raise(self, session_id: str) -> InterviewSession:
        session = self.get_session(session_id)
        if session is None:
            raise SessionNotFound(session_id)
        return session

    def save_responses(self, session_id: str, responses: List[str], current_question_id: int) -> None:
        """Persist the full responses list and the cursor echoed to the client."""
        self.store.upsert(self.SESSIONS_TABLE, {
            "id": session_id,
            "responses": responses,
            "current_question_id": current_question_id,
            "updated_at": _now(),
        })

    def save_feedback(self, session_id: str, feedback: str) -> None:
        self.store.upsert(self.SESSIONS_TABLE, {
            "id": session_id,
            "feedback": feedback,
            "updated_at": _now(),
        })
        logger.info(f"Session {session_id}: Interview concluded")
