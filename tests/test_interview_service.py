import asyncio
import re

import pytest

from mock_interview.api.interview_service import InterviewService, UploadedDocument, new_session_id
from mock_interview.api.models import InterviewStatus
from mock_interview.api.session_store import InterviewSessionStore
from mock_interview.config import Settings
from mock_interview.errors import (
    DependencyError,
    MissingInputError,
    SessionNotFound,
    UnsupportedFileType,
    ValidationError,
)
from mock_interview.llm import InterviewLLM

from conftest import FailingChatModel, ScriptedChatModel

RESUME = UploadedDocument("text/plain", b"Experienced backend engineer", "resume.txt")
JOB = UploadedDocument("text/plain", b"Seeking backend engineer with API design skills", "jd.txt")


def start(service):
    return asyncio.run(service.start_interview(RESUME, JOB))


def test_session_id_format():
    assert re.fullmatch(r"interview_\d{13}_[a-z0-9]{11}", new_session_id())
    assert new_session_id() != new_session_id()


@pytest.mark.parametrize("resume, job", [(RESUME, None), (None, JOB), (None, None)])
def test_start_without_both_files_writes_nothing(interview_service, store, chat_model, resume, job):
    with pytest.raises(MissingInputError):
        asyncio.run(interview_service.start_interview(resume, job))
    assert store.writes == []
    assert chat_model.calls == []


def test_start_rejects_unsupported_upload(interview_service, store):
    image = UploadedDocument("image/png", b"\x89PNG", "photo.png")
    with pytest.raises(UnsupportedFileType):
        asyncio.run(interview_service.start_interview(image, JOB))
    assert store.writes == []


def test_unsupported_upload_is_its_own_error_category():
    error = UnsupportedFileType("image/png")
    assert isinstance(error, ValueError)
    assert not isinstance(error, ValidationError)
    assert error.media_type == "image/png"


def test_start_logs_upload_filenames(interview_service, caplog):
    with caplog.at_level("INFO", logger="mock_interview.api.interview_service"):
        start(interview_service)
    assert "resume.txt" in caplog.text
    assert "jd.txt" in caplog.text


def test_start_persists_sources_and_session(interview_service, store):
    started = start(interview_service)

    sources = store.tables["interview_data"][started.session_id]
    assert sources["resume_text"] == "Experienced backend engineer"
    assert sources["job_description"] == "Seeking backend engineer with API design skills"

    session = store.tables["interviews"][started.session_id]
    assert session["current_question_id"] == 0
    assert len(session["questions"]) == 5
    assert session["questions"][0] == "How have you designed REST APIs for backend services?"
    assert started.current_question == session["questions"][0]


def test_start_with_no_generated_questions_has_no_first_question(store):
    service = InterviewService(
        InterviewSessionStore(store), InterviewLLM(Settings(), llm=ScriptedChatModel(questions_output=""))
    )
    started = start(service)
    assert started.current_question is None
    assert store.tables["interviews"][started.session_id]["questions"] == []


def test_failed_generation_leaves_created_session(store):
    service = InterviewService(InterviewSessionStore(store), InterviewLLM(Settings(), llm=FailingChatModel()))

    with pytest.raises(DependencyError):
        start(service)

    (session_id,) = store.tables["interview_data"].keys()
    assert store.tables["interviews"] == {}
    status = asyncio.run(service.get_session_status(session_id))
    assert status.status == InterviewStatus.CREATED


def test_next_question_follows_client_cursor(interview_service, store):
    started = start(interview_service)
    questions = store.tables["interviews"][started.session_id]["questions"]

    question, cursor = asyncio.run(interview_service.next_question(started.session_id, "answer a", 3))
    assert (question, cursor) == (questions[4], 4)

    question, cursor = asyncio.run(interview_service.next_question(started.session_id, "answer b", 0))
    assert (question, cursor) == (questions[1], 1)

    session = store.tables["interviews"][started.session_id]
    assert session["responses"] == ["answer a", "answer b"]
    assert session["current_question_id"] == 1


def test_next_question_past_the_end_returns_none(interview_service):
    started = start(interview_service)
    assert asyncio.run(interview_service.next_question(started.session_id, "last", 4)) == (None, 5)
    assert asyncio.run(interview_service.next_question(started.session_id, "extra", 5)) == (None, 6)


def test_unknown_session_is_not_found(interview_service):
    with pytest.raises(SessionNotFound):
        asyncio.run(interview_service.next_question("interview_missing", "x", 0))
    with pytest.raises(SessionNotFound):
        asyncio.run(interview_service.end_interview("interview_missing"))
    with pytest.raises(SessionNotFound):
        asyncio.run(interview_service.get_session_status("interview_missing"))


def test_end_without_responses_still_produces_feedback(interview_service, store, chat_model):
    started = start(interview_service)

    feedback = asyncio.run(interview_service.end_interview(started.session_id))

    assert feedback.startswith("Communication skills")
    assert store.tables["interviews"][started.session_id]["feedback"] == feedback
    assert len(chat_model.calls) == 2


def test_end_uses_all_recorded_responses(interview_service, chat_model):
    started = start(interview_service)
    asyncio.run(interview_service.next_question(started.session_id, "I built APIs", 0))
    asyncio.run(interview_service.next_question(started.session_id, "I scaled queues", 1))

    asyncio.run(interview_service.end_interview(started.session_id))

    assert "I built APIs\n\nI scaled queues" in chat_model.calls[-1][1]["content"]


def test_status_tracks_lifecycle(interview_service):
    started = start(interview_service)

    status = asyncio.run(interview_service.get_session_status(started.session_id))
    assert status.status == InterviewStatus.ACTIVE
    assert status.total_questions == 5
    assert status.current_question == started.current_question

    asyncio.run(interview_service.next_question(started.session_id, "answer", 0))
    asyncio.run(interview_service.end_interview(started.session_id))

    status = asyncio.run(interview_service.get_session_status(started.session_id))
    assert status.status == InterviewStatus.CONCLUDED
    assert status.responses_recorded == 1
    assert status.current_question_id == 1
    assert status.feedback


def test_concurrent_responses_are_not_lost(interview_service, store):
    started = start(interview_service)

    async def submit_both():
        await asyncio.gather(
            interview_service.next_question(started.session_id, "first", 0),
            interview_service.next_question(started.session_id, "second", 1),
        )

    asyncio.run(submit_both())

    assert sorted(store.tables["interviews"][started.session_id]["responses"]) == ["first", "second"]
