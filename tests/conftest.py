import copy
import itertools
import os
from collections import defaultdict

import pytest

os.environ.setdefault("LANGFUSE_TRACING_ENABLED", "false")

from fastapi.testclient import TestClient  # noqa: E402

from mock_interview.api.account_service import AccountService, get_account_service  # noqa: E402
from mock_interview.api.interview_service import InterviewService, get_interview_service  # noqa: E402
from mock_interview.api.main import app  # noqa: E402
from mock_interview.api.session_store import InterviewSessionStore  # noqa: E402
from mock_interview.config import Settings  # noqa: E402
from mock_interview.llm import InterviewLLM  # noqa: E402
from mock_interview.prompts import QUESTIONS_SYSTEM_PROMPT  # noqa: E402


QUESTIONS_OUTPUT = """1. How have you designed REST APIs for backend services?

2. Describe a time you scaled a service under load.

3. How do you approach API versioning?

4. What testing strategy do you use for backend code?

5. How do you handle failures in external dependencies?"""

FEEDBACK_OUTPUT = """
Communication skills: clear and concise.
Technical knowledge: solid API fundamentals.
Overall assessment: strong candidate.
"""


class InMemoryStore:
    """Dict-backed stand-in for SupabaseStore with the same operations."""

    def __init__(self):
        self.tables = defaultdict(dict)
        self.writes = []
        self._ids = itertools.count(1)

    @staticmethod
    def _value(row, column):
        if "->" in column:
            parent, child = column.split("->", 1)
            return (row.get(parent) or {}).get(child)
        return row.get(column)

    def _matches(self, row, filters):
        for column, expected in (filters or {}).items():
            actual = self._value(row, column)
            if actual is None or str(actual) != str(expected):
                return False
        return True

    def rows(self, table):
        return list(self.tables[table].values())

    def select(self, table, columns="*", filters=None):
        return [copy.deepcopy(row) for row in self.rows(table) if self._matches(row, filters)]

    def select_one(self, table, columns="*", filters=None):
        rows = self.select(table, columns, filters)
        return rows[0] if rows else None

    def insert(self, table, row):
        stored = copy.deepcopy(row)
        stored.setdefault("id", next(self._ids))
        self.tables[table][stored["id"]] = stored
        self.writes.append(("insert", table, copy.deepcopy(stored)))
        return copy.deepcopy(stored)

    def upsert(self, table, row):
        stored = self.tables[table].setdefault(row["id"], {})
        stored.update(copy.deepcopy(row))
        self.writes.append(("upsert", table, copy.deepcopy(row)))
        return copy.deepcopy(stored)


class ScriptedChatModel:
    """Answers crewai-style `call(messages=...)` with canned text."""

    def __init__(self, questions_output=QUESTIONS_OUTPUT, feedback_output=FEEDBACK_OUTPUT):
        self.questions_output = questions_output
        self.feedback_output = feedback_output
        self.calls = []

    def call(self, messages):
        self.calls.append(messages)
        if messages[0]["content"] == QUESTIONS_SYSTEM_PROMPT:
            return self.questions_output
        return self.feedback_output


class FailingChatModel:
    def call(self, messages):
        raise RuntimeError("upstream returned 503")


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def chat_model():
    return ScriptedChatModel()


@pytest.fixture
def interview_service(store, chat_model):
    return InterviewService(
        sessions=InterviewSessionStore(store),
        llm=InterviewLLM(Settings(), llm=chat_model)
    )


@pytest.fixture
def account_service(store):
    return AccountService(store)


@pytest.fixture
def client(interview_service, account_service):
    app.dependency_overrides[get_interview_service] = lambda: interview_service
    app.dependency_overrides[get_account_service] = lambda: account_service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
