"""
LLM collaborator for question generation and interview feedback.
"""

import logging
import re
from typing import Any, List, Optional

from crewai import LLM
from langfuse import get_client

from mock_interview.config import Settings
from mock_interview.errors import DependencyError
from mock_interview.prompts import (
    FEEDBACK_PROMPT,
    FEEDBACK_SYSTEM_PROMPT,
    QUESTIONS_PROMPT,
    QUESTIONS_SYSTEM_PROMPT,
)

langfuse = get_client()

logger = logging.getLogger(__name__)

_SEGMENT_BREAK = re.compile(r"(?:\r?\n)+")
_ENUMERATION_MARKER = re.compile(r"^\d+\.?\s*")


def parse_questions(raw_output: str) -> List[str]:
    """
    Split a raw model response into individual questions.

    Segments are separated by line breaks (blank lines included); empty
    segments are dropped and a leading "1." / "2 " style marker is removed.
    """
    questions = []
    for segment in _SEGMENT_BREAK.split(raw_output or ""):
        question = _ENUMERATION_MARKER.sub("", segment.strip()).strip()
        if question:
            questions.append(question)
    return questions


class InterviewLLM:
    """
    Chat-completion client for the interview flow.

    Wraps a crewai LLM (any litellm model string, OpenRouter by default).
    Each call is traced as a Langfuse span.
    """

    def __init__(self, settings: Settings, llm: Optional[Any] = None):
        self.settings = settings
        self.llm = llm or LLM(
            model=settings.llm_model,
            api_key=settings.llm_api_key,
            base_url=settings.llm_base_url,
        )

    def _call(self, name: str, system_prompt: str, user_prompt: str) -> str:
        try:
            with langfuse.start_as_current_observation(as_type="span", name=name) as span:
                response = self.llm.call(messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ])
                span.update(input={"prompt": user_prompt}, output={"response": response})
        except Exception as e:
            logger.error(f"LLM API error during {name}: {e}")
            raise DependencyError(f"LLM call '{name}' failed: {e}") from e

        return response if isinstance(response, str) else str(response)

    def generate_questions(self, resume_text: str, job_description: str) -> List[str]:
        """
        Ask the model for interview questions tailored to a resume and job description.

        Args:
            resume_text: Extracted resume text
            job_description: Extracted job description text

        Returns:
            Ordered list of question strings (may be empty)
        """
        logger.info("❓ Generating interview questions...")

        raw_output = self._call(
            "generate_questions",
            QUESTIONS_SYSTEM_PROMPT,
            QUESTIONS_PROMPT.format(
                resume=resume_text,
                job_description=job_description,
                question_count=self.settings.question_count,
            ),
        )
        questions = parse_questions(raw_output)

        logger.info(f"✅ {len(questions)} questions generated")
        return questions

    def generate_feedback(self, responses: List[str]) -> str:
        """Ask the model for structured feedback on the candidate's responses."""
        logger.info(f"🔍 Generating feedback for {len(responses)} responses...")

        feedback = self._call(
            "generate_feedback",
            FEEDBACK_SYSTEM_PROMPT,
            FEEDBACK_PROMPT.format(responses="\n\n".join(responses)),
        )
        return feedback.strip()
