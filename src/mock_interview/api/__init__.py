# Mock Interview API Package
"""
FastAPI backend for the Mock Interview system.

Provides REST API endpoints for:
- Account signup and login
- Adding and listing contacts
- Starting interview sessions from uploaded resume/job description files
- Submitting responses and getting the next question
- Ending interviews with AI feedback
"""

from .main import app
from .interview_service import InterviewService, get_interview_service
from .account_service import AccountService, get_account_service

__all__ = [
    "app",
    "InterviewService",
    "get_interview_service",
    "AccountService",
    "get_account_service",
]
