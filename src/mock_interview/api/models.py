# API Request/Response Models
"""
Pydantic models for API request and response schemas.
"""

from datetime import datetime
from enum import Enum
from typing import Optional, Union
from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Enums
# ============================================================================

class InterviewStatus(str, Enum):
    """Status of an interview session."""
    CREATED = "created"
    ACTIVE = "active"
    CONCLUDED = "concluded"


# ============================================================================
# Account Models
# ============================================================================

class SignupRequest(BaseModel):
    """Request to create a new account."""
    username: str
    email: str
    password: str


class LoginRequest(BaseModel):
    """Request to log in with username and password."""
    username: str
    password: str


class UserInfo(BaseModel):
    id: Union[int, str]
    username: str


class AuthResponse(BaseModel):
    """Response for signup and login."""
    message: str
    user: UserInfo

    model_config = {
        "json_schema_extra": {
            "example": {
                "message": "Login successful",
                "user": {"id": "7d1c5f0e-2b1a-4a57-9d0c-3f5e2a1b9c44", "username": "jdoe"}
            }
        }
    }


# ============================================================================
# Contact Models
# ============================================================================

class AddContactRequest(BaseModel):
    """Request to add a contact owned by `created_by`."""
    name: str
    email: str
    country_code: int
    number: int
    created_by: Union[int, str]

    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "Jane Roe",
                "email": "jane@example.com",
                "country_code": 44,
                "number": 7700900123,
                "created_by": "7d1c5f0e-2b1a-4a57-9d0c-3f5e2a1b9c44"
            }
        }
    }


class ContactInfo(BaseModel):
    id: Union[int, str]
    name: str
    email: str
    country_code: Optional[int] = None
    number: Optional[int] = None


class AddContactResponse(BaseModel):
    message: str
    contact: ContactInfo


# ============================================================================
# Interview Models
# ============================================================================

class StartInterviewResponse(BaseModel):
    """Response after starting a new interview."""
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "interviewId": "interview_1735914622000_k3j9x0a1b2c",
                "current_question": "Describe a backend API you designed end to end."
            }
        }
    )

    interview_id: str = Field(..., alias="interviewId")
    current_question: Optional[str] = None


class NextQuestionRequest(BaseModel):
    """Submit a response and ask for the question after `current_question_id`."""
    model_config = ConfigDict(populate_by_name=True)

    response: str
    interview_id: str = Field(..., alias="interviewId")
    current_question_id: int = Field(
        ..., description="Index of the question being answered, as tracked by the client"
    )


class NextQuestionResponse(BaseModel):
    question: Optional[str] = None
    current_question_id: int


class EndInterviewRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    interview_id: str = Field(..., alias="interviewId")


class FeedbackResponse(BaseModel):
    feedback: str


class SessionStatusResponse(BaseModel):
    """Response containing session status details."""
    model_config = ConfigDict(populate_by_name=True)

    interview_id: str = Field(..., alias="interviewId")
    status: InterviewStatus
    total_questions: int = 0
    responses_recorded: int = 0
    current_question_id: int = 0
    current_question: Optional[str] = None
    feedback: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ============================================================================
# System Models
# ============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str

    model_config = {
        "json_schema_extra": {
            "example": {"error": "Failed to process next question"}
        }
    }


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    timestamp: datetime

