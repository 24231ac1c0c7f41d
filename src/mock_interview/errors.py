"""
Error taxonomy for the Mock Interview API.

Routes translate the distinguished cases (duplicate username, invalid
credentials, unknown account, duplicate contact, missing uploads) into 400/401
responses; everything else becomes a 500.
"""

# Own category, raised by the extraction package; not a ValidationError.
from document_text.extractor import UnsupportedFileType


class MockInterviewError(Exception):
    """Base class for all application errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


# ============================================================================
# Validation
# ============================================================================

class ValidationError(MockInterviewError):
    """A required input is missing."""


class MissingInputError(ValidationError):
    pass


# ============================================================================
# Not Found
# ============================================================================

class NotFoundError(MockInterviewError):
    """A referenced account or session does not exist."""


class SessionNotFound(NotFoundError):
    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Interview not found: {session_id}")


class UnknownAccount(NotFoundError):
    def __init__(self, account_id: str):
        self.account_id = account_id
        super().__init__("User not found")


class InvalidCredentials(NotFoundError):
    def __init__(self):
        super().__init__("Invalid username or password")


# ============================================================================
# Conflicts
# ============================================================================

class ConflictError(MockInterviewError):
    """The record being created already exists."""


class DuplicateUsername(ConflictError):
    def __init__(self, username: str):
        self.username = username
        super().__init__("Username already exists")


class DuplicateContact(ConflictError):
    def __init__(self):
        super().__init__("Contact already exists")


# ============================================================================
# Collaborators
# ============================================================================

class DependencyError(MockInterviewError):
    """The datastore or the LLM call failed."""


__all__ = [
    "MockInterviewError",
    "ValidationError",
    "MissingInputError",
    "NotFoundError",
    "SessionNotFound",
    "UnknownAccount",
    "InvalidCredentials",
    "ConflictError",
    "DuplicateUsername",
    "DuplicateContact",
    "DependencyError",
    "UnsupportedFileType",
]
