# Account Routes
"""
FastAPI route handlers for accounts and contacts.
"""

import json
import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from mock_interview.errors import (
    DuplicateContact,
    DuplicateUsername,
    InvalidCredentials,
    UnknownAccount,
)

from .models import (
    AddContactRequest,
    AddContactResponse,
    AuthResponse,
    ContactInfo,
    ErrorResponse,
    LoginRequest,
    SignupRequest,
    UserInfo,
)
from .account_service import AccountService, get_account_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["accounts"])


# ============================================================================
# Account Endpoints
# ============================================================================

@router.post(
    "/signup",
    status_code=201,
    response_model=AuthResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Create an account"
)
async def signup(
    request: SignupRequest,
    service: AccountService = Depends(get_account_service)
) -> AuthResponse:
    try:
        user = await service.signup(request.username, request.email, request.password)
        return AuthResponse(message="User created successfully", user=UserInfo(**user))

    except DuplicateUsername as e:
        logger.warning(f"Signup rejected for '{request.username}': {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception(f"Signup error: {e}")
        raise HTTPException(status_code=500, detail="Failed to create user")


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Log in"
)
async def login(
    request: LoginRequest,
    service: AccountService = Depends(get_account_service)
) -> AuthResponse:
    try:
        user = await service.login(request.username, request.password)
        return AuthResponse(message="Login successful", user=UserInfo(**user))

    except InvalidCredentials as e:
        logger.warning(f"Login rejected for '{request.username}'")
        raise HTTPException(status_code=401, detail=str(e))
    except Exception as e:
        logger.exception(f"Login error: {e}")
        raise HTTPException(status_code=500, detail="Failed to log in")


# ============================================================================
# Contact Endpoints
# ============================================================================

@router.post(
    "/contacts/addContact",
    status_code=201,
    response_model=AddContactResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        500: {"model": ErrorResponse}
    },
    summary="Add a contact"
)
async def add_contact(
    request: AddContactRequest,
    service: AccountService = Depends(get_account_service)
) -> AddContactResponse:
    try:
        contact = await service.add_contact(
            name=request.name,
            email=request.email,
            country_code=request.country_code,
            number=request.number,
            created_by=request.created_by
        )
        return AddContactResponse(message="Contact added successfully", contact=ContactInfo(**contact))

    except UnknownAccount as e:
        logger.warning(f"Add contact rejected, unknown user {request.created_by}")
        raise HTTPException(status_code=401, detail=str(e))
    except DuplicateContact as e:
        logger.warning(f"Add contact rejected: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception(f"Add contact error: {e}")
        raise HTTPException(status_code=500, detail="Failed to add contact")


async def _created_by_from_body(http_request: Request) -> Optional[Any]:
    body = await http_request.body()
    if not body:
        return None
    try:
        payload = json.loads(body)
    except ValueError:
        return None
    return payload.get("created_by") if isinstance(payload, dict) else None


@router.get(
    "/contacts/getContacts",
    response_model=List[Dict[str, Any]],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="List contacts",
    description=(
        "List the contacts owned by created_by. The owner id is caller-supplied "
        "(query string, or JSON body for older clients) and is not verified."
    )
)
async def get_contacts(
    http_request: Request,
    created_by: Optional[str] = Query(None),
    service: AccountService = Depends(get_account_service)
) -> List[Dict[str, Any]]:
    owner = created_by
    if owner is None:
        owner = await _created_by_from_body(http_request)
        if owner is not None:
            logger.warning("Contact owner taken from request body of a GET")

    if owner is None:
        logger.warning("Get contacts called without created_by")
        raise HTTPException(status_code=400, detail="created_by is required")

    try:
        return await service.list_contacts(owner)

    except Exception as e:
        logger.exception(f"Get contacts error: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch contacts")
