# Account Service
"""
Account and contact operations over the "users" and "contacts" tables.
"""

import logging
from functools import lru_cache
from typing import Any, Dict, List, Union

from fastapi.concurrency import run_in_threadpool

from mock_interview.datastore import get_datastore
from mock_interview.errors import (
    DependencyError,
    DuplicateContact,
    DuplicateUsername,
    InvalidCredentials,
    UnknownAccount,
)

logger = logging.getLogger(__name__)

AccountId = Union[int, str]


class AccountService:
    """
    Stateless account/contact handlers.

    Passwords are stored and compared as given.
    """

    USERS_TABLE = "users"
    CONTACTS_TABLE = "contacts"

    def __init__(self, store):
        self.store = store

    async def signup(self, username: str, email: str, password: str) -> Dict[str, Any]:
        """Create an account; raises DuplicateUsername if the name is taken."""
        existing = await run_in_threadpool(
            self.store.select_one, self.USERS_TABLE, "username", {"username": username}
        )
        if existing:
            raise DuplicateUsername(username)

        user = await run_in_threadpool(self.store.insert, self.USERS_TABLE, {
            "username": username,
            "email": email,
            "password": password,
        })
        logger.info(f"Created user: {user['username']}")
        return {"id": user["id"], "username": user["username"]}

    async def login(self, username: str, password: str) -> Dict[str, Any]:
        try:
            user = await run_in_threadpool(
                self.store.select_one,
                self.USERS_TABLE,
                "*",
                {"username": username, "password": password},
            )
        except DependencyError as e:
            logger.warning(f"Credentials lookup for {username} failed: {e}")
            raise InvalidCredentials() from e
        if not user:
            raise InvalidCredentials()

        return {"id": user["id"], "username": user["username"]}

    async def add_contact(
        self,
        name: str,
        email: str,
        country_code: int,
        number: int,
        created_by: AccountId
    ) -> Dict[str, Any]:
        """
        Add a contact for an existing account.

        Raises:
            UnknownAccount: If `created_by` is not an account id
            DuplicateContact: If a contact with the same email and phone number exists
        """
        try:
            owner = await run_in_threadpool(
                self.store.select_one, self.USERS_TABLE, "id", {"id": created_by}
            )
        except DependencyError as e:
            # e.g. an id the users.id column type rejects
            logger.warning(f"Owner lookup for {created_by} failed: {e}")
            raise UnknownAccount(str(created_by)) from e
        if not owner:
            raise UnknownAccount(str(created_by))

        existing = await run_in_threadpool(
            self.store.select_one,
            self.CONTACTS_TABLE,
            "id",
            {
                "email": email,
                "phone_number->country_code": country_code,
                "phone_number->number": number,
            },
        )
        if existing:
            raise DuplicateContact()

        contact = await run_in_threadpool(self.store.insert, self.CONTACTS_TABLE, {
            "name": name,
            "email": email,
            "phone_number": {
                "country_code": country_code,
                "number": number,
            },
            "created_by": created_by,
        })
        logger.info(f"Added contact {contact['id']} for user {created_by}")

        phone_number = contact.get("phone_number") or {}
        return {
            "id": contact["id"],
            "name": contact["name"],
            "email": contact["email"],
            "country_code": phone_number.get("country_code"),
            "number": phone_number.get("number"),
        }

    async def list_contacts(self, created_by: AccountId) -> List[Dict[str, Any]]:
        """All contacts whose owner id equals `created_by`."""
        return await run_in_threadpool(
            self.store.select, self.CONTACTS_TABLE, "*", {"created_by": created_by}
        )


@lru_cache
def get_account_service() -> AccountService:
    """Dependency returning the account service singleton."""
    return AccountService(get_datastore())
