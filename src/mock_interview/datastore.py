"""
Supabase-backed datastore.

Thin wrapper over the Supabase client exposing the three operations the
services need: filtered select, insert and upsert-by-id. Any client failure is
re-raised as DependencyError.
"""

import logging
from functools import lru_cache
from typing import Any, Dict, List, Optional

from supabase import Client, create_client

from mock_interview.config import Settings, get_settings
from mock_interview.errors import DependencyError

logger = logging.getLogger(__name__)


class SupabaseStore:
    """
    Datastore over named Supabase tables.

    Filters are equality matches keyed by column name; PostgREST JSON paths
    such as "phone_number->country_code" are passed through unchanged.
    """

    def __init__(self, client: Client):
        self.client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "SupabaseStore":
        """Create a store from the configured Supabase project."""
        if not settings.supabase_url or not settings.supabase_key:
            raise DependencyError("SUPABASE_URL and SUPABASE_KEY must be configured")

        client = create_client(settings.supabase_url, settings.supabase_key)
        logger.info("SupabaseStore initialized")
        return cls(client)

    def _execute(self, operation: str, table: str, query) -> List[Dict[str, Any]]:
        try:
            response = query.execute()
        except Exception as e:
            logger.error(f"Datastore {operation} on '{table}' failed: {e}")
            raise DependencyError(f"Datastore {operation} on '{table}' failed: {e}") from e
        return response.data or []

    def select(
        self,
        table: str,
        columns: str = "*",
        filters: Optional[Dict[str, Any]] = None
    ) -> List[Dict[str, Any]]:
        """Return all rows of `table` matching every filter."""
        query = self.client.table(table).select(columns)
        for column, value in (filters or {}).items():
            query = query.eq(column, value)
        return self._execute("select", table, query)

    def select_one(
        self,
        table: str,
        columns: str = "*",
        filters: Optional[Dict[str, Any]] = None
    ) -> Optional[Dict[str, Any]]:
        """Return the first matching row, or None."""
        rows = self.select(table, columns, filters)
        return rows[0] if rows else None

    def insert(self, table: str, row: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a row and return it as stored."""
        rows = self._execute("insert", table, self.client.table(table).insert(row))
        return rows[0] if rows else row

    def upsert(self, table: str, row: Dict[str, Any]) -> Dict[str, Any]:
        """Insert or update the row with the same id; only given columns are written."""
        rows = self._execute("upsert", table, self.client.table(table).upsert(row))
        return rows[0] if rows else row


@lru_cache
def get_datastore() -> SupabaseStore:
    """Return the datastore singleton for the configured Supabase project."""
    return SupabaseStore.from_settings(get_settings())
