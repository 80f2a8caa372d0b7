"""
Base class for Supabase-backed repositories.

A repository owns one table, maps rows to pydantic models, and is the only
place that builds queries against it.
"""

from typing import Any, Optional, TypeVar, Generic
from supabase import Client


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Holds the Supabase client and the row helpers shared by repositories.

    Subclasses set `table` and map rows to their model type T.
    """

    table: str = ""

    def __init__(self, db: Client) -> None:
        self._db = db

    def _query(self):
        return self._db.table(self.table)

    @staticmethod
    def _first(result: Any) -> Optional[dict[str, Any]]:
        """First row of a query result, or None when nothing matched."""
        if not result.data:
            return None
        return result.data[0]
