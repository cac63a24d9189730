# =============================================================================
# PEDIDOS v1.0 - BASE REPOSITORY
# =============================================================================
# Base class for the Repository Pattern
# =============================================================================

from typing import Optional, List, Dict, Any, Sequence

from ...database_pg import PostgreSQLConnection, QueryParam


class BaseRepository:
    """
    Repository bound to the connection of the current request.

    Attributes:
        db: connection exposing execute_query(sql, params)
    """

    def __init__(self, db: PostgreSQLConnection):
        self.db = db

    def _execute_query(self, query: str, params: Sequence[QueryParam] = ()) -> List[Dict[str, Any]]:
        """Run a query and return every row."""
        return self.db.execute_query(query, list(params))

    def _execute_one(self, query: str, params: Sequence[QueryParam] = ()) -> Optional[Dict[str, Any]]:
        """Run a query and return the first row or None."""
        rows = self._execute_query(query, params)
        return rows[0] if rows else None

    def _execute(self, query: str, params: Sequence[QueryParam] = ()) -> None:
        """Run a statement with no expected result."""
        self._execute_query(query, params)
