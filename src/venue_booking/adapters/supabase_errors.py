"""Translation of Supabase client failures into domain errors."""

from typing import Any, Protocol

import httpx
from postgrest.exceptions import APIError

from venue_booking.domain.errors import StoreUnavailableError

UNIQUE_VIOLATION = "23505"


class ExecutableQuery(Protocol):
    """A Supabase query builder awaiting execution."""

    async def execute(self) -> Any:
        """Run the query and return the API response."""


async def execute(query: ExecutableQuery) -> Any:
    """Execute a query, raising StoreUnavailableError on transport or API failure.

    APIError with code UNIQUE_VIOLATION is re-raised untouched so callers can
    map it to a domain conflict.
    """
    try:
        return await query.execute()
    except APIError as exc:
        if exc.code == UNIQUE_VIOLATION:
            raise
        raise StoreUnavailableError(f"Store rejected request: {exc.message}") from exc
    except httpx.HTTPError as exc:
        raise StoreUnavailableError(f"Store unreachable: {exc}") from exc
