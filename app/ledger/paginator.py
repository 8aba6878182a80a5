"""Cursor-based pagination over the token-operations ledger."""

from __future__ import annotations

from dataclasses import dataclass, replace
import logging

from app.adapters import LedgerQueryPort
from app.domain import LedgerEvent, LedgerQueryFilter

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 1000
DEFAULT_MAX_PAGES = 100_000
PAGINATION_ORDER = "desc"


@dataclass(frozen=True)
class PaginationCursor:
    """Immutable cursor state threaded through each page request.

    Attributes:
        before: Last event id of the previous page, None before the first page.
        pages_fetched: Number of pages requested so far.
        exhausted: Whether the walk has terminated.
        stop_reason: Termination marker (`empty_page`, `stalled_cursor`, `page_limit`).
    """

    before: str | None = None
    pages_fetched: int = 0
    exhausted: bool = False
    stop_reason: str | None = None


def paginator_advance_cursor(
    cursor: PaginationCursor,
    page: list[LedgerEvent],
    max_pages: int,
) -> PaginationCursor:
    """Compute the cursor that follows one fetched page.

    Args:
        cursor: Cursor used to request the page.
        page: Events returned for that cursor.
        max_pages: Hard cap of pages per walk.

    Returns:
        PaginationCursor: Next cursor, exhausted when the walk must stop.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    pages_fetched = cursor.pages_fetched + 1
    if not page:
        return replace(cursor, pages_fetched=pages_fetched, exhausted=True, stop_reason="empty_page")

    last_event_id = page[-1].event_id
    if not last_event_id or last_event_id == cursor.before:
        return replace(cursor, pages_fetched=pages_fetched, exhausted=True, stop_reason="stalled_cursor")

    if pages_fetched >= max_pages:
        return PaginationCursor(
            before=last_event_id,
            pages_fetched=pages_fetched,
            exhausted=True,
            stop_reason="page_limit",
        )

    return PaginationCursor(before=last_event_id, pages_fetched=pages_fetched)


class LedgerPageIterator:
    """Pull-based async iterator over one filtered ledger query.

    Pages are requested strictly sequentially because each cursor depends on
    the previous page's last id. Events of a page are yielded before the next
    page is requested.
    """

    def __init__(
        self,
        ledger_adapter: LedgerQueryPort,
        base_filter: LedgerQueryFilter,
        page_size: int,
        max_pages: int,
    ):
        self._ledger_adapter = ledger_adapter
        self._base_filter = base_filter
        self._page_size = page_size
        self._max_pages = max_pages
        self._cursor = PaginationCursor()
        self._buffer: list[LedgerEvent] = []
        self._buffer_index = 0

    @property
    def cursor(self) -> PaginationCursor:
        """Return current cursor state."""

        return self._cursor

    def __aiter__(self) -> LedgerPageIterator:
        return self

    async def __anext__(self) -> LedgerEvent:
        while self._buffer_index >= len(self._buffer):
            if self._cursor.exhausted:
                raise StopAsyncIteration
            await self._paginator_fetch_next_page()

        event = self._buffer[self._buffer_index]
        self._buffer_index += 1
        return event

    async def _paginator_fetch_next_page(self) -> None:
        """Request the page addressed by the current cursor and advance it.

        Returns:
            None: Replaces the buffered page and cursor as side effect.

        Raises:
            ConnectionError: Raised when the ledger transport fails.
            TimeoutError: Raised when the ledger request times out.
            ValueError: Raised when the ledger payload is malformed.
            RuntimeError: Raised when the ledger reports query errors.
        """

        page_filter = replace(
            self._base_filter,
            order=PAGINATION_ORDER,
            limit=self._page_size,
            before=self._cursor.before,
        )
        page = await self._ledger_adapter.adapter_fetch_token_operations(page_filter)
        self._cursor = paginator_advance_cursor(self._cursor, page=page, max_pages=self._max_pages)
        self._buffer = list(page)
        self._buffer_index = 0

        if self._cursor.stop_reason == "page_limit":
            logger.warning(
                "Ledger pagination safety break after %d pages (filter=%s)",
                self._cursor.pages_fetched,
                self._base_filter.to_variables(),
            )
        elif self._cursor.stop_reason == "stalled_cursor":
            logger.warning("Ledger pagination cursor did not advance (before=%s)", self._cursor.before)


class LedgerPaginator:
    """Factory for fresh cursor walks over the ledger."""

    def __init__(
        self,
        ledger_adapter: LedgerQueryPort,
        page_size: int = DEFAULT_PAGE_SIZE,
        max_pages: int = DEFAULT_MAX_PAGES,
    ):
        """Initialize paginator dependencies.

        Args:
            ledger_adapter: Adapter fetching one ledger page.
            page_size: Events requested per page.
            max_pages: Hard cap of pages per walk.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when dependencies or bounds are invalid.
        """

        if ledger_adapter is None:
            raise ValueError("ledger_adapter must not be None")
        if page_size < 1:
            raise ValueError("page_size must be >= 1")
        if max_pages < 1:
            raise ValueError("max_pages must be >= 1")

        self._ledger_adapter = ledger_adapter
        self._page_size = page_size
        self._max_pages = max_pages

    def paginator_iterate(self, base_filter: LedgerQueryFilter) -> LedgerPageIterator:
        """Start one fresh cursor walk for the filter.

        Args:
            base_filter: Selection filter; order, limit and cursor are managed here.

        Returns:
            LedgerPageIterator: Async iterator over matching events.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        return LedgerPageIterator(
            ledger_adapter=self._ledger_adapter,
            base_filter=base_filter,
            page_size=self._page_size,
            max_pages=self._max_pages,
        )


__all__ = [
    "DEFAULT_MAX_PAGES",
    "DEFAULT_PAGE_SIZE",
    "LedgerPageIterator",
    "LedgerPaginator",
    "PaginationCursor",
    "paginator_advance_cursor",
]
