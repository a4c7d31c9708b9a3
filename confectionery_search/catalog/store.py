"""
Screen state for the catalogue search.

``CatalogViewModel`` owns the fetched records, the search text, the
loading flag, the selected detail target and the kind of the last
failure.  It is the only place that mutates that state; observers read
``snapshot()`` or iterate ``subscribe()``.  All methods are meant to be
called from the event loop.  The blocking HTTP request is pushed to a
worker thread and its result is applied back on the loop.
"""

from __future__ import annotations

import asyncio
import logging
from typing import AsyncIterator, Callable, List, Optional, Sequence

from pydantic import AnyHttpUrl, TypeAdapter, ValidationError

from ..config import CatalogSettings
from .errors import FailureKind
from .schemas import CatalogRecord, FetchOutcome, ViewState
from .toriko_service import displayable_records, fetch_catalog


logger = logging.getLogger(__name__)

Fetcher = Callable[[], FetchOutcome]

_http_url = TypeAdapter(AnyHttpUrl)

# Snapshots a subscriber may fall behind by before the oldest are dropped
SUBSCRIBER_BACKLOG = 16


def is_valid_target(url: Optional[str]) -> bool:
    """Return True when ``url`` parses as an absolute http(s) URL."""
    if not url:
        return False
    # the URL parser strips these silently instead of rejecting them
    if any(ch.isspace() or ord(ch) < 32 or ord(ch) == 127 for ch in url):
        return False
    try:
        _http_url.validate_python(url)
    except ValidationError:
        return False
    return True


def filter_by_name(records: Sequence[CatalogRecord], search_text: str) -> List[CatalogRecord]:
    """Case-insensitive substring match on the record name.

    An empty search returns ``records`` unchanged.  Order is preserved.
    """
    if not search_text:
        return list(records)
    needle = search_text.lower()
    return [r for r in records if r.name is not None and needle in r.name.lower()]


class CatalogViewModel:
    """Observable state container behind the search screen."""

    def __init__(
        self,
        fetcher: Optional[Fetcher] = None,
        settings: Optional[CatalogSettings] = None,
    ) -> None:
        if fetcher is None:
            settings = settings or CatalogSettings()
            fetcher = lambda: fetch_catalog(settings)  # noqa: E731
        self._fetcher = fetcher
        self._state = ViewState()
        # Incremented on every start_fetch; only the newest may settle
        self._fetch_token = 0
        self._subscribers: List[asyncio.Queue] = []

    # -- read access ------------------------------------------------------

    @property
    def records(self) -> List[CatalogRecord]:
        return list(self._state.records)

    @property
    def search_text(self) -> str:
        return self._state.search_text

    @property
    def is_loading(self) -> bool:
        return self._state.is_loading

    @property
    def selected_target(self) -> Optional[str]:
        return self._state.selected_target

    @property
    def last_failure(self) -> Optional[FailureKind]:
        return self._state.last_failure

    def snapshot(self) -> ViewState:
        return self._state

    def filtered_records(self) -> List[CatalogRecord]:
        return filter_by_name(self._state.records, self._state.search_text)

    # -- mutations --------------------------------------------------------

    def _update(self, **changes) -> None:
        self._state = self._state.model_copy(update=changes)
        for queue in self._subscribers:
            if queue.full():
                queue.get_nowait()
            queue.put_nowait(self._state)

    async def start_fetch(self) -> FetchOutcome:
        """Fetch the catalogue and replace the records when it settles.

        A fetch started while another is outstanding supersedes it: the
        older result is dropped when it arrives.
        """
        self._fetch_token += 1
        token = self._fetch_token
        self._update(is_loading=True)
        try:
            outcome = await asyncio.to_thread(self._fetcher)
        except asyncio.CancelledError:
            if token == self._fetch_token:
                self._settle(FetchOutcome.failed(FailureKind.UNEXPECTED, "fetch cancelled"))
            raise
        except Exception as exc:
            logger.exception("Catalogue fetcher raised")
            outcome = FetchOutcome.failed(FailureKind.UNEXPECTED, str(exc))

        if token != self._fetch_token:
            logger.info("Dropping result of superseded fetch %s", token)
            return outcome
        self._settle(outcome)
        return outcome

    def _settle(self, outcome: FetchOutcome) -> None:
        self._update(
            records=tuple(displayable_records(outcome.records)),
            last_failure=outcome.failure,
            is_loading=False,
        )

    def set_search_text(self, text: str) -> None:
        self._update(search_text=text)

    def select_record(self, record: CatalogRecord) -> bool:
        """Remember ``record.url`` as the detail target if it is a valid URL."""
        if not is_valid_target(record.url):
            logger.warning("Invalid URL for selected record %r: %r", record.name, record.url)
            return False
        self._update(selected_target=record.url)
        return True

    def clear_selection(self) -> None:
        self._update(selected_target=None)

    # -- observation ------------------------------------------------------

    async def subscribe(self) -> AsyncIterator[ViewState]:
        """Yield the current snapshot, then one snapshot per mutation.

        A subscriber that falls more than ``SUBSCRIBER_BACKLOG`` snapshots
        behind loses the oldest ones; the latest state is always kept.
        """
        queue: asyncio.Queue = asyncio.Queue(maxsize=SUBSCRIBER_BACKLOG)
        self._subscribers.append(queue)
        try:
            yield self._state
            while True:
                yield await queue.get()
        finally:
            if queue in self._subscribers:
                self._subscribers.remove(queue)
