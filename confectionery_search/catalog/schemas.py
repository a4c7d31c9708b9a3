"""
Pydantic schema definitions for the catalog module.

``CatalogRecord`` and ``CatalogResponse`` mirror the JSON document
returned by the Toriko API: an object whose ``item`` key holds a list
of confectionery entries.  Every entry field is optional because the
upstream API may leave any of them out; only records carrying all three
are shown to the user.  The remaining models are what the view-model
hands to the presentation layer.
"""

from __future__ import annotations

from typing import Any, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import FailureKind


class CatalogRecord(BaseModel):
    """A single confectionery entry.

    ``url`` points to the item's detail page and ``image`` to its
    thumbnail.  A field that is missing, null or not a string decodes to
    ``None`` rather than failing the whole response.
    """

    name: Optional[str] = None
    url: Optional[str] = None
    image: Optional[str] = None

    @field_validator("name", "url", "image", mode="before")
    @classmethod
    def _non_string_is_absent(cls, value: Any) -> Optional[str]:
        return value if isinstance(value, str) else None

    @property
    def is_displayable(self) -> bool:
        return bool(self.name and self.url and self.image)


class CatalogResponse(BaseModel):
    """Top-level document: ``{"item": [...]}``, order as received."""

    item: List[CatalogRecord]


class FetchOutcome(BaseModel):
    """Tagged result of one catalogue fetch.

    ``failure`` is ``None`` on success; otherwise ``records`` is empty
    and ``detail`` carries the diagnostic message that was logged.
    """

    records: List[CatalogRecord] = Field(default_factory=list)
    failure: Optional[FailureKind] = None
    detail: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def failed(cls, kind: FailureKind, detail: str) -> "FetchOutcome":
        return cls(records=[], failure=kind, detail=detail)


class ViewState(BaseModel):
    """Immutable snapshot of the screen state."""

    model_config = ConfigDict(frozen=True)

    records: Tuple[CatalogRecord, ...] = ()
    search_text: str = ""
    is_loading: bool = False
    selected_target: Optional[str] = None
    last_failure: Optional[FailureKind] = None


ScreenStatus = Literal["loading", "empty", "error", "list"]


class ScreenView(BaseModel):
    """Everything the front-end needs to render the search screen."""

    items: List[CatalogRecord]
    is_loading: bool
    search_text: str
    # The search box is disabled while a fetch is outstanding
    search_enabled: bool
    selected_target: Optional[str] = None
    show_detail: bool = False
    last_failure: Optional[FailureKind] = None
    status: ScreenStatus
    message: Optional[str] = None


class SearchUpdate(BaseModel):
    text: str
