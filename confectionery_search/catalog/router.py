"""
Route definitions for the catalogue search screen.

Endpoints under /api/catalog:
- GET    /state      : current screen (filtered items, loading flag, status)
- POST   /refresh    : pull-to-refresh, fetch the catalogue again
- PUT    /search     : replace the search text
- POST   /selection  : item tapped, remember its detail URL
- DELETE /selection  : detail viewer dismissed
- GET    /detail     : redirect to the selected detail page
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import RedirectResponse

from .errors import FailureKind
from .schemas import CatalogRecord, ScreenView, SearchUpdate
from .store import CatalogViewModel


LOADING_MESSAGE = "Fetching confectioneries..."
EMPTY_MESSAGE = "No data available"
NETWORK_MESSAGE = "Could not reach the catalog. Pull to refresh."

router = APIRouter(prefix="/api/catalog", tags=["catalog"])


def get_view_model(request: Request) -> CatalogViewModel:
    return request.app.state.view_model


def build_screen_view(view_model: CatalogViewModel) -> ScreenView:
    """Derive what the screen shows from the view-model state.

    The spinner is only shown while nothing has been loaded yet; a
    refresh over an existing list keeps the list visible.
    """
    state = view_model.snapshot()
    items = view_model.filtered_records()

    if state.is_loading and not state.records:
        status, message = "loading", LOADING_MESSAGE
    elif not items:
        if state.last_failure == FailureKind.NETWORK and not state.records:
            status, message = "error", NETWORK_MESSAGE
        else:
            status, message = "empty", EMPTY_MESSAGE
    else:
        status, message = "list", None

    return ScreenView(
        items=items,
        is_loading=state.is_loading,
        search_text=state.search_text,
        search_enabled=not state.is_loading,
        selected_target=state.selected_target,
        show_detail=state.selected_target is not None,
        last_failure=state.last_failure,
        status=status,
        message=message,
    )


@router.get("/state", response_model=ScreenView)
async def get_state(view_model: CatalogViewModel = Depends(get_view_model)) -> ScreenView:
    return build_screen_view(view_model)


@router.post("/refresh", response_model=ScreenView)
async def refresh(view_model: CatalogViewModel = Depends(get_view_model)) -> ScreenView:
    """Fetch the catalogue again and return the settled screen."""
    await view_model.start_fetch()
    return build_screen_view(view_model)


@router.put("/search", response_model=ScreenView)
async def update_search(
    update: SearchUpdate,
    view_model: CatalogViewModel = Depends(get_view_model),
) -> ScreenView:
    view_model.set_search_text(update.text)
    return build_screen_view(view_model)


@router.post("/selection", response_model=ScreenView)
async def select(
    record: CatalogRecord,
    view_model: CatalogViewModel = Depends(get_view_model),
) -> ScreenView:
    """Item tapped.

    Only items currently on the list can be selected.  A listed item
    whose URL is malformed is ignored and the screen is returned as is.
    """
    if record.url not in {listed.url for listed in view_model.records}:
        raise HTTPException(status_code=404, detail="Item not in catalogue")
    view_model.select_record(record)
    return build_screen_view(view_model)


@router.delete("/selection", response_model=ScreenView)
async def clear_selection(view_model: CatalogViewModel = Depends(get_view_model)) -> ScreenView:
    view_model.clear_selection()
    return build_screen_view(view_model)


@router.get("/detail")
async def open_detail(view_model: CatalogViewModel = Depends(get_view_model)):
    """Hand the selected detail page to the in-app browser."""
    target = view_model.selected_target
    if target is None:
        raise HTTPException(status_code=404, detail="No item selected")
    return RedirectResponse(target, status_code=302)
