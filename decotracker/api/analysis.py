"""
Analysis API endpoints.

Accepts pasted save documents and returns classified, filtered item lists
with completion statistics. Every response uses the failure envelope.

A successful analysis or comparison returns a `session_id`. Posting new
filter values to the session's filter endpoint re-derives the view from
the stored result, so the save text is not sent or extracted again.
"""

import logging
from dataclasses import asdict
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, Field

from decotracker.api.deps import get_catalog_store, get_session_registry
from decotracker.config import settings
from decotracker.filtering.pipeline import ComparisonFilterResult, FilterResult
from decotracker.models.catalog import ItemKind
from decotracker.models.failure import (
    ApiResponse,
    KnownError,
    SessionNotFoundError,
    create_success,
    create_unknown_failure,
)
from decotracker.models.filters import (
    ComparisonFilterState,
    ComparisonStatusFilter,
    FilterState,
    KindFilter,
    StatusFilter,
)
from decotracker.models.items import ClassifiedItem, ComparisonItem, ComparisonState
from decotracker.services.analysis import AnalysisSession
from decotracker.services.catalog_store import CatalogStore
from decotracker.services.image_prefetch import schedule_prefetch
from decotracker.services.sessions import SessionRegistry

logger = logging.getLogger(__name__)

router = APIRouter(tags=["analysis"])


class FilterRequest(BaseModel):
    """Single-player filter values."""

    kind_filter: KindFilter = KindFilter.ALL
    status_filter: StatusFilter = StatusFilter.ALL
    search_term: str = ""

    def to_state(self) -> FilterState:
        return FilterState(
            kind_filter=self.kind_filter,
            status_filter=self.status_filter,
            search_term=self.search_term,
        )


class ComparisonFilterRequest(BaseModel):
    """Comparison filter values."""

    kind_filter: KindFilter = KindFilter.ALL
    status_filter: ComparisonStatusFilter = ComparisonStatusFilter.ALL
    search_term: str = ""

    def to_state(self) -> ComparisonFilterState:
        return ComparisonFilterState(
            kind_filter=self.kind_filter,
            status_filter=self.status_filter,
            search_term=self.search_term,
        )


class AnalyzeRequest(FilterRequest):
    """Request model for analyzing one save document."""

    text: str = Field(
        ...,
        description="Raw save document JSON as pasted by the user",
        examples=['{"decos": [{"data": 18000001}]}'],
    )
    session_id: str | None = Field(
        default=None,
        description="Existing session to store the result in; a new one is created if omitted",
    )


class CompareRequest(ComparisonFilterRequest):
    """Request model for comparing two save documents."""

    player1_text: str = Field(..., description="Save document JSON for player 1")
    player2_text: str = Field(..., description="Save document JSON for player 2")
    session_id: str | None = None


class ItemResponse(BaseModel):
    """A catalog item with single-player ownership."""

    code: int
    name: str
    kind: ItemKind
    image_url: str = Field(..., description="Image path, or the placeholder if none")
    has_image: bool
    owned: bool


class ComparisonItemResponse(BaseModel):
    """A catalog item with two-player ownership."""

    code: int
    name: str
    kind: ItemKind
    image_url: str
    has_image: bool
    player1_owned: bool
    player2_owned: bool
    state: ComparisonState


class StatsResponse(BaseModel):
    owned: int = 0
    missing: int = 0
    total: int = 0
    percentage: int = 0


class ComparisonStatsResponse(BaseModel):
    total: int = 0
    neither: int = 0
    player1_only: int = 0
    player2_only: int = 0
    both: int = 0
    player1_owned: int = 0
    player2_owned: int = 0


class AnalysisData(BaseModel):
    """Payload of a successful analysis."""

    session_id: str = Field(..., description="Id for re-filtering this result")
    items: list[ItemResponse] = Field(default_factory=list)
    stats: StatsResponse = Field(default_factory=StatsResponse)
    unrecognized_count: int = Field(
        default=0,
        description="Extracted codes with no catalog entry (ignored)",
    )


class ComparisonData(BaseModel):
    """Payload of a successful comparison."""

    session_id: str
    items: list[ComparisonItemResponse] = Field(default_factory=list)
    stats: ComparisonStatsResponse = Field(default_factory=ComparisonStatsResponse)
    player1_unrecognized_count: int = 0
    player2_unrecognized_count: int = 0


def _image_fields(image_ref: str | None) -> dict[str, Any]:
    return {
        "image_url": image_ref or settings.placeholder_image,
        "has_image": bool(image_ref),
    }


def _item_response(item: ClassifiedItem) -> ItemResponse:
    return ItemResponse(
        code=item.code,
        name=item.name,
        kind=item.kind,
        owned=item.owned,
        **_image_fields(item.image_ref),
    )


def _comparison_item_response(item: ComparisonItem) -> ComparisonItemResponse:
    return ComparisonItemResponse(
        code=item.code,
        name=item.name,
        kind=item.kind,
        player1_owned=item.player1_owned,
        player2_owned=item.player2_owned,
        state=item.state,
        **_image_fields(item.image_ref),
    )


def _analysis_success(
    session_id: str, session: AnalysisSession, result: FilterResult
) -> ApiResponse[Any]:
    schedule_prefetch(item.image_ref for item in result.visible_items)
    unrecognized = session.analysis.unrecognized_count if session.analysis else 0
    return create_success(
        AnalysisData(
            session_id=session_id,
            items=[_item_response(item) for item in result.visible_items],
            stats=StatsResponse(**asdict(result.stats)),
            unrecognized_count=unrecognized,
        )
    )


def _comparison_success(
    session_id: str, session: AnalysisSession, result: ComparisonFilterResult
) -> ApiResponse[Any]:
    schedule_prefetch(item.image_ref for item in result.visible_items)
    comparison = session.comparison
    return create_success(
        ComparisonData(
            session_id=session_id,
            items=[_comparison_item_response(item) for item in result.visible_items],
            stats=ComparisonStatsResponse(**asdict(result.stats)),
            player1_unrecognized_count=comparison.player1_unrecognized_count if comparison else 0,
            player2_unrecognized_count=comparison.player2_unrecognized_count if comparison else 0,
        )
    )


def _failure(exc: Exception, response: Response, operation: str) -> ApiResponse[Any]:
    """Convert an exception into a finalized envelope at the endpoint boundary."""
    if isinstance(exc, KnownError):
        logger.info("%s rejected: %s", operation, exc.kind.value)
        response.status_code = exc.status_code
        return exc.to_response()

    logger.exception("Unexpected error during %s", operation)
    response.status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return create_unknown_failure(exc)


@router.post("/analyze", response_model=ApiResponse[AnalysisData])
async def analyze(
    request: AnalyzeRequest,
    response: Response,
    store: Annotated[CatalogStore, Depends(get_catalog_store)],
    registry: Annotated[SessionRegistry, Depends(get_session_registry)],
) -> ApiResponse[Any]:
    """
    Analyze a pasted save document.

    Returns every catalog item marked owned or missing, narrowed by the
    kind, status, and search filters. Stats reflect the kind filter only.
    A failed analysis leaves an existing session's previous result intact.
    """
    try:
        if request.session_id is not None:
            session_id = request.session_id
            session = registry.get(session_id)
            result = session.analyze(request.text, request.to_state())
        else:
            session = AnalysisSession(store)
            result = session.analyze(request.text, request.to_state())
            session_id = registry.add(session)
    except Exception as e:
        return _failure(e, response, "analyze")

    return _analysis_success(session_id, session, result)


@router.post("/analyze/{session_id}/filter", response_model=ApiResponse[AnalysisData])
async def refilter_analysis(
    session_id: str,
    request: FilterRequest,
    response: Response,
    registry: Annotated[SessionRegistry, Depends(get_session_registry)],
) -> ApiResponse[Any]:
    """Re-apply filters to a stored analysis without re-extracting it."""
    try:
        session = registry.get(session_id)
        if session.analysis is None:
            raise SessionNotFoundError(session_id, detail="Session has no analysis")
        result = session.apply_filter(request.to_state())
    except Exception as e:
        return _failure(e, response, "analysis filter")

    return _analysis_success(session_id, session, result)


@router.post("/compare", response_model=ApiResponse[ComparisonData])
async def compare(
    request: CompareRequest,
    response: Response,
    store: Annotated[CatalogStore, Depends(get_catalog_store)],
    registry: Annotated[SessionRegistry, Depends(get_session_registry)],
) -> ApiResponse[Any]:
    """
    Compare two pasted save documents.

    Each catalog item carries ownership for both players; the status
    filter selects player-1-only, player-2-only, or shared items.
    """
    try:
        if request.session_id is not None:
            session_id = request.session_id
            session = registry.get(session_id)
            result = session.compare(
                request.player1_text, request.player2_text, request.to_state()
            )
        else:
            session = AnalysisSession(store)
            result = session.compare(
                request.player1_text, request.player2_text, request.to_state()
            )
            session_id = registry.add(session)
    except Exception as e:
        return _failure(e, response, "compare")

    return _comparison_success(session_id, session, result)


@router.post("/compare/{session_id}/filter", response_model=ApiResponse[ComparisonData])
async def refilter_comparison(
    session_id: str,
    request: ComparisonFilterRequest,
    response: Response,
    registry: Annotated[SessionRegistry, Depends(get_session_registry)],
) -> ApiResponse[Any]:
    """Re-apply filters to a stored comparison without re-extracting it."""
    try:
        session = registry.get(session_id)
        if session.comparison is None:
            raise SessionNotFoundError(session_id, detail="Session has no comparison")
        result = session.apply_comparison_filter(request.to_state())
    except Exception as e:
        return _failure(e, response, "comparison filter")

    return _comparison_success(session_id, session, result)
