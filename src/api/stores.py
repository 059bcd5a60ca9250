"""Store browsing and rating API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from src.api.dependencies import get_ledger, require
from src.models.enums import SortOrder, StoreSortField
from src.models.user import User
from src.schemas.rating import RatingResponse, RatingSubmit
from src.schemas.store import StoreListResponse, StoreResponse
from src.services.ledger import RatingLedger
from src.services.permissions import Operation

router = APIRouter(prefix="/api/v1/stores", tags=["stores"])


@router.get("", response_model=StoreListResponse)
def list_stores(
    current_user: Annotated[User, Depends(require(Operation.BROWSE_STORES))],
    ledger: Annotated[RatingLedger, Depends(get_ledger)],
    q: str | None = Query(default=None, max_length=255, description="Search name or address"),
    sort_by: StoreSortField = Query(default=StoreSortField.NAME),
    sort_order: SortOrder = Query(default=SortOrder.ASC),
    page: int = Query(default=1, ge=1),
):
    """List stores with their average rating and the caller's own rating."""
    result = ledger.list_stores(query=q, sort_field=sort_by, sort_order=sort_order, page=page)

    store_ids = [entry.store.id for entry in result.items]
    own_ratings = ledger.get_user_ratings(current_user.id, store_ids)

    items = []
    for entry in result.items:
        own = own_ratings.get(entry.store.id)
        store_response = StoreResponse.model_validate(entry.store)
        store_response.average_rating = entry.average_rating
        store_response.user_rating = own.rating if own else None
        items.append(store_response)

    return StoreListResponse(
        items=items, total=result.total, page=result.page, page_size=result.page_size
    )


@router.post("/{store_id}/ratings", response_model=RatingResponse)
def submit_rating(
    store_id: int,
    rating_data: RatingSubmit,
    current_user: Annotated[User, Depends(require(Operation.SUBMIT_RATING))],
    ledger: Annotated[RatingLedger, Depends(get_ledger)],
):
    """Rate a store. Submitting again for the same store updates the rating."""
    return ledger.submit_rating(current_user.id, store_id, rating_data.rating)
