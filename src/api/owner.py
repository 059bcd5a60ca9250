"""Store owner dashboard API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from src.api.dependencies import get_ledger, require
from src.models.user import User
from src.schemas.rating import RatingWithUserResponse
from src.schemas.store import OwnerStoreResponse
from src.services.ledger import RatingLedger
from src.services.permissions import Operation

router = APIRouter(prefix="/api/v1/owner", tags=["owner"])


@router.get("/stores", response_model=list[OwnerStoreResponse])
def get_my_stores(
    current_user: Annotated[User, Depends(require(Operation.VIEW_OWNER_DASHBOARD))],
    ledger: Annotated[RatingLedger, Depends(get_ledger)],
):
    """Get the caller's stores with every rating and who submitted it."""
    return [
        OwnerStoreResponse(
            id=entry.store.id,
            name=entry.store.name,
            address=entry.store.address,
            created_at=entry.store.created_at,
            average_rating=entry.average_rating,
            total_ratings=entry.total_ratings,
            ratings=[RatingWithUserResponse.model_validate(r) for r in entry.ratings],
        )
        for entry in ledger.list_owner_stores(current_user.id)
    ]
