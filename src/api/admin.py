"""Admin API endpoints for users, stores and dashboard totals."""

from typing import Annotated, Literal

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from src.api.dependencies import get_directory_service, get_ledger, require
from src.database import get_db
from src.models.enums import SortOrder, StoreSortField, UserSortField
from src.models.user import User
from src.schemas.auth import UserResponse
from src.schemas.store import AdminStoreListResponse, AdminStoreResponse, StoreCreate
from src.schemas.user import (
    AdminUserCreate,
    DashboardStatsResponse,
    UserDetailResponse,
    UserListResponse,
)
from src.services.auth import create_user
from src.services.directory import DirectoryService
from src.services.ledger import RatingLedger
from src.services.permissions import Operation

router = APIRouter(prefix="/api/v1/admin", tags=["admin"])

RoleFilter = Literal["all", "admin", "normal_user", "store_owner"]


@router.get("/stats", response_model=DashboardStatsResponse)
def get_stats(
    current_user: Annotated[User, Depends(require(Operation.ADMIN_VIEW_STATS))],
    directory: Annotated[DirectoryService, Depends(get_directory_service)],
):
    """Get total users, stores and ratings."""
    stats = directory.get_stats()
    return DashboardStatsResponse(
        total_users=stats.total_users,
        total_stores=stats.total_stores,
        total_ratings=stats.total_ratings,
    )


@router.get("/users", response_model=UserListResponse)
def list_users(
    current_user: Annotated[User, Depends(require(Operation.ADMIN_LIST_USERS))],
    directory: Annotated[DirectoryService, Depends(get_directory_service)],
    q: str | None = Query(default=None, max_length=255, description="Search name, email, address"),
    role: RoleFilter = Query(default="all"),
    sort_by: UserSortField = Query(default=UserSortField.CREATED_AT),
    sort_order: SortOrder = Query(default=SortOrder.DESC),
    page: int = Query(default=1, ge=1),
):
    """List users with search, role filter, sorting and pagination."""
    result = directory.list_users(
        query=q, role=role, sort_field=sort_by, sort_order=sort_order, page=page
    )
    return UserListResponse(
        items=[UserResponse.model_validate(u) for u in result.items],
        total=result.total,
        page=result.page,
        page_size=result.page_size,
    )


@router.post("/users", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def add_user(
    user_data: AdminUserCreate,
    current_user: Annotated[User, Depends(require(Operation.ADMIN_CREATE_USER))],
    db: Annotated[Session, Depends(get_db)],
):
    """Create a user with any role."""
    return create_user(
        db,
        name=user_data.name,
        email=user_data.email,
        address=user_data.address,
        password=user_data.password,
        role=user_data.role,
    )


@router.get("/users/{user_id}", response_model=UserDetailResponse)
def get_user(
    user_id: int,
    current_user: Annotated[User, Depends(require(Operation.ADMIN_VIEW_USER))],
    directory: Annotated[DirectoryService, Depends(get_directory_service)],
):
    """Get a user's details, including a store owner's rating."""
    detail = directory.get_user_detail(user_id)
    user_response = UserDetailResponse.model_validate(detail.user)
    user_response.owner_rating = detail.owner_rating
    return user_response


@router.get("/stores", response_model=AdminStoreListResponse)
def list_stores(
    current_user: Annotated[User, Depends(require(Operation.ADMIN_LIST_STORES))],
    ledger: Annotated[RatingLedger, Depends(get_ledger)],
    q: str | None = Query(default=None, max_length=255, description="Search name, address, owner"),
    sort_by: StoreSortField = Query(default=StoreSortField.CREATED_AT),
    sort_order: SortOrder = Query(default=SortOrder.DESC),
    page: int = Query(default=1, ge=1),
):
    """List stores with owners and rating totals."""
    result = ledger.list_stores(
        query=q,
        sort_field=sort_by,
        sort_order=sort_order,
        page=page,
        include_owner_email=True,
    )

    items = []
    for entry in result.items:
        store_response = AdminStoreResponse.model_validate(entry.store)
        store_response.average_rating = entry.average_rating
        store_response.total_ratings = entry.total_ratings
        items.append(store_response)

    return AdminStoreListResponse(
        items=items, total=result.total, page=result.page, page_size=result.page_size
    )


@router.post("/stores", response_model=AdminStoreResponse, status_code=status.HTTP_201_CREATED)
def add_store(
    store_data: StoreCreate,
    current_user: Annotated[User, Depends(require(Operation.ADMIN_CREATE_STORE))],
    directory: Annotated[DirectoryService, Depends(get_directory_service)],
):
    """Create a store for an existing owner."""
    store = directory.create_store(store_data.name, store_data.address, store_data.owner_id)
    return AdminStoreResponse.model_validate(store)
