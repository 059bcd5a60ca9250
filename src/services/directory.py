"""Directory service for admin views of users and stores."""

import logging
from dataclasses import dataclass

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from src.config import get_settings
from src.models.enums import Role, SortOrder, UserSortField
from src.models.rating import Rating
from src.models.store import Store
from src.models.user import User
from src.services.errors import NotFound
from src.services.ledger import RatingLedger
from src.services.pagination import Page, coerce_choice, ordered, paginate

logger = logging.getLogger(__name__)

settings = get_settings()

ALL_ROLES_FILTER = "all"


@dataclass
class DashboardStats:
    """Platform-wide totals for the admin dashboard."""

    total_users: int
    total_stores: int
    total_ratings: int


@dataclass
class UserDetail:
    """A user plus, for store owners, the mean of their stores' average ratings."""

    user: User
    owner_rating: float | None = None


class DirectoryService:
    """Service for user listings, store creation and platform totals."""

    def __init__(self, db: Session, ledger: RatingLedger | None = None):
        self.db = db
        self.ledger = ledger or RatingLedger(db)

    def list_users(
        self,
        query: str | None = None,
        role: Role | str = ALL_ROLES_FILTER,
        sort_field: UserSortField = UserSortField.CREATED_AT,
        sort_order: SortOrder = SortOrder.DESC,
        page: int = 1,
        page_size: int | None = None,
    ) -> Page[User]:
        """List users matching a case-insensitive search and an optional role."""
        page_size = page_size or settings.page_size
        users = self.db.query(User)

        if role != ALL_ROLES_FILTER:
            users = users.filter(User.role == coerce_choice(Role, role, "role").value)

        term = (query or "").strip()
        if term:
            users = users.filter(
                or_(
                    User.name.icontains(term, autoescape=True),
                    User.email.icontains(term, autoescape=True),
                    User.address.icontains(term, autoescape=True),
                )
            )

        sort_columns = {
            UserSortField.NAME: User.name,
            UserSortField.EMAIL: User.email,
            UserSortField.ROLE: User.role,
            UserSortField.CREATED_AT: User.created_at,
        }
        sort_column = sort_columns[coerce_choice(UserSortField, sort_field, "sort field")]
        users = users.order_by(
            ordered(sort_column, sort_order),
            ordered(User.id, sort_order),
        )

        rows, count = paginate(users, page, page_size)
        return Page(items=rows, total=count, page=max(page, 1), page_size=page_size)

    def get_user_detail(self, user_id: int) -> UserDetail:
        """Get a user, with the owner rating when they own stores."""
        user = self.db.get(User, user_id)
        if user is None:
            raise NotFound("User not found")

        if user.role != Role.STORE_OWNER.value:
            return UserDetail(user=user)

        store_ids = [
            store_id
            for (store_id,) in self.db.query(Store.id).filter(Store.owner_id == user.id).all()
        ]
        if not store_ids:
            return UserDetail(user=user)

        averages = [self.ledger.get_average_rating(store_id) for store_id in store_ids]
        return UserDetail(user=user, owner_rating=sum(averages) / len(averages))

    def create_store(self, name: str, address: str, owner_id: int) -> Store:
        """Create a store assigned to an existing user."""
        if self.db.get(User, owner_id) is None:
            raise NotFound("Owner not found")

        store = Store(name=name, address=address, owner_id=owner_id)
        self.db.add(store)
        self.db.commit()
        self.db.refresh(store)
        logger.info(f"Created store {store.id} for owner {owner_id}")
        return store

    def get_stats(self) -> DashboardStats:
        """Count users, stores and ratings."""
        return DashboardStats(
            total_users=self.db.query(func.count(User.id)).scalar() or 0,
            total_stores=self.db.query(func.count(Store.id)).scalar() or 0,
            total_ratings=self.db.query(func.count(Rating.id)).scalar() or 0,
        )
