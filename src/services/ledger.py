"""Rating ledger: one rating per (user, store), and the aggregates derived from them."""

import logging
from collections import defaultdict
from dataclasses import dataclass, field

from sqlalchemy import func, or_
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload, selectinload

from src.config import get_settings
from src.models.enums import SortOrder, StoreSortField
from src.models.rating import MAX_RATING, MIN_RATING, Rating
from src.models.store import Store
from src.models.user import User
from src.services.errors import InvalidRating, NotFound
from src.services.pagination import Page, coerce_choice, ordered, paginate

logger = logging.getLogger(__name__)

settings = get_settings()

# Dialects with INSERT ... ON CONFLICT DO UPDATE
UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


@dataclass
class RatingSummary:
    """Average and count of a store's ratings."""

    average_rating: float = 0.0
    total_ratings: int = 0


@dataclass
class StoreAggregate:
    """A store with its derived rating aggregates."""

    store: Store
    average_rating: float = 0.0
    total_ratings: int = 0


@dataclass
class OwnerStore:
    """A store on its owner's dashboard, with every rating and its submitter."""

    store: Store
    ratings: list[Rating] = field(default_factory=list)
    average_rating: float = 0.0
    total_ratings: int = 0


def validate_rating_value(value: object) -> int:
    """Return the value if it is an integer rating in range, else raise InvalidRating."""
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidRating(f"Rating must be an integer between {MIN_RATING} and {MAX_RATING}")
    if not MIN_RATING <= value <= MAX_RATING:
        raise InvalidRating(f"Rating must be between {MIN_RATING} and {MAX_RATING}")
    return value


def mean_rating(ratings: list[Rating]) -> float:
    """Arithmetic mean of rating values, 0 when empty."""
    if not ratings:
        return 0.0
    return sum(r.rating for r in ratings) / len(ratings)


class RatingLedger:
    """Owns Rating records: submission, aggregation and store listings."""

    def __init__(self, db: Session):
        self.db = db

    def submit_rating(self, user_id: int, store_id: int, rating_value: int) -> Rating:
        """Create or overwrite the caller's rating of a store.

        The first submission for a (user, store) pair inserts a row; later ones
        update its value in place, keeping id and created_at. Uniqueness comes
        from the database constraint, so concurrent submissions for the same
        pair still end with a single row.
        """
        validate_rating_value(rating_value)
        if self.db.get(Store, store_id) is None:
            raise NotFound("Store not found")
        if self.db.get(User, user_id) is None:
            raise NotFound("User not found")

        dialect = self.db.get_bind().dialect.name
        if dialect in UPSERT_INSERTS:
            self._upsert(user_id, store_id, rating_value, UPSERT_INSERTS[dialect])
        else:
            self._insert_or_update(user_id, store_id, rating_value)
        self.db.commit()

        rating = self.get_user_rating(user_id, store_id)
        if rating is None:
            raise NotFound("Rating not found")
        logger.info(f"User {user_id} rated store {store_id}: {rating_value} (rating {rating.id})")
        return rating

    def _upsert(self, user_id: int, store_id: int, rating_value: int, insert) -> None:
        stmt = insert(Rating).values(user_id=user_id, store_id=store_id, rating=rating_value)
        stmt = stmt.on_conflict_do_update(
            index_elements=["user_id", "store_id"],
            set_={"rating": stmt.excluded.rating, "updated_at": func.now()},
        )
        self.db.execute(stmt)

    def _insert_or_update(self, user_id: int, store_id: int, rating_value: int) -> None:
        try:
            with self.db.begin_nested():
                self.db.add(Rating(user_id=user_id, store_id=store_id, rating=rating_value))
        except IntegrityError:
            existing = self.get_user_rating(user_id, store_id)
            if existing is None:
                raise
            existing.rating = rating_value

    def get_user_rating(self, user_id: int, store_id: int) -> Rating | None:
        """Get a user's rating of a store, if they have submitted one."""
        return (
            self.db.query(Rating)
            .populate_existing()
            .filter(Rating.user_id == user_id, Rating.store_id == store_id)
            .first()
        )

    def get_user_ratings(self, user_id: int, store_ids: list[int]) -> dict[int, Rating]:
        """Get a user's ratings for several stores, keyed by store id."""
        if not store_ids:
            return {}
        ratings = (
            self.db.query(Rating)
            .filter(Rating.user_id == user_id, Rating.store_id.in_(store_ids))
            .all()
        )
        return {r.store_id: r for r in ratings}

    def get_rating_summary(self, store_id: int) -> RatingSummary:
        """Average and count of a store's ratings."""
        average, total = (
            self.db.query(func.avg(Rating.rating), func.count(Rating.id))
            .filter(Rating.store_id == store_id)
            .one()
        )
        return RatingSummary(
            average_rating=float(average) if average is not None else 0.0,
            total_ratings=int(total),
        )

    def get_average_rating(self, store_id: int) -> float:
        """Mean rating of a store, unrounded. 0 when it has no ratings."""
        return self.get_rating_summary(store_id).average_rating

    def list_ratings_for_store(self, store_id: int) -> list[Rating]:
        """All ratings of a store with their submitting users loaded."""
        return (
            self.db.query(Rating)
            .options(joinedload(Rating.user))
            .filter(Rating.store_id == store_id)
            .order_by(Rating.id)
            .all()
        )

    def list_stores(
        self,
        query: str | None = None,
        sort_field: StoreSortField = StoreSortField.CREATED_AT,
        sort_order: SortOrder = SortOrder.DESC,
        page: int = 1,
        page_size: int | None = None,
        include_owner_email: bool = False,
    ) -> Page[StoreAggregate]:
        """List stores with their average rating and rating count.

        ``query`` matches name and address case-insensitively, and also the
        owner's email when ``include_owner_email`` is set (admin view). Sorting
        by RATING uses the derived average, with unrated stores counted as 0.
        """
        page_size = page_size or settings.page_size
        aggregates = (
            self.db.query(
                Rating.store_id.label("store_id"),
                func.avg(Rating.rating).label("average_rating"),
                func.count(Rating.id).label("total_ratings"),
            )
            .group_by(Rating.store_id)
            .subquery()
        )
        average = func.coalesce(aggregates.c.average_rating, 0)
        total = func.coalesce(aggregates.c.total_ratings, 0)

        stores = (
            self.db.query(Store, average.label("average_rating"), total.label("total_ratings"))
            .outerjoin(aggregates, aggregates.c.store_id == Store.id)
            .outerjoin(User, Store.owner_id == User.id)
            .options(selectinload(Store.owner))
        )

        term = (query or "").strip()
        if term:
            conditions = [
                Store.name.icontains(term, autoescape=True),
                Store.address.icontains(term, autoescape=True),
            ]
            if include_owner_email:
                conditions.append(User.email.icontains(term, autoescape=True))
            stores = stores.filter(or_(*conditions))

        sort_columns = {
            StoreSortField.NAME: Store.name,
            StoreSortField.ADDRESS: Store.address,
            StoreSortField.RATING: average,
            StoreSortField.CREATED_AT: Store.created_at,
        }
        sort_column = sort_columns[coerce_choice(StoreSortField, sort_field, "sort field")]
        stores = stores.order_by(
            ordered(sort_column, sort_order),
            ordered(Store.id, sort_order),
        )

        rows, count = paginate(stores, page, page_size)
        items = [
            StoreAggregate(store=store, average_rating=float(avg), total_ratings=int(n))
            for store, avg, n in rows
        ]
        return Page(items=items, total=count, page=max(page, 1), page_size=page_size)

    def list_owner_stores(self, owner_id: int) -> list[OwnerStore]:
        """Stores owned by a user, each with its ratings and aggregates."""
        stores = self.db.query(Store).filter(Store.owner_id == owner_id).order_by(Store.id).all()
        if not stores:
            return []

        ratings_by_store = defaultdict(list)
        ratings = (
            self.db.query(Rating)
            .options(joinedload(Rating.user))
            .filter(Rating.store_id.in_([store.id for store in stores]))
            .order_by(Rating.id)
            .all()
        )
        for rating in ratings:
            ratings_by_store[rating.store_id].append(rating)

        result = []
        for store in stores:
            ratings = ratings_by_store[store.id]
            result.append(
                OwnerStore(
                    store=store,
                    ratings=ratings,
                    average_rating=mean_rating(ratings),
                    total_ratings=len(ratings),
                )
            )
        return result
