"""Enums for model fields."""

from enum import Enum


class Role(str, Enum):
    """Account roles. Assigned at creation and never changed."""

    ADMIN = "admin"
    NORMAL_USER = "normal_user"
    STORE_OWNER = "store_owner"


class SortOrder(str, Enum):
    """Direction for sorted listings."""

    ASC = "asc"
    DESC = "desc"


class StoreSortField(str, Enum):
    """Sortable store listing fields. RATING sorts by the derived average."""

    NAME = "name"
    ADDRESS = "address"
    RATING = "rating"
    CREATED_AT = "created_at"


class UserSortField(str, Enum):
    """Sortable user listing fields."""

    NAME = "name"
    EMAIL = "email"
    ROLE = "role"
    CREATED_AT = "created_at"
