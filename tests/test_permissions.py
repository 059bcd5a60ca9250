"""Tests for identity claims and the authorization table."""

import pytest

from src.models.enums import Role
from src.services.auth import create_access_token, decode_access_token
from src.services.errors import Forbidden, Unauthorized
from src.services.permissions import PERMISSIONS, Identity, Operation, authorize, is_allowed


class TestIdentity:
    """Tests for Identity.from_claims."""

    def test_from_token(self):
        identity = Identity.from_claims(decode_access_token(create_access_token(7, Role.ADMIN)))
        assert identity == Identity(user_id=7, role=Role.ADMIN)

    @pytest.mark.parametrize(
        "payload",
        [
            None,
            {},
            {"sub": "7"},
            {"role": "admin"},
            {"sub": "abc", "role": "admin"},
            {"sub": "7", "role": "superuser"},
        ],
    )
    def test_malformed_claims(self, payload):
        with pytest.raises(Unauthorized):
            Identity.from_claims(payload)


class TestPermissions:
    """Tests for the role table."""

    def test_every_operation_has_an_entry(self):
        assert set(PERMISSIONS) == set(Operation)

    @pytest.mark.parametrize(
        "role,operation,allowed",
        [
            (Role.NORMAL_USER, Operation.SUBMIT_RATING, True),
            (Role.ADMIN, Operation.SUBMIT_RATING, False),
            (Role.STORE_OWNER, Operation.SUBMIT_RATING, False),
            (Role.NORMAL_USER, Operation.BROWSE_STORES, True),
            (Role.ADMIN, Operation.BROWSE_STORES, True),
            (Role.STORE_OWNER, Operation.VIEW_OWNER_DASHBOARD, True),
            (Role.NORMAL_USER, Operation.VIEW_OWNER_DASHBOARD, False),
            (Role.ADMIN, Operation.ADMIN_LIST_USERS, True),
            (Role.STORE_OWNER, Operation.ADMIN_LIST_USERS, False),
            (Role.STORE_OWNER, Operation.CHANGE_OWN_PASSWORD, True),
        ],
    )
    def test_table(self, role, operation, allowed):
        assert is_allowed(role, operation) is allowed

    def test_authorize_raises_forbidden(self):
        with pytest.raises(Forbidden):
            authorize(Identity(user_id=1, role=Role.NORMAL_USER), Operation.ADMIN_VIEW_STATS)

    def test_authorize_allows(self):
        authorize(Identity(user_id=1, role=Role.ADMIN), Operation.ADMIN_VIEW_STATS)
