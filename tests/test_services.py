"""Service-layer tests that do not go through HTTP."""

import math
from uuid import uuid4

import pytest

from techmatch.api.models import Identity
from techmatch.database.core import to_uuid
from techmatch.database.core.funcs import ensure_admin, ensure_user, get_user_profile, login_user, register_user
from techmatch.database.core.patents import coerce_price, list_patents
from techmatch.errors import Forbidden, InvalidCredential, NotFound, StoreFailure, ValidationError


class TestCoercePrice:
    @pytest.mark.parametrize("value, expected", [
        ("1,000", 0.0), (" 42.5 ", 42.5), (7, 7.0), (-3, 0.0), ("", 0.0), (True, 0.0), (math.inf, 0.0),
    ])
    def test_values(self, value, expected):
        assert coerce_price(value) == expected

    def test_default_is_returned_for_garbage(self):
        assert coerce_price("n/a", default=99.0) == 99.0


class TestToUuid:
    def test_parses_strings_and_passes_uuids_through(self):
        value = uuid4()
        assert to_uuid(value) is value
        assert to_uuid(str(value)) == value

    def test_malformed_is_none(self):
        assert to_uuid("12") is None
        assert to_uuid(None) is None


class TestAccounts:
    def test_login_returns_identity(self):
        user_id = register_user(email="x@example.com", password="pw", name="X", role="seller")["userId"]
        identity = login_user(email="x@example.com", password="pw")
        assert identity.id == user_id
        assert identity.role == "seller"

    def test_login_failure(self):
        with pytest.raises(InvalidCredential):
            login_user(email="nobody@example.com", password="pw")

    def test_profile_of_missing_user(self):
        with pytest.raises(NotFound):
            get_user_profile(user_id=uuid4())

    def test_ensure_user_creates_unusable_login(self):
        identity = Identity(id=uuid4(), email="dev@local", name="Dev", role="admin")
        ensure_user(identity=identity)
        ensure_user(identity=identity)
        assert get_user_profile(user_id=identity.id)["email"] == "dev@local"
        with pytest.raises(InvalidCredential):
            login_user(email="dev@local", password="!")

    def test_ensure_user_goes_through_the_dao_unhashed(self, monkeypatch):
        from techmatch.database.daos.user_dao import UserDao

        calls = []
        original = UserDao.createUser

        def spy(self, session, user_data, hash_password=True):
            calls.append(hash_password)
            return original(self, session, user_data, hash_password)

        monkeypatch.setattr(UserDao, "createUser", spy)
        ensure_user(identity=Identity(id=uuid4(), email="dev2@local", name="Dev", role="admin"))
        assert calls == [False]

    def test_admin_registration_can_be_refused(self):
        with pytest.raises(Forbidden):
            register_user(email="m@example.com", password="pw", name="M", role="admin", allow_admin=False)
        with pytest.raises(InvalidCredential):
            login_user(email="m@example.com", password="pw")

    def test_ensure_admin_seeds_a_working_login_once(self):
        assert ensure_admin(email="root@example.com", password="s3cret", name="Root") is True
        assert ensure_admin(email="root@example.com", password="other", name="Root") is False
        identity = login_user(email="root@example.com", password="s3cret")
        assert identity.role == "admin"

    def test_ensure_admin_leaves_existing_non_admin_alone(self):
        register_user(email="b@example.com", password="pw", name="B", role="buyer")
        assert ensure_admin(email="b@example.com", password="pw", name="B") is False
        assert login_user(email="b@example.com", password="pw").role == "buyer"


class TestListPatents:
    def test_unknown_scope(self):
        with pytest.raises(ValidationError):
            list_patents(scope="everything")

    def test_mine_without_caller(self):
        with pytest.raises(ValidationError):
            list_patents(scope="mine")


class TestTransactional:
    def test_database_errors_surface_as_store_failure(self, monkeypatch):
        from sqlalchemy.exc import OperationalError

        from techmatch.database.daos.user_dao import UserDao

        def boom(self, session, user_id):
            raise OperationalError("SELECT 1", {}, Exception("connection lost"))

        monkeypatch.setattr(UserDao, "fetchUserById", boom)
        with pytest.raises(StoreFailure):
            get_user_profile(user_id=uuid4())
