"""
UserService Tests
=================

In-memory user collection: listing, pagination, uniqueness and the
full-replacement update contract.
"""

import math

import pytest

from crud_api.app.core.errors import BadRequest, Conflict, ErrorKind, NotFound, ValidationFailed
from crud_api.app.services import UserService


def fill(service: UserService, n: int) -> None:
    for i in range(n):
        service.create({"name": f"User {i}", "email": f"user{i}@example.com", "age": 20 + i})


class TestUserListing:

    def test_seeded_users(self):
        service = UserService()
        users, pagination = service.list()
        assert [u.name for u in users] == ["John Doe", "Jane Smith", "Bob Johnson"]
        assert [u.id for u in users] == [1, 2, 3]
        assert pagination.current_page == 1
        assert pagination.total_pages == 1
        assert pagination.total_users == 3
        assert pagination.limit == 10

    def test_search_matches_name_case_insensitively_in_insertion_order(self):
        users, pagination = UserService().list(search="JOHN")
        assert [u.name for u in users] == ["John Doe", "Bob Johnson"]
        assert pagination.total_users == 2

    def test_search_matches_email(self):
        users, _ = UserService().list(search="jane@")
        assert [u.id for u in users] == [2]

    def test_empty_search_returns_everything(self):
        users, _ = UserService().list(search="")
        assert len(users) == 3

    @pytest.mark.parametrize("total", [0, 1, 7, 25])
    @pytest.mark.parametrize("page, limit", [(1, 1), (1, 10), (2, 3), (3, 10), (4, 2)])
    def test_pagination_math(self, total, page, limit):
        service = UserService(seed=False)
        fill(service, total)
        users, pagination = service.list(page=page, limit=limit)
        assert pagination.total_pages == math.ceil(total / limit)
        assert pagination.total_users == total
        assert len(users) == min(limit, max(0, total - (page - 1) * limit))

    def test_pagination_counts_filtered_users(self):
        service = UserService()
        fill(service, 5)
        users, pagination = service.list(page=1, limit=2, search="john")
        assert pagination.total_users == 2
        assert pagination.total_pages == 1
        assert len(users) == 2

    def test_page_past_the_end_is_empty(self):
        users, pagination = UserService().list(page=5, limit=10)
        assert users == []
        assert pagination.current_page == 5

    @pytest.mark.parametrize("page, limit", [(1, 0), (0, 10), (-1, 5)])
    def test_non_positive_paging_is_rejected(self, page, limit):
        with pytest.raises(BadRequest):
            UserService().list(page=page, limit=limit)


class TestUserMutations:

    def test_first_create_gets_id_four(self):
        user = UserService().create({"name": " Alice ", "email": "ALICE@Example.com ", "age": "28"})
        assert user.id == 4
        assert user.name == "Alice"
        assert user.email == "alice@example.com"
        assert user.age == 28
        assert user.created_at == user.updated_at

    def test_duplicate_email_conflicts_regardless_of_case(self):
        service = UserService()
        with pytest.raises(Conflict) as exc_info:
            service.create({"name": "Other John", "email": "JOHN@example.com", "age": 40})
        assert exc_info.value.kind is ErrorKind.CONFLICT
        assert exc_info.value.message == "User with this email already exists"
        assert service.count() == 3

    def test_invalid_data_reports_every_error(self):
        service = UserService()
        with pytest.raises(ValidationFailed) as exc_info:
            service.create({"name": "", "email": "bad", "age": 200})
        assert exc_info.value.errors == [
            "Name is required",
            "Email format is invalid",
            "Age must be a valid number between 0 and 150",
        ]
        assert exc_info.value.status_code == 400

    def test_age_zero_fails_validation(self):
        with pytest.raises(ValidationFailed) as exc_info:
            UserService().create({"name": "Baby", "email": "baby@example.com", "age": 0})
        assert exc_info.value.errors == ["Age must be a valid number between 0 and 150"]

    def test_ids_are_never_reused(self):
        service = UserService()
        service.delete(3)
        user = service.create({"name": "New", "email": "new@example.com", "age": 22})
        assert user.id == 4

    def test_get_by_id_not_found(self):
        with pytest.raises(NotFound) as exc_info:
            UserService().get_by_id(999)
        assert exc_info.value.message == "User with ID 999 not found"

    def test_update_replaces_all_fields(self):
        service = UserService()
        before = service.get_by_id(1).updated_at
        user = service.update(1, {"name": "Johnny", "email": "Johnny@Example.com", "age": 31})
        assert (user.name, user.email, user.age) == ("Johnny", "johnny@example.com", 31)
        assert user.updated_at >= before
        assert service.get_by_id(1) is user

    def test_update_may_keep_own_email(self):
        user = UserService().update(1, {"name": "John", "email": "john@example.com", "age": 30})
        assert user.email == "john@example.com"

    def test_update_missing_user(self):
        with pytest.raises(NotFound):
            UserService().update(42, {"name": "X", "email": "x@example.com", "age": 20})

    def test_update_with_taken_email_leaves_user_untouched(self):
        service = UserService()
        with pytest.raises(Conflict) as exc_info:
            service.update(1, {"name": "John", "email": "jane@example.com", "age": 30})
        assert exc_info.value.message == "Email already exists for another user"
        assert service.get_by_id(1).email == "john@example.com"

    def test_rejected_update_does_not_modify_user(self):
        service = UserService()
        with pytest.raises(ValidationFailed):
            service.update(1, {"name": "Renamed", "email": "john@example.com"})
        user = service.get_by_id(1)
        assert user.name == "John Doe"
        assert user.age == 30

    def test_delete_returns_removed_user(self):
        service = UserService()
        removed = service.delete(2)
        assert removed.name == "Jane Smith"
        assert service.count() == 2
        with pytest.raises(NotFound):
            service.get_by_id(2)
        with pytest.raises(NotFound):
            service.delete(2)

    def test_email_exists(self):
        service = UserService()
        assert service.email_exists("Bob@Example.com")
        assert not service.email_exists("bob@example.com", exclude_id=3)
        assert not service.email_exists("nobody@example.com")

    def test_services_are_isolated(self):
        first, second = UserService(), UserService()
        first.create({"name": "Only Here", "email": "here@example.com", "age": 33})
        assert first.count() == 4
        assert second.count() == 3
