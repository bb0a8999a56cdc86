"""
Entity Validation Tests
=======================

``User.validate`` and ``Post.validate`` report every violated rule
without raising.
"""

import pytest

from crud_api.app.models import Post, User


def make_user(**overrides) -> User:
    data = {"name": "John Doe", "email": "john@example.com", "age": 30}
    data.update(overrides)
    return User.create(data)


def make_post(**overrides) -> Post:
    data = {"title": "Hello", "content": "World", "authorId": 1}
    data.update(overrides)
    return Post.create(data)


class TestUserModel:

    def test_create_normalises_fields(self):
        user = User.create({"name": "  Ann  ", "email": "  ANN@Example.COM ", "age": "42"})
        assert user.id is None
        assert user.name == "Ann"
        assert user.email == "ann@example.com"
        assert user.age == 42

    def test_valid_user_has_no_errors(self):
        assert make_user().validate() == []

    def test_missing_fields_accumulate_in_order(self):
        user = User.create({"name": "   ", "email": "", "age": None})
        assert user.validate() == [
            "Name is required",
            "Email is required",
            "Age must be a valid number between 0 and 150",
        ]

    def test_only_one_email_error_is_reported(self):
        assert make_user(email="not-an-email").validate() == ["Email format is invalid"]

    @pytest.mark.parametrize("email", ["a@b", "@b.c", "a@b.", "abc"])
    def test_rejects_malformed_emails(self, email):
        assert make_user(email=email).validate() == ["Email format is invalid"]

    def test_age_zero_is_treated_as_missing(self):
        # Zero is inside the documented range but is still rejected.
        assert make_user(age=0).validate() == ["Age must be a valid number between 0 and 150"]

    @pytest.mark.parametrize("age", [-1, 151, "abc", None, True])
    def test_rejects_out_of_range_or_non_numeric_age(self, age):
        assert make_user(age=age).validate() == ["Age must be a valid number between 0 and 150"]

    @pytest.mark.parametrize("age, expected", [(1, 1), (150, 150), ("25", 25), (30.9, 30), ("30abc", 30)])
    def test_age_reads_leading_integer(self, age, expected):
        user = make_user(age=age)
        assert user.age == expected
        assert user.validate() == []

    def test_non_string_name_reports_required(self):
        assert make_user(name=123).validate() == ["Name is required"]

    def test_replaced_overwrites_every_field_on_a_copy(self):
        user = make_user()
        user.id = 7
        updated = user.replaced({"name": "New"})
        assert updated.name == "New"
        assert updated.email == ""
        assert updated.age is None
        assert user.name == "John Doe"
        assert updated.id == 7

    def test_representation_revalidates(self):
        user = make_user()
        again = User.create(user.to_dict())
        assert again.validate() == []
        assert again.email == user.email


class TestPostModel:

    def test_status_defaults_to_draft(self):
        post = make_post()
        assert post.status == "draft"
        assert post.validate() == []

    def test_create_trims_and_parses_author(self):
        post = Post.create({"title": "  T  ", "content": " C ", "authorId": "2"})
        assert (post.title, post.content, post.author_id) == ("T", "C", 2)

    def test_empty_title_does_not_also_report_length(self):
        assert make_post(title="").validate() == ["Title is required"]

    def test_length_limits(self):
        errors = make_post(title="x" * 201, content="y" * 10001).validate()
        assert errors == [
            "Title must not exceed 200 characters",
            "Content must not exceed 10000 characters",
        ]

    def test_limits_are_inclusive(self):
        assert make_post(title="x" * 200, content="y" * 10000).validate() == []

    @pytest.mark.parametrize("author_id", [0, -3, None, "abc"])
    def test_invalid_author(self, author_id):
        assert make_post(authorId=author_id).validate() == ["Valid author ID is required"]

    def test_invalid_status(self):
        assert make_post(status="archived").validate() == [
            'Status must be either "draft" or "published"'
        ]

    def test_all_errors_accumulate(self):
        post = Post.create({"title": "", "content": "", "authorId": 0, "status": "x"})
        assert len(post.validate()) == 4

    def test_patched_keeps_unspecified_fields(self):
        post = make_post(status="published")
        patched = post.patched({"content": "  changed  "})
        assert patched.title == "Hello"
        assert patched.content == "changed"
        assert patched.status == "published"
        assert post.content == "World"
        assert patched.updated_at >= post.updated_at

    def test_representation_uses_camel_case_keys(self):
        data = make_post().to_dict()
        assert set(data) == {"id", "title", "content", "authorId", "status", "createdAt", "updatedAt"}
