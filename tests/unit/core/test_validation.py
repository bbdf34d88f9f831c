"""Unit tests for declarative payload validation."""

import pytest

from src.books_api.core.errors import ValidationError
from src.books_api.core.validation import (
    NEW_BOOK_SCHEMA,
    UPDATE_BOOK_SCHEMA,
    FieldSpec,
    SchemaSpec,
    ensure_valid,
    validate,
)


class TestSchemaSpecs:
    """The creation and update schemas are two instances of one structure."""

    def test_new_book_schema_requires_all_fields(self):
        assert NEW_BOOK_SCHEMA.field_names == (
            "isbn",
            "amazon_url",
            "author",
            "language",
            "pages",
            "publisher",
            "title",
            "year",
        )

    def test_update_schema_is_new_schema_without_isbn(self):
        assert "isbn" not in UPDATE_BOOK_SCHEMA.field_names
        assert set(UPDATE_BOOK_SCHEMA.field_names) == set(
            NEW_BOOK_SCHEMA.field_names
        ) - {"isbn"}
        assert isinstance(UPDATE_BOOK_SCHEMA, SchemaSpec)

    def test_custom_spec(self):
        spec = SchemaSpec(name="Tiny", fields=(FieldSpec("count", int),))

        assert validate({"count": 3}, spec).valid
        assert not validate({"count": "3"}, spec).valid


class TestValidate:
    """Tests for validate()."""

    def test_valid_payload(self, new_book_data):
        result = validate(new_book_data, NEW_BOOK_SCHEMA)

        assert result.valid is True
        assert result.errors == []

    def test_reports_every_missing_field(self):
        result = validate({"title": "test title"}, NEW_BOOK_SCHEMA)

        assert result.valid is False
        assert len(result.errors) == 7
        for name in ("isbn", "amazon_url", "author", "language", "pages", "publisher", "year"):
            assert any(message.startswith(f"{name}:") for message in result.errors)
        assert not any(message.startswith("title:") for message in result.errors)

    def test_rejects_wrong_types(self, new_book_data):
        payload = {**new_book_data, "pages": "999", "year": 10.5, "title": 42}

        result = validate(payload, NEW_BOOK_SCHEMA)

        assert result.valid is False
        assert {message.split(":")[0] for message in result.errors} == {
            "pages",
            "year",
            "title",
        }

    def test_rejects_boolean_for_integer(self, new_book_data):
        result = validate({**new_book_data, "pages": True}, NEW_BOOK_SCHEMA)

        assert result.valid is False
        assert result.errors[0].startswith("pages:")

    @pytest.mark.parametrize("value", [2**63, -(2**63) - 1, 10**30])
    def test_rejects_integers_outside_column_range(self, new_book_data, value):
        result = validate({**new_book_data, "pages": value, "year": value}, NEW_BOOK_SCHEMA)

        assert result.valid is False
        assert {message.split(":")[0] for message in result.errors} == {"pages", "year"}

    def test_accepts_integers_at_column_bounds(self, new_book_data):
        payload = {**new_book_data, "pages": 2**63 - 1, "year": -(2**63)}

        assert validate(payload, NEW_BOOK_SCHEMA).valid is True

    def test_ignores_unknown_fields(self, new_book_data):
        result = validate({**new_book_data, "edition": "first"}, NEW_BOOK_SCHEMA)

        assert result.valid is True

    @pytest.mark.parametrize("payload", [None, [], "book", 7])
    def test_non_object_payload(self, payload):
        result = validate(payload, NEW_BOOK_SCHEMA)

        assert result.valid is False
        assert result.errors == ["body: must be a JSON object"]


class TestEnsureValid:
    """Tests for ensure_valid()."""

    def test_returns_only_schema_fields(self, update_book_data):
        data = ensure_valid({**update_book_data, "extra": 1}, UPDATE_BOOK_SCHEMA)

        assert data == update_book_data

    def test_raises_with_all_messages(self):
        with pytest.raises(ValidationError) as exc_info:
            ensure_valid({}, UPDATE_BOOK_SCHEMA)

        assert exc_info.value.status_code == 400
        assert len(exc_info.value.messages) == len(UPDATE_BOOK_SCHEMA.fields)
        assert exc_info.value.detail == exc_info.value.messages
