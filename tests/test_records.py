"""Unit tests for RecordStore and the record schemas."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from translator_api import models, schemas
from translator_api.core.errors import StoreError, ValidationError
from translator_api.crud import comparison_store, translation_store

HELLO = {
    "original_message": "Hello",
    "translated_message": "Bonjour",
    "language": "French",
    "model": "deepl",
    "score": 4.5,
}


def _row_count(db, model):
    return db.query(model).count()


class TestAppend:
    """Tests for writing records."""

    def test_append_assigns_id_and_timestamp(self, store):
        record = store.append(HELLO)
        assert record.id is not None
        assert record.created_at is not None
        assert record.original_message == "Hello"
        assert record.score == 4.5

    def test_append_then_list_recent_returns_exactly_that_record(self, store):
        stored = store.append(HELLO)
        recent = store.list_recent(1)
        assert len(recent) == 1
        assert recent[0] == stored
        assert recent[0].translated_message == "Bonjour"

    def test_append_accepts_schema_instance(self, store):
        record = store.append(schemas.RecordCreate(**HELLO))
        assert record.model == "deepl"

    def test_score_is_optional(self, store):
        fields = {k: v for k, v in HELLO.items() if k != "score"}
        assert store.append(fields).score is None

    @pytest.mark.parametrize("field", schemas.REQUIRED_FIELDS)
    def test_missing_required_field_never_reaches_store(self, db, store, field):
        fields = {k: v for k, v in HELLO.items() if k != field}
        with pytest.raises(ValidationError) as excinfo:
            store.append(fields)
        assert field in excinfo.value.message
        assert _row_count(db, models.TranslationRecord) == 0

    @pytest.mark.parametrize("field", schemas.REQUIRED_FIELDS)
    @pytest.mark.parametrize("blank", ["", "   "])
    def test_blank_required_field_never_reaches_store(self, db, store, field, blank):
        with pytest.raises(ValidationError):
            store.append({**HELLO, field: blank})
        assert _row_count(db, models.TranslationRecord) == 0

    def test_out_of_range_score_rejected(self, db, store):
        with pytest.raises(ValidationError):
            store.append({**HELLO, "score": 6})
        assert _row_count(db, models.TranslationRecord) == 0

    def test_store_failure_raises_store_error(self, broken_session_factory):
        session = broken_session_factory()
        try:
            with pytest.raises(StoreError):
                translation_store(session).append(HELLO)
        finally:
            session.close()


class TestListRecent:
    """Tests for the newest-first history read."""

    def test_never_returns_more_than_n(self, store):
        for i in range(7):
            store.append({**HELLO, "original_message": f"Hello {i}"})
        assert len(store.list_recent(5)) == 5
        assert len(store.list_recent(100)) == 7

    def test_newest_first(self, store):
        for i in range(4):
            store.append({**HELLO, "original_message": f"Hello {i}"})
        recent = store.list_recent(4)
        assert [r.original_message for r in recent] == ["Hello 3", "Hello 2", "Hello 1", "Hello 0"]
        stamps = [r.created_at for r in recent]
        assert stamps == sorted(stamps, reverse=True)

    def test_zero_returns_empty(self, store):
        store.append(HELLO)
        assert store.list_recent(0) == []

    def test_negative_limit_rejected(self, store):
        with pytest.raises(ValidationError):
            store.list_recent(-1)

    def test_empty_store(self, store):
        assert store.list_recent(5) == []

    def test_read_failure_raises_store_error(self, broken_session_factory):
        session = broken_session_factory()
        try:
            with pytest.raises(StoreError):
                translation_store(session).list_recent(5)
        finally:
            session.close()


class TestRecordKindsAreIndependent:
    """Translation and comparison records live in separate tables."""

    def test_comparison_records_do_not_appear_in_translations(self, db, store):
        comparison_store(db).append(HELLO)
        assert store.list_recent(5) == []

    def test_each_kind_assigns_its_own_ids(self, store, compare_store):
        first_translation = store.append(HELLO)
        first_comparison = compare_store.append(HELLO)
        assert first_translation.id == 1
        assert first_comparison.id == 1


class TestRecordCreateSchema:
    """Tests for request-body validation rules."""

    def test_string_score_rejected(self):
        with pytest.raises(PydanticValidationError):
            schemas.RecordCreate(**{**HELLO, "score": "4"})

    def test_boolean_score_rejected(self):
        with pytest.raises(PydanticValidationError):
            schemas.RecordCreate(**{**HELLO, "score": True})

    def test_nan_score_rejected(self):
        with pytest.raises(PydanticValidationError):
            schemas.RecordCreate(**{**HELLO, "score": float("nan")})

    def test_integer_score_accepted(self):
        assert schemas.RecordCreate(**{**HELLO, "score": 3}).score == 3

    def test_legacy_rating_used_as_score(self):
        fields = {k: v for k, v in HELLO.items() if k != "score"}
        record = schemas.RecordCreate(**fields, rating=2.5, ranking=1, classification="good")
        assert record.score == 2.5

    def test_score_wins_over_legacy_rating(self):
        record = schemas.RecordCreate(**HELLO, rating=1)
        assert record.score == 4.5

    def test_text_is_stored_untrimmed(self):
        record = schemas.RecordCreate(**{**HELLO, "original_message": "  Hello  "})
        assert record.original_message == "  Hello  "

    def test_overlong_language_rejected(self):
        with pytest.raises(PydanticValidationError):
            schemas.RecordCreate(**{**HELLO, "language": "x" * (schemas.LABEL_MAX_LENGTH + 1)})

    def test_overlong_model_rejected(self, db, store):
        with pytest.raises(ValidationError) as excinfo:
            store.append({**HELLO, "model": "m" * (schemas.LABEL_MAX_LENGTH + 1)})
        assert "model" in excinfo.value.message
        assert _row_count(db, models.TranslationRecord) == 0

    def test_direct_write_accepts_model_outside_support_table(self, store):
        record = store.append({**HELLO, "model": "benchmark-model", "language": "Mauritian Creole"})
        assert record.model == "benchmark-model"
