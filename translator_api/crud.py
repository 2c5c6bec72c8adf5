
# File: translator_api/crud.py

import logging
from typing import Mapping, Union

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from translator_api import models, schemas
from translator_api.core.errors import StoreError, ValidationError

logger = logging.getLogger(__name__)


def create_record(db: Session, model, record_in: schemas.RecordCreate):
    db_record = model(
        original_message=record_in.original_message,
        translated_message=record_in.translated_message,
        language=record_in.language,
        model=record_in.model,
        score=record_in.score,
    )
    db.add(db_record)
    db.commit()
    db.refresh(db_record)
    return db_record


def list_recent_records(db: Session, model, limit: int):
    return (
        db.query(model)
        .order_by(model.created_at.desc(), model.id.desc())
        .limit(limit)
        .all()
    )


def describe_validation_error(exc: PydanticValidationError) -> str:
    problems = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err["loc"]) or "body"
        problems.append(f"{field}: {err['msg']}")
    return "Invalid record: " + "; ".join(problems)


class RecordStore:
    """Append-only writer and newest-first reader over one record table.

    One instance per record kind; the translation and comparison stores
    share no ids and no ordering. The session is owned by the caller.
    """

    def __init__(self, db: Session, model):
        self.db = db
        self.model = model

    @property
    def kind(self) -> str:
        return self.model.__tablename__

    def append(self, fields: Union[schemas.RecordCreate, Mapping]) -> schemas.RecordOut:
        """Validate and insert a record; ``id`` and ``created_at`` are assigned here."""
        if isinstance(fields, schemas.RecordCreate):
            record_in = fields
        else:
            try:
                record_in = schemas.RecordCreate.model_validate(dict(fields))
            except PydanticValidationError as e:
                raise ValidationError(describe_validation_error(e)) from e

        try:
            db_record = create_record(self.db, self.model, record_in)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to insert into {self.kind}: {e}")
            raise StoreError(f"Failed to save record to {self.kind}") from e

        logger.info(f"Stored {self.kind} record id={db_record.id} model={db_record.model}")
        return schemas.RecordOut.model_validate(db_record)

    def list_recent(self, n: int) -> list[schemas.RecordOut]:
        """Return at most ``n`` records, newest first."""
        if n < 0:
            raise ValidationError("History limit must not be negative")
        if n == 0:
            return []
        try:
            rows = list_recent_records(self.db, self.model, n)
        except SQLAlchemyError as e:
            logger.error(f"Failed to read from {self.kind}: {e}")
            raise StoreError(f"Failed to fetch records from {self.kind}") from e
        return [schemas.RecordOut.model_validate(row) for row in rows]


def translation_store(db: Session) -> RecordStore:
    return RecordStore(db, models.TranslationRecord)


def comparison_store(db: Session) -> RecordStore:
    return RecordStore(db, models.ComparisonRecord)
