
# File: translator_api/schemas.py

import math
from pydantic import BaseModel, Field, StrictFloat, StrictInt, field_validator, model_validator
from typing import Optional, Union
from datetime import datetime

SCORE_MIN = 0
SCORE_MAX = 5

# matches the String(50) columns in models.py
LABEL_MAX_LENGTH = 50

REQUIRED_FIELDS = ("original_message", "translated_message", "language", "model")


class RecordCreate(BaseModel):
    """Fields of a new record.

    Only non-empty values are required here. The model -> language support
    table is checked by the translation gateway, not on direct writes, so
    callers of the record endpoints may store models outside that table.
    """
    original_message: str
    translated_message: str
    language: str = Field(max_length=LABEL_MAX_LENGTH)
    model: str = Field(max_length=LABEL_MAX_LENGTH)
    score: Optional[Union[StrictInt, StrictFloat]] = None

    @model_validator(mode="before")
    @classmethod
    def accept_legacy_rating(cls, data):
        # older clients sent "rating" (and "ranking"/"classification", dropped)
        if isinstance(data, dict) and data.get("score") is None and "rating" in data:
            data = {**data, "score": data["rating"]}
        return data

    @field_validator(*REQUIRED_FIELDS)
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value

    @field_validator("score")
    @classmethod
    def score_in_range(cls, value):
        if value is None:
            return value
        if not math.isfinite(value) or not SCORE_MIN <= value <= SCORE_MAX:
            raise ValueError(f"must be between {SCORE_MIN} and {SCORE_MAX}")
        return value


class RecordOut(BaseModel):
    id: int
    original_message: str
    translated_message: str
    language: str
    model: str
    score: Optional[float] = None
    created_at: datetime

    class Config:
        from_attributes = True


class TranslateRequest(BaseModel):
    message: str
    language: str
    model: str


class TranslateResponse(BaseModel):
    translated_message: str
    record: RecordOut


class ModelCatalog(BaseModel):
    models: dict[str, list[str]]
