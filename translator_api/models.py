
# File: translator_api/models.py

from sqlalchemy import Column, Integer, String, DateTime, Text, Float, CheckConstraint
from datetime import datetime, timezone
from translator_api.db.session import Base


def _utcnow():
    return datetime.now(timezone.utc)


class RecordColumns:
    """Columns shared by both record kinds. Rows are never updated."""
    id = Column(Integer, primary_key=True, index=True)
    original_message = Column(Text, nullable=False)
    translated_message = Column(Text, nullable=False)
    language = Column(String(50), nullable=False)
    model = Column(String(50), nullable=False)
    score = Column(Float, nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False, index=True)


class TranslationRecord(RecordColumns, Base):
    __tablename__ = "translations"
    __table_args__ = (
        CheckConstraint("score IS NULL OR (score >= 0 AND score <= 5)", name="ck_translations_score"),
    )


class ComparisonRecord(RecordColumns, Base):
    __tablename__ = "compare_translations"
    __table_args__ = (
        CheckConstraint("score IS NULL OR (score >= 0 AND score <= 5)", name="ck_compare_translations_score"),
    )
