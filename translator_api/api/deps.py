
# File: translator_api/api/deps.py

from fastapi import Depends, Request
from sqlalchemy.orm import Session
from translator_api.db.session import get_db
from translator_api.core.config import Settings
from translator_api.core.translator import Translator
from translator_api import crud


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_translation_store(db: Session = Depends(get_db)) -> crud.RecordStore:
    return crud.translation_store(db)


def get_comparison_store(db: Session = Depends(get_db)) -> crud.RecordStore:
    return crud.comparison_store(db)


def get_translator(
    store: crud.RecordStore = Depends(get_translation_store),
    config: Settings = Depends(get_settings),
) -> Translator:
    return Translator(store=store, config=config)
