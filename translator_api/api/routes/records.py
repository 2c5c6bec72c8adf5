from fastapi import APIRouter, Depends, status

from translator_api import schemas
from translator_api.api.deps import get_comparison_store, get_settings, get_translation_store
from translator_api.core.config import Settings
from translator_api.crud import RecordStore

router = APIRouter(tags=["records"])


# -------------------------------
# TRANSLATIONS
# -------------------------------
@router.post("/translations", response_model=schemas.RecordOut, status_code=status.HTTP_201_CREATED)
def create_translation(record_in: schemas.RecordCreate, store: RecordStore = Depends(get_translation_store)):
    return store.append(record_in)


@router.get("/translations", response_model=list[schemas.RecordOut])
def list_translations(store: RecordStore = Depends(get_translation_store), config: Settings = Depends(get_settings)):
    return store.list_recent(config.HISTORY_LIMIT)


# -------------------------------
# COMPARISONS
# -------------------------------
@router.post("/compareTranslate", response_model=schemas.RecordOut, status_code=status.HTTP_201_CREATED)
def create_comparison(record_in: schemas.RecordCreate, store: RecordStore = Depends(get_comparison_store)):
    return store.append(record_in)


@router.get("/compare-translations", response_model=list[schemas.RecordOut])
def list_comparisons(store: RecordStore = Depends(get_comparison_store), config: Settings = Depends(get_settings)):
    return store.list_recent(config.HISTORY_LIMIT)
