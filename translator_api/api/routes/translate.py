from fastapi import APIRouter, Depends

from translator_api import schemas
from translator_api.api.deps import get_translator
from translator_api.core.translator import SUPPORTED_MODELS, Translator

router = APIRouter(tags=["translate"])


@router.get("/models", response_model=schemas.ModelCatalog)
def list_models():
    return {"models": SUPPORTED_MODELS}


@router.post("/translate", response_model=schemas.TranslateResponse)
def translate_message(request: schemas.TranslateRequest, translator: Translator = Depends(get_translator)):
    """
    Translate a message with the chosen model and record it.
    The response carries the stored record so callers can refresh their history.
    """
    outcome = translator.translate(request.message, request.language, request.model)
    return {"translated_message": outcome.translated_text, "record": outcome.record}
