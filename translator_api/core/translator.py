import logging
from dataclasses import dataclass
from typing import Callable, Optional

from translator_api import schemas
from translator_api.core.config import Settings, settings
from translator_api.core.errors import (
    InternalError,
    RecordNotSavedError,
    StoreError,
    UpstreamError,
    ValidationError,
)
from translator_api.crud import RecordStore
from translator_api.services.providers import Provider, ProviderAdapter, build_adapter

logger = logging.getLogger(__name__)

_ALL_LANGUAGES = [
    "Spanish", "French", "German", "Italian", "Dutch", "Portuguese",
    "Russian", "Chinese (Simplified)", "Japanese",
]
_GEMINI_LANGUAGES = [lang for lang in _ALL_LANGUAGES if lang != "Dutch"]

# model key -> target languages it may be asked for
SUPPORTED_MODELS: dict[str, list[str]] = {
    "deepl": list(_ALL_LANGUAGES),
    "gpt-3.5-turbo": list(_ALL_LANGUAGES),
    "gpt-4": list(_ALL_LANGUAGES),
    "gpt-4-turbo": list(_ALL_LANGUAGES),
    "gemini-1.5-flash-001": list(_GEMINI_LANGUAGES),
    "gemini-1.5-flash-002": list(_GEMINI_LANGUAGES),
    "gemini-1.5-pro-001": list(_GEMINI_LANGUAGES),
    "gemini-1.5-pro-002": list(_GEMINI_LANGUAGES),
}

AdapterFactory = Callable[[Provider, str], ProviderAdapter]


@dataclass
class TranslationOutcome:
    translated_text: str
    record: schemas.RecordOut


def validate_request(text: str, language: str, model: str) -> Provider:
    """Reject bad input before any network or store call and resolve the provider."""
    if not text or not text.strip():
        raise ValidationError("Please enter a message to translate.")
    if model not in SUPPORTED_MODELS:
        raise ValidationError(f"Unsupported model for translation: {model}")
    if language not in SUPPORTED_MODELS[model]:
        raise ValidationError(f"Unsupported language for {model}: {language}")
    return Provider.for_model(model)


class Translator:
    """Translation gateway: validate, dispatch to one provider, record the result."""

    def __init__(
        self,
        store: Optional[RecordStore] = None,
        adapter_factory: Optional[AdapterFactory] = None,
        config: Settings = settings,
    ):
        self.store = store
        self.config = config
        self.adapter_factory = adapter_factory or (lambda provider, model: build_adapter(provider, model, config))

    def translate_text(self, text: str, language: str, model: str) -> str:
        """Translate without recording anything."""
        provider = validate_request(text, language, model)
        adapter = self.adapter_factory(provider, model)
        try:
            return adapter.translate(text, language)
        except UpstreamError as e:
            logger.error(f"Translation via {model} failed: {e.message}")
            raise
        except Exception as e:
            logger.exception(f"Unexpected error from {model} adapter")
            raise InternalError("Internal server error") from e

    def translate(self, text: str, language: str, model: str) -> TranslationOutcome:
        """Translate, then append the request/response pair to the store."""
        if self.store is None:
            raise InternalError("Translator has no record store")

        translated_text = self.translate_text(text, language, model)
        try:
            record = self.store.append(
                {
                    "original_message": text,
                    "translated_message": translated_text,
                    "language": language,
                    "model": model,
                }
            )
        except (StoreError, ValidationError) as e:
            logger.error(f"Translation succeeded but was not saved: {e.message}")
            raise RecordNotSavedError("Translation succeeded but could not be saved.", translated_text) from e
        return TranslationOutcome(translated_text=translated_text, record=record)
