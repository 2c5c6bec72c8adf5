"""Error taxonomy shared by the gateway, the record store and the HTTP layer.

Every failure is terminal for the request that raised it; nothing here is
retried automatically.
"""


class TranslationAppError(Exception):
    """Base class. ``message`` is safe to show to a caller."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TranslationAppError):
    """Bad input, rejected before any provider or store call."""


class UpstreamError(TranslationAppError):
    """A translation provider answered with an error or an unusable payload."""

    def __init__(self, message: str, provider: str | None = None):
        super().__init__(message)
        self.provider = provider


class StoreError(TranslationAppError):
    """The record store could not write or read."""


class RecordNotSavedError(StoreError):
    """Translation succeeded but the resulting record was not stored."""

    def __init__(self, message: str, translated_text: str):
        super().__init__(message)
        self.translated_text = translated_text


class InternalError(TranslationAppError):
    """Unexpected failure; details stay in the server log."""
