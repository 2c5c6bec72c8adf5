# File: translator_api/services/providers.py

import logging
from enum import Enum
from typing import Protocol

import requests
import google.genai as genai
from google.genai import types

from translator_api.core.config import Settings
from translator_api.core.errors import UpstreamError, ValidationError

logger = logging.getLogger(__name__)


class Provider(str, Enum):
    DEEPL = "deepl"
    GEMINI = "gemini"
    GPT = "gpt"

    @classmethod
    def for_model(cls, model: str) -> "Provider":
        """Resolve a model key to its provider; first match wins."""
        if model == "deepl":
            return cls.DEEPL
        if model.startswith("gemini"):
            return cls.GEMINI
        if model.startswith("gpt"):
            return cls.GPT
        raise ValidationError(f"Unsupported model for translation: {model}")


class ProviderAdapter(Protocol):
    def translate(self, text: str, language: str) -> str:
        ...


# -------------------------------
# 1. DeepL
# -------------------------------
DEEPL_LANGUAGE_CODES = {
    "Spanish": "ES",
    "French": "FR",
    "German": "DE",
    "Italian": "IT",
    "Dutch": "NL",
    "Portuguese": "PT",
    "Russian": "RU",
    "Chinese (Simplified)": "ZH",
    "Japanese": "JA",
}


class DeepLAdapter:
    """DeepL takes short language codes, so display names are mapped first."""

    name = "deepl"

    def __init__(self, api_key: str | None, api_url: str, source_lang: str = "EN", timeout: float = 30.0):
        self.api_key = api_key
        self.api_url = api_url
        self.source_lang = source_lang
        self.timeout = timeout

    def translate(self, text: str, language: str) -> str:
        target_code = DEEPL_LANGUAGE_CODES.get(language)
        if not target_code:
            raise UpstreamError(f"DeepL has no code for language: {language}", provider=self.name)
        if not self.api_key:
            raise UpstreamError("DeepL provider not configured", provider=self.name)

        data = {
            "auth_key": self.api_key,
            "text": text,
            "source_lang": self.source_lang,
            "target_lang": target_code,
        }
        logger.debug(f"DeepL request target_lang={target_code}")
        try:
            response = requests.post(self.api_url, data=data, timeout=self.timeout)
            response.raise_for_status()
            result = response.json()
            translated = result["translations"][0]["text"]
        except requests.RequestException as e:
            raise UpstreamError(f"DeepL request failed: {e}", provider=self.name) from e
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise UpstreamError(f"Malformed DeepL response: {e}", provider=self.name) from e

        if not isinstance(translated, str) or not translated.strip():
            raise UpstreamError("Empty response from DeepL", provider=self.name)
        return translated


# -------------------------------
# 2. OpenAI chat completions
# -------------------------------
class GPTAdapter:
    name = "gpt"

    def __init__(self, model: str, api_key: str | None, api_url: str, timeout: float = 30.0):
        self.model = model
        self.api_key = api_key
        self.api_url = api_url
        self.timeout = timeout

    def translate(self, text: str, language: str) -> str:
        if not self.api_key:
            raise UpstreamError("OpenAI provider not configured", provider=self.name)

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        logger.debug(f"OpenAI request model={self.model} language={language}")
        body = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": f"Translate this text to {language}"},
                {"role": "user", "content": text},
            ],
        }
        try:
            response = requests.post(self.api_url, headers=headers, json=body, timeout=self.timeout)
            response.raise_for_status()
            result = response.json()
            content = result["choices"][0]["message"]["content"]
        except requests.RequestException as e:
            raise UpstreamError(f"OpenAI request failed: {e}", provider=self.name) from e
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise UpstreamError(f"Malformed OpenAI response: {e}", provider=self.name) from e

        if not isinstance(content, str) or not content.strip():
            raise UpstreamError("Empty response from OpenAI", provider=self.name)
        return content.strip()


# -------------------------------
# 3. Google Gemini
# -------------------------------
class GeminiAdapter:
    name = "gemini"

    TRANSLATION_PROMPT = 'Translate the following text to {language}: "{text}"'

    def __init__(self, model: str, api_key: str | None, timeout: float = 30.0):
        self.model = model
        self.api_key = api_key
        self.timeout = timeout

    def translate(self, text: str, language: str) -> str:
        if not self.api_key:
            raise UpstreamError("Gemini provider not configured", provider=self.name)

        prompt = self.TRANSLATION_PROMPT.format(language=language, text=text)
        logger.debug(f"Gemini request model={self.model} language={language}")
        try:
            client = genai.Client(
                api_key=self.api_key,
                http_options=types.HttpOptions(timeout=int(self.timeout * 1000)),
            )
            response = client.models.generate_content(model=self.model, contents=prompt)
        except Exception as e:
            # the SDK raises its own errors as well as transport ones
            raise UpstreamError(f"Gemini request failed: {e}", provider=self.name) from e

        if not response.text:
            raise UpstreamError("Empty response from Gemini", provider=self.name)
        return response.text.strip()


def build_adapter(provider: Provider, model: str, config: Settings) -> ProviderAdapter:
    """Instantiate the adapter for a provider with credentials from config."""
    timeout = config.PROVIDER_TIMEOUT_SECONDS
    if provider is Provider.DEEPL:
        return DeepLAdapter(config.DEEPL_API_KEY, config.DEEPL_API_URL, config.DEEPL_SOURCE_LANG, timeout)
    if provider is Provider.GPT:
        return GPTAdapter(model, config.OPENAI_API_KEY, config.OPENAI_API_URL, timeout)
    if provider is Provider.GEMINI:
        return GeminiAdapter(model, config.GOOGLE_API_KEY, timeout)
    raise ValueError(f"Unknown provider: {provider}")
