"""Best-effort text translation backed by the Google Translate v2 API.

When no API key is configured, or the call fails for any reason, a small
bundled dictionary is consulted and the original text is returned when
it has no entry. Results are cached per (text, source, target).
"""
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

import requests

from app.data import load_json
from app.metrics import TRANSLATION_COUNTER
from app.services import i18n

logger = logging.getLogger(__name__)

PLACEHOLDER_KEY = "YOUR_GOOGLE_TRANSLATE_API_KEY"


@dataclass
class TranslationResult:
    translated_text: str
    detected_source_language: Optional[str] = None

    def to_dict(self):
        return {
            "translatedText": self.translated_text,
            "detectedSourceLanguage": self.detected_source_language,
        }


class TranslationService:
    def __init__(self, api_key: str = None, base_url: str = None, timeout: float = 5.0, session=None):
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        self.session = session or requests.Session()
        self._cache: Dict[str, TranslationResult] = {}

    @property
    def configured(self) -> bool:
        return bool(self.api_key) and self.api_key != PLACEHOLDER_KEY

    def clear_cache(self) -> None:
        self._cache.clear()

    def fallback(self, text: str, target: str) -> TranslationResult:
        entry = load_json("fallback_translations.json").get(text, {})
        return TranslationResult(entry.get(target, text))

    def translate_text(self, text: str, target: str, source: str = "en") -> TranslationResult:
        if not text or target == source:
            return TranslationResult(text, source)
        cache_key = f"{text}_{source}_{target}"
        if cache_key in self._cache:
            TRANSLATION_COUNTER.labels("cache").inc()
            return self._cache[cache_key]

        if not self.configured:
            logger.warning("Translate API key not configured. Using fallback translations.")
            TRANSLATION_COUNTER.labels("fallback").inc()
            return self.fallback(text, target)

        try:
            resp = self.session.post(
                self.base_url,
                params={"key": self.api_key},
                json={"q": text, "target": target, "source": source},
                timeout=self.timeout,
            )
            resp.raise_for_status()
            first = resp.json()["data"]["translations"][0]
            translated = first["translatedText"]
        except (requests.RequestException, ValueError, KeyError, IndexError, TypeError) as e:
            logger.error("Translation error: %s", e)
            TRANSLATION_COUNTER.labels("fallback").inc()
            return self.fallback(text, target)

        result = TranslationResult(translated, first.get("detectedSourceLanguage"))
        self._cache[cache_key] = result
        TRANSLATION_COUNTER.labels("api").inc()
        return result

    def translate_many(self, texts: List[str], target: str, source: str = "en") -> List[TranslationResult]:
        return [self.translate_text(text, target, source) for text in texts]


def init_translation(app):
    api_key = app.config.get("GOOGLE_TRANSLATE_API_KEY")
    if not api_key or api_key == PLACEHOLDER_KEY:
        logging.warning("Translate API key missing; fallback dictionary only")
    app.translation_service = TranslationService(
        api_key=api_key,
        base_url=app.config.get("GOOGLE_TRANSLATE_BASE_URL"),
        timeout=app.config.get("TRANSLATE_TIMEOUT_SECONDS", 5),
    )


def translate_for_shopper(service: TranslationService, user, texts: List[str]) -> List[str]:
    """Translate into the shopper's language, honouring the translation toggle."""
    lang = user.preferred_language or i18n.DEFAULT_LANGUAGE
    if not user.translation_enabled or lang == i18n.DEFAULT_LANGUAGE:
        return list(texts)
    return [r.translated_text for r in service.translate_many(texts, lang, i18n.DEFAULT_LANGUAGE)]
