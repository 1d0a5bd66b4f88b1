# deebank_admin/core/i18n.py
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from typing import Dict, Optional
import json
import logging
import os

from deebank_admin.core.config import settings

logger = logging.getLogger(__name__)

SUPPORTED_LANGUAGES = {
    'pt': 'Portuguese',
    'en': 'English',
}

_LOCALE_DIR = os.path.join(os.path.dirname(__file__), "..", "locales")
_translations: Dict[str, Dict[str, str]] = {}

for fname in os.listdir(_LOCALE_DIR) if os.path.isdir(_LOCALE_DIR) else []:
    if fname.endswith(".json"):
        locale = fname.replace(".json", "")
        try:
            with open(os.path.join(_LOCALE_DIR, fname), "r", encoding="utf-8") as f:
                _translations[locale] = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to load locale {locale}: {e}")
            _translations[locale] = {}


def detect_language_from_header(accept_lang: Optional[str]) -> Optional[str]:
    """First supported language in an Accept-Language header, if any"""
    if not accept_lang:
        return None

    for lang in accept_lang.split(","):
        lang_code = lang.split(";")[0].split("-")[0].strip().lower()
        if lang_code in SUPPORTED_LANGUAGES:
            return lang_code
    return None


def t(key: str, lang: Optional[str] = None, **kwargs) -> str:
    """Translation with fallback to English, then to the key itself"""
    lang = lang or settings.DEFAULT_LANGUAGE
    translation = _translations.get(lang, {}).get(key, _translations.get('en', {}).get(key, key))

    if kwargs:
        try:
            translation = translation.format(**kwargs)
        except (KeyError, IndexError):
            pass  # Keep original if formatting fails

    return translation


def request_language(request: Request) -> str:
    return getattr(request.state, "lang", settings.DEFAULT_LANGUAGE)


class LocalizationMiddleware(BaseHTTPMiddleware):
    """?lang= first, then Accept-Language, then the configured default"""

    async def dispatch(self, request: Request, call_next):
        lang = request.query_params.get("lang")

        if not lang or lang not in SUPPORTED_LANGUAGES:
            lang = detect_language_from_header(request.headers.get("accept-language"))

        if not lang:
            lang = settings.DEFAULT_LANGUAGE

        request.state.lang = lang

        response = await call_next(request)
        response.headers["Content-Language"] = lang
        return response
