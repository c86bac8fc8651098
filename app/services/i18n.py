"""Supported UI languages and the bundled UI string table."""
from app.data import load_json

DEFAULT_LANGUAGE = "en"

LANGUAGES = [
    {"code": "en", "name": "English", "flag": "🇬🇧"},
    {"code": "hi", "name": "हिंदी", "flag": "🇮🇳"},
    {"code": "kn", "name": "ಕನ್ನಡ", "flag": "🇮🇳"},
    {"code": "ta", "name": "தமிழ்", "flag": "🇮🇳"},
    {"code": "mr", "name": "मराठी", "flag": "🇮🇳"},
    {"code": "gu", "name": "ગુજરાતી", "flag": "🇮🇳"},
    {"code": "te", "name": "తెలుగు", "flag": "🇮🇳"},
    {"code": "bn", "name": "বাংলা", "flag": "🇮🇳"},
    {"code": "ml", "name": "മലയാളം", "flag": "🇮🇳"},
    {"code": "pa", "name": "ਪੰਜਾਬੀ", "flag": "🇮🇳"},
    {"code": "or", "name": "ଓଡ଼ିଆ", "flag": "🇮🇳"},
    {"code": "as", "name": "অসমীয়া", "flag": "🇮🇳"},
]

_BY_CODE = {lang["code"]: lang for lang in LANGUAGES}


def is_supported(code) -> bool:
    return code in _BY_CODE


def language_name(code: str) -> str:
    lang = _BY_CODE.get(code)
    return lang["name"] if lang else code


def next_language(code: str) -> str:
    """Language after `code` in list order, wrapping; unknown codes restart at the first."""
    codes = [lang["code"] for lang in LANGUAGES]
    if code not in codes:
        return codes[0]
    return codes[(codes.index(code) + 1) % len(codes)]


def _strings():
    return load_json("ui_strings.json")


def t(key: str, lang: str = DEFAULT_LANGUAGE) -> str:
    table = _strings()
    return (
        table.get(lang, {}).get(key)
        or table[DEFAULT_LANGUAGE].get(key)
        or key
    )


def strings_for(lang: str) -> dict:
    table = _strings()
    resolved = dict(table[DEFAULT_LANGUAGE])
    resolved.update(table.get(lang, {}))
    return resolved
