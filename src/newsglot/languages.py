"""The set of languages a reader can select."""

from dataclasses import dataclass
from typing import Final

from .errors import UnsupportedLanguageError


@dataclass(frozen=True)
class Language:
    """A selectable language."""

    code: str
    name: str
    flag: str


SUPPORTED_LANGUAGES: Final[tuple[Language, ...]] = (
    Language("id", "Bahasa Indonesia", "🇮🇩"),
    Language("en", "English", "🇺🇸"),
    Language("es", "Español", "🇪🇸"),
    Language("fr", "Français", "🇫🇷"),
    Language("de", "Deutsch", "🇩🇪"),
    Language("ja", "日本語", "🇯🇵"),
    Language("ko", "한국어", "🇰🇷"),
    Language("zh", "中文", "🇨🇳"),
    Language("ar", "العربية", "🇸🇦"),
    Language("pt", "Português", "🇵🇹"),
    Language("ru", "Русский", "🇷🇺"),
    Language("hi", "हिन्दी", "🇮🇳"),
    Language("th", "ไทย", "🇹🇭"),
    Language("vi", "Tiếng Việt", "🇻🇳"),
    Language("ms", "Bahasa Malaysia", "🇲🇾"),
)

_LANGUAGES_BY_CODE: Final[dict[str, Language]] = {language.code: language for language in SUPPORTED_LANGUAGES}


def find_language(code: str) -> Language:
    """
    Resolve a language code to a supported language.

    Args:
        code: A language code such as 'en'. Matching is case-insensitive.

    Raises:
        UnsupportedLanguageError: If the code is not supported.

    """
    language = _LANGUAGES_BY_CODE.get(code.strip().lower())
    if language is None:
        supported = ", ".join(_LANGUAGES_BY_CODE)
        msg = f"Unsupported language '{code}'. Supported languages: {supported}."
        raise UnsupportedLanguageError(msg)
    return language
