"""Exception types raised by the newsglot translation pipeline."""


class NewsglotError(Exception):
    """Base exception for all newsglot errors."""


class TranslationError(NewsglotError):
    """Raised when a provider call fails and no fallback translation exists."""


class TranslationTimeoutError(TranslationError):
    """Raised when a provider call or a whole translation pass exceeds its time budget."""


class RunCountMismatchError(NewsglotError):
    """Raised when reinsertion receives a different number of texts than there are runs."""


class UnsupportedLanguageError(NewsglotError):
    """Raised when a language code is not one of the supported languages."""
