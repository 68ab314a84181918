"""Exceptions raised by the intl runtime.

Every failure is a hard failure: missing data is never replaced by a
placeholder or an empty string.
"""

from typing import Optional


class IntlError(Exception):
    """Base exception for all intl runtime errors.

    Example:
        try:
            translations = intl.get_translations(scope, "home")
        except IntlError as e:
            logger.error("intl_error", error=str(e))
    """

    pass


class IntlConfigError(IntlError):
    """Raised when an intl configuration is invalid."""

    pass


class IntlCacheError(IntlError):
    """Raised for invalid access to the request-scoped cache store."""

    pass


class NotInitializedError(IntlCacheError):
    """Raised when the cache store is read before ``initialize`` was called.

    This is a programmer error and is fatal to the request.
    """

    def __init__(self, message: str = "Intl cache not initialized"):
        super().__init__(message)


class LocaleLoadError(IntlError):
    """Raised when the locale loader collaborator fails.

    The failure is not cached; a later call may retry the load.
    """

    def __init__(self, locale: str, reason: Optional[str] = None):
        self.locale = locale
        message = f'Failed to load locale "{locale}"'
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class LocaleNotLoadedError(IntlError):
    """Raised when a namespace is resolved for a locale that was never loaded."""

    def __init__(self, locale: str):
        self.locale = locale
        super().__init__(f'Locale "{locale}" not loaded')


class NamespaceNotFoundError(IntlError):
    """Raised when a namespace path does not exist in a locale's messages."""

    def __init__(self, path: str, locale: str, hint: Optional[str] = None):
        self.path = path
        self.locale = locale
        message = f'Namespace "{path}" not found in locale "{locale}"'
        if hint:
            message = f"{message}\n{hint}"
        super().__init__(message)


class MissingParameterError(IntlError):
    """Raised when a parameterized string is called without a required parameter."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'Missing parameter "{name}"')


class MissingRefLoaderError(IntlError):
    """Raised when a reference leaf needs a loader and none is configured."""

    def __init__(self, path: Optional[str] = None):
        self.path = path
        message = "Missing ref loader"
        if path:
            message = f'{message} for "{path}"'
        super().__init__(message)


class TranslationNotFoundError(IntlError):
    """Raised when a key is absent inside an otherwise resolved namespace."""

    def __init__(self, key: str, namespace: str):
        self.key = key
        self.namespace = namespace
        super().__init__(f'Translation "{key}" not found in namespace "{namespace}"')


class ContextNotProvidedError(IntlError):
    """Raised when restricted-side lookups run without a render context."""

    pass


class CompilerError(IntlError):
    """Raised when the message compiler cannot process a source file."""

    pass


class MessageFormatError(IntlError):
    """Raised when a raw message node has an invalid shape."""

    pass
