"""Translation handles exposing one resolved namespace to callers."""

from collections.abc import Mapping
from typing import Any, Optional

from infrastructure.intl.exceptions import TranslationNotFoundError
from infrastructure.intl.models import ParameterizedString
from infrastructure.intl.paths import get_path
from infrastructure.logging import get_module_logger

logger = get_module_logger()


class TranslateHandle:
    """The translations for one namespace.

    Offers two explicit lookups: ``get`` returns the resolved value at a path,
    ``call`` additionally interpolates parameterized strings.

    Usage:
        t = intl.get_translations(scope, "home")
        t.call("greeting", {"name": "Ada"})   # "Hello Ada"
        t.get("nested")                        # {"count": ParameterizedString(...)}
    """

    __slots__ = ("_resolved", "_namespace")

    def __init__(self, resolved: Any, namespace: str):
        self._resolved = resolved
        self._namespace = namespace

    @property
    def namespace(self) -> str:
        return self._namespace

    @property
    def value(self) -> Any:
        """The whole resolved subtree."""
        return self._resolved

    def get(self, path: str = "") -> Any:
        """Return the resolved value at ``path`` without interpolating it.

        Raises:
            TranslationNotFoundError: If nothing exists at ``path``.
        """
        value = get_path(self._resolved, path)
        if value is None:
            logger.warning(
                "translation_not_found", key=path, namespace=self._namespace
            )
            raise TranslationNotFoundError(path, self._namespace)
        return value

    def call(self, key: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        """Look up ``key`` and interpolate it when it is a parameterized string.

        Args:
            key: Dot-delimited path inside the namespace.
            params: Parameter mapping; required when the string has placeholders.

        Returns:
            The interpolated string, or the value as-is (plain string, lazy
            component, nested mapping or list).

        Raises:
            TranslationNotFoundError: If ``key`` is absent.
            MissingParameterError: If a placeholder has no parameter.
        """
        value = self.get(key)
        if isinstance(value, ParameterizedString):
            return value(params)
        return value

    def __repr__(self) -> str:
        return f"TranslateHandle(namespace={self._namespace!r})"


def build_translate_handle(resolved: Any, namespace: str) -> TranslateHandle:
    return TranslateHandle(resolved, namespace)
