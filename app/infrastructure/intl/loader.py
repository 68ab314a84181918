"""Locale loading for the intl runtime.

Provides the namespace loader that fills the raw partition once per request,
and file-based collaborators reading the compiler's output: a locale loader
for compiled message files and a reference loader for copied documents.
"""

import asyncio
import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Dict

import yaml

import structlog
from infrastructure.intl.cache import IntlCacheState, IntlCacheStore
from infrastructure.intl.exceptions import LocaleLoadError, LocaleNotLoadedError
from infrastructure.intl.models import (
    MessageTree,
    RefValue,
    resolve_maybe_awaitable,
    unwrap_default,
)

logger = structlog.get_logger()


class NamespaceLoader:
    """Loads a locale's raw message tree at most once per request scope.

    Concurrent callers waiting on the same locale share one in-flight load.
    A failed load is not cached and may be retried.
    """

    def __init__(self, store: IntlCacheStore):
        self._store = store

    async def ensure_locale_loaded(self, locale: str) -> MessageTree:
        """Load ``locale`` into the raw partition if it is not there yet.

        Args:
            locale: Locale to load.

        Returns:
            The raw message tree for the locale.

        Raises:
            NotInitializedError: If the cache store is not initialized.
            LocaleLoadError: If the locale is unsupported or the loader fails.
        """
        state = self._store.get()
        if locale in state.raw:
            return state.raw[locale]

        if not state.config.has_locale(locale):
            raise LocaleLoadError(locale, "unsupported locale")

        pending = state.pending_loads.get(locale)
        if pending is None:
            pending = asyncio.ensure_future(self._load(state, locale))
            state.pending_loads[locale] = pending
        else:
            logger.debug("locale_load_joined", locale=locale)

        return await asyncio.shield(pending)

    def require_locale(self, locale: str) -> MessageTree:
        """Return the raw tree of an already loaded locale.

        Raises:
            LocaleNotLoadedError: If the locale was never loaded in this scope.
        """
        state = self._store.get()
        messages = state.raw.get(locale)
        if messages is None:
            raise LocaleNotLoadedError(locale)
        return messages

    async def _load(self, state: IntlCacheState, locale: str) -> MessageTree:
        try:
            result = await resolve_maybe_awaitable(state.config.loader(locale))
        except Exception as e:
            logger.error("locale_load_failed", locale=locale, error=str(e))
            raise LocaleLoadError(locale, str(e)) from e
        finally:
            state.pending_loads.pop(locale, None)

        messages = unwrap_default(result)
        if not isinstance(messages, Mapping):
            logger.error(
                "invalid_locale_messages",
                locale=locale,
                received=type(messages).__name__,
            )
            raise LocaleLoadError(locale, "loader did not return a message tree")

        state.raw[locale] = dict(messages)
        logger.info("locale_loaded", locale=locale, namespace_count=len(messages))
        return state.raw[locale]


class CompiledMessageLoader:
    """Locale loader collaborator reading compiled message files.

    Expects ``<locale>.json`` in the messages directory, falling back to
    ``<locale>.yml`` / ``<locale>.yaml``.

    Attributes:
        messages_dir: Directory holding the compiled message files.
    """

    def __init__(self, messages_dir: Path):
        self.messages_dir = Path(messages_dir)

        if not self.messages_dir.exists():
            raise ValueError(f"Messages directory not found: {self.messages_dir}")

        logger.info("initialized_compiled_loader", messages_dir=str(self.messages_dir))

    def __call__(self, locale: str) -> Dict[str, Any]:
        """Read the message tree for ``locale``.

        Raises:
            FileNotFoundError: If no message file exists for the locale.
            ValueError: If the file cannot be parsed or is not a mapping.
        """
        json_file = self.messages_dir / f"{locale}.json"
        if json_file.exists():
            try:
                data = json.loads(json_file.read_text(encoding="utf-8"))
            except json.JSONDecodeError as e:
                logger.error("json_parse_error", file=str(json_file), error=str(e))
                raise ValueError(f"Failed to parse {json_file}: {e}") from e
            return self._validate(data, json_file)

        for suffix in (".yml", ".yaml"):
            yaml_file = self.messages_dir / f"{locale}{suffix}"
            if not yaml_file.exists():
                continue
            try:
                with open(yaml_file, "r", encoding="utf-8") as f:
                    data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                logger.error("yaml_parse_error", file=str(yaml_file), error=str(e))
                raise ValueError(f"Failed to parse {yaml_file}: {e}") from e
            return self._validate(data or {}, yaml_file)

        raise FileNotFoundError(
            f"No message file found for locale {locale} in {self.messages_dir}"
        )

    def _validate(self, data: Any, source_file: Path) -> Dict[str, Any]:
        if not isinstance(data, dict):
            logger.warning("invalid_messages_format", file=str(source_file), expected="dict")
            raise ValueError(f"Message file {source_file} must contain a mapping")
        return data


class DocumentRefLoader:
    """Reference loader collaborator returning compiled document sources.

    Reads the document copied by the message compiler at ``<assets_dir>/<ref.path>``.

    Attributes:
        assets_dir: Directory the compiler copied documents into.
    """

    def __init__(self, assets_dir: Path):
        self.assets_dir = Path(assets_dir)

    def __call__(self, ref: RefValue) -> str:
        """Return the text of the referenced document.

        Raises:
            FileNotFoundError: If the document does not exist.
            ValueError: If the reference escapes the assets directory.
        """
        target = (self.assets_dir / ref.path).resolve()
        if not target.is_relative_to(self.assets_dir.resolve()):
            raise ValueError(f"Reference {ref.path} escapes {self.assets_dir}")

        text = target.read_text(encoding="utf-8")
        logger.debug("loaded_document", path=ref.path, kind=ref.kind)
        return text
