"""Intl runtime facade.

Ties the cache store, namespace loader and partition synchronizer of one
request scope together behind a small API used by request handlers.
"""

from collections.abc import Mapping
from typing import Any, Iterable, Optional

from infrastructure.intl.cache import IntlCacheStore, RequestScope
from infrastructure.intl.config import IntlConfig
from infrastructure.intl.context import RenderContext
from infrastructure.intl.loader import NamespaceLoader
from infrastructure.intl.models import MessageTree, Partition
from infrastructure.intl.partitions import PartitionSynchronizer
from infrastructure.intl.resolvers import LocaleResolver
from infrastructure.intl.translate import TranslateHandle
from infrastructure.logging import get_module_logger

logger = get_module_logger()

_RUNTIME_KEY = "intl.runtime"


class ScopeRuntime:
    """Components bound to one request scope."""

    def __init__(self, scope: RequestScope):
        self.store = IntlCacheStore(scope)
        self.loader = NamespaceLoader(self.store)
        self.synchronizer = PartitionSynchronizer(self.store, self.loader)


class Intl:
    """Translation runtime for one application configuration.

    The Intl instance is application-scoped; all per-request state lives on
    the RequestScope passed to each call.

    Usage:
        intl = create_intl(locales=["en", "fr"], default_locale="en", loader=load)

        scope = RequestScope()
        await intl.bind_locale(scope, params={"locale": "fr"})
        t = intl.get_translations(scope, "home")
        t.call("greeting", {"name": "Ada"})

        context = intl.render_context(scope, ["home"])
    """

    def __init__(self, config: IntlConfig):
        self.config = config
        self.resolver = LocaleResolver(
            locales=config.locales,
            default_locale=config.default_locale,
            locale_param=config.locale_param,
        )
        logger.info(
            "initialized_intl",
            locales=list(config.locales),
            default_locale=config.default_locale,
            ref_loader=config.ref_loader is not None,
        )

    def has_locale(self, value: Any) -> bool:
        return self.config.has_locale(value)

    def runtime(self, scope: RequestScope) -> ScopeRuntime:
        return scope.cached(_RUNTIME_KEY, lambda: ScopeRuntime(scope))

    def initialize(self, scope: RequestScope) -> None:
        """Initialize the request cache; safe to call from several entry points."""
        self.runtime(scope).store.initialize(self.config)

    async def bind_locale(
        self,
        scope: RequestScope,
        params: Optional[Mapping[str, Any]] = None,
        accept_language: Optional[str] = None,
    ) -> str:
        """Select the request locale and eagerly load its messages.

        This is the designated place where a locale is loaded implicitly;
        every other resolution requires the locale to be loaded already.

        Returns:
            The locale selected for the request.

        Raises:
            LocaleLoadError: If the locale messages cannot be loaded.
        """
        runtime = self.runtime(scope)
        runtime.store.initialize(self.config)

        locale = self.resolver.resolve(params, accept_language)
        runtime.store.update(current_locale=locale)
        await runtime.loader.ensure_locale_loaded(locale)

        logger.info(
            "locale_bound",
            locale=locale,
            correlation_id=scope.correlation_id,
        )
        return locale

    async def load_locale(self, scope: RequestScope, locale: str) -> MessageTree:
        """Load an additional locale into the request cache."""
        return await self.runtime(scope).loader.ensure_locale_loaded(locale)

    def current_locale(self, scope: RequestScope) -> str:
        return self.runtime(scope).store.get().current_locale

    def get_translations(self, scope: RequestScope, path: str) -> TranslateHandle:
        """Translations of ``path`` for the privileged side (server partition)."""
        return self._translations(scope, Partition.SERVER, path)

    def get_client_translations(self, scope: RequestScope, path: str) -> TranslateHandle:
        """Translations of ``path`` safe for the restricted side (client partition)."""
        return self._translations(scope, Partition.CLIENT, path)

    def render_context(
        self, scope: RequestScope, namespaces: Iterable[str] = ()
    ) -> RenderContext:
        """Build the render context for the restricted side of this request."""
        runtime = self.runtime(scope)
        locale = runtime.store.get().current_locale
        return runtime.synchronizer.build_render_context(locale, namespaces)

    def _translations(
        self, scope: RequestScope, partition: Partition, path: str
    ) -> TranslateHandle:
        runtime = self.runtime(scope)
        locale = runtime.store.get().current_locale
        return runtime.synchronizer.translations(partition, locale, path)
