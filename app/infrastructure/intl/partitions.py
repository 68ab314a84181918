"""Partition synchronization between the privileged and restricted sides.

The server partition is wrapped with the configured reference loader. The
client partition is always wrapped with the restricted configuration, so no
loader closure is ever stored in it, even when the client entry is derived
from an existing server entry.
"""

import copy
from typing import Any, Iterable

from infrastructure.intl.cache import IntlCacheStore
from infrastructure.intl.context import RenderContext
from infrastructure.intl.exceptions import NamespaceNotFoundError
from infrastructure.intl.loader import NamespaceLoader
from infrastructure.intl.models import Partition
from infrastructure.intl.paths import get_path
from infrastructure.intl.translate import TranslateHandle, build_translate_handle
from infrastructure.intl.wrapper import WrapOptions, wrap_messages
from infrastructure.logging import get_module_logger

logger = get_module_logger()


class PartitionSynchronizer:
    """Resolves namespaces into the server or client partition of a request."""

    def __init__(self, store: IntlCacheStore, loader: NamespaceLoader):
        self._store = store
        self._loader = loader

    def resolve_for_partition(self, partition: Partition, locale: str, path: str) -> Any:
        """Return the resolved subtree at ``path``, wrapping it on first access.

        Args:
            partition: Partition.SERVER or Partition.CLIENT.
            locale: Locale whose messages are resolved.
            path: Dot-delimited namespace path ("" for the whole tree).

        Returns:
            The resolved subtree; the same object for repeated calls.

        Raises:
            LocaleNotLoadedError: If the locale was not loaded in this request.
            NamespaceNotFoundError: If the namespace does not exist.
            MissingRefLoaderError: If a server-side reference has no loader.
        """
        state = self._store.get()
        target = state.partition(partition)

        cached = target.lookup(locale, path)
        if cached is not None:
            logger.debug(
                "namespace_cache_hit",
                partition=partition.value,
                locale=locale,
                namespace=path,
            )
            return cached

        raw = get_path(
            self._loader.require_locale(locale), path, state.config.ref_prop
        )
        if raw is None:
            logger.warning("namespace_not_found", locale=locale, namespace=path)
            raise NamespaceNotFoundError(path, locale)

        if partition is Partition.SERVER:
            resolved = wrap_messages(
                copy.deepcopy(raw), WrapOptions.privileged(state.config)
            )
        else:
            # Parsing rebuilds every container, so the server entry is not aliased.
            source = state.server.lookup(locale, path)
            if source is None:
                source = copy.deepcopy(raw)
            resolved = wrap_messages(
                source, WrapOptions.restricted(state.config.ref_prop)
            )

        target.store(locale, path, resolved)
        logger.info(
            "namespace_resolved",
            partition=partition.value,
            locale=locale,
            namespace=path,
        )
        return resolved

    def translations(self, partition: Partition, locale: str, path: str) -> TranslateHandle:
        resolved = self.resolve_for_partition(partition, locale, path)
        return build_translate_handle(resolved, path)

    def build_render_context(
        self, locale: str, namespaces: Iterable[str] = ()
    ) -> RenderContext:
        """Construct the render context for one render pass.

        Declared namespaces are resolved into the client partition first; the
        context then receives every client namespace resolved for ``locale`` so
        far and is sealed. Later client entries are not visible to it.
        """
        state = self._store.get()
        for path in namespaces:
            self.resolve_for_partition(Partition.CLIENT, locale, path)

        context = RenderContext(locale=locale, ref_prop=state.config.ref_prop)
        resolved_paths = sorted(
            state.client.namespaces.get(locale, ()), key=lambda p: (p.count("."), p)
        )
        for path in resolved_paths:
            context.merge(path, state.client.lookup(locale, path))

        logger.info(
            "render_context_built",
            locale=locale,
            namespaces=resolved_paths,
        )
        return context.seal()
