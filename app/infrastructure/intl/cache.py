"""Request-scoped cache store for the intl runtime.

The cache state lives on an explicit ``RequestScope`` object that is created
once per logical request and threaded through the call graph. Nothing is
retained across requests.
"""

import asyncio
import uuid
from dataclasses import dataclass, field, fields
from typing import Any, Callable, Dict, Optional, Set

import structlog
from infrastructure.intl.config import IntlConfig
from infrastructure.intl.exceptions import IntlCacheError, NotInitializedError
from infrastructure.intl.models import MessageTree, Partition
from infrastructure.intl.paths import (
    get_path,
    is_ancestor,
    relative_path,
    set_path,
)

logger = structlog.get_logger().bind(component="intl.cache")

_CACHE_KEY = "intl.cache_state"


class RequestScope:
    """Per-request memoization scope.

    Values created through ``cached`` are built at most once per scope and
    discarded with it.

    Attributes:
        correlation_id: Identifier of the request owning this scope.
    """

    def __init__(self, correlation_id: Optional[str] = None):
        self.correlation_id = correlation_id or str(uuid.uuid4())
        self._values: Dict[str, Any] = {}

    def cached(self, key: str, factory: Callable[[], Any]) -> Any:
        if key not in self._values:
            self._values[key] = factory()
        return self._values[key]

    def peek(self, key: str) -> Optional[Any]:
        return self._values.get(key)

    def __repr__(self) -> str:
        return f"RequestScope({self.correlation_id!r})"


class ResolvedPartition:
    """Resolved message trees for one partition, keyed by locale.

    Tracks which namespace paths were resolved so that a lookup only hits when
    the path itself, or one of its ancestors, was fully resolved.
    """

    def __init__(self, name: Partition):
        self.name = name
        self.trees: Dict[str, MessageTree] = {}
        self.namespaces: Dict[str, Set[str]] = {}

    def has(self, locale: str, path: str) -> bool:
        return any(
            is_ancestor(namespace, path)
            for namespace in self.namespaces.get(locale, ())
        )

    def lookup(self, locale: str, path: str) -> Optional[Any]:
        """Return the resolved subtree at ``path`` or None on a miss."""
        if not self.has(locale, path):
            return None
        return get_path(self.trees.get(locale), path)

    def store(self, locale: str, path: str, value: Any) -> None:
        """Store a fully formed resolved subtree at ``path``.

        Descendant namespaces resolved earlier are grafted into ``value`` so
        previously returned subtrees keep their identity.
        """
        resolved = self.namespaces.setdefault(locale, set())
        descendants = sorted(
            namespace
            for namespace in resolved
            if namespace != path and is_ancestor(path, namespace)
        )
        if descendants and isinstance(value, dict):
            previous = self.trees.get(locale)
            for namespace in descendants:
                existing = get_path(previous, namespace)
                relative = relative_path(path, namespace)
                parent, _, _ = relative.rpartition(".")
                # Namespaces inside lists keep the freshly wrapped value.
                if existing is not None and isinstance(get_path(value, parent), dict):
                    set_path(value, relative, existing)

        if path:
            set_path(self.trees.setdefault(locale, {}), path, value)
        else:
            self.trees[locale] = value

        resolved.difference_update(descendants)
        resolved.add(path)

    def locales(self) -> Set[str]:
        return set(self.trees)

    def __len__(self) -> int:
        return sum(len(paths) for paths in self.namespaces.values())


@dataclass
class IntlCacheState:
    """Cache contents for one logical request.

    Attributes:
        config: Runtime configuration; set before any other field is read.
        current_locale: Locale selected for the request.
        raw: Unwrapped message trees by locale.
        server: Resolved trees for the privileged side.
        client: Resolved trees for the restricted side (no bound loaders).
        pending_loads: In-flight locale loads shared by concurrent callers.
    """

    config: IntlConfig
    current_locale: str
    raw: Dict[str, MessageTree] = field(default_factory=dict)
    server: ResolvedPartition = field(
        default_factory=lambda: ResolvedPartition(Partition.SERVER)
    )
    client: ResolvedPartition = field(
        default_factory=lambda: ResolvedPartition(Partition.CLIENT)
    )
    pending_loads: Dict[str, "asyncio.Future[MessageTree]"] = field(
        default_factory=dict
    )

    def partition(self, partition: Partition) -> ResolvedPartition:
        if partition is Partition.SERVER:
            return self.server
        if partition is Partition.CLIENT:
            return self.client
        raise IntlCacheError(f"Partition {partition.value} holds raw trees")


_STATE_FIELDS = frozenset(f.name for f in fields(IntlCacheState))


class IntlCacheStore:
    """Access to the intl cache state of one request scope."""

    def __init__(self, scope: RequestScope):
        self.scope = scope

    @property
    def is_initialized(self) -> bool:
        return self.scope.peek(_CACHE_KEY) is not None

    def initialize(self, config: IntlConfig) -> IntlCacheState:
        """Create the cache state for this scope if absent.

        Calling it again within the same scope is a no-op, so several entry
        points of one request may each initialize the store.
        """
        existing = self.scope.peek(_CACHE_KEY)
        if existing is not None:
            logger.debug(
                "intl_cache_already_initialized",
                correlation_id=self.scope.correlation_id,
            )
            return existing

        state = self.scope.cached(
            _CACHE_KEY,
            lambda: IntlCacheState(config=config, current_locale=config.default_locale),
        )
        logger.debug(
            "intl_cache_initialized",
            correlation_id=self.scope.correlation_id,
            default_locale=config.default_locale,
        )
        return state

    def get(self) -> IntlCacheState:
        """Return the cache state.

        Raises:
            NotInitializedError: If ``initialize`` was never called in this scope.
        """
        state = self.scope.peek(_CACHE_KEY)
        if state is None:
            raise NotInitializedError()
        return state

    def update(self, **partial: Any) -> IntlCacheState:
        """Shallow-merge fields into the cache state.

        Raises:
            NotInitializedError: If the store is not initialized.
            IntlCacheError: For unknown fields or an unsupported locale.
        """
        state = self.get()
        unknown = set(partial) - _STATE_FIELDS
        if unknown:
            raise IntlCacheError(f"Unknown cache fields: {sorted(unknown)}")

        locale = partial.get("current_locale")
        if locale is not None and not state.config.has_locale(locale):
            raise IntlCacheError(f'Unsupported locale "{locale}"')

        for name, value in partial.items():
            setattr(state, name, value)
        return state
