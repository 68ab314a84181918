"""Intl runtime - request-scoped translation resolution.

Resolves translated message content for a request: loads each locale once
per request, wraps namespaces into translation handles (parameterized strings
and lazily loaded references), and keeps the privileged (server) and
restricted (client) resolutions in separate partitions.

Main components:
- models: message node variants, ParameterizedString, LazyComponent, RefValue
- cache: RequestScope and the request-scoped IntlCacheStore
- loader: NamespaceLoader plus file-based loader collaborators
- wrapper: wrap_messages, the message wrapping algorithm
- translate: TranslateHandle
- partitions: PartitionSynchronizer
- context: RenderContext and use_translations for the restricted side
- runtime / factory: the Intl facade and its constructors
- compiler: offline MessageCompiler
"""

from infrastructure.intl.cache import IntlCacheState, IntlCacheStore, RequestScope
from infrastructure.intl.config import IntlConfig, create_config
from infrastructure.intl.context import RenderContext, use_translations
from infrastructure.intl.exceptions import (
    CompilerError,
    ContextNotProvidedError,
    IntlCacheError,
    IntlConfigError,
    IntlError,
    LocaleLoadError,
    LocaleNotLoadedError,
    MessageFormatError,
    MissingParameterError,
    MissingRefLoaderError,
    NamespaceNotFoundError,
    NotInitializedError,
    TranslationNotFoundError,
)
from infrastructure.intl.factory import create_intl, create_intl_from_settings
from infrastructure.intl.loader import (
    CompiledMessageLoader,
    DocumentRefLoader,
    NamespaceLoader,
)
from infrastructure.intl.models import (
    LazyComponent,
    ParameterizedString,
    Partition,
    RefValue,
)
from infrastructure.intl.partitions import PartitionSynchronizer
from infrastructure.intl.resolvers import LanguageNegotiator, LocaleResolver
from infrastructure.intl.runtime import Intl
from infrastructure.intl.translate import TranslateHandle, build_translate_handle
from infrastructure.intl.wrapper import WrapOptions, wrap_messages

__all__ = [
    # Runtime
    "Intl",
    "IntlConfig",
    "create_config",
    "create_intl",
    "create_intl_from_settings",
    # Cache
    "RequestScope",
    "IntlCacheState",
    "IntlCacheStore",
    # Loading
    "NamespaceLoader",
    "CompiledMessageLoader",
    "DocumentRefLoader",
    # Wrapping
    "WrapOptions",
    "wrap_messages",
    "ParameterizedString",
    "LazyComponent",
    "RefValue",
    "Partition",
    # Handles
    "TranslateHandle",
    "build_translate_handle",
    "PartitionSynchronizer",
    "RenderContext",
    "use_translations",
    # Locale resolution
    "LocaleResolver",
    "LanguageNegotiator",
    # Errors
    "IntlError",
    "IntlConfigError",
    "IntlCacheError",
    "NotInitializedError",
    "LocaleLoadError",
    "LocaleNotLoadedError",
    "NamespaceNotFoundError",
    "MissingParameterError",
    "MissingRefLoaderError",
    "TranslationNotFoundError",
    "ContextNotProvidedError",
    "MessageFormatError",
    "CompilerError",
]
