"""Render-time context consumed by the restricted side.

A RenderContext carries ``{locale, messages}`` for one render pass. It is
filled once by the partition synchronizer, then sealed. Its messages are
wrapped with the restricted configuration at most once per instance, on first
use. Only raw trees cross the boundary through ``to_payload`` and
``from_payload``.
"""

from collections.abc import Mapping
from typing import Any, Dict, List, Optional

from infrastructure.intl.config import DEFAULT_REF_PROP
from infrastructure.intl.exceptions import (
    ContextNotProvidedError,
    IntlError,
    NamespaceNotFoundError,
)
from infrastructure.intl.models import MessageTree, to_raw
from infrastructure.intl.paths import get_path, set_path
from infrastructure.intl.translate import TranslateHandle, build_translate_handle
from infrastructure.intl.wrapper import WrapOptions, wrap_messages

NAMESPACE_HINT = (
    "Maybe you forgot to declare the namespace when building the render context?"
)


class RenderContext:
    """Messages propagated to the restricted side for one render pass.

    Attributes:
        locale: Locale the messages belong to.
        messages: Message tree merged from client-partition entries.
        ref_prop: Property marking reference leaves in ``messages``.
    """

    def __init__(
        self,
        locale: str,
        messages: Optional[MessageTree] = None,
        ref_prop: str = DEFAULT_REF_PROP,
    ):
        self.locale = locale
        self.messages: MessageTree = messages if messages is not None else {}
        self.ref_prop = ref_prop
        self._namespaces: List[str] = []
        self._sealed = False
        self._resolved: Optional[Any] = None
        self._wrapped = False

    @property
    def sealed(self) -> bool:
        return self._sealed

    @property
    def namespaces(self) -> List[str]:
        return list(self._namespaces)

    def merge(self, path: str, value: Any) -> None:
        """Merge a resolved subtree at ``path`` while the context is being built.

        Raises:
            IntlError: If the context was already sealed.
        """
        if self._sealed:
            raise IntlError("Render context already constructed")
        if path:
            set_path(self.messages, path, value)
        elif isinstance(value, Mapping):
            self.messages.update(value)
        else:
            raise IntlError("Only a mapping can be merged at the root path")
        self._namespaces.append(path)

    def seal(self) -> "RenderContext":
        self._sealed = True
        return self

    def resolve(self) -> Any:
        """Wrap the messages with the restricted configuration, once.

        Later calls return the same resolved tree.
        """
        if not self._wrapped:
            self._resolved = wrap_messages(
                self.messages, WrapOptions.restricted(self.ref_prop)
            )
            self._wrapped = True
            self._sealed = True
        return self._resolved

    def to_payload(self) -> Dict[str, Any]:
        """Serializable form of the context; resolved values become raw again."""
        return {
            "locale": self.locale,
            "ref_prop": self.ref_prop,
            "messages": to_raw(self.messages, self.ref_prop),
        }

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "RenderContext":
        context = cls(
            locale=payload["locale"],
            messages=dict(payload.get("messages") or {}),
            ref_prop=payload.get("ref_prop") or DEFAULT_REF_PROP,
        )
        return context.seal()

    def __repr__(self) -> str:
        return f"RenderContext(locale={self.locale!r}, namespaces={self._namespaces!r})"


def use_translations(context: Optional[RenderContext], path: str) -> TranslateHandle:
    """Restricted-side lookup of one namespace from a render context.

    Raises:
        ContextNotProvidedError: If no render context is available.
        NamespaceNotFoundError: If the namespace was not propagated.
    """
    if context is None:
        raise ContextNotProvidedError(
            f"`use_translations` requires a render context\n{NAMESPACE_HINT}"
        )

    namespace = get_path(context.resolve(), path)
    if namespace is None:
        raise NamespaceNotFoundError(path, context.locale, hint=NAMESPACE_HINT)
    return build_translate_handle(namespace, path)
