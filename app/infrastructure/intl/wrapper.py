"""Message wrapping: turns raw message subtrees into resolved subtrees.

Strings with placeholders become ParameterizedString instances, reference
leaves become LazyComponent thunks, and containers are rebuilt structurally.
Wrapping is synchronous and never invokes a reference loader.
"""

from dataclasses import dataclass
from typing import Any, Optional

from infrastructure.intl.config import DEFAULT_REF_PROP, IntlConfig
from infrastructure.intl.exceptions import MissingRefLoaderError
from infrastructure.intl.models import (
    PLACEHOLDER_PATTERN,
    LazyComponent,
    ListNode,
    MessageNode,
    ObjectNode,
    ParameterizedString,
    RefLeaf,
    RefLoader,
    ScalarLeaf,
    StringLeaf,
    parse_node,
)


@dataclass(frozen=True)
class WrapOptions:
    """Options controlling how reference leaves are wrapped.

    Attributes:
        ref_prop: Property marking a reference leaf.
        ref_loader: Loader bound into each LazyComponent (privileged side).
        defer_refs: Restricted configuration: references become unbound
            identity-tagged components and no loader is required.
    """

    ref_prop: str = DEFAULT_REF_PROP
    ref_loader: Optional[RefLoader] = None
    defer_refs: bool = False

    @classmethod
    def privileged(cls, config: IntlConfig) -> "WrapOptions":
        return cls(ref_prop=config.ref_prop, ref_loader=config.ref_loader)

    @classmethod
    def restricted(cls, ref_prop: str) -> "WrapOptions":
        return cls(ref_prop=ref_prop, ref_loader=None, defer_refs=True)


def wrap_string(value: str) -> Any:
    """Return ``value`` unchanged or a ParameterizedString if it has placeholders."""
    if PLACEHOLDER_PATTERN.search(value) is None:
        return value
    return ParameterizedString(value)


def wrap_node(node: MessageNode, options: WrapOptions) -> Any:
    """Resolve a parsed MessageNode."""
    match node:
        case StringLeaf(text=text):
            return wrap_string(text)
        case ScalarLeaf(value=value):
            return value
        case RefLeaf(ref=ref):
            if options.defer_refs:
                return LazyComponent(ref)
            if options.ref_loader is None:
                raise MissingRefLoaderError(ref.path)
            return LazyComponent(ref, options.ref_loader)
        case ListNode(items=items):
            return [wrap_node(item, options) for item in items]
        case ObjectNode(children=children):
            return {key: wrap_node(child, options) for key, child in children.items()}
        case _:
            raise TypeError(f"Unknown message node: {node!r}")


def wrap_messages(raw: Any, options: WrapOptions) -> Any:
    """Wrap a raw (or previously resolved) message subtree.

    Args:
        raw: Raw subtree: strings, lists, mappings, reference objects, scalars.
        options: Wrapping options.

    Returns:
        The resolved subtree. Containers are always newly built.

    Raises:
        MissingRefLoaderError: If a reference leaf is found, no loader is
            configured, and references are not deferred.
    """
    return wrap_node(parse_node(raw, options.ref_prop), options)
