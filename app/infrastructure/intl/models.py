"""Message tree models for the intl runtime.

Defines the raw message node variants, the resolved value types produced by
wrapping (parameterized strings and lazy components), and the partition enum.
"""

import inspect
import re
from dataclasses import dataclass, field
from enum import Enum
from collections.abc import Mapping
from typing import Any, Awaitable, Callable, Dict, Optional, Tuple, Union

from infrastructure.intl.exceptions import (
    MessageFormatError,
    MissingParameterError,
    MissingRefLoaderError,
)

# A placeholder is the shortest span between one "{" and the next "}".
PLACEHOLDER_PATTERN = re.compile(r"\{\s*([^}\s]+)\s*\}")

MessageTree = Dict[str, Any]
LocaleLoader = Callable[[str], Union[Any, Awaitable[Any]]]


class Partition(str, Enum):
    """Independent cached views of a locale's messages."""

    RAW = "raw"
    SERVER = "server"
    CLIENT = "client"


@dataclass(frozen=True)
class RefValue:
    """Identifies an external asset referenced from a message tree.

    Attributes:
        extension: Source file extension (e.g., ".mdx").
        kind: Asset kind (e.g., "mdx").
        path: Asset path, also used as the identity of the lazy component.
    """

    extension: str
    kind: str
    path: str

    @classmethod
    def from_raw(cls, value: Any) -> "RefValue":
        """Build a RefValue from its raw mapping form.

        The key ``ext`` is accepted as an alias of ``extension``.

        Raises:
            MessageFormatError: If the value is not a mapping with a path.
        """
        if isinstance(value, RefValue):
            return value
        if not isinstance(value, Mapping) or not value.get("path"):
            raise MessageFormatError(f"Invalid reference value: {value!r}")
        return cls(
            extension=str(value.get("extension", value.get("ext", ""))),
            kind=str(value.get("kind", "")),
            path=str(value["path"]),
        )

    def to_raw(self) -> Dict[str, str]:
        return {"extension": self.extension, "kind": self.kind, "path": self.path}


RefLoader = Callable[[RefValue], Union[Any, Awaitable[Any]]]


@dataclass(frozen=True)
class StringLeaf:
    text: str


@dataclass(frozen=True)
class ScalarLeaf:
    value: Any


@dataclass(frozen=True)
class RefLeaf:
    ref: RefValue


@dataclass(frozen=True)
class ListNode:
    items: Tuple["MessageNode", ...] = ()


@dataclass(frozen=True)
class ObjectNode:
    children: Dict[str, "MessageNode"] = field(default_factory=dict)


MessageNode = Union[StringLeaf, ScalarLeaf, RefLeaf, ListNode, ObjectNode]


def unwrap_default(value: Any) -> Any:
    """Unwrap the default-export convention.

    A mapping whose only key is ``default``, or any other object (such as a
    module) exposing a ``default`` attribute, is replaced by that value;
    anything else is returned unchanged.
    """
    if isinstance(value, Mapping):
        if len(value) == 1 and "default" in value:
            return value["default"]
        return value
    if hasattr(value, "default"):
        return value.default
    return value


async def resolve_maybe_awaitable(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


class ParameterizedString:
    """A message string with named placeholders.

    Calling it with a parameter mapping substitutes every placeholder
    left-to-right. A missing (or None) parameter raises MissingParameterError
    naming the first unsatisfied placeholder; no partial result is returned.
    """

    __slots__ = ("template", "placeholders")

    def __init__(self, template: str):
        self.template = template
        self.placeholders: Tuple[str, ...] = tuple(
            match.group(1) for match in PLACEHOLDER_PATTERN.finditer(template)
        )

    def __call__(self, params: Optional[Mapping[str, Any]] = None) -> str:
        values = params or {}

        def _substitute(match: "re.Match[str]") -> str:
            name = match.group(1)
            value = values.get(name)
            if value is None:
                raise MissingParameterError(name)
            return str(value)

        return PLACEHOLDER_PATTERN.sub(_substitute, self.template)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParameterizedString):
            return NotImplemented
        return self.template == other.template

    def __hash__(self) -> int:
        return hash(self.template)

    def __repr__(self) -> str:
        return f"ParameterizedString({self.template!r})"


class LazyComponent:
    """Async thunk that loads and instantiates a referenced asset on demand.

    The identity is the referenced asset path, so two components wrapped from
    the same reference on different partitions compare as the same logical
    component even though the instances differ.
    """

    def __init__(self, ref: RefValue, ref_loader: Optional[RefLoader] = None):
        self.ref = ref
        self._ref_loader = ref_loader

    @property
    def identity(self) -> str:
        return self.ref.path

    @property
    def is_bound(self) -> bool:
        """Whether a reference loader was bound when the component was wrapped."""
        return self._ref_loader is not None

    def same_component(self, other: Any) -> bool:
        return isinstance(other, LazyComponent) and other.identity == self.identity

    async def __call__(self, ref_loader: Optional[RefLoader] = None) -> Any:
        """Load the referenced asset and instantiate it.

        Args:
            ref_loader: Loader supplied by the caller. Takes precedence over the
                loader bound at wrap time; required for unbound components.

        Raises:
            MissingRefLoaderError: If no loader is available.
        """
        loader = ref_loader or self._ref_loader
        if loader is None:
            raise MissingRefLoaderError(self.identity)

        module = await resolve_maybe_awaitable(loader(self.ref))
        component = unwrap_default(module)
        rendered = component() if callable(component) else component
        return await resolve_maybe_awaitable(rendered)

    def __repr__(self) -> str:
        return f"LazyComponent({self.identity!r}, bound={self.is_bound})"


def parse_node(raw: Any, ref_prop: str) -> MessageNode:
    """Parse a raw (or previously resolved) value into a MessageNode.

    Resolved values map back to their source variant: a ParameterizedString
    becomes its template and a LazyComponent becomes its reference, dropping
    any bound loader. The result never aliases containers of ``raw``.
    """
    match raw:
        case ParameterizedString():
            return StringLeaf(raw.template)
        case LazyComponent():
            return RefLeaf(raw.ref)
        case str():
            return StringLeaf(raw)
        case None | bool() | int() | float():
            return ScalarLeaf(raw)
        case Mapping() if ref_prop in raw:
            return RefLeaf(RefValue.from_raw(raw[ref_prop]))
        case list() | tuple():
            return ListNode(tuple(parse_node(item, ref_prop) for item in raw))
        case Mapping():
            return ObjectNode(
                {str(key): parse_node(value, ref_prop) for key, value in raw.items()}
            )
        case _:
            return ScalarLeaf(raw)


def to_raw(value: Any, ref_prop: str) -> Any:
    """Convert a resolved tree back to its serializable raw form."""
    match value:
        case ParameterizedString():
            return value.template
        case LazyComponent():
            return {ref_prop: value.ref.to_raw()}
        case Mapping():
            return {key: to_raw(child, ref_prop) for key, child in value.items()}
        case list() | tuple():
            return [to_raw(item, ref_prop) for item in value]
        case _:
            return value
