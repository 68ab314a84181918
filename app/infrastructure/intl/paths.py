"""Dot-path helpers over plain message trees."""

from collections.abc import Mapping, MutableMapping
from typing import Any, List, Optional


def split_path(path: str) -> List[str]:
    """Split a dot-delimited path into segments.

    The empty path selects the whole tree and yields no segments.
    """
    if not path:
        return []
    return path.split(".")


def join_path(*parts: str) -> str:
    """Join path fragments, skipping empty ones."""
    return ".".join(part for part in parts if part)


def get_path(tree: Any, path: str, ref_prop: Optional[str] = None) -> Optional[Any]:
    """Return the value at ``path`` inside ``tree`` or None if absent.

    Numeric segments index into lists. When ``ref_prop`` is given, a mapping
    carrying it is a reference leaf and is never descended into.
    """
    current = tree
    for segment in split_path(path):
        if isinstance(current, Mapping):
            if ref_prop is not None and ref_prop in current:
                return None
            if segment not in current:
                return None
            current = current[segment]
        elif isinstance(current, (list, tuple)) and segment.isdecimal():
            index = int(segment)
            if index >= len(current):
                return None
            current = current[index]
        else:
            return None
    return current


def set_path(tree: MutableMapping[str, Any], path: str, value: Any) -> None:
    """Assign ``value`` at ``path``, creating intermediate mappings as needed.

    Existing intermediate mappings are reused so sibling keys survive.

    Raises:
        ValueError: If ``path`` is empty or crosses a non-mapping value.
    """
    segments = split_path(path)
    if not segments:
        raise ValueError("Cannot assign at the root path")

    current = tree
    for segment in segments[:-1]:
        child = current.get(segment)
        if child is None:
            child = {}
            current[segment] = child
        elif not isinstance(child, MutableMapping):
            raise ValueError(f'Cannot assign "{path}": "{segment}" is not a mapping')
        current = child
    current[segments[-1]] = value


def is_ancestor(ancestor: str, path: str) -> bool:
    """Check whether ``ancestor`` equals ``path`` or contains it."""
    if ancestor == path or not ancestor:
        return True
    return path.startswith(ancestor + ".")


def relative_path(ancestor: str, path: str) -> str:
    """Return ``path`` relative to ``ancestor`` (which must contain it)."""
    if not ancestor:
        return path
    if ancestor == path:
        return ""
    return path[len(ancestor) + 1 :]


def deep_merge(target: MutableMapping[str, Any], source: Mapping[str, Any]) -> None:
    """Recursively merge ``source`` into ``target``; later values win."""
    for key, value in source.items():
        existing = target.get(key)
        if isinstance(existing, MutableMapping) and isinstance(value, Mapping):
            deep_merge(existing, value)
        else:
            target[key] = value


def sort_keys_deep(value: Any) -> Any:
    """Return a copy of ``value`` with mapping keys sorted at every level."""
    if isinstance(value, Mapping):
        return {key: sort_keys_deep(value[key]) for key in sorted(value)}
    if isinstance(value, list):
        return [sort_keys_deep(item) for item in value]
    return value
