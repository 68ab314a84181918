"""Offline message compiler.

Walks a source directory laid out as ``<input>/<locale>/**/*.{json,yml,yaml,md,mdx}``
and produces, per locale, one sorted merged message file and one type
description file in the output directory. Document files (.md/.mdx) become
reference leaves and are copied next to the compiled messages. Files whose
content did not change are not rewritten.

Usage:
    compiler = MessageCompiler(Path("locales"), Path("messages"))
    results = compiler.compile()

    # or from the command line
    intl-compile --input locales --output messages
"""

import argparse
import json
import re
import shutil
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from infrastructure.intl.config import DEFAULT_REF_PROP
from infrastructure.intl.exceptions import CompilerError
from infrastructure.intl.models import PLACEHOLDER_PATTERN
from infrastructure.intl.paths import deep_merge, sort_keys_deep
from infrastructure.logging import get_module_logger

logger = get_module_logger()

DATA_EXTENSIONS = (".json", ".yml", ".yaml")
DOCUMENT_EXTENSIONS = (".md", ".mdx")
INDEX_SEGMENT = "_index"

_WORD_PATTERN = re.compile(r"[A-Z]?[a-z0-9]+|[A-Z]+(?![a-z])")


def camel_case(value: str) -> str:
    words = _WORD_PATTERN.findall(value)
    if not words:
        return value
    return words[0].lower() + "".join(word.capitalize() for word in words[1:])


def pascal_case(value: str) -> str:
    words = _WORD_PATTERN.findall(value)
    if not words:
        return value
    return "".join(word.capitalize() for word in words)


def describe_types(value: Any, ref_prop: str) -> Dict[str, Any]:
    """Build a machine-readable type description of a message tree."""
    if isinstance(value, str):
        params = list(dict.fromkeys(m.group(1) for m in PLACEHOLDER_PATTERN.finditer(value)))
        if params:
            return {"type": "template", "params": params}
        return {"type": "string"}
    if isinstance(value, dict):
        if ref_prop in value:
            ref = value[ref_prop] or {}
            return {"type": "ref", "kind": ref.get("kind", "")}
        return {
            "type": "object",
            "properties": {key: describe_types(child, ref_prop) for key, child in value.items()},
        }
    if isinstance(value, list):
        return {"type": "array", "items": [describe_types(item, ref_prop) for item in value]}
    if isinstance(value, bool):
        return {"type": "boolean"}
    if isinstance(value, (int, float)):
        return {"type": "number"}
    return {"type": "null"}


def write_changed_file(file: Path, content: str) -> bool:
    """Write ``content`` to ``file`` unless it already holds exactly that content.

    Returns:
        True if the file was written.
    """
    try:
        current = file.read_text(encoding="utf-8")
    except FileNotFoundError:
        current = None

    if current == content:
        return False

    file.parent.mkdir(parents=True, exist_ok=True)
    file.write_text(content, encoding="utf-8")
    return True


@dataclass(frozen=True)
class CompileResult:
    """Outcome of compiling one locale."""

    locale: str
    messages_file: Path
    types_file: Path
    messages_changed: bool
    types_changed: bool
    file_count: int


class MessageCompiler:
    """Compiles per-locale source trees into message and type files.

    Attributes:
        input_dir: Directory holding one sub-directory per locale.
        output_dir: Directory receiving compiled files and copied documents.
        ref_prop: Property marking reference leaves.
    """

    def __init__(
        self,
        input_dir: Path,
        output_dir: Path,
        ref_prop: str = DEFAULT_REF_PROP,
    ):
        self.input_dir = Path(input_dir)
        self.output_dir = Path(output_dir)
        self.ref_prop = ref_prop

        if not self.input_dir.is_dir():
            raise CompilerError(f"Source directory not found: {self.input_dir}")

    def list_locales(self) -> List[str]:
        locales = sorted(entry.name for entry in self.input_dir.iterdir() if entry.is_dir())
        logger.info("found_locales", input_dir=str(self.input_dir), locales=locales)
        return locales

    def source_files(self, locale: str) -> List[Path]:
        root = self.input_dir / locale
        extensions = DATA_EXTENSIONS + DOCUMENT_EXTENSIONS
        return sorted(
            path
            for path in root.rglob("*")
            if path.is_file() and path.suffix.lower() in extensions
        )

    def load_messages(self, locale: str) -> Dict[str, Any]:
        """Merge every source file of ``locale`` into one key-sorted tree.

        Raises:
            CompilerError: If a file cannot be parsed.
        """
        root = self.input_dir / locale
        messages: Dict[str, Any] = {}

        for file in self.source_files(locale):
            content, is_document = self._load_file(locale, root, file)
            key_path = self._key_path(root, file, is_document)

            if is_document:
                self._copy_document(file, content[self.ref_prop]["path"])

            if not key_path:
                if not isinstance(content, dict):
                    raise CompilerError(f"Root file {file} must contain a mapping")
                deep_merge(messages, content)
                continue

            nested: Any = content
            for segment in reversed(key_path):
                nested = {segment: nested}
            deep_merge(messages, nested)
            logger.debug("processed_source_file", locale=locale, file=str(file))

        return sort_keys_deep(messages)

    def compile_locale(self, locale: str) -> CompileResult:
        messages = self.load_messages(locale)
        files = self.source_files(locale)

        messages_file = self.output_dir / f"{locale}.json"
        types_file = self.output_dir / f"{locale}.types.json"

        messages_json = json.dumps(messages, indent=2, ensure_ascii=False) + "\n"
        types_json = (
            json.dumps(
                {"locale": locale, "messages": describe_types(messages, self.ref_prop)},
                indent=2,
                ensure_ascii=False,
            )
            + "\n"
        )

        messages_changed = write_changed_file(messages_file, messages_json)
        types_changed = write_changed_file(types_file, types_json)

        if messages_changed:
            logger.info("compiled_messages", locale=locale, file=str(messages_file))
        else:
            logger.info("messages_up_to_date", locale=locale)

        if types_changed:
            logger.info("compiled_types", locale=locale, file=str(types_file))
        else:
            logger.info("types_up_to_date", locale=locale)

        return CompileResult(
            locale=locale,
            messages_file=messages_file,
            types_file=types_file,
            messages_changed=messages_changed,
            types_changed=types_changed,
            file_count=len(files),
        )

    def compile(self) -> List[CompileResult]:
        start = time.perf_counter()
        results = [self.compile_locale(locale) for locale in self.list_locales()]
        logger.info(
            "compiled_locales",
            locale_count=len(results),
            duration_ms=round((time.perf_counter() - start) * 1000, 2),
        )
        return results

    def _load_file(self, locale: str, root: Path, file: Path):
        ext = file.suffix.lower()

        if ext in DOCUMENT_EXTENSIONS:
            ref_path = Path(locale, file.relative_to(root)).as_posix()
            return {
                self.ref_prop: {"extension": ext, "kind": "mdx", "path": ref_path}
            }, True

        text = file.read_text(encoding="utf-8")
        try:
            if ext == ".json":
                return json.loads(text), False
            return yaml.safe_load(text), False
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            logger.error("source_parse_error", file=str(file), error=str(e))
            raise CompilerError(f"Failed to parse {file}: {e}") from e

    def _key_path(self, root: Path, file: Path, is_document: bool) -> List[str]:
        parts = [
            camel_case(part)
            for part in file.relative_to(root).with_suffix("").parts
            if part != INDEX_SEGMENT
        ]
        if is_document and parts:
            parts[-1] = pascal_case(parts[-1])
        return parts

    def _copy_document(self, source: Path, ref_path: str) -> None:
        target = self.output_dir / ref_path
        if target.exists():
            logger.debug("document_already_copied", file=str(target))
            return
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, target)
        logger.info("copied_document", source=str(source), target=str(target))


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command line entry point for the message compiler."""
    from infrastructure.configuration import settings

    parser = argparse.ArgumentParser(description="Compile locale source files.")
    parser.add_argument("--input", default=settings.intl.INTL_SOURCE_DIR)
    parser.add_argument("--output", default=settings.intl.INTL_MESSAGES_DIR)
    parser.add_argument("--ref-prop", default=settings.intl.INTL_REF_PROP)
    args = parser.parse_args(argv)

    try:
        compiler = MessageCompiler(Path(args.input), Path(args.output), args.ref_prop)
        compiler.compile()
    except CompilerError as e:
        logger.error("compile_failed", error=str(e))
        return 1
    return 0
