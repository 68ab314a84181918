"""Tests for infrastructure.intl.loader module."""

import asyncio
import json
from unittest.mock import MagicMock

import pytest
import yaml

from infrastructure.intl import (
    CompiledMessageLoader,
    DocumentRefLoader,
    IntlCacheStore,
    LocaleLoadError,
    LocaleNotLoadedError,
    NamespaceLoader,
    NotInitializedError,
)
from tests.factories.intl import make_config, make_messages, make_ref_value


@pytest.mark.unit
class TestNamespaceLoader:
    """Tests for NamespaceLoader."""

    @pytest.mark.asyncio
    async def test_loads_locale_into_raw_partition(self, namespace_loader, store, locale_loader):
        messages = await namespace_loader.ensure_locale_loaded("en")

        assert messages == make_messages("en")
        assert store.get().raw["en"] is messages
        locale_loader.assert_called_once_with("en")

    @pytest.mark.asyncio
    async def test_second_call_is_cache_hit(self, namespace_loader, locale_loader):
        first = await namespace_loader.ensure_locale_loaded("en")
        second = await namespace_loader.ensure_locale_loaded("en")

        assert first is second
        assert locale_loader.call_count == 1

    @pytest.mark.asyncio
    async def test_concurrent_calls_load_once(self, request_scope):
        calls = []
        release = asyncio.Event()

        async def slow_loader(locale):
            calls.append(locale)
            await release.wait()
            return make_messages(locale)

        store = IntlCacheStore(request_scope)
        store.initialize(make_config(loader=slow_loader))
        loader = NamespaceLoader(store)

        tasks = [
            asyncio.create_task(loader.ensure_locale_loaded("en")) for _ in range(5)
        ]
        await asyncio.sleep(0)
        release.set()
        results = await asyncio.gather(*tasks)

        assert calls == ["en"]
        assert all(result is results[0] for result in results)
        assert store.get().pending_loads == {}

    @pytest.mark.asyncio
    async def test_accepts_default_export_wrapper(self, request_scope):
        store = IntlCacheStore(request_scope)
        store.initialize(
            make_config(loader=lambda locale: {"default": make_messages(locale)})
        )

        messages = await NamespaceLoader(store).ensure_locale_loaded("fr")

        assert messages["home"]["title"] == "Bienvenue"

    @pytest.mark.asyncio
    async def test_loader_failure_raises_and_is_not_cached(self, request_scope):
        loader = MagicMock(side_effect=[OSError("disk unavailable"), make_messages("en")])
        store = IntlCacheStore(request_scope)
        store.initialize(make_config(loader=loader))
        namespace_loader = NamespaceLoader(store)

        with pytest.raises(LocaleLoadError) as exc_info:
            await namespace_loader.ensure_locale_loaded("en")

        assert exc_info.value.locale == "en"
        assert "disk unavailable" in str(exc_info.value)
        assert "en" not in store.get().raw
        assert store.get().pending_loads == {}

        # A later call retries the load.
        messages = await namespace_loader.ensure_locale_loaded("en")
        assert messages["home"]["title"] == "Welcome"
        assert loader.call_count == 2

    @pytest.mark.asyncio
    async def test_non_mapping_result_raises(self, request_scope):
        store = IntlCacheStore(request_scope)
        store.initialize(make_config(loader=lambda locale: ["not", "a", "tree"]))

        with pytest.raises(LocaleLoadError):
            await NamespaceLoader(store).ensure_locale_loaded("en")

    @pytest.mark.asyncio
    async def test_unsupported_locale_does_not_call_loader(self, namespace_loader, locale_loader):
        with pytest.raises(LocaleLoadError):
            await namespace_loader.ensure_locale_loaded("de")
        locale_loader.assert_not_called()

    @pytest.mark.asyncio
    async def test_uninitialized_store_raises(self, request_scope):
        with pytest.raises(NotInitializedError):
            await NamespaceLoader(IntlCacheStore(request_scope)).ensure_locale_loaded("en")

    def test_require_locale_without_load_raises(self, namespace_loader, locale_loader):
        with pytest.raises(LocaleNotLoadedError) as exc_info:
            namespace_loader.require_locale("en")
        assert exc_info.value.locale == "en"
        locale_loader.assert_not_called()

    @pytest.mark.asyncio
    async def test_require_locale_after_load(self, namespace_loader):
        await namespace_loader.ensure_locale_loaded("en")
        assert namespace_loader.require_locale("en")["home"]["title"] == "Welcome"


@pytest.mark.unit
class TestCompiledMessageLoader:
    """Tests for CompiledMessageLoader."""

    def test_missing_directory_raises(self, tmp_path):
        with pytest.raises(ValueError):
            CompiledMessageLoader(tmp_path / "missing")

    def test_reads_json(self, tmp_path):
        (tmp_path / "en.json").write_text(json.dumps(make_messages("en")), encoding="utf-8")

        assert CompiledMessageLoader(tmp_path)("en") == make_messages("en")

    def test_reads_yaml_fallback(self, tmp_path):
        with open(tmp_path / "fr.yml", "w", encoding="utf-8") as f:
            yaml.dump(make_messages("fr"), f, allow_unicode=True)

        assert CompiledMessageLoader(tmp_path)("fr")["home"]["title"] == "Bienvenue"

    def test_missing_locale_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            CompiledMessageLoader(tmp_path)("de")

    def test_invalid_json_raises(self, tmp_path):
        (tmp_path / "en.json").write_text("{not json", encoding="utf-8")
        with pytest.raises(ValueError):
            CompiledMessageLoader(tmp_path)("en")

    def test_non_mapping_raises(self, tmp_path):
        (tmp_path / "en.json").write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ValueError):
            CompiledMessageLoader(tmp_path)("en")


@pytest.mark.unit
class TestDocumentRefLoader:
    """Tests for DocumentRefLoader."""

    def test_reads_referenced_document(self, tmp_path):
        (tmp_path / "en" / "home").mkdir(parents=True)
        (tmp_path / "en" / "home" / "Hero.mdx").write_text("# Hero", encoding="utf-8")

        loader = DocumentRefLoader(tmp_path)

        assert loader(make_ref_value("en/home/Hero.mdx")) == "# Hero"

    def test_missing_document_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            DocumentRefLoader(tmp_path)(make_ref_value("en/missing.mdx"))

    def test_path_escape_raises(self, tmp_path):
        with pytest.raises(ValueError):
            DocumentRefLoader(tmp_path / "assets")(make_ref_value("../secret.mdx"))
