"""Tests for infrastructure.intl.models module."""

import types
from unittest.mock import AsyncMock, MagicMock

import pytest

from infrastructure.intl import (
    LazyComponent,
    MessageFormatError,
    MissingParameterError,
    MissingRefLoaderError,
    ParameterizedString,
    RefValue,
)
from infrastructure.intl.models import (
    ListNode,
    ObjectNode,
    RefLeaf,
    ScalarLeaf,
    StringLeaf,
    parse_node,
    to_raw,
    unwrap_default,
)
from tests.factories.intl import make_ref, make_ref_value


@pytest.mark.unit
class TestParameterizedString:
    """Tests for ParameterizedString."""

    def test_substitutes_every_placeholder(self):
        value = ParameterizedString("{count} items for {name}")
        assert value({"count": 3, "name": "Ada"}) == "3 items for Ada"

    def test_substitution_ignores_mapping_order(self):
        value = ParameterizedString("{a}-{b}-{c}")
        forward = value({"a": "1", "b": "2", "c": "3"})
        backward = value({"c": "3", "b": "2", "a": "1"})
        assert forward == backward == "1-2-3"

    def test_repeated_placeholder_substituted_everywhere(self):
        value = ParameterizedString("{name} and {name}")
        assert value({"name": "Ada"}) == "Ada and Ada"

    def test_whitespace_inside_braces_is_trimmed(self):
        value = ParameterizedString("Hello { name }")
        assert value.placeholders == ("name",)
        assert value({"name": "Ada"}) == "Hello Ada"

    def test_missing_parameter_names_placeholder(self):
        value = ParameterizedString("{n} items")
        with pytest.raises(MissingParameterError) as exc_info:
            value({})
        assert exc_info.value.name == "n"
        assert '"n"' in str(exc_info.value)

    def test_missing_parameter_names_first_unsatisfied_in_scan_order(self):
        value = ParameterizedString("{a} {b} {c}")
        with pytest.raises(MissingParameterError) as exc_info:
            value({"a": "1"})
        assert exc_info.value.name == "b"

    def test_duplicate_missing_placeholder_names_first_occurrence(self):
        value = ParameterizedString("{x} then {y} then {x}")
        with pytest.raises(MissingParameterError) as exc_info:
            value({"y": "2"})
        assert exc_info.value.name == "x"

    def test_none_parameter_counts_as_missing(self):
        value = ParameterizedString("Hello {name}")
        with pytest.raises(MissingParameterError):
            value({"name": None})

    def test_called_without_params_raises(self):
        with pytest.raises(MissingParameterError):
            ParameterizedString("Hello {name}")()

    def test_non_string_values_are_stringified(self):
        value = ParameterizedString("{n} / {ok}")
        assert value({"n": 2.5, "ok": False}) == "2.5 / False"

    def test_equality_is_by_template(self):
        assert ParameterizedString("Hi {x}") == ParameterizedString("Hi {x}")
        assert ParameterizedString("Hi {x}") != ParameterizedString("Hi {y}")
        assert len({ParameterizedString("Hi {x}"), ParameterizedString("Hi {x}")}) == 1


@pytest.mark.unit
class TestRefValue:
    """Tests for RefValue."""

    def test_from_raw(self):
        ref = RefValue.from_raw({"extension": ".mdx", "kind": "mdx", "path": "/hero"})
        assert ref == make_ref_value("/hero")

    def test_from_raw_accepts_ext_alias(self):
        ref = RefValue.from_raw({"ext": ".md", "kind": "mdx", "path": "/doc"})
        assert ref.extension == ".md"

    def test_from_raw_returns_existing_instance(self):
        ref = make_ref_value()
        assert RefValue.from_raw(ref) is ref

    @pytest.mark.parametrize("value", [None, "hero", {"kind": "mdx"}, {"path": ""}])
    def test_from_raw_rejects_invalid_values(self, value):
        with pytest.raises(MessageFormatError):
            RefValue.from_raw(value)

    def test_to_raw(self):
        assert make_ref_value("/hero").to_raw() == {
            "extension": ".mdx",
            "kind": "mdx",
            "path": "/hero",
        }


@pytest.mark.unit
class TestLazyComponent:
    """Tests for LazyComponent."""

    def test_identity_is_ref_path(self):
        component = LazyComponent(make_ref_value("/hero"))
        assert component.identity == "/hero"

    def test_same_component_across_instances(self):
        bound = LazyComponent(make_ref_value("/hero"), MagicMock())
        unbound = LazyComponent(make_ref_value("/hero"))
        other = LazyComponent(make_ref_value("/other"))

        assert bound is not unbound
        assert bound.same_component(unbound)
        assert not bound.same_component(other)
        assert not bound.same_component("/hero")

    def test_is_bound(self):
        assert LazyComponent(make_ref_value(), MagicMock()).is_bound
        assert not LazyComponent(make_ref_value()).is_bound

    def test_construction_does_not_call_loader(self):
        loader = MagicMock()
        LazyComponent(make_ref_value(), loader)
        loader.assert_not_called()

    @pytest.mark.asyncio
    async def test_call_loads_and_instantiates_default_export(self):
        loader = MagicMock(return_value={"default": lambda: "<Hero />"})
        ref = make_ref_value("/hero")

        result = await LazyComponent(ref, loader)()

        assert result == "<Hero />"
        loader.assert_called_once_with(ref)

    @pytest.mark.asyncio
    async def test_call_awaits_async_loader_and_component(self):
        async def render():
            return "<Async />"

        module = types.ModuleType("hero")
        module.default = render
        loader = AsyncMock(return_value=module)

        result = await LazyComponent(make_ref_value(), loader)()

        assert result == "<Async />"
        loader.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_call_returns_non_callable_result_as_is(self):
        loader = MagicMock(return_value="# Hero")
        assert await LazyComponent(make_ref_value(), loader)() == "# Hero"

    @pytest.mark.asyncio
    async def test_explicit_loader_takes_precedence(self):
        bound = MagicMock(return_value="bound")
        explicit = MagicMock(return_value="explicit")

        result = await LazyComponent(make_ref_value(), bound)(explicit)

        assert result == "explicit"
        bound.assert_not_called()

    @pytest.mark.asyncio
    async def test_unbound_call_without_loader_raises(self):
        with pytest.raises(MissingRefLoaderError) as exc_info:
            await LazyComponent(make_ref_value("/hero"))()
        assert exc_info.value.path == "/hero"


@pytest.mark.unit
class TestUnwrapDefault:
    """Tests for unwrap_default()."""

    def test_module_with_default(self):
        module = types.ModuleType("messages")
        module.default = {"home": {}}
        assert unwrap_default(module) == {"home": {}}

    def test_mapping_with_only_default(self):
        assert unwrap_default({"default": {"a": "b"}}) == {"a": "b"}

    def test_mapping_with_other_keys_is_unchanged(self):
        value = {"default": "x", "other": "y"}
        assert unwrap_default(value) is value

    def test_plain_value_is_unchanged(self):
        assert unwrap_default("text") == "text"

    def test_object_with_default_attribute(self):
        exports = types.SimpleNamespace(default="<Hero />", other="x")
        assert unwrap_default(exports) == "<Hero />"


@pytest.mark.unit
class TestParseNode:
    """Tests for parse_node() and to_raw()."""

    def test_parses_every_variant(self):
        raw = {
            "title": "Welcome",
            "count": 3,
            "hero": make_ref("/hero"),
            "links": ["a", None],
        }

        node = parse_node(raw, "$ref")

        assert node == ObjectNode(
            {
                "title": StringLeaf("Welcome"),
                "count": ScalarLeaf(3),
                "hero": RefLeaf(make_ref_value("/hero")),
                "links": ListNode((StringLeaf("a"), ScalarLeaf(None))),
            }
        )

    def test_read_only_mapping_parses_as_object(self):
        raw = types.MappingProxyType(
            {"title": "Welcome", "hero": types.MappingProxyType(make_ref("/hero"))}
        )

        assert parse_node(raw, "$ref") == ObjectNode(
            {"title": StringLeaf("Welcome"), "hero": RefLeaf(make_ref_value("/hero"))}
        )
        assert to_raw(raw, "$ref") == {"title": "Welcome", "hero": make_ref("/hero")}

    def test_ref_leaf_is_terminal(self):
        raw = {"$ref": {"extension": ".mdx", "kind": "mdx", "path": "/hero", "nested": "{x}"}}
        assert parse_node(raw, "$ref") == RefLeaf(make_ref_value("/hero"))

    def test_custom_ref_prop(self):
        raw = {"@doc": make_ref_value("/doc").to_raw()}
        assert parse_node(raw, "@doc") == RefLeaf(make_ref_value("/doc"))
        assert isinstance(parse_node(raw, "$ref"), ObjectNode)

    def test_resolved_values_parse_back_to_leaves(self):
        component = LazyComponent(make_ref_value("/hero"), MagicMock())
        assert parse_node(ParameterizedString("Hi {x}"), "$ref") == StringLeaf("Hi {x}")
        assert parse_node(component, "$ref") == RefLeaf(make_ref_value("/hero"))

    def test_to_raw_restores_serializable_tree(self):
        resolved = {
            "greeting": ParameterizedString("Hello {name}"),
            "hero": LazyComponent(make_ref_value("/hero"), MagicMock()),
            "links": ["About", ParameterizedString("Contact {team}")],
            "visible": True,
        }

        assert to_raw(resolved, "$ref") == {
            "greeting": "Hello {name}",
            "hero": make_ref("/hero"),
            "links": ["About", "Contact {team}"],
            "visible": True,
        }
