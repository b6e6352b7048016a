"""
Tests for the intent registry.

Covers default ordering, registration, key override semantics and
configuration errors for malformed patterns.
"""

import re

import pytest

from voice_command.exceptions import IntentConfigurationError
from voice_command.models import ActionResult, IntentKind
from voice_command.registry import IntentDefinition, IntentRegistry, define


@pytest.fixture
def mock_handler():
    """Create a simple handler."""

    async def handler(captures, context):
        return ActionResult.failure(f"mock result: {captures}")

    return handler


class TestDefaults:
    """Test the stock intent set."""

    def test_default_order(self):
        registry = IntentRegistry.with_defaults()
        assert registry.keys() == ("go_to", "search", "read_post")

    def test_default_kinds(self):
        registry = IntentRegistry.with_defaults()
        kinds = [d.kind for d in registry.collect()]
        assert kinds == [IntentKind.NAVIGATE, IntentKind.SEARCH, IntentKind.READ]

    def test_default_patterns_case_insensitive(self):
        for definition in IntentRegistry.with_defaults().collect():
            assert definition.pattern.flags & re.IGNORECASE

    def test_extra_appended_after_defaults(self, mock_handler):
        extra = define("weather", r"^what is the weather$", mock_handler)
        registry = IntentRegistry.with_defaults([extra])
        assert registry.keys() == ("go_to", "search", "read_post", "weather")

    def test_fresh_registry_per_call(self, mock_handler):
        first = IntentRegistry.with_defaults()
        first.add("extra", r"^extra$", mock_handler)
        assert "extra" not in IntentRegistry.with_defaults()


class TestRegistration:
    """Test registration mechanics."""

    def test_register(self, mock_handler):
        registry = IntentRegistry()
        definition = define("ping", r"^ping$", mock_handler)
        registry.register(definition)
        assert registry.get("ping") is definition
        assert len(registry) == 1

    def test_get_unregistered(self):
        assert IntentRegistry().get("nope") is None

    def test_override_keeps_position(self, mock_handler):
        async def other_handler(captures, context):
            return ActionResult.failure("other")

        registry = IntentRegistry.with_defaults()
        registry.add("go_to", r"^take me to (.+)$", other_handler)

        assert registry.keys() == ("go_to", "search", "read_post")
        replacement = registry.get("go_to")
        assert replacement.handler is other_handler
        assert replacement.pattern.pattern == r"^take me to (.+)$"

    def test_last_registration_wins(self, mock_handler):
        registry = IntentRegistry()
        registry.add("go_to", r"^first (.+)$", mock_handler)
        registry.add("go_to", r"^second (.+)$", mock_handler)
        assert len(registry) == 1
        assert registry.get("go_to").pattern.pattern == r"^second (.+)$"

    def test_collect_is_snapshot(self, mock_handler):
        registry = IntentRegistry()
        registry.add("a", r"^a$", mock_handler)
        snapshot = registry.collect()
        registry.add("b", r"^b$", mock_handler)
        assert [d.key for d in snapshot] == ["a"]
        assert isinstance(snapshot, tuple)

    def test_compiled_pattern_gets_ignorecase(self, mock_handler):
        definition = define("x", re.compile(r"^hello$"), mock_handler)
        assert definition.pattern.search("HELLO")


class TestConfigurationErrors:
    """Malformed definitions fail at registration time."""

    def test_malformed_pattern(self, mock_handler):
        with pytest.raises(IntentConfigurationError):
            define("broken", r"^(unclosed", mock_handler)

    def test_malformed_pattern_via_add(self, mock_handler):
        registry = IntentRegistry()
        with pytest.raises(IntentConfigurationError):
            registry.add("broken", r"[a-", mock_handler)
        assert "broken" not in registry

    def test_blank_key(self, mock_handler):
        with pytest.raises(IntentConfigurationError):
            define("  ", r"^x$", mock_handler)

    def test_handler_must_be_callable(self):
        with pytest.raises(IntentConfigurationError):
            define("x", r"^x$", "not callable")

    def test_register_rejects_non_definition(self):
        with pytest.raises(IntentConfigurationError):
            IntentRegistry().register({"key": "x"})

    def test_definition_is_frozen(self, mock_handler):
        definition = define("x", r"^x$", mock_handler)
        with pytest.raises(Exception):
            definition.key = "y"
        assert isinstance(definition, IntentDefinition)
