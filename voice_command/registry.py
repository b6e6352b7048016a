"""
Intent registry: the ordered set of intent definitions a processor matches against.

Order is evaluation priority. Registering a definition whose key already
exists replaces the earlier definition in its original position, so
external collaborators can override a default without reordering.
"""

import logging
import re
from typing import Any, Awaitable, Callable, Dict, Iterable, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, field_validator

from .exceptions import IntentConfigurationError
from .lookup import ContentLookup
from .models import ActionResult, IntentKind

logger = logging.getLogger("voice-command.registry")


class HandlerContext(BaseModel):
    """Collaborators a handler may consult."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    lookup: ContentLookup
    site_url: str


HandlerOutput = Union[ActionResult, Dict[str, Any]]

# Handlers may be plain functions or coroutines
HandlerFunc = Callable[[Sequence[str], HandlerContext], Union[HandlerOutput, Awaitable[HandlerOutput]]]


class IntentDefinition(BaseModel):
    """A pattern plus the handler to run when it matches."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    key: str
    pattern: re.Pattern
    handler: HandlerFunc
    kind: IntentKind = IntentKind.CUSTOM

    @field_validator("key")
    @classmethod
    def _key_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("intent key must not be blank")
        return value

    @field_validator("pattern", mode="before")
    @classmethod
    def _compile(cls, value: Any) -> re.Pattern:
        if isinstance(value, re.Pattern):
            if not value.flags & re.IGNORECASE:
                return re.compile(value.pattern, value.flags | re.IGNORECASE)
            return value
        if not isinstance(value, str):
            raise ValueError(f"pattern must be a string or compiled regex, got {type(value).__name__}")
        try:
            return re.compile(value, re.IGNORECASE)
        except re.error as e:
            raise ValueError(f"invalid pattern {value!r}: {e}") from e


def define(
    key: str,
    pattern: Union[str, re.Pattern],
    handler: HandlerFunc,
    kind: IntentKind = IntentKind.CUSTOM,
) -> IntentDefinition:
    """Build an IntentDefinition, turning validation failures into IntentConfigurationError."""
    try:
        return IntentDefinition(key=key, pattern=pattern, handler=handler, kind=kind)
    except ValueError as e:
        # pydantic.ValidationError subclasses ValueError
        raise IntentConfigurationError(f"Invalid intent definition '{key}': {e}") from e


class IntentRegistry:
    """Ordered, key-unique collection of intent definitions."""

    def __init__(self, definitions: Iterable[IntentDefinition] = ()) -> None:
        self._definitions: Dict[str, IntentDefinition] = {}
        for definition in definitions:
            self.register(definition)

    @classmethod
    def with_defaults(cls, extra: Iterable[IntentDefinition] = ()) -> "IntentRegistry":
        """Registry holding go_to, search and read_post, followed by `extra`."""
        from .handlers import default_intents

        registry = cls(default_intents())
        for definition in extra:
            registry.register(definition)
        return registry

    def register(self, definition: IntentDefinition) -> None:
        if not isinstance(definition, IntentDefinition):
            raise IntentConfigurationError(f"Expected IntentDefinition, got {type(definition).__name__}")
        replaced = definition.key in self._definitions
        self._definitions[definition.key] = definition
        if replaced:
            logger.debug(f"Replaced intent '{definition.key}'")
        else:
            logger.debug(f"Registered intent '{definition.key}'")

    def add(
        self,
        key: str,
        pattern: Union[str, re.Pattern],
        handler: HandlerFunc,
        kind: IntentKind = IntentKind.CUSTOM,
    ) -> IntentDefinition:
        """Build and register a definition in one step."""
        definition = define(key, pattern, handler, kind)
        self.register(definition)
        return definition

    def get(self, key: str) -> Optional[IntentDefinition]:
        return self._definitions.get(key)

    def collect(self) -> Tuple[IntentDefinition, ...]:
        """Immutable snapshot in evaluation order."""
        return tuple(self._definitions.values())

    def keys(self) -> Tuple[str, ...]:
        return tuple(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)

    def __contains__(self, key: object) -> bool:
        return key in self._definitions
