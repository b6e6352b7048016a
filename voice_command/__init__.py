"""
Voice command interpreter.

Turns a short transcribed utterance ("go to About", "search for vegan
recipes", "read latest post") into a structured action plus a speakable
message.

Usage:
    from voice_command import VoiceCommandInterpreter

    interpreter = VoiceCommandInterpreter()
    result = await interpreter.process("search for vegan recipes")
    print(result.url, result.message)
"""

from typing import Iterable, Optional

from .analytics import AnalyticsTracker
from .cleaning import clean_for_speech, sanitize_text
from .config import VoiceSettings, get_settings
from .delivery import ContentDelivery
from .exceptions import (
    CommerceUnavailable,
    ContentLookupUnavailable,
    ContentNotFound,
    DeliveryDisabled,
    IntentConfigurationError,
    VoiceCommandError,
)
from .lookup import ContentEntity, ContentLookup, ContentType, InMemoryContentLookup, WordPressContentLookup
from .matcher import IntentMatch, match
from .models import ActionResult, ActionType, CommandRequest, IntentKind, SpeechContent
from .processor import CommandProcessor
from .registry import HandlerContext, IntentDefinition, IntentRegistry, define


class VoiceCommandInterpreter:
    """Wires settings, content lookup, registry, analytics and delivery together."""

    def __init__(
        self,
        settings: Optional[VoiceSettings] = None,
        lookup: Optional[ContentLookup] = None,
        extra_intents: Iterable[IntentDefinition] = (),
    ) -> None:
        self.settings = settings or get_settings()
        self.lookup = lookup or WordPressContentLookup(
            self.settings.site_url, timeout=self.settings.lookup_timeout
        )
        self.registry = IntentRegistry.with_defaults(extra_intents)
        self.analytics = AnalyticsTracker(
            enabled=self.settings.analytics_enabled,
            retention_days=self.settings.analytics_retention_days,
        )
        self.processor = CommandProcessor(
            self.registry, self.lookup, self.settings.site_url, analytics=self.analytics
        )
        self.delivery = ContentDelivery(
            self.lookup,
            enabled=self.settings.smart_speaker_enabled,
            cache_ttl=self.settings.content_cache_ttl,
        )

    async def process(self, text: str) -> ActionResult:
        """Process an utterance and return the result."""
        return await self.processor.process(text)

    async def handle(self, request: CommandRequest) -> ActionResult:
        return await self.processor.process(request.text)

    def match(self, text: str) -> Optional[IntentMatch]:
        """Match text without running a handler (useful for testing)."""
        return match(sanitize_text(text), self.registry.collect())


__all__ = [
    "VoiceCommandInterpreter",
    "VoiceSettings",
    "get_settings",
    "ActionResult",
    "ActionType",
    "CommandRequest",
    "IntentKind",
    "SpeechContent",
    "CommandProcessor",
    "IntentDefinition",
    "IntentRegistry",
    "HandlerContext",
    "IntentMatch",
    "define",
    "match",
    "ContentEntity",
    "ContentLookup",
    "ContentType",
    "InMemoryContentLookup",
    "WordPressContentLookup",
    "ContentDelivery",
    "AnalyticsTracker",
    "clean_for_speech",
    "sanitize_text",
    "VoiceCommandError",
    "IntentConfigurationError",
    "ContentLookupUnavailable",
    "ContentNotFound",
    "CommerceUnavailable",
    "DeliveryDisabled",
]
