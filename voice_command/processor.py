"""
Command processor: the single entry point of the interpreter.

Sanitizes the utterance, matches it against a registry snapshot, runs the
matched handler and returns an ActionResult. Successful results are
reported to the analytics sink, whose failures never reach the caller.
"""

import inspect
import logging
import time
from typing import Any, Dict, Optional

from pydantic import ValidationError

from .analytics import AnalyticsSink
from .cleaning import sanitize_text
from .exceptions import ContentLookupUnavailable
from .lookup import ContentLookup
from .matcher import IntentMatch, match
from .models import HANDLER_FAILED_MESSAGE, NO_COMMAND_MESSAGE, NOT_RECOGNIZED_MESSAGE, ActionResult
from .registry import HandlerContext, IntentRegistry

logger = logging.getLogger("voice-command")


class CommandProcessor:
    """Matcher -> handler -> ActionResult orchestration."""

    def __init__(
        self,
        registry: IntentRegistry,
        lookup: ContentLookup,
        site_url: str,
        analytics: Optional[AnalyticsSink] = None,
    ) -> None:
        self.registry = registry
        self.context = HandlerContext(lookup=lookup, site_url=site_url)
        self.analytics = analytics

    async def process(self, text: Optional[str]) -> ActionResult:
        """
        Interpret one utterance.

        Raises ContentLookupUnavailable when the content store cannot be
        reached; every other outcome is returned as an ActionResult.
        """
        start = time.monotonic()
        command = sanitize_text(text or "")

        if not command:
            return ActionResult.failure(NO_COMMAND_MESSAGE)

        found = match(command, self.registry.collect())
        if found is None:
            logger.info(f"Command not recognized: '{command[:80]}'")
            return ActionResult.failure(NOT_RECOGNIZED_MESSAGE)

        response = await self._run_handler(found)

        if response.success:
            self._notify(command, response, time.monotonic() - start)
        return response

    async def _run_handler(self, found: IntentMatch) -> ActionResult:
        key = found.key
        try:
            output = found.definition.handler(found.captures, self.context)
            if inspect.isawaitable(output):
                output = await output
            return self._merge(output)
        except ContentLookupUnavailable:
            raise
        except Exception as e:
            logger.error(f"Handler error for intent '{key}': {e}", exc_info=True)
            return ActionResult.failure(HANDLER_FAILED_MESSAGE)

    @staticmethod
    def _merge(output: Any) -> ActionResult:
        """Lay the handler's fields over the not-recognized default."""
        if isinstance(output, ActionResult):
            fields: Dict[str, Any] = output.model_dump(exclude_unset=True)
        elif isinstance(output, dict):
            fields = dict(output)
        else:
            raise TypeError(f"handler returned {type(output).__name__}, expected ActionResult or dict")

        base = ActionResult.failure(NOT_RECOGNIZED_MESSAGE).model_dump()
        base.update(fields)
        try:
            return ActionResult.model_validate(base)
        except ValidationError as e:
            raise TypeError(f"handler returned an invalid result: {e}") from e

    def _notify(self, command: str, response: ActionResult, duration: float) -> None:
        if self.analytics is None:
            return
        try:
            self.analytics.track_command(command, response, duration)
        except Exception as e:
            logger.warning(f"Analytics tracking failed: {e}")
