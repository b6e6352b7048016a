"""
First-match intent matcher.

Walks definitions in registry order and stops at the first pattern that
matches. Captures use the preg_match layout: index 0 is the whole match,
index n is group n, and groups that did not participate are "".
"""

import logging
from typing import Optional, Sequence, Tuple

from pydantic import BaseModel

from .registry import IntentDefinition

logger = logging.getLogger("voice-command.matcher")


class IntentMatch(BaseModel):
    """A matched definition and the text it captured."""

    definition: IntentDefinition
    captures: Tuple[str, ...]

    @property
    def key(self) -> str:
        return self.definition.key


def match(text: str, definitions: Sequence[IntentDefinition]) -> Optional[IntentMatch]:
    """Return the first definition matching `text`, or None when nothing matches."""
    for definition in definitions:
        m = definition.pattern.search(text)
        if m is None:
            continue
        captures = (m.group(0),) + tuple(g if g is not None else "" for g in m.groups())
        logger.debug(f"Matched intent '{definition.key}' with {len(captures) - 1} group(s)")
        return IntentMatch(definition=definition, captures=captures)

    logger.debug("No intent matched")
    return None
