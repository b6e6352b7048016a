"""
Navigation handler ("go to About", "open contact us").
"""

import logging
from typing import Sequence

from ..cleaning import sanitize_text
from ..models import ActionResult, ActionType
from ..registry import HandlerContext

logger = logging.getLogger("voice-command.handlers.navigate")

# go_to pattern: group 1 is the verb, group 2 the page title
TARGET_GROUP = 2


async def handle_navigate(captures: Sequence[str], context: HandlerContext) -> ActionResult:
    target = sanitize_text(captures[TARGET_GROUP]) if len(captures) > TARGET_GROUP else ""
    page = await context.lookup.find_page_by_title(target)
    if page is None:
        logger.info(f"No published page titled '{target}'")
        return ActionResult.failure(f'Page "{target}" not found.')

    return ActionResult(
        success=True,
        action=ActionType.NAVIGATE,
        url=page.url,
        message=f"Navigating to {target}.",
    )
