"""
Read-content handler ("read latest post", "read article").

Only the `post` content type is considered.
"""

import logging
from typing import Sequence

from ..cleaning import clean_for_speech
from ..models import ActionResult, ActionType
from ..registry import HandlerContext

logger = logging.getLogger("voice-command.handlers.read")


async def handle_read_post(captures: Sequence[str], context: HandlerContext) -> ActionResult:
    post = await context.lookup.find_latest_post()
    if post is None:
        return ActionResult.failure("No posts found.")

    logger.debug(f"Reading post {post.id}")
    return ActionResult(
        success=True,
        action=ActionType.READ,
        title=post.title,
        content=clean_for_speech(post.content),
        message="Reading the latest post.",
    )
