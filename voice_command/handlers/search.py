"""
Site search handler ("search for vegan recipes").

Always succeeds: building a search URL cannot fail and no existence check
is made against the content store.
"""

from typing import Sequence
from urllib.parse import quote, urlencode

from ..cleaning import sanitize_text
from ..models import ActionResult, ActionType
from ..registry import HandlerContext

QUERY_GROUP = 1
SEARCH_PARAM = "s"


def search_url(site_url: str, query: str) -> str:
    """Site search URL with `query` bound to the `s` parameter."""
    return f"{site_url.rstrip('/')}/?{urlencode({SEARCH_PARAM: query}, quote_via=quote)}"


async def handle_search(captures: Sequence[str], context: HandlerContext) -> ActionResult:
    query = sanitize_text(captures[QUERY_GROUP]) if len(captures) > QUERY_GROUP else ""
    return ActionResult(
        success=True,
        action=ActionType.SEARCH,
        url=search_url(context.site_url, query),
        message=f'Searching for "{query}".',
    )
