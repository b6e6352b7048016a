"""
Built-in intent handlers.

default_intents() returns the stock definitions in priority order:
go_to, search, read_post.
"""

from typing import List

from ..models import IntentKind
from ..registry import IntentDefinition, define
from .navigate import handle_navigate
from .read import handle_read_post
from .search import handle_search

GO_TO_PATTERN = r"^(go to|navigate to|open) (.+)$"
SEARCH_PATTERN = r"^search for (.+)$"
READ_POST_PATTERN = r"^read (latest|recent)? ?(post|article)$"


def default_intents() -> List[IntentDefinition]:
    """Stock intent definitions, highest priority first."""
    return [
        define("go_to", GO_TO_PATTERN, handle_navigate, IntentKind.NAVIGATE),
        define("search", SEARCH_PATTERN, handle_search, IntentKind.SEARCH),
        define("read_post", READ_POST_PATTERN, handle_read_post, IntentKind.READ),
    ]


__all__ = [
    "default_intents",
    "handle_navigate",
    "handle_search",
    "handle_read_post",
    "GO_TO_PATTERN",
    "SEARCH_PATTERN",
    "READ_POST_PATTERN",
]
