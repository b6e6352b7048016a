"""
Read-only content delivery for smart-speaker style integrations.

Serves {title, content} for the latest post, a page by slug, or a product
by slug. Content goes through the same speech filter as the read handler.
Responses are cached per resource for `cache_ttl` seconds (default one
hour). Missing or unpublished resources raise ContentNotFound.
"""

import hashlib
import logging
import re
import time
from typing import Dict, Optional, Tuple

from .cleaning import clean_for_speech, sanitize_text
from .exceptions import ContentNotFound, DeliveryDisabled
from .lookup import ContentEntity, ContentLookup
from .models import SpeechContent

logger = logging.getLogger("voice-command.delivery")

DEFAULT_CACHE_TTL = 3600
SLUG_RE = re.compile(r"^[a-zA-Z0-9-]+$")


def _slug_key(prefix: str, slug: str) -> str:
    return f"{prefix}_{hashlib.md5(slug.encode('utf-8')).hexdigest()}"


def to_speech(entity: ContentEntity) -> SpeechContent:
    return SpeechContent(title=entity.title, content=clean_for_speech(entity.content))


class ContentDelivery:
    """Cached facade over a ContentLookup."""

    def __init__(self, lookup: ContentLookup, enabled: bool = True, cache_ttl: int = DEFAULT_CACHE_TTL) -> None:
        self.lookup = lookup
        self.enabled = enabled
        self.cache_ttl = cache_ttl
        self._cache: Dict[str, Tuple[float, SpeechContent]] = {}

    # -----------------------------------------------------------------------
    # Cache
    # -----------------------------------------------------------------------

    def clear_cache(self) -> None:
        self._cache.clear()

    def _get_cached(self, key: str) -> Optional[SpeechContent]:
        entry = self._cache.get(key)
        if entry is None:
            return None
        ts, content = entry
        if time.time() - ts > self.cache_ttl:
            del self._cache[key]
            return None
        return content

    def _set_cached(self, key: str, content: SpeechContent) -> None:
        self._cache[key] = (time.time(), content)

    # -----------------------------------------------------------------------
    # Endpoints
    # -----------------------------------------------------------------------

    def _check_enabled(self) -> None:
        if not self.enabled:
            raise DeliveryDisabled()

    @staticmethod
    def _clean_slug(slug: str, not_found: str) -> str:
        slug = sanitize_text(slug)
        if not SLUG_RE.match(slug):
            raise ContentNotFound(not_found)
        return slug

    async def latest_post(self) -> SpeechContent:
        self._check_enabled()
        key = "latest_post"
        cached = self._get_cached(key)
        if cached is not None:
            logger.debug("Latest post cache hit")
            return cached

        post = await self.lookup.find_latest_post()
        if post is None:
            raise ContentNotFound("No posts found.")

        content = to_speech(post)
        self._set_cached(key, content)
        return content

    async def page(self, slug: str) -> SpeechContent:
        self._check_enabled()
        slug = self._clean_slug(slug, "Page not found.")
        key = _slug_key("page", slug)
        cached = self._get_cached(key)
        if cached is not None:
            return cached

        page = await self.lookup.find_page_by_slug(slug)
        if page is None or not page.is_published:
            raise ContentNotFound("Page not found.")

        content = to_speech(page)
        self._set_cached(key, content)
        return content

    async def product(self, slug: str) -> SpeechContent:
        """Raises CommerceUnavailable (from the lookup) when there is no catalogue."""
        self._check_enabled()
        slug = self._clean_slug(slug, "Product not found.")
        key = _slug_key("product", slug)
        cached = self._get_cached(key)
        if cached is not None:
            return cached

        product = await self.lookup.find_product_by_slug(slug)
        if product is None or not product.is_published:
            raise ContentNotFound("Product not found.")

        content = to_speech(product)
        self._set_cached(key, content)
        return content
