"""
Content lookup: read-only access to the site's published content.

Handlers and the delivery facade only see the ContentLookup interface.
Two implementations ship here:

- InMemoryContentLookup for tests, fixtures and local runs
- WordPressContentLookup, which talks to a WordPress-compatible REST API

Every finder returns a ContentEntity or None. Not-found is never an
exception; an unreachable or misbehaving store raises
ContentLookupUnavailable.
"""

import html
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional

import httpx
from pydantic import BaseModel, Field

from .cleaning import strip_tags
from .exceptions import CommerceUnavailable, ContentLookupUnavailable

logger = logging.getLogger("voice-command.lookup")

PUBLISHED = "publish"


class ContentType(str, Enum):
    PAGE = "page"
    POST = "post"
    PRODUCT = "product"


class ContentEntity(BaseModel):
    """A single piece of site content."""

    id: int
    content_type: ContentType
    title: str
    content: str = ""
    url: str = ""
    slug: str = ""
    status: str = PUBLISHED
    published_at: datetime = Field(default_factory=lambda: datetime(1970, 1, 1))

    @property
    def is_published(self) -> bool:
        return self.status == PUBLISHED


def _same_title(a: str, b: str) -> bool:
    return a.strip().casefold() == b.strip().casefold()


class ContentLookup(ABC):
    """Read-only content capability consumed by handlers."""

    @abstractmethod
    async def find_page_by_title(self, title: str) -> Optional[ContentEntity]:
        """Published page whose title equals `title` (case-insensitive).

        When several pages share the title, the lowest id wins.
        """

    @abstractmethod
    async def find_latest_post(self) -> Optional[ContentEntity]:
        """Most recently published post of the `post` type."""

    @abstractmethod
    async def find_page_by_slug(self, slug: str) -> Optional[ContentEntity]:
        """Published page with the given slug."""

    @abstractmethod
    async def find_product_by_slug(self, slug: str) -> Optional[ContentEntity]:
        """Published product with the given slug.

        Raises CommerceUnavailable when the site has no product catalogue.
        """


class InMemoryContentLookup(ContentLookup):
    """Content lookup over a fixed list of entities."""

    def __init__(self, entities: Iterable[ContentEntity] = (), commerce_enabled: bool = False) -> None:
        self._entities: List[ContentEntity] = list(entities)
        self.commerce_enabled = commerce_enabled

    def add(self, entity: ContentEntity) -> None:
        self._entities.append(entity)

    def _published(self, content_type: ContentType) -> List[ContentEntity]:
        return [e for e in self._entities if e.content_type == content_type and e.is_published]

    async def find_page_by_title(self, title: str) -> Optional[ContentEntity]:
        matches = [p for p in self._published(ContentType.PAGE) if _same_title(p.title, title)]
        if not matches:
            return None
        return min(matches, key=lambda p: p.id)

    async def find_latest_post(self) -> Optional[ContentEntity]:
        posts = self._published(ContentType.POST)
        if not posts:
            return None
        return max(posts, key=lambda p: (p.published_at, p.id))

    async def find_page_by_slug(self, slug: str) -> Optional[ContentEntity]:
        for page in sorted(self._published(ContentType.PAGE), key=lambda p: p.id):
            if page.slug == slug:
                return page
        return None

    async def find_product_by_slug(self, slug: str) -> Optional[ContentEntity]:
        if not self.commerce_enabled:
            raise CommerceUnavailable()
        for product in sorted(self._published(ContentType.PRODUCT), key=lambda p: p.id):
            if product.slug == slug:
                return product
        return None


# ---------------------------------------------------------------------------
# WordPress REST implementation
# ---------------------------------------------------------------------------

def _rendered(field: Any) -> str:
    """WordPress wraps title/content as {"rendered": "..."}."""
    if isinstance(field, dict):
        return field.get("rendered", "") or ""
    return field or ""


def _parse_date(value: Optional[str]) -> datetime:
    if not value:
        return datetime(1970, 1, 1)
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        logger.warning(f"Unparseable date from content store: {value!r}")
        return datetime(1970, 1, 1)


def _entity_from_wp(item: Dict[str, Any], content_type: ContentType) -> ContentEntity:
    return ContentEntity(
        id=int(item["id"]),
        content_type=content_type,
        title=html.unescape(strip_tags(_rendered(item.get("title")))).strip(),
        content=_rendered(item.get("content")),
        url=item.get("link", ""),
        slug=item.get("slug", ""),
        status=item.get("status", PUBLISHED),
        published_at=_parse_date(item.get("date")),
    )


def _entity_from_store_product(item: Dict[str, Any]) -> ContentEntity:
    # The Store API only lists purchasable, published products
    return ContentEntity(
        id=int(item["id"]),
        content_type=ContentType.PRODUCT,
        title=html.unescape(strip_tags(item.get("name", ""))).strip(),
        content=item.get("description", "") or "",
        url=item.get("permalink", ""),
        slug=item.get("slug", ""),
    )


def _build_entities(items: List[Any], build: Callable[[Dict[str, Any]], ContentEntity]) -> List[ContentEntity]:
    try:
        return [build(item) for item in items]
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        logger.error(f"Malformed item from content store: {exc!r}")
        raise ContentLookupUnavailable("Content store returned a malformed item") from exc


class WordPressContentLookup(ContentLookup):
    """Content lookup backed by the WordPress REST API (wp/v2 + WooCommerce Store API)."""

    PAGES_PATH = "/wp-json/wp/v2/pages"
    POSTS_PATH = "/wp-json/wp/v2/posts"
    PRODUCTS_PATH = "/wp-json/wc/store/v1/products"

    def __init__(self, site_url: str, timeout: float = 10.0) -> None:
        self.site_url = site_url.rstrip("/")
        self.timeout = timeout

    async def _get_list(self, path: str, params: Dict[str, Any], missing_route: Optional[Exception] = None) -> List[Dict[str, Any]]:
        url = f"{self.site_url}{path}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.get(url, params=params)
        except httpx.HTTPError as exc:
            logger.error(f"Content store unreachable at {url}: {exc}")
            raise ContentLookupUnavailable(f"Cannot reach content store at {url}") from exc

        if resp.status_code == 404 and missing_route is not None:
            raise missing_route

        if resp.status_code != 200:
            logger.error(f"Content store returned HTTP {resp.status_code} for {url}")
            raise ContentLookupUnavailable(f"Content store returned HTTP {resp.status_code}")

        try:
            data = resp.json()
        except ValueError as exc:
            raise ContentLookupUnavailable("Content store returned non-JSON response") from exc

        if not isinstance(data, list):
            raise ContentLookupUnavailable("Content store returned an unexpected payload")
        return data

    async def find_page_by_title(self, title: str) -> Optional[ContentEntity]:
        items = await self._get_list(
            self.PAGES_PATH,
            {"search": title, "per_page": 100, "orderby": "id", "order": "asc"},
        )
        pages = _build_entities(items, lambda i: _entity_from_wp(i, ContentType.PAGE))
        matches = [p for p in pages if p.is_published and _same_title(p.title, title)]
        if not matches:
            return None
        if len(matches) > 1:
            logger.debug(f"{len(matches)} pages titled {title!r}, using id {min(p.id for p in matches)}")
        return min(matches, key=lambda p: p.id)

    async def find_latest_post(self) -> Optional[ContentEntity]:
        items = await self._get_list(
            self.POSTS_PATH,
            {"per_page": 1, "orderby": "date", "order": "desc", "status": PUBLISHED},
        )
        if not items:
            return None
        return _build_entities(items[:1], lambda i: _entity_from_wp(i, ContentType.POST))[0]

    async def find_page_by_slug(self, slug: str) -> Optional[ContentEntity]:
        items = await self._get_list(self.PAGES_PATH, {"slug": slug})
        for page in _build_entities(items, lambda i: _entity_from_wp(i, ContentType.PAGE)):
            if page.is_published:
                return page
        return None

    async def find_product_by_slug(self, slug: str) -> Optional[ContentEntity]:
        items = await self._get_list(
            self.PRODUCTS_PATH,
            {"slug": slug},
            missing_route=CommerceUnavailable(),
        )
        if not items:
            return None
        return _build_entities(items[:1], _entity_from_store_product)[0]
