"""Shared fixtures: an in-memory site with a few pages and posts."""

from datetime import datetime

import pytest

from voice_command.lookup import ContentEntity, ContentType, InMemoryContentLookup

SITE_URL = "https://example.test"


def _page(id, title, slug=None, status="publish", content=""):
    return ContentEntity(
        id=id,
        content_type=ContentType.PAGE,
        title=title,
        content=content,
        url=f"{SITE_URL}/{slug or title.lower().replace(' ', '-')}/",
        slug=slug or title.lower().replace(" ", "-"),
        status=status,
    )


def _post(id, title, content, published_at, status="publish"):
    return ContentEntity(
        id=id,
        content_type=ContentType.POST,
        title=title,
        content=content,
        url=f"{SITE_URL}/?p={id}",
        slug=title.lower().replace(" ", "-"),
        status=status,
        published_at=published_at,
    )


def _product(id, title, slug, content, status="publish"):
    return ContentEntity(
        id=id,
        content_type=ContentType.PRODUCT,
        title=title,
        content=content,
        url=f"{SITE_URL}/product/{slug}/",
        slug=slug,
        status=status,
    )


@pytest.fixture
def site_url():
    return SITE_URL


@pytest.fixture
def make_page():
    """Builder for pages on the test site."""
    return _page


@pytest.fixture
def make_post():
    return _post


@pytest.fixture
def make_product():
    return _product


@pytest.fixture
def site_lookup():
    return InMemoryContentLookup(
        [
            _page(2, "About", content="<p>About us</p>"),
            _page(5, "Contact Us", slug="contact"),
            _page(9, "Drafts", status="draft"),
            _post(10, "Older Post", "Old news.", datetime(2024, 1, 1, 9, 0)),
            _post(11, "Test Post", "<p>This is a test post content.</p>", datetime(2024, 3, 1, 9, 0)),
            _post(12, "Unpublished", "Secret.", datetime(2025, 1, 1, 9, 0), status="draft"),
            _product(20, "Blue Mug", "blue-mug", "<p>Um, a really nice mug.</p>"),
        ],
        commerce_enabled=True,
    )
