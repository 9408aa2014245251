"""End-to-end smoke tests for the blog application.

Points the app's storage at a temp directory and exercises every route:
the JSON article index, the listing page and article pages.
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

import blogsite.main
from blogsite.config import settings


@pytest.fixture(autouse=True)
def _patch_storage(articles_dir):
    """Use a temporary directory for storage in all tests."""
    original = blogsite.main.storage.base_path
    blogsite.main.storage.base_path = articles_dir
    yield
    blogsite.main.storage.base_path = original


@pytest_asyncio.fixture
async def client():
    transport = ASGITransport(app=blogsite.main.app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


# ============================================================
# JSON article index
# ============================================================


class TestArticlesJson:
    async def test_two_articles_newest_first(self, client, write_article):
        write_article("a.md", title="A", date="2023-01-01", tags=["x"])
        write_article("b.md", title="B", date="2023-06-15", tags=[])

        resp = await client.get("/api/articles.json")

        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("application/json")
        assert resp.json() == [
            {"meta": {"title": "B", "date": "2023-06-15", "tags": []}, "path": "b"},
            {"meta": {"title": "A", "date": "2023-01-01", "tags": ["x"]}, "path": "a"},
        ]

    async def test_empty_directory(self, client):
        resp = await client.get("/api/articles.json")
        assert resp.status_code == 200
        assert resp.json() == []

    async def test_invalid_article_is_server_error(self, client, write_article):
        write_article("good.md")
        write_article("bad.md", date="not-a-date")
        resp = await client.get("/api/articles.json")
        assert resp.status_code == 500
        assert "bad.md" in resp.json()["detail"]

    async def test_calendar_invalid_date_is_json_server_error(self, client, write_article):
        write_article("good.md")
        write_article("bad.md", date="2023-02-30")
        resp = await client.get("/api/articles.json")
        assert resp.status_code == 500
        assert "bad.md" in resp.json()["detail"]

    async def test_missing_directory_is_server_error(self, client, tmp_path):
        blogsite.main.storage.base_path = tmp_path / "missing"
        resp = await client.get("/api/articles.json")
        assert resp.status_code == 500
        assert "does not exist" in resp.json()["detail"]

    async def test_skip_invalid_setting(self, client, write_article, monkeypatch):
        monkeypatch.setattr(settings, "skip_invalid", True)
        write_article("good.md")
        write_article("bad.md", date="not-a-date")
        resp = await client.get("/api/articles.json")
        assert resp.status_code == 200
        assert [a["path"] for a in resp.json()] == ["good"]


# ============================================================
# Listing page
# ============================================================


class TestIndexPage:
    async def test_lists_articles(self, client, write_article):
        write_article("first.md", title="First Post", date="2023-01-01", tags=["python"])
        write_article("second.md", title="Second Post", date="2023-06-15")

        resp = await client.get("/")

        assert resp.status_code == 200
        assert resp.text.index("Second Post") < resp.text.index("First Post")
        assert 'href="/articles/first"' in resp.text
        assert "June 15, 2023" in resp.text
        assert "python" in resp.text

    async def test_empty(self, client):
        resp = await client.get("/")
        assert resp.status_code == 200
        assert "No articles yet" in resp.text


# ============================================================
# Article pages
# ============================================================


class TestArticlePage:
    async def test_renders_article(self, client, write_article):
        write_article(
            "hello.md",
            title="Hello World",
            date="2023-06-15",
            tags=["intro"],
            body="Some **bold** text.\n\nhttps://example.com/cat.png\n",
        )

        resp = await client.get("/articles/hello")

        assert resp.status_code == 200
        assert "Hello World" in resp.text
        assert "<strong>bold</strong>" in resp.text
        assert 'src="https://example.com/cat.png"' in resp.text
        assert "intro" in resp.text

    async def test_missing_article(self, client):
        resp = await client.get("/articles/nope")
        assert resp.status_code == 404

    async def test_invalid_article(self, client, write_article):
        write_article("bad.md", date="not-a-date")
        resp = await client.get("/articles/bad")
        assert resp.status_code == 500

    async def test_stylesheet_served(self, client):
        resp = await client.get("/static/style.css")
        assert resp.status_code == 200
        assert "padding-left: 1rem" in resp.text
