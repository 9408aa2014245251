"""Blog FastAPI application."""

import logging
from pathlib import Path

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from blogsite.config import settings
from blogsite.core.errors import ArticleIndexError
from blogsite.core.index import build_index
from blogsite.core.models import ArticleEntry, parse_date
from blogsite.core.parser import render_article
from blogsite.core.storage import FileStorage

logger = logging.getLogger(__name__)

# Initialize app
app = FastAPI(
    title=settings.app_title,
    debug=settings.debug,
)

# Setup templates and static files
templates_path = Path(__file__).parent / "templates"
static_path = Path(__file__).parent / "static"

templates = Jinja2Templates(directory=str(templates_path))
app.mount("/static", StaticFiles(directory=str(static_path)), name="static")


def longdate_filter(value: str) -> str:
    """Format a frontmatter date as e.g. 'June 15, 2023'."""
    return parse_date(value).strftime("%B %d, %Y").replace(" 0", " ")


templates.env.filters["longdate"] = longdate_filter

# Initialize storage
storage = FileStorage(settings.articles_dir)


# Template context helper
def get_context(**kwargs) -> dict:
    """Create base context for templates."""
    return {
        "app_title": settings.app_title,
        **kwargs,
    }


@app.exception_handler(ArticleIndexError)
async def article_index_error(request: Request, exc: ArticleIndexError):
    """Report index failures as a server error, never a partial result."""
    logger.exception(
        "Article index failed for %s: %s", request.url.path, exc, exc_info=exc
    )
    return JSONResponse(status_code=500, content={"detail": str(exc)})


async def load_index() -> list[ArticleEntry]:
    return await build_index(
        storage,
        skip_invalid=settings.skip_invalid,
        timeout=settings.resolve_timeout,
    )


@app.get("/api/articles.json", response_model=list[ArticleEntry])
async def api_articles():
    """Return all articles, newest first."""
    return await load_index()


@app.get("/", response_class=HTMLResponse)
async def index(request: Request):
    """Home page - list all articles."""
    articles = await load_index()
    return templates.TemplateResponse(
        request,
        "index.html",
        get_context(articles=articles),
    )


@app.get("/articles/{path}", response_class=HTMLResponse)
async def view_article(request: Request, path: str):
    """View an article."""
    article = await storage.get_article(path)
    if article is None:
        raise HTTPException(status_code=404, detail="Article not found")

    html_content = render_article(article.content)
    return templates.TemplateResponse(
        request,
        "article.html",
        get_context(article=article, html_content=html_content),
    )
