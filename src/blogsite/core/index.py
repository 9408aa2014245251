"""Article index builder.

Discovers every article, resolves all of their frontmatter concurrently
and returns the entries newest first.
"""

import asyncio
import logging
from pathlib import Path

from blogsite.core.errors import MetadataResolutionError
from blogsite.core.models import Article, ArticleEntry
from blogsite.core.storage import Storage

logger = logging.getLogger(__name__)


async def _resolve(
    storage: Storage, document: Path, timeout: float | None
) -> Article:
    if timeout is None:
        return await storage.resolve(document)
    try:
        return await asyncio.wait_for(storage.resolve(document), timeout)
    except TimeoutError as e:
        raise MetadataResolutionError(
            f"metadata resolution timed out after {timeout}s", document
        ) from e


async def build_index(
    storage: Storage,
    *,
    skip_invalid: bool = False,
    timeout: float | None = None,
) -> list[ArticleEntry]:
    """Build the sorted article index.

    Args:
        storage: Source of article documents.
        skip_invalid: Log and drop documents with invalid frontmatter
            instead of failing the whole build.
        timeout: Optional per-document resolution timeout in seconds.

    Returns:
        One entry per discovered document, sorted by date, newest first.
        Entries with the same date keep discovery order.

    Raises:
        DocumentDiscoveryError: If the article directory cannot be listed.
        MetadataResolutionError: If a document's frontmatter is invalid
            and skip_invalid is False.
        DateParseError: If a document's date is missing or unparseable
            and skip_invalid is False.
    """
    documents = await storage.discover()

    results = await asyncio.gather(
        *(_resolve(storage, document, timeout) for document in documents),
        return_exceptions=True,
    )

    entries: list[ArticleEntry] = []
    skipped = 0
    for document, result in zip(documents, results):
        if isinstance(result, MetadataResolutionError) and skip_invalid:
            logger.warning("Skipping article %s: %s", document.name, result)
            skipped += 1
            continue
        if isinstance(result, BaseException):
            raise result
        entries.append(ArticleEntry(meta=result.meta.model_copy(deep=True), path=result.path))

    entries.sort(key=lambda entry: entry.meta.published, reverse=True)
    logger.info("Built article index: %d articles, %d skipped", len(entries), skipped)
    return entries
