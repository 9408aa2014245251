"""Storage abstraction for articles."""

import asyncio
import re
from abc import ABC, abstractmethod
from pathlib import Path

import yaml
from pydantic import ValidationError

from blogsite.core.errors import (
    DateParseError,
    DocumentDiscoveryError,
    MetadataResolutionError,
)
from blogsite.core.models import Article, ArticleMetadata

# Recognised article extensions, longest first so ".svelte.md" wins over ".md".
ARTICLE_EXTENSIONS = (".svelte.md", ".md", ".svx")


class FrontmatterLoader(yaml.SafeLoader):
    """SafeLoader that keeps timestamps as plain strings."""


# Without the timestamp resolver, dates reach parse_date verbatim.
FrontmatterLoader.yaml_implicit_resolvers = {
    first: [
        (tag, regexp)
        for tag, regexp in resolvers
        if tag != "tag:yaml.org,2002:timestamp"
    ]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


class Storage(ABC):
    """Abstract base class for article storage."""

    @abstractmethod
    async def discover(self) -> list[Path]:
        """List all article documents in discovery order."""
        ...

    @abstractmethod
    async def resolve(self, document: Path) -> Article:
        """Read a document and validate its frontmatter."""
        ...

    @abstractmethod
    async def get_article(self, path: str) -> Article | None:
        """Get an article by its derived path. Returns None if not found."""
        ...


class FileStorage(Storage):
    """File-based storage implementation.

    Articles are Markdown files in a flat directory, each starting with a
    YAML frontmatter block holding title, date and tags.
    File naming: <path>.md (or .svelte.md / .svx)
    """

    FRONTMATTER_PATTERN = re.compile(
        r"^---\s*\n(.*?)\n---[ \t]*(?:\n|$)",
        re.DOTALL,
    )

    def __init__(self, base_path: Path):
        self.base_path = base_path

    @staticmethod
    def _extension(filename: str) -> str | None:
        """Return the recognised extension of a filename, if any."""
        for ext in ARTICLE_EXTENSIONS:
            if filename.endswith(ext) and len(filename) > len(ext):
                return ext
        return None

    def derive_path(self, document: Path) -> str:
        """Strip the directory and extension: articles/my-post.md -> my-post."""
        ext = self._extension(document.name)
        if ext is None:
            return document.stem
        return document.name[: -len(ext)]

    def _parse_frontmatter(
        self, content: str, source: Path
    ) -> tuple[ArticleMetadata, str]:
        """Parse YAML frontmatter from content.

        Returns (metadata, content_without_frontmatter).
        """
        match = self.FRONTMATTER_PATTERN.match(content)
        if match is None:
            raise MetadataResolutionError("missing frontmatter block", source)

        try:
            frontmatter = yaml.load(match.group(1), Loader=FrontmatterLoader)
        except (yaml.YAMLError, ValueError) as e:
            raise MetadataResolutionError(f"malformed frontmatter: {e}", source) from e
        if frontmatter is None:
            frontmatter = {}
        if not isinstance(frontmatter, dict):
            raise MetadataResolutionError("frontmatter must be a mapping", source)

        try:
            metadata = ArticleMetadata(**frontmatter)
        except ValidationError as e:
            errors = e.errors()
            detail = "; ".join(
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
                for err in errors
            )
            if any(err["loc"] and err["loc"][0] == "date" for err in errors):
                raise DateParseError(detail, source) from e
            raise MetadataResolutionError(detail, source) from e
        except TypeError as e:
            # non-string keys in the YAML mapping
            raise MetadataResolutionError(f"invalid frontmatter: {e}", source) from e

        return metadata, content[match.end() :]

    async def discover(self) -> list[Path]:
        """List article files, sorted by filename."""
        try:
            entries = sorted(self.base_path.iterdir())
        except FileNotFoundError as e:
            raise DocumentDiscoveryError(
                "article directory does not exist", self.base_path
            ) from e
        except NotADirectoryError as e:
            raise DocumentDiscoveryError(
                "article directory is not a directory", self.base_path
            ) from e
        except OSError as e:
            raise DocumentDiscoveryError(
                f"cannot read article directory: {e.strerror}", self.base_path
            ) from e

        documents = []
        seen: dict[str, Path] = {}
        for entry in entries:
            if not entry.is_file() or self._extension(entry.name) is None:
                continue
            path = self.derive_path(entry)
            if path in seen:
                raise DocumentDiscoveryError(
                    f"{seen[path].name} and {entry.name} both map to '{path}'",
                    self.base_path,
                )
            seen[path] = entry
            documents.append(entry)
        return documents

    async def resolve(self, document: Path) -> Article:
        """Read a document off the event loop and parse its frontmatter."""
        try:
            raw = await asyncio.to_thread(document.read_text, encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as e:
            raise MetadataResolutionError(f"cannot read document: {e}", document) from e

        metadata, body = self._parse_frontmatter(raw, document)
        return Article(meta=metadata, path=self.derive_path(document), content=body)

    async def get_article(self, path: str) -> Article | None:
        """Get an article by its derived path."""
        for document in await self.discover():
            if self.derive_path(document) == path:
                return await self.resolve(document)
        return None
