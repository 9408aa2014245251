"""Markdown parser with image embedding support."""

import re

from markdown import Markdown
from markdown.extensions import Extension
from markdown.preprocessors import Preprocessor

# A line holding nothing but an image URL, e.g. https://example.com/cat.png
IMAGE_URL_PATTERN = re.compile(
    r"^ {0,3}((?:https?://|/)\S+\.(?:png|jpe?g|gif|svg|webp)(?:\?\S*)?)\s*$",
    re.IGNORECASE,
)


class ImageEmbedPreprocessor(Preprocessor):
    """Turn standalone image URLs into images linked to themselves."""

    def run(self, lines: list[str]) -> list[str]:
        """Rewrite image URL lines as Markdown image links."""
        result = []
        for line in lines:
            match = IMAGE_URL_PATTERN.match(line)
            if match:
                url = match.group(1)
                line = f"[![]({url})]({url})"
            result.append(line)
        return result


class ImageEmbedExtension(Extension):
    """Markdown extension for bare image URLs."""

    def extendMarkdown(self, md: Markdown) -> None:
        """Add image embed preprocessor.

        Registered below fenced_code (25) so fenced blocks are already
        stashed and their contents stay literal.
        """
        md.preprocessors.register(
            ImageEmbedPreprocessor(md),
            "image_embed",
            15,
        )


def create_parser() -> Markdown:
    """Create a Markdown parser for article bodies.

    Returns:
        Configured Markdown parser instance.
    """
    return Markdown(
        extensions=[
            "extra",  # Includes: abbreviations, attr_list, def_list, fenced_code, footnotes, md_in_html, tables
            "sane_lists",
            "smarty",
            "toc",
            "pymdownx.tasklist",
            ImageEmbedExtension(),
        ]
    )


def render_article(content: str) -> str:
    """Render an article body (Markdown) to HTML."""
    return create_parser().convert(content)
