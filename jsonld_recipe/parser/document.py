"""Load HTML and pull out its JSON-LD script blocks."""

import logging

from bs4 import BeautifulSoup, Tag
from bs4.builder import ParserRejectedMarkup

from jsonld_recipe.models import NotFoundError, ParseError

logger = logging.getLogger(__name__)

JSONLD_MIME_TYPE = "application/ld+json"


def load_document(html: str) -> BeautifulSoup:
    """Parse raw HTML into a document tree, raising ParseError if unusable."""
    if not html or not html.strip():
        raise ParseError("Unable to parse body: document is empty.")

    try:
        soup = BeautifulSoup(html, "html.parser")
    except ParserRejectedMarkup as e:
        logger.warning("HTML parser rejected markup: %s", e)
        raise ParseError("Unable to parse body as HTML.") from e

    if soup.find() is None:
        raise ParseError("Unable to parse body: no HTML elements found.")
    return soup


def _is_jsonld_type(value: str | None) -> bool:
    return value is not None and value.strip().lower() == JSONLD_MIME_TYPE


def find_jsonld_blocks(soup: BeautifulSoup) -> list[str]:
    """Return the text of every JSON-LD script element, in document order."""
    scripts: list[Tag] = soup.find_all("script", attrs={"type": _is_jsonld_type})
    if not scripts:
        raise NotFoundError("No JSON-LD found in body.")

    logger.debug("Found %d JSON-LD block(s)", len(scripts))
    return [script.get_text() for script in scripts]
