"""Tests for HTML loading and JSON-LD block location."""

import pytest

from jsonld_recipe.models import NotFoundError, ParseError
from jsonld_recipe.parser.document import find_jsonld_blocks, load_document

TWO_BLOCKS_HTML = """
<html><head>
<script type="application/ld+json">{"@type": "WebSite", "name": "Blog"}</script>
<script type="text/javascript">var x = 1;</script>
</head><body>
<script type="application/ld+json">{"@type": "Recipe", "name": "Soup"}</script>
</body></html>
"""

MIXED_CASE_TYPE_HTML = """
<html><head>
<script type=" Application/LD+JSON ">{"@type": "Recipe"}</script>
</head></html>
"""

NO_JSONLD_HTML = """
<html><head><title>Just a Blog</title>
<script src="/app.js"></script>
</head><body><p>No recipe here.</p></body></html>
"""


# -- load_document --


def test_load_document_returns_tree():
    soup = load_document(TWO_BLOCKS_HTML)
    assert soup.find("head") is not None


def test_load_document_tolerates_unclosed_tags():
    soup = load_document("<html><body><div><p>unclosed")
    assert soup.find("p").get_text() == "unclosed"


def test_load_document_rejects_empty():
    with pytest.raises(ParseError):
        load_document("")


def test_load_document_rejects_whitespace():
    with pytest.raises(ParseError):
        load_document("   \n\t ")


def test_load_document_rejects_text_without_elements():
    with pytest.raises(ParseError, match="no HTML elements"):
        load_document("just some plain text")


# -- find_jsonld_blocks --


def test_finds_blocks_in_document_order():
    blocks = find_jsonld_blocks(load_document(TWO_BLOCKS_HTML))
    assert blocks == [
        '{"@type": "WebSite", "name": "Blog"}',
        '{"@type": "Recipe", "name": "Soup"}',
    ]


def test_type_attribute_match_ignores_case_and_padding():
    blocks = find_jsonld_blocks(load_document(MIXED_CASE_TYPE_HTML))
    assert blocks == ['{"@type": "Recipe"}']


def test_no_jsonld_raises_not_found():
    with pytest.raises(NotFoundError, match="No JSON-LD"):
        find_jsonld_blocks(load_document(NO_JSONLD_HTML))


def test_not_found_error_type():
    with pytest.raises(NotFoundError) as excinfo:
        find_jsonld_blocks(load_document(NO_JSONLD_HTML))
    assert excinfo.value.error_type == "not_found"
