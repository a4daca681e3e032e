"""Turn JSON-LD blocks into a RecipeRecord."""

import json
import logging
import math
import re
from typing import Any, Iterable

from pydantic import ValidationError

from jsonld_recipe.models import (
    RECIPE_FIELDS,
    CoercionError,
    NotFoundError,
    ParseError,
    RecipeRecord,
)
from jsonld_recipe.parser.document import find_jsonld_blocks, load_document

logger = logging.getLogger(__name__)

# Literal backslash-n followed by a tab, left behind by some CMS templates.
_ESCAPED_NEWLINE_TAB = "\\n\t"

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


def _reject_constant(name: str):
    raise ValueError(f"{name} is not a valid JSON value")


def _parse_finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"number {text} is out of range")
    return value


def normalize_blocks(
    blocks: Iterable[str],
    *,
    strict: bool = True,
    expand_graph: bool = False,
    logger: logging.Logger = logger,
) -> list[dict[str, Any]]:
    """Parse JSON-LD blocks into unique candidate entities.

    Top-level arrays contribute one candidate per element. Candidates are
    deduplicated on their compact JSON serialization; the first occurrence
    keeps its place, so the result follows document order.

    With ``strict`` a block that is not valid JSON raises ParseError,
    otherwise it is logged and skipped. With ``expand_graph`` the objects
    inside a top-level ``@graph`` list are added after their container.
    """
    candidates: dict[str, dict[str, Any]] = {}

    for index, block in enumerate(blocks):
        text = block.replace(_ESCAPED_NEWLINE_TAB, "")
        try:
            parsed = json.loads(
                text,
                parse_constant=_reject_constant,
                parse_float=_parse_finite_float,
            )
        except ValueError as e:
            if strict:
                raise ParseError(f"JSON-LD block {index} is not valid JSON: {e}.") from e
            logger.warning("Skipping JSON-LD block %d: %s", index, e)
            continue

        items = parsed if isinstance(parsed, list) else [parsed]
        for item in _iter_entities(items, expand_graph):
            key = json.dumps(item, ensure_ascii=False, separators=(",", ":"))
            if key in candidates:
                logger.debug("Dropping duplicate entity from block %d", index)
                continue
            candidates[key] = item

    logger.debug("Normalized %d unique candidate entities", len(candidates))
    return list(candidates.values())


def _iter_entities(items: list[Any], expand_graph: bool):
    for item in items:
        if not isinstance(item, dict):
            continue
        yield item
        if expand_graph and isinstance(item.get("@graph"), list):
            yield from (node for node in item["@graph"] if isinstance(node, dict))


def is_recipe(entity: dict[str, Any]) -> bool:
    """True if the entity's @type is "Recipe" or a list containing it."""
    item_type = entity.get("@type")
    if isinstance(item_type, str):
        return item_type == "Recipe"
    if isinstance(item_type, list):
        return "Recipe" in item_type
    return False


def coerce_yield(value: Any) -> int:
    """Coerce a recipeYield value to an integer or raise CoercionError."""
    if isinstance(value, bool):
        raise CoercionError(f"recipeYield {value!r} is not numeric.")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and _INTEGER_RE.fullmatch(value.strip()):
        try:
            return int(value.strip())
        except ValueError:
            # past the interpreter's integer digit limit
            pass
    raise CoercionError(f"recipeYield {value!r} is not an integer.")


def project_recipe(entity: dict[str, Any]) -> RecipeRecord:
    """Copy the recognized Recipe fields into a RecipeRecord."""
    fields = {key: entity[key] for key in RECIPE_FIELDS if key in entity}

    if "recipeYield" in fields:
        try:
            fields["recipeYield"] = coerce_yield(fields["recipeYield"])
        except CoercionError as e:
            logger.debug("Omitting recipeYield: %s", e.message)
            del fields["recipeYield"]

    try:
        return RecipeRecord(**fields)
    except ValidationError as e:
        rejected = {err["loc"][0] for err in e.errors() if err["loc"]}
        logger.debug("Omitting fields with unexpected shapes: %s", sorted(rejected))
        return RecipeRecord(
            **{key: value for key, value in fields.items() if key not in rejected}
        )


def extract_recipe(
    html: str, *, strict: bool = True, expand_graph: bool = False
) -> RecipeRecord:
    """Return the first Recipe entity in the page's JSON-LD as a RecipeRecord."""
    soup = load_document(html)
    blocks = find_jsonld_blocks(soup)
    candidates = normalize_blocks(blocks, strict=strict, expand_graph=expand_graph)

    for position, entity in enumerate(candidates):
        if is_recipe(entity):
            logger.debug("Candidate %d is a Recipe", position)
            return project_recipe(entity)

    raise NotFoundError("No entity in this document qualifies as a Recipe.")
