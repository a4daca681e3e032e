from typing import Any

from pydantic import BaseModel, ConfigDict

RECIPE_FIELDS = (
    "name",
    "description",
    "image",
    "recipeYield",
    "recipeIngredient",
    "recipeInstructions",
    "recipeCategory",
    "recipeCuisine",
    "recipeCalories",
    "recipeCookTime",
    "recipePrepTime",
    "totalTime",
)

# Scalar string or list, plus the object forms (ImageObject, HowToStep lists)
# that real pages publish under the same keys.
TextOrList = str | list[Any] | dict[str, Any]


class RecipeRecord(BaseModel):
    """Flat recipe fields projected from a schema.org Recipe entity."""

    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    description: str | None = None
    image: TextOrList | None = None
    recipeYield: int | None = None
    recipeIngredient: TextOrList | None = None
    recipeInstructions: TextOrList | None = None
    recipeCategory: Any = None
    recipeCuisine: Any = None
    recipeCalories: Any = None
    recipeCookTime: Any = None
    recipePrepTime: Any = None
    totalTime: Any = None

    def to_mapping(self) -> dict[str, Any]:
        """Return only the fields the source entity actually carried."""
        return self.model_dump(exclude_unset=True)


class ExtractionError(Exception):
    error_type = "extraction"

    def __init__(self, message: str, *, error_type: str | None = None):
        if error_type is not None:
            self.error_type = error_type
        self.message = message
        super().__init__(message)


class ParseError(ExtractionError):
    error_type = "parse"


class NotFoundError(ExtractionError):
    error_type = "not_found"


class CoercionError(ExtractionError):
    error_type = "coercion"


class FetchError(ExtractionError):
    error_type = "network"
