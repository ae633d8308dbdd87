"""
Mealie recipe server client.

Only what the taxonomy needs is modelled: recipe identity and, per recipe,
the food names of its ingredients. Unknown response fields are ignored.
"""

import logging
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from infrastructure.config.models import MealieConfig
from infrastructure.constants import MEALIE_MAX_PER_PAGE, MEALIE_RECIPES_ENDPOINT, USER_AGENT

logger = logging.getLogger(__name__)


class MealieError(RuntimeError):
    """Request to Mealie failed or returned data of an unexpected shape."""


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class RecipeFood(_CamelModel):
    id: str | None = None
    name: str


class RecipeIngredient(_CamelModel):
    quantity: float | None = None
    food: RecipeFood | None = None
    note: str | None = None
    display: str = ""
    title: str | None = None
    original_text: str | None = Field(default=None, alias="originalText")
    reference_id: str | None = Field(default=None, alias="referenceId")


class RecipeSummary(_CamelModel):
    id: str | None = None
    slug: str
    name: str | None = None
    description: str | None = None
    total_time: str | None = Field(default=None, alias="totalTime")
    rating: float | None = None
    org_url: str | None = Field(default=None, alias="orgURL")


class Recipe(RecipeSummary):
    recipe_ingredient: list[RecipeIngredient] = Field(default_factory=list, alias="recipeIngredient")

    def ingredient_names(self) -> list[str]:
        """Food names of ingredients that reference a food; free-text lines are skipped."""
        return [ing.food.name for ing in self.recipe_ingredient if ing.food is not None]


class RecipesPage(BaseModel):
    """Paginated listing; Mealie uses snake_case for pagination fields."""

    model_config = ConfigDict(extra="ignore")

    page: int
    per_page: int
    total: int
    total_pages: int
    items: list[RecipeSummary] = Field(default_factory=list)


def _validate_slug(slug: str) -> str:
    if not slug or any(c in slug for c in "/?#"):
        raise MealieError(f"recipe slug {slug!r} is not valid to use in URL path")
    return quote(slug, safe="")


class MealieClient:
    """Blocking client for the Mealie recipes API."""

    def __init__(
        self,
        address: str,
        api_token: str,
        *,
        timeout_s: float = 30.0,
        per_page: int = MEALIE_MAX_PER_PAGE,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        if not api_token:
            raise ValueError("Mealie API token is empty")
        self.per_page = per_page
        self.client = httpx.Client(
            base_url=address.rstrip("/"),
            timeout=timeout_s,
            headers={"Authorization": f"Bearer {api_token}", "User-Agent": USER_AGENT},
            transport=transport,
        )

    @classmethod
    def from_config(cls, cfg: MealieConfig) -> "MealieClient":
        return cls(cfg.address, cfg.api_token, timeout_s=cfg.timeout_s, per_page=cfg.per_page)

    def __enter__(self) -> "MealieClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self.client.close()

    def _get_json(self, path: str, params: dict[str, int] | None = None) -> object:
        try:
            resp = self.client.get(path, params=params)
            resp.raise_for_status()
            return resp.json()
        except httpx.HTTPError as e:
            raise MealieError(f"error requesting Mealie API ({path}): {e}") from e
        except ValueError as e:
            raise MealieError(f"Mealie returned invalid JSON for {path}") from e

    def _get_page(self, page: int) -> RecipesPage:
        data = self._get_json(MEALIE_RECIPES_ENDPOINT, params={"page": page, "perPage": self.per_page})
        try:
            return RecipesPage.model_validate(data)
        except ValidationError as e:
            raise MealieError(f"unexpected recipe listing shape on page {page}: {e}") from e

    def get_recipe_summaries(self) -> list[RecipeSummary]:
        """Fetch every recipe summary, following pagination."""
        first = self._get_page(1)
        summaries = list(first.items)
        for page in range(2, first.total_pages + 1):
            summaries.extend(self._get_page(page).items)
        logger.info("Fetched %d recipe summaries (%d page(s))", len(summaries), max(first.total_pages, 1))
        return summaries

    def get_recipe(self, slug: str) -> Recipe:
        path = f"{MEALIE_RECIPES_ENDPOINT}/{_validate_slug(slug)}"
        data = self._get_json(path)
        try:
            return Recipe.model_validate(data)
        except ValidationError as e:
            raise MealieError(f"unexpected recipe shape for slug {slug!r}: {e}") from e

    def get_recipes(self) -> list[Recipe]:
        """Fetch all recipes with their ingredients (one request per recipe)."""
        recipes = [self.get_recipe(summary.slug) for summary in self.get_recipe_summaries()]
        logger.debug("Fetched %d full recipes", len(recipes))
        return recipes
