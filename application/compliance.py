"""Check recipe ingredient names against a resolved diet."""

import logging
from collections.abc import Iterable

from pydantic import BaseModel, Field

from domain.ingredients import Diet, Ingredient
from infrastructure.recipes import Recipe

logger = logging.getLogger(__name__)


class RecipeCompliance(BaseModel):
    """Outcome of checking one recipe against one diet."""

    slug: str
    name: str | None = None
    diet: str
    violations: list[str] = Field(default_factory=list, description="Banned ingredients found, sorted.")

    @property
    def compliant(self) -> bool:
        return not self.violations


def find_violations(names: Iterable[str], diet: Diet) -> list[Ingredient]:
    """
    Return the banned ingredients among `names`.

    Names are normalized through Ingredient, so "Brie" matches a banned "brie".
    The result is sorted and de-duplicated.
    """
    return sorted({ingredient for ingredient in map(Ingredient, names) if diet.disallows(ingredient)})


def check_recipes(recipes: Iterable[Recipe], diet_name: str, diet: Diet) -> list[RecipeCompliance]:
    results = []
    for recipe in recipes:
        violations = find_violations(recipe.ingredient_names(), diet)
        results.append(
            RecipeCompliance(
                slug=recipe.slug,
                name=recipe.name,
                diet=diet_name,
                violations=[str(v) for v in violations],
            )
        )
        if violations:
            logger.debug("Recipe '%s' violates %s: %s", recipe.slug, diet_name, ", ".join(map(str, violations)))

    n_ok = sum(r.compliant for r in results)
    logger.info("Checked %d recipe(s) against '%s': %d compliant", len(results), diet_name, n_ok)
    return results
