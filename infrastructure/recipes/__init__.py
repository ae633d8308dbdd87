"""Recipe sources: external servers that supply ingredient names per recipe."""

from infrastructure.recipes.mealie import (
    MealieClient,
    MealieError,
    Recipe,
    RecipeFood,
    RecipeIngredient,
    RecipeSummary,
)

__all__ = [
    "MealieClient",
    "MealieError",
    "Recipe",
    "RecipeSummary",
    "RecipeIngredient",
    "RecipeFood",
]
