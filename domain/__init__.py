"""
Domain layer: Business logic with minimal external dependencies.

Contains:
- ingredients: Ingredient value type, IngredientGroup and Diet collections
- taxonomy: Raw record parsing and group/diet resolution
- errors: Schema and reference errors raised by the above
"""

from domain.errors import (
    CacheInitializationError,
    SchemaError,
    SubgroupCycleError,
    TaxonomyError,
    UnresolvedReferenceError,
)
from domain.ingredients import Diet, Ingredient, IngredientGroup, normalize_ingredient_name

__all__ = [
    "Ingredient",
    "IngredientGroup",
    "Diet",
    "normalize_ingredient_name",
    "TaxonomyError",
    "SchemaError",
    "UnresolvedReferenceError",
    "SubgroupCycleError",
    "CacheInitializationError",
]
