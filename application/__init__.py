"""
Application layer: Use cases and workflow orchestration.

This layer coordinates between domain logic and infrastructure:
building resolved taxonomies, the process-wide default cache,
recipe compliance checks and table export.
"""

from application.compliance import RecipeCompliance, check_recipes, find_violations
from application.export import taxonomy_to_frame
from application.taxonomy import (
    ResolvedTaxonomy,
    build_configured_taxonomy,
    build_taxonomy,
    bundled_documents,
)
from application.taxonomy_cache import (
    TaxonomyCache,
    build_default_taxonomy,
    default_diets,
    default_groups,
    default_taxonomy,
)

__all__ = [
    # Taxonomy building
    "ResolvedTaxonomy",
    "build_taxonomy",
    "build_configured_taxonomy",
    "bundled_documents",
    # Default cache
    "TaxonomyCache",
    "build_default_taxonomy",
    "default_taxonomy",
    "default_groups",
    "default_diets",
    # Recipes
    "RecipeCompliance",
    "check_recipes",
    "find_violations",
    # Export
    "taxonomy_to_frame",
]
