"""
Ingredient taxonomy: raw record parsing and reference resolution.

All functions in this module are pure (no file I/O).
Documents are decoded elsewhere (infrastructure.config.loader).
"""

from domain.taxonomy.loader import DIETS_SECTION, GROUPS_SECTION, parse_diet_batch, parse_group_batch
from domain.taxonomy.records import RawDietRecord, RawGroupRecord, SourceDocument
from domain.taxonomy.resolver import (
    SubgroupExpansion,
    load_diets,
    load_groups,
    resolve_diets,
    resolve_groups,
)

__all__ = [
    "SourceDocument",
    "RawGroupRecord",
    "RawDietRecord",
    "GROUPS_SECTION",
    "DIETS_SECTION",
    "parse_group_batch",
    "parse_diet_batch",
    "SubgroupExpansion",
    "resolve_groups",
    "resolve_diets",
    "load_groups",
    "load_diets",
]
