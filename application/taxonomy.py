"""Build a resolved, read-only taxonomy from group and diet document batches."""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType

from domain.ingredients import Diet, IngredientGroup
from domain.taxonomy import SourceDocument, SubgroupExpansion, load_diets, load_groups
from infrastructure.config import TaxonomyConfig, load_documents, parse_yaml_document
from infrastructure.io import BUNDLED_DIET_TEXTS, BUNDLED_GROUP_TEXTS
from infrastructure.observability import clear_batch_context, set_log_context

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedTaxonomy:
    """Resolved groups and diets. Mappings are read-only views over frozen values."""

    groups: Mapping[str, IngredientGroup]
    diets: Mapping[str, Diet]

    @classmethod
    def from_maps(
        cls,
        groups: Mapping[str, IngredientGroup],
        diets: Mapping[str, Diet],
    ) -> "ResolvedTaxonomy":
        return cls(
            groups=MappingProxyType({name: g.freeze() for name, g in groups.items()}),
            diets=MappingProxyType({name: d.freeze() for name, d in diets.items()}),
        )


def build_taxonomy(
    group_documents: Sequence[SourceDocument],
    diet_documents: Sequence[SourceDocument],
    *,
    expansion: SubgroupExpansion = SubgroupExpansion.TRANSITIVE,
) -> ResolvedTaxonomy:
    """
    Resolve groups, then diets against those groups.

    Args:
        group_documents: One batch; subgroup references resolve within it
        diet_documents: One batch; banned groups resolve against the groups above
        expansion: Subgroup expansion mode

    Raises:
        TaxonomyError: Any schema or reference error; nothing partial is returned
    """
    try:
        set_log_context(batch="groups")
        groups = load_groups(group_documents, expansion=expansion)
        set_log_context(batch="diets")
        diets = load_diets(diet_documents, groups)
    finally:
        clear_batch_context()

    return ResolvedTaxonomy.from_maps(groups, diets)


def bundled_documents() -> tuple[list[SourceDocument], list[SourceDocument]]:
    """Decode the bundled group and diet documents (already in memory)."""
    groups = [parse_yaml_document(name, text) for name, text in BUNDLED_GROUP_TEXTS]
    diets = [parse_yaml_document(name, text) for name, text in BUNDLED_DIET_TEXTS]
    return groups, diets


def build_configured_taxonomy(cfg: TaxonomyConfig) -> ResolvedTaxonomy:
    """
    Build a taxonomy from config: bundled documents (optional) plus extra files,
    merged into one batch per kind.
    """
    group_docs: list[SourceDocument] = []
    diet_docs: list[SourceDocument] = []
    if cfg.include_defaults:
        group_docs, diet_docs = bundled_documents()

    group_docs.extend(load_documents(cfg.group_files))
    diet_docs.extend(load_documents(cfg.diet_files))

    logger.info(
        "Building taxonomy from %d group and %d diet document(s) (defaults=%s)",
        len(group_docs),
        len(diet_docs),
        cfg.include_defaults,
    )
    return build_taxonomy(group_docs, diet_docs, expansion=cfg.subgroup_expansion)
