"""
Flatten raw group/diet records into self-contained IngredientGroup and Diet values.

Groups are resolved first; diets reference the resolved groups. Both passes are
pure and all-or-nothing: the first unresolved reference aborts the pass.
"""

import logging
from collections.abc import Iterable, Mapping
from enum import Enum

from domain.errors import SubgroupCycleError, UnresolvedReferenceError
from domain.ingredients import Diet, IngredientGroup
from domain.taxonomy.loader import parse_diet_batch, parse_group_batch
from domain.taxonomy.records import RawDietRecord, RawGroupRecord, SourceDocument

logger = logging.getLogger(__name__)


class SubgroupExpansion(str, Enum):
    """How far subgroup references are followed."""

    # A group gets its subgroups' subgroups too, recursively; loops are errors
    TRANSITIVE = "transitive"
    # A group gets only the listed subgroups' own ingredients
    SINGLE_HOP = "single_hop"


def _lookup_subgroup(raw_groups: Mapping[str, RawGroupRecord], name: str, referenced_by: str) -> RawGroupRecord:
    try:
        return raw_groups[name]
    except KeyError:
        raise UnresolvedReferenceError(kind="subgroup", name=name, referenced_by=referenced_by) from None


def _resolve_single_hop(raw_groups: Mapping[str, RawGroupRecord]) -> dict[str, IngredientGroup]:
    resolved: dict[str, IngredientGroup] = {}
    for name, record in raw_groups.items():
        group = IngredientGroup(record.ingredients)
        for sub in record.subgroups:
            group.merge_group(IngredientGroup(_lookup_subgroup(raw_groups, sub, name).ingredients))
        resolved[name] = group
    return resolved


def _resolve_transitive(raw_groups: Mapping[str, RawGroupRecord]) -> dict[str, IngredientGroup]:
    resolved: dict[str, IngredientGroup] = {}
    # names currently being expanded, in DFS order
    in_progress: list[str] = []

    def expand(name: str) -> IngredientGroup:
        done = resolved.get(name)
        if done is not None:
            return done
        if name in in_progress:
            start = in_progress.index(name)
            raise SubgroupCycleError(in_progress[start:] + [name])

        in_progress.append(name)
        record = raw_groups[name]
        group = IngredientGroup(record.ingredients)
        for sub in record.subgroups:
            _lookup_subgroup(raw_groups, sub, name)
            group.merge_group(expand(sub))
        in_progress.pop()

        resolved[name] = group
        return group

    for name in raw_groups:
        expand(name)
    return resolved


def resolve_groups(
    raw_groups: Mapping[str, RawGroupRecord],
    *,
    expansion: SubgroupExpansion = SubgroupExpansion.TRANSITIVE,
) -> dict[str, IngredientGroup]:
    """
    Resolve every group of one batch into a flat IngredientGroup.

    Subgroup names are looked up in `raw_groups` only; callers needing
    references across several sources must merge them into one batch first.

    Args:
        raw_groups: Mapping of group name -> RawGroupRecord
        expansion: TRANSITIVE (full closure, default) or SINGLE_HOP (one reference level)

    Returns:
        Mapping of group name -> IngredientGroup with no remaining references

    Raises:
        UnresolvedReferenceError: A subgroup name is not in the batch
        SubgroupCycleError: TRANSITIVE expansion found a loop
    """
    expansion = SubgroupExpansion(expansion)
    if expansion is SubgroupExpansion.SINGLE_HOP:
        resolved = _resolve_single_hop(raw_groups)
    else:
        resolved = _resolve_transitive(raw_groups)

    for name, group in resolved.items():
        logger.debug("Resolved group '%s' (%d ingredients)", name, len(group))
    logger.info("Resolved %d group(s) (expansion=%s)", len(resolved), expansion.value)
    return resolved


def resolve_diets(
    raw_diets: Mapping[str, RawDietRecord],
    groups: Mapping[str, IngredientGroup],
) -> dict[str, Diet]:
    """
    Resolve every diet into a flat banlist using already-resolved groups.

    Raises:
        UnresolvedReferenceError: A banned group name is not in `groups`
    """
    resolved: dict[str, Diet] = {}
    for name, record in raw_diets.items():
        diet = Diet(record.banned_ingredients)
        for group_name in record.banned_groups:
            group = groups.get(group_name)
            if group is None:
                raise UnresolvedReferenceError(kind="group", name=group_name, referenced_by=name)
            diet.merge_group(group)
        resolved[name] = diet
        logger.debug("Resolved diet '%s' (%d banned ingredients)", name, len(diet))

    logger.info("Resolved %d diet(s)", len(resolved))
    return resolved


def load_groups(
    documents: Iterable[SourceDocument],
    *,
    expansion: SubgroupExpansion = SubgroupExpansion.TRANSITIVE,
) -> dict[str, IngredientGroup]:
    """Parse a group document batch and resolve it in one step."""
    return resolve_groups(parse_group_batch(documents), expansion=expansion)


def load_diets(
    documents: Iterable[SourceDocument],
    groups: Mapping[str, IngredientGroup],
) -> dict[str, Diet]:
    """Parse a diet document batch and resolve it against `groups`."""
    return resolve_diets(parse_diet_batch(documents), groups)
