"""
Process-wide default taxonomy, built on first access and shared afterwards.

`TaxonomyCache` is a lock-guarded once-cell: concurrent first callers block on
the lock and exactly one of them runs the builder. Later reads take no lock.
"""

import logging
import threading
from collections.abc import Callable, Mapping

from application.taxonomy import ResolvedTaxonomy, build_taxonomy, bundled_documents
from domain.errors import CacheInitializationError
from domain.ingredients import Diet, IngredientGroup
from domain.taxonomy import SubgroupExpansion

logger = logging.getLogger(__name__)


class TaxonomyCache:
    """
    At-most-once computed, read-only taxonomy.

    A failing builder is not retried: the failure is kept and re-raised as
    CacheInitializationError on every call.
    """

    def __init__(self, builder: Callable[[], ResolvedTaxonomy]) -> None:
        self._builder = builder
        self._lock = threading.Lock()
        self._value: ResolvedTaxonomy | None = None
        self._failure: Exception | None = None

    @property
    def is_initialized(self) -> bool:
        return self._value is not None

    def get(self) -> ResolvedTaxonomy:
        value = self._value
        if value is not None:
            return value

        with self._lock:
            if self._value is None:
                if self._failure is None:
                    try:
                        self._value = self._builder()
                    except Exception as e:
                        self._failure = e
                        logger.critical("Default taxonomy failed to build: %s", e)
                    else:
                        logger.info(
                            "Taxonomy cache initialized (%d groups, %d diets)",
                            len(self._value.groups),
                            len(self._value.diets),
                        )
                if self._failure is not None:
                    raise CacheInitializationError(f"taxonomy could not be built: {self._failure}") from self._failure
            return self._value

    @property
    def groups(self) -> Mapping[str, IngredientGroup]:
        return self.get().groups

    @property
    def diets(self) -> Mapping[str, Diet]:
        return self.get().diets


def build_default_taxonomy() -> ResolvedTaxonomy:
    """Resolve the bundled documents."""
    group_docs, diet_docs = bundled_documents()
    return build_taxonomy(group_docs, diet_docs, expansion=SubgroupExpansion.TRANSITIVE)


_DEFAULT_CACHE = TaxonomyCache(build_default_taxonomy)


def default_taxonomy() -> ResolvedTaxonomy:
    """
    The bundled taxonomy, resolved once per process.

    Raises:
        CacheInitializationError: The bundled data is broken
    """
    return _DEFAULT_CACHE.get()


def default_groups() -> Mapping[str, IngredientGroup]:
    """Resolved default groups (read-only; copy a group before merging into it)."""
    return _DEFAULT_CACHE.groups


def default_diets() -> Mapping[str, Diet]:
    """Resolved default diets (read-only; copy a diet before merging into it)."""
    return _DEFAULT_CACHE.diets
