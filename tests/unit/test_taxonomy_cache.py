import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

import application.taxonomy_cache as taxonomy_cache
from application import ResolvedTaxonomy, TaxonomyCache, build_taxonomy, default_diets, default_groups
from domain.errors import CacheInitializationError, UnresolvedReferenceError
from domain.taxonomy import SourceDocument


def _small_taxonomy() -> ResolvedTaxonomy:
    groups = [SourceDocument(name="g", data={"groups": {"dairy": {"ingredients": ["milk"]}}})]
    diets = [SourceDocument(name="d", data={"diets": {"vegan": {"bannedGroups": ["dairy"]}}})]
    return build_taxonomy(groups, diets)


def test_concurrent_first_access_builds_exactly_once() -> None:
    calls = 0
    calls_lock = threading.Lock()

    def builder() -> ResolvedTaxonomy:
        nonlocal calls
        with calls_lock:
            calls += 1
        time.sleep(0.05)  # widen the race window
        return _small_taxonomy()

    cache = TaxonomyCache(builder)
    n_threads = 16
    barrier = threading.Barrier(n_threads)

    def read() -> ResolvedTaxonomy:
        barrier.wait()
        return cache.get()

    with ThreadPoolExecutor(max_workers=n_threads) as pool:
        results = list(pool.map(lambda _: read(), range(n_threads)))

    assert calls == 1
    assert all(r is results[0] for r in results)
    assert cache.is_initialized
    assert cache.get() is results[0]
    assert calls == 1


@pytest.mark.parametrize(
    "failure",
    [
        UnresolvedReferenceError(kind="group", name="unicorn", referenced_by="vegan"),
        KeyError("dairy"),
        RecursionError("maximum recursion depth exceeded"),
    ],
)
def test_failed_build_is_not_retried(failure: Exception) -> None:
    calls = 0

    def builder() -> ResolvedTaxonomy:
        nonlocal calls
        calls += 1
        raise failure

    cache = TaxonomyCache(builder)
    for _ in range(3):
        with pytest.raises(CacheInitializationError) as exc_info:
            cache.get()
        assert exc_info.value.__cause__ is failure

    assert calls == 1
    assert not cache.is_initialized


def test_cached_taxonomy_is_read_only() -> None:
    cache = TaxonomyCache(_small_taxonomy)
    with pytest.raises(TypeError):
        cache.groups["new"] = cache.groups["dairy"]  # type: ignore[index]
    with pytest.raises(TypeError):
        cache.groups["dairy"].merge_ingredient("cream")
    with pytest.raises(TypeError):
        cache.diets["vegan"].merge_ingredient("honey")

    variant = cache.diets["vegan"].copy()
    variant.merge_ingredient("honey")
    assert variant.disallows("honey")
    assert not cache.diets["vegan"].disallows("honey")


def test_default_accessors_share_one_instance() -> None:
    assert default_groups() is default_groups()
    assert default_diets() is default_diets()


def test_default_accessors_under_concurrent_first_access(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = 0
    calls_lock = threading.Lock()

    def counting_builder() -> ResolvedTaxonomy:
        nonlocal calls
        with calls_lock:
            calls += 1
        time.sleep(0.05)
        return taxonomy_cache.build_default_taxonomy()

    monkeypatch.setattr(taxonomy_cache, "_DEFAULT_CACHE", TaxonomyCache(counting_builder))

    n_threads = 16
    barrier = threading.Barrier(n_threads)

    def read(i: int) -> object:
        barrier.wait()
        return default_groups() if i % 2 == 0 else default_diets()

    with ThreadPoolExecutor(max_workers=n_threads) as pool:
        results = list(pool.map(read, range(n_threads)))

    groups = [r for i, r in enumerate(results) if i % 2 == 0]
    diets = [r for i, r in enumerate(results) if i % 2 == 1]
    assert calls == 1
    assert all(g is groups[0] for g in groups)
    assert all(d is diets[0] for d in diets)
    assert groups[0] is default_groups()
    assert "dairy" in groups[0]
    assert "vegan" in diets[0]
