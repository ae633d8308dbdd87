from pathlib import Path

import pytest

from application import build_default_taxonomy, bundled_documents, default_diets, default_groups
from domain.taxonomy import SubgroupExpansion, load_groups
from infrastructure.io import BUNDLED_DIET_TEXTS, BUNDLED_GROUP_TEXTS

DATA_DIR = Path(__file__).resolve().parents[2] / "infrastructure" / "data"


def _count_yaml(kind: str) -> int:
    return sum(1 for p in (DATA_DIR / kind).iterdir() if p.is_file() and p.suffix == ".yaml")


def test_every_bundled_file_is_loaded() -> None:
    assert len(BUNDLED_GROUP_TEXTS) == _count_yaml("groups")
    assert len(BUNDLED_DIET_TEXTS) == _count_yaml("diets")
    assert len(default_groups()) >= _count_yaml("groups")
    assert len(default_diets()) >= _count_yaml("diets")


def test_default_groups_are_flattened() -> None:
    groups = default_groups()
    assert {"cheese", "dairy", "fish", "meat", "shellfish"} <= set(groups)
    # dairy lists cheese as a subgroup
    assert groups["dairy"].contains("brie")
    # seafood -> fish, shellfish
    assert groups["seafood"].contains("shrimp")
    assert groups["seafood"].contains("salmon")


@pytest.mark.parametrize(
    ("diet", "ingredient", "banned"),
    [
        ("vegan", "Brie", True),
        ("vegan", "honey", True),
        ("vegan", "shrimp", True),
        ("vegan", "egg", True),
        ("vegan", "tofu", False),
        ("vegetarian", "salmon", True),
        ("vegetarian", "chicken", True),
        ("vegetarian", "milk", False),
        ("vegetarian", "rennet", True),
        ("pescatarian", "salmon", False),
        ("pescatarian", "bacon", True),
    ],
)
def test_default_diets(diet: str, ingredient: str, banned: bool) -> None:
    assert default_diets()[diet].disallows(ingredient) is banned


def test_build_default_taxonomy_matches_cache() -> None:
    fresh = build_default_taxonomy()
    assert dict(fresh.groups) == dict(default_groups())
    assert dict(fresh.diets) == dict(default_diets())


def test_bundled_groups_nest_only_one_level() -> None:
    group_docs, _ = bundled_documents()
    single = load_groups(group_docs, expansion=SubgroupExpansion.SINGLE_HOP)
    full = load_groups(group_docs, expansion=SubgroupExpansion.TRANSITIVE)
    assert single == full
