from pathlib import Path

import pandas as pd
import pytest

from application import ResolvedTaxonomy, check_recipes, find_violations, taxonomy_to_frame
from domain.ingredients import Diet, Ingredient, IngredientGroup
from infrastructure.io import write_table
from infrastructure.recipes import Recipe


def _recipe(slug: str, foods: list[str]) -> Recipe:
    return Recipe.model_validate(
        {
            "slug": slug,
            "name": slug.title(),
            "recipeIngredient": [{"food": {"name": f}} for f in foods],
        }
    )


def test_find_violations_normalizes_and_deduplicates() -> None:
    diet = Diet(["brie", "honey"])
    assert find_violations(["Brie", "tofu", "BRIE", "Honey"], diet) == [Ingredient("brie"), Ingredient("honey")]
    assert find_violations([], diet) == []


def test_check_recipes_reports_per_recipe() -> None:
    diet = Diet(["parmesan"])
    results = check_recipes([_recipe("pasta", ["Parmesan", "Spaghetti"]), _recipe("salad", ["Lettuce"])], "vegan", diet)

    by_slug = {r.slug: r for r in results}
    assert by_slug["pasta"].violations == ["parmesan"]
    assert not by_slug["pasta"].compliant
    assert by_slug["salad"].compliant
    assert all(r.diet == "vegan" for r in results)


def _taxonomy() -> ResolvedTaxonomy:
    return ResolvedTaxonomy.from_maps(
        groups={"dairy": IngredientGroup(["milk", "butter"])},
        diets={"vegan": Diet(["honey", "milk", "butter"])},
    )


def test_taxonomy_to_frame_is_long_form_and_sorted() -> None:
    df = taxonomy_to_frame(_taxonomy())
    assert list(df.columns) == ["kind", "name", "ingredient"]
    assert df.to_records(index=False).tolist() == [
        ("diet", "vegan", "butter"),
        ("diet", "vegan", "honey"),
        ("diet", "vegan", "milk"),
        ("group", "dairy", "butter"),
        ("group", "dairy", "milk"),
    ]


def test_write_table_csv_round_trip(tmp_path: Path) -> None:
    df = taxonomy_to_frame(_taxonomy())
    path = write_table(df, tmp_path / "out" / "taxonomy.csv")
    assert path.exists()
    assert pd.read_csv(path).equals(df)


def test_write_table_rejects_unknown_suffix(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        write_table(pd.DataFrame(), tmp_path / "taxonomy.json")


def test_write_table_xlsx_round_trip(tmp_path: Path) -> None:
    df = taxonomy_to_frame(_taxonomy())
    path = write_table(df, tmp_path / "taxonomy.XLSX")
    assert path.exists()
    assert pd.read_excel(path).equals(df)
