import pytest
from pydantic import ValidationError

from domain.ingredients import Diet, Ingredient, IngredientGroup, normalize_ingredient_name


@pytest.mark.parametrize("raw", ["Brie", "BRIE", "brie", "Crème Fraîche", "", "  Feta "])
def test_normalize_is_idempotent(raw: str) -> None:
    once = normalize_ingredient_name(raw)
    assert normalize_ingredient_name(once) == once
    assert Ingredient(Ingredient(raw)) == Ingredient(raw)


def test_ingredient_identity_is_case_insensitive() -> None:
    assert Ingredient("BRIE") == Ingredient("brie")
    assert hash(Ingredient("Brie")) == hash(Ingredient("brie"))
    assert len({Ingredient("Brie"), Ingredient("brie"), Ingredient("BRIE")}) == 1
    assert str(Ingredient("Brie")) == "brie"


def test_ingredient_ordering_is_lexicographic_on_normalized_text() -> None:
    ordered = sorted([Ingredient("Feta"), Ingredient("brie"), Ingredient("Camembert")])
    assert [i.name for i in ordered] == ["brie", "camembert", "feta"]
    assert Ingredient("B") <= Ingredient("b")
    assert Ingredient("z") > Ingredient("A")


def test_ingredient_accepts_empty_string() -> None:
    assert Ingredient("").name == ""


def test_ingredient_rejects_non_text() -> None:
    with pytest.raises(ValidationError):
        Ingredient(5)  # type: ignore[arg-type]


def test_ingredient_is_immutable() -> None:
    ing = Ingredient("brie")
    with pytest.raises(ValidationError):
        ing.root = "BRIE"  # type: ignore[misc]


def test_merge_ingredient_is_idempotent() -> None:
    group = IngredientGroup()
    group.merge_ingredient(Ingredient("salt"))
    group.merge_ingredient(Ingredient("SALT"))
    group.merge_ingredient("Salt")
    assert len(group) == 1
    assert group.contains("salt")


def test_merge_group_is_commutative_and_idempotent() -> None:
    a = IngredientGroup(["milk", "cream"])
    b = IngredientGroup(["cream", "butter"])

    ab = a.copy()
    ab.merge_group(b)
    ba = b.copy()
    ba.merge_group(a)
    assert ab == ba
    assert set(ab.ingredients()) == {Ingredient("milk"), Ingredient("cream"), Ingredient("butter")}

    aa = a.copy()
    aa.merge_group(a)
    assert aa == a


def test_ingredients_iteration_is_restartable() -> None:
    group = IngredientGroup(["a", "b", "c"])
    first = sorted(group.ingredients())
    second = sorted(group.ingredients())
    assert first == second == [Ingredient("a"), Ingredient("b"), Ingredient("c")]


def test_group_membership_and_containment_operator() -> None:
    group = IngredientGroup(["Gouda"])
    assert group.contains(Ingredient("gouda"))
    assert "GOUDA" in group
    assert "edam" not in group
    assert 42 not in group


def test_frozen_group_rejects_merges_but_copy_is_mutable() -> None:
    frozen = IngredientGroup(["milk"]).freeze()
    assert frozen.is_frozen
    with pytest.raises(TypeError):
        frozen.merge_ingredient("cream")
    with pytest.raises(TypeError):
        frozen.merge_group(IngredientGroup(["cream"]))

    thawed = frozen.copy()
    assert not thawed.is_frozen
    thawed.merge_ingredient("cream")
    assert len(thawed) == 2
    assert len(frozen) == 1


def test_diet_merge_group_bans_every_member() -> None:
    diet = Diet(["gelatin"])
    diet.merge_group(IngredientGroup(["milk", "cheese"]))
    assert set(diet.banned_ingredients()) == {Ingredient("milk"), Ingredient("cheese"), Ingredient("gelatin")}
    assert diet.disallows("Cheese")
    assert not diet.disallows("tofu")


def test_diet_merge_ingredient_is_idempotent() -> None:
    diet = Diet()
    diet.merge_ingredient("Honey")
    diet.merge_ingredient(Ingredient("honey"))
    assert list(diet.banned_ingredients()) == [Ingredient("honey")]


def test_group_and_diet_with_same_members_are_not_equal() -> None:
    assert IngredientGroup(["milk"]) != Diet(["milk"])
    assert IngredientGroup(["milk"]) == IngredientGroup(["MILK"])
