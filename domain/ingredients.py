"""Ingredient value type and the two ingredient collections built from it."""

from collections.abc import Iterable, Iterator
from functools import total_ordering

from pydantic import ConfigDict, RootModel, field_validator


def normalize_ingredient_name(text: str) -> str:
    """
    Normalize a food name for identity comparisons.

    Examples:
        >>> normalize_ingredient_name("Brie")
        'brie'
        >>> normalize_ingredient_name(normalize_ingredient_name("BRIE"))
        'brie'
    """
    return text.lower()


@total_ordering
class Ingredient(RootModel[str]):
    """
    A single food identity, compared case-insensitively.

    The validator below is the only place raw text becomes an Ingredient,
    so every instance holds normalized text.
    """

    model_config = ConfigDict(frozen=True)

    @field_validator("root", mode="before")
    @classmethod
    def _normalize(cls, value: object) -> object:
        if isinstance(value, Ingredient):
            return value.root
        if isinstance(value, str):
            return normalize_ingredient_name(value)
        # anything else is left for pydantic to reject
        return value

    @property
    def name(self) -> str:
        return self.root

    def __hash__(self) -> int:
        return hash(self.root)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ingredient):
            return NotImplemented
        return self.root == other.root

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Ingredient):
            return NotImplemented
        return self.root < other.root

    def __str__(self) -> str:
        return self.root

    def __repr__(self) -> str:
        return f"Ingredient({self.root!r})"


IngredientLike = Ingredient | str


def _as_ingredient(value: IngredientLike) -> Ingredient:
    return value if isinstance(value, Ingredient) else Ingredient(value)


class _IngredientSet:
    """Shared set machinery; subclasses expose it under their own vocabulary."""

    __slots__ = ("_items",)

    def __init__(self, ingredients: Iterable[IngredientLike] = ()) -> None:
        self._items: set[Ingredient] | frozenset[Ingredient] = {_as_ingredient(i) for i in ingredients}

    @property
    def is_frozen(self) -> bool:
        return isinstance(self._items, frozenset)

    def _insert(self, ingredient: IngredientLike) -> None:
        if isinstance(self._items, frozenset):
            raise TypeError(f"cannot modify a frozen {type(self).__name__}")
        self._items.add(_as_ingredient(ingredient))

    def _has(self, ingredient: IngredientLike) -> bool:
        return _as_ingredient(ingredient) in self._items

    def copy(self):
        """Return a mutable copy."""
        return type(self)(self._items)

    def freeze(self):
        """Return a read-only copy; merging into it raises TypeError."""
        frozen = type(self)()
        frozen._items = frozenset(self._items)
        return frozen

    def __iter__(self) -> Iterator[Ingredient]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, ingredient: object) -> bool:
        if not isinstance(ingredient, (Ingredient, str)):
            return False
        return self._has(ingredient)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return set(self._items) == set(other._items)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        names = ", ".join(repr(i.root) for i in sorted(self._items))
        return f"{type(self).__name__}([{names}])"


class IngredientGroup(_IngredientSet):
    """
    Flat, duplicate-free group of ingredients.

    Example:
        >>> group = IngredientGroup()
        >>> group.merge_ingredient(Ingredient("Camembert"))
        >>> group.contains("camembert")
        True
    """

    __slots__ = ()

    def merge_ingredient(self, ingredient: IngredientLike) -> None:
        """Add one ingredient. Adding an existing member is a no-op."""
        self._insert(ingredient)

    def merge_group(self, other: "IngredientGroup") -> None:
        """Union every ingredient of `other` into this group."""
        for ingredient in other.ingredients():
            self.merge_ingredient(ingredient)

    def ingredients(self) -> Iterator[Ingredient]:
        """Iterate over all ingredients; each call starts a fresh pass."""
        return iter(self._items)

    def contains(self, ingredient: IngredientLike) -> bool:
        return self._has(ingredient)


class Diet(_IngredientSet):
    """
    Banned-ingredient list of a diet.

    Example:
        >>> diet = Diet()
        >>> diet.merge_group(IngredientGroup(["brie", "feta"]))
        >>> diet.disallows("Feta")
        True
    """

    __slots__ = ()

    def merge_ingredient(self, ingredient: IngredientLike) -> None:
        """Ban one ingredient."""
        self._insert(ingredient)

    def merge_group(self, group: IngredientGroup) -> None:
        """Ban every ingredient of `group`."""
        for ingredient in group.ingredients():
            self.merge_ingredient(ingredient)

    def banned_ingredients(self) -> Iterator[Ingredient]:
        return iter(self._items)

    def disallows(self, ingredient: IngredientLike) -> bool:
        return self._has(ingredient)
