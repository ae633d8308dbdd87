"""Pre-resolution records: definitions that still reference other records by name."""

from typing import Any, NamedTuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from domain.ingredients import Ingredient


class SourceDocument(NamedTuple):
    """A named document already decoded into plain Python data (e.g. by yaml.safe_load)."""

    name: str
    data: Any


def _none_as_empty(value: object) -> object:
    # `ingredients:` with nothing after it decodes to None
    return () if value is None else value


class RawGroupRecord(BaseModel):
    """Group definition: own ingredients plus names of subgroups to pull in."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    ingredients: frozenset[Ingredient] = Field(default_factory=frozenset)
    subgroups: tuple[str, ...] = ()

    @field_validator("ingredients", "subgroups", mode="before")
    @classmethod
    def _empty_when_null(cls, value: object) -> object:
        return _none_as_empty(value)


class RawDietRecord(BaseModel):
    """Diet definition: own banned ingredients plus names of banned groups."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    banned_ingredients: frozenset[Ingredient] = Field(default_factory=frozenset, alias="bannedIngredients")
    banned_groups: tuple[str, ...] = Field(..., alias="bannedGroups")

    @field_validator("banned_ingredients", "banned_groups", mode="before")
    @classmethod
    def _empty_when_null(cls, value: object) -> object:
        return _none_as_empty(value)


def allowed_keys(model: type[BaseModel]) -> frozenset[str]:
    """Document keys accepted for `model`: the field aliases, or field names where no alias is set."""
    return frozenset(field.alias or name for name, field in model.model_fields.items())
