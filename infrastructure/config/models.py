"""Configuration models (Pydantic classes)."""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from domain.taxonomy import SubgroupExpansion
from infrastructure.constants import MEALIE_MAX_PER_PAGE


class MealieConfig(BaseModel):
    """Connection settings for a Mealie recipe server."""

    address: str = Field(..., description="Base URL of the Mealie server, e.g. http://localhost:9000")
    api_token: str = Field(
        default="",
        description="API token sent in the Authorization header. Usually supplied via MEALIE_API_TOKEN.",
    )
    timeout_s: float = Field(default=30.0, gt=0)
    per_page: int = Field(default=MEALIE_MAX_PER_PAGE, ge=1, le=MEALIE_MAX_PER_PAGE)

    @field_validator("address")
    @classmethod
    def _address_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("mealie.address must not be empty")
        return v


class TaxonomyConfig(BaseModel):
    """
    Which documents make up the taxonomy.

    Extra files are merged into the same batch as the bundled defaults, so
    references may cross between them.
    """

    include_defaults: bool = True
    group_files: list[Path] = Field(default_factory=list)
    diet_files: list[Path] = Field(default_factory=list)
    subgroup_expansion: SubgroupExpansion = SubgroupExpansion.TRANSITIVE

    @property
    def uses_only_defaults(self) -> bool:
        return (
            self.include_defaults
            and not self.group_files
            and not self.diet_files
            and self.subgroup_expansion is SubgroupExpansion.TRANSITIVE
        )


class AppConfig(BaseModel):
    """
    Runtime configuration.
    - Loaded from configs/app.yaml
    - Secrets overridden from the environment by the loader
    """

    mealie: MealieConfig | None = None
    taxonomy: TaxonomyConfig = Field(default_factory=TaxonomyConfig)
