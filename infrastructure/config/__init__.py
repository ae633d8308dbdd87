"""
Configuration management: models, loading, and validation.

Handles:
- AppConfig: Mealie connection and taxonomy sources
- Taxonomy document loading from YAML
- Environment variable overrides

The loader module performs file I/O; models are pure Pydantic classes.
"""

from infrastructure.config.loader import load_app_config, load_documents, parse_yaml_document
from infrastructure.config.models import AppConfig, MealieConfig, TaxonomyConfig

__all__ = [
    "AppConfig",
    "MealieConfig",
    "TaxonomyConfig",
    "load_app_config",
    "load_documents",
    "parse_yaml_document",
]
