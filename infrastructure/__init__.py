"""
Infrastructure layer: External dependencies and I/O boundaries.

Contains adapters for:
- Configuration loading (YAML, environment)
- Bundled default taxonomy documents
- Mealie recipe server client
- Observability (logging)
- Table export

This is the only layer that performs I/O operations.
"""

# Most commonly used - exposed at top level for convenience
from infrastructure.config import AppConfig, load_app_config, load_documents, parse_yaml_document
from infrastructure.recipes import MealieClient, MealieError

__all__ = [
    # Configuration
    "AppConfig",
    "load_app_config",
    "load_documents",
    "parse_yaml_document",
    # Recipe source
    "MealieClient",
    "MealieError",
]
