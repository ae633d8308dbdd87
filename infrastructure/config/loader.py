"""Configuration and taxonomy document loading from YAML files."""

import logging
import os
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from domain.errors import SchemaError
from domain.taxonomy import SourceDocument
from infrastructure.config.models import AppConfig
from infrastructure.constants import MEALIE_ADDRESS_ENV, MEALIE_TOKEN_ENV
from infrastructure.io.fs import read_text

logger = logging.getLogger(__name__)

_MERGE_TAG = "tag:yaml.org,2002:merge"


class UniqueKeyLoader(yaml.SafeLoader):
    """SafeLoader that rejects a key repeated within one mapping instead of keeping the last value."""


def _construct_unique_mapping(loader: UniqueKeyLoader, node: yaml.MappingNode, deep: bool = False) -> dict:
    seen = set()
    for key_node, _ in node.value:
        if key_node.tag == _MERGE_TAG:
            continue
        key = loader.construct_object(key_node, deep=True)
        try:
            duplicate = key in seen
        except TypeError:
            # Unhashable keys are reported by construct_mapping
            continue
        if duplicate:
            raise yaml.constructor.ConstructorError(
                "while constructing a mapping",
                node.start_mark,
                f"found duplicate key {key!r}",
                key_node.start_mark,
            )
        seen.add(key)
    return loader.construct_mapping(node, deep=deep)


UniqueKeyLoader.add_constructor(yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG, _construct_unique_mapping)


def _load_yaml(path: Path) -> dict[str, Any]:
    """Load YAML file and return as dict."""
    text = read_text(path, "config file")
    try:
        data = yaml.load(text, Loader=UniqueKeyLoader)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected YAML dict in {path}, got {type(data)}")

    return data


def parse_yaml_document(name: str, text: str) -> SourceDocument:
    """
    Decode one taxonomy document from YAML text.

    Raises:
        SchemaError: If the text is not valid YAML, repeats a key within a mapping,
            or does not decode to a mapping
    """
    try:
        data = yaml.load(text, Loader=UniqueKeyLoader)
    except yaml.YAMLError as e:
        raise SchemaError(name, f"invalid YAML: {e}") from e

    if not isinstance(data, dict):
        raise SchemaError(name, f"expected a mapping at top level, got {type(data).__name__}")
    return SourceDocument(name=name, data=data)


def load_documents(paths: Iterable[Path]) -> list[SourceDocument]:
    """
    Read and decode taxonomy documents from disk.

    This function handles file I/O; parsing into records happens in the domain layer.

    Raises:
        FileNotFoundError: If a path does not exist
        SchemaError: If a file is not a YAML mapping
    """
    documents = []
    for path in paths:
        path = Path(path)
        documents.append(parse_yaml_document(str(path), read_text(path, "taxonomy document")))
        logger.debug("Loaded taxonomy document %s", path)
    return documents


def load_app_config(path: Path) -> AppConfig:
    """
    Load app.yaml and construct an AppConfig.

    Environment overrides (apply after .env has been loaded):
    - MEALIE_API_TOKEN replaces mealie.api_token
    - MEALIE_ADDRESS replaces mealie.address
    Without a mealie section in the file, one is built from the environment
    when both variables are set.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the YAML is not a mapping or fails validation
    """
    data = _load_yaml(path)
    token = os.environ.get(MEALIE_TOKEN_ENV)
    address = os.environ.get(MEALIE_ADDRESS_ENV)

    mealie = data.get("mealie")
    if mealie is None and token and address:
        mealie = {}
    if mealie is not None:
        if not isinstance(mealie, dict):
            raise ValueError(f"'mealie' must be a mapping in {path}")
        mealie = dict(mealie)
        if token:
            mealie["api_token"] = token
        if address:
            mealie["address"] = address
        data = {**data, "mealie": mealie}

    try:
        cfg = AppConfig.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid config in {path}: {e}") from e

    # Relative document paths are taken relative to the config file
    base = path.parent
    cfg.taxonomy.group_files = [p if p.is_absolute() else base / p for p in cfg.taxonomy.group_files]
    cfg.taxonomy.diet_files = [p if p.is_absolute() else base / p for p in cfg.taxonomy.diet_files]

    return cfg
