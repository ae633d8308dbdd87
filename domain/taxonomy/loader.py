"""Parse decoded group/diet documents into raw, still-unresolved records."""

import logging
from collections.abc import Iterable, Mapping
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from domain.errors import SchemaError
from domain.taxonomy.records import RawDietRecord, RawGroupRecord, SourceDocument, allowed_keys

logger = logging.getLogger(__name__)

GROUPS_SECTION = "groups"
DIETS_SECTION = "diets"

RecordT = TypeVar("RecordT", bound=BaseModel)


def _format_validation_error(err: ValidationError) -> str:
    parts = []
    for e in err.errors():
        loc = ".".join(str(p) for p in e.get("loc", ())) or "<record>"
        parts.append(f"{loc}: {e.get('msg')}")
    return "; ".join(parts)


def _parse_record(
    model: type[RecordT],
    *,
    document: str,
    record_name: str,
    data: object,
) -> RecordT:
    if not isinstance(data, Mapping):
        raise SchemaError(document, f"expected a mapping, got {type(data).__name__}", record=record_name)

    # Explicit allow-list so unknown keys are rejected whatever the model config says
    allowed = allowed_keys(model)
    unknown = sorted(str(k) for k in data if k not in allowed)
    if unknown:
        raise SchemaError(
            document,
            f"unknown field(s) {unknown}; allowed: {sorted(allowed)}",
            record=record_name,
        )

    try:
        return model.model_validate(dict(data))
    except ValidationError as e:
        raise SchemaError(document, _format_validation_error(e), record=record_name) from e


def _parse_batch(
    documents: Iterable[SourceDocument],
    *,
    section: str,
    model: type[RecordT],
) -> dict[str, RecordT]:
    records: dict[str, RecordT] = {}
    origin: dict[str, str] = {}

    for doc in documents:
        if not isinstance(doc.data, Mapping):
            raise SchemaError(doc.name, f"expected a mapping at top level, got {type(doc.data).__name__}")

        extra_sections = sorted(str(k) for k in doc.data if k != section)
        if extra_sections:
            raise SchemaError(doc.name, f"unknown top-level key(s) {extra_sections}; expected only '{section}'")
        if section not in doc.data:
            raise SchemaError(doc.name, f"no '{section}' map found")

        body = doc.data[section]
        if not isinstance(body, Mapping):
            raise SchemaError(doc.name, f"'{section}' must be a mapping of name -> record")

        for raw_name, raw_record in body.items():
            if not isinstance(raw_name, str):
                raise SchemaError(doc.name, f"record names must be strings, got {raw_name!r}")
            if raw_name in records:
                raise SchemaError(
                    doc.name,
                    f"duplicate definition (already defined in document '{origin[raw_name]}')",
                    record=raw_name,
                )
            records[raw_name] = _parse_record(model, document=doc.name, record_name=raw_name, data=raw_record)
            origin[raw_name] = doc.name

    logger.debug("Parsed %d %s record(s)", len(records), section)
    return records


def parse_group_batch(documents: Iterable[SourceDocument]) -> dict[str, RawGroupRecord]:
    """
    Parse a batch of group documents.

    Each document must have the shape::

        groups:
          <name>:
            ingredients: [...]
            subgroups: [...]

    Args:
        documents: Decoded documents; all records land in one namespace

    Returns:
        Mapping of group name -> RawGroupRecord

    Raises:
        SchemaError: On the first malformed document; nothing is returned for the batch
    """
    return _parse_batch(documents, section=GROUPS_SECTION, model=RawGroupRecord)


def parse_diet_batch(documents: Iterable[SourceDocument]) -> dict[str, RawDietRecord]:
    """
    Parse a batch of diet documents (top-level `diets` section, records with
    `bannedIngredients` and `bannedGroups`).

    Raises:
        SchemaError: On the first malformed document
    """
    return _parse_batch(documents, section=DIETS_SECTION, model=RawDietRecord)
