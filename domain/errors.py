"""Error types raised while parsing and resolving ingredient taxonomies."""


class TaxonomyError(Exception):
    """Base class for every parse or resolution failure."""


class SchemaError(TaxonomyError, ValueError):
    """
    A document has the wrong shape, a missing or unknown field, or a duplicate record.

    Attributes:
        document: Name of the document that failed
        record: Name of the record inside the document (None for document-level problems)
        detail: What failed
    """

    def __init__(self, document: str, detail: str, *, record: str | None = None) -> None:
        self.document = document
        self.record = record
        self.detail = detail
        where = f"document '{document}'" if record is None else f"record '{record}' in document '{document}'"
        super().__init__(f"Schema error in {where}: {detail}")


class UnresolvedReferenceError(TaxonomyError, LookupError):
    """
    A subgroup or banned-group name has no matching entry.

    Attributes:
        kind: "subgroup" (group -> group reference) or "group" (diet -> group reference)
        name: The missing name
        referenced_by: Name of the record holding the reference
    """

    def __init__(self, *, kind: str, name: str, referenced_by: str) -> None:
        self.kind = kind
        self.name = name
        self.referenced_by = referenced_by
        super().__init__(f"unknown {kind} '{name}' referenced by '{referenced_by}'")

    def __str__(self) -> str:
        # LookupError would otherwise repr() the message like KeyError does
        return str(self.args[0])


class SubgroupCycleError(TaxonomyError):
    """Transitive subgroup expansion found a loop; `cycle` lists the names in order."""

    def __init__(self, cycle: list[str]) -> None:
        self.cycle = list(cycle)
        super().__init__(f"subgroup cycle detected: {' -> '.join(self.cycle)}")


class CacheInitializationError(RuntimeError):
    """The built-in taxonomy could not be built. Indicates broken bundled data."""
