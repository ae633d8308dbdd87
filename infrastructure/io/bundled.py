"""
Bundled default taxonomy documents.

The YAML texts ship inside the package (infrastructure/data) and are read into
memory once, when this module is imported. Building the default taxonomy
afterwards touches no files.
"""

from importlib import resources

_DATA_PACKAGE = "infrastructure.data"


def _read_bundled(kind: str) -> tuple[tuple[str, str], ...]:
    root = resources.files(_DATA_PACKAGE).joinpath(kind)
    entries = sorted(
        (entry for entry in root.iterdir() if entry.name.endswith(".yaml")),
        key=lambda entry: entry.name,
    )
    return tuple((f"{kind}/{entry.name}", entry.read_text(encoding="utf-8")) for entry in entries)


# (document name, YAML text) pairs
BUNDLED_GROUP_TEXTS = _read_bundled("groups")
BUNDLED_DIET_TEXTS = _read_bundled("diets")
