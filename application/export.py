"""Tabular views of a resolved taxonomy."""

import pandas as pd

from application.taxonomy import ResolvedTaxonomy

EXPORT_COLUMNS = ["kind", "name", "ingredient"]


def taxonomy_to_frame(taxonomy: ResolvedTaxonomy) -> pd.DataFrame:
    """
    Long-form table: one row per (group or diet, ingredient).

    Columns: kind ("group" / "diet"), name, ingredient. Sorted by all three.
    """
    rows: list[tuple[str, str, str]] = []
    for name, group in taxonomy.groups.items():
        rows.extend(("group", name, str(i)) for i in group.ingredients())
    for name, diet in taxonomy.diets.items():
        rows.extend(("diet", name, str(i)) for i in diet.banned_ingredients())

    df = pd.DataFrame(rows, columns=EXPORT_COLUMNS)
    return df.sort_values(EXPORT_COLUMNS).reset_index(drop=True)
