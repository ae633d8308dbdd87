"""Tabular export utilities."""

from pathlib import Path

import pandas as pd


def write_table(df: pd.DataFrame, path: Path) -> Path:
    """
    Write a DataFrame to Excel or CSV based on file extension.

    Supported formats:
    - Excel: .xlsx
    - CSV: .csv

    Args:
        df: Table to write
        path: Destination file; parent directories are created

    Returns:
        The path written

    Raises:
        ValueError: If file format is not supported
    """
    suffix = path.suffix.lower()
    if suffix not in (".xlsx", ".csv"):
        raise ValueError(f"Unsupported file format: {suffix}. Supported formats: .xlsx, .csv")

    path.parent.mkdir(parents=True, exist_ok=True)
    if suffix == ".xlsx":
        df.to_excel(path, index=False)
    else:
        df.to_csv(path, index=False)
    return path
