"""Filesystem helpers shared by config and document loading."""

from pathlib import Path


def ensure_exists(path: Path, what: str) -> None:
    """
    Raise FileNotFoundError naming `what` if `path` is missing.

    Args:
        path: Path to check
        what: Human description used in the error message (e.g. "app config")
    """
    if not path.exists():
        raise FileNotFoundError(f"Missing {what} at: {path}")


def read_text(path: Path, what: str = "file") -> str:
    """Read a UTF-8 text file after checking it exists."""
    ensure_exists(path, what)
    return path.read_text(encoding="utf-8")
