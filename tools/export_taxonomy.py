"""Export the resolved taxonomy (groups and diet banlists) as a CSV or Excel table."""

from __future__ import annotations

import argparse
from pathlib import Path

from application import build_configured_taxonomy, default_taxonomy, taxonomy_to_frame
from infrastructure.config import load_app_config
from infrastructure.io import write_table


def main() -> None:
    p = argparse.ArgumentParser(description=__doc__)
    p.add_argument("output", type=Path, help="Destination file (.csv or .xlsx)")
    p.add_argument(
        "--config",
        type=Path,
        default=None,
        help="app.yaml with extra taxonomy documents; bundled defaults only if omitted",
    )
    p.add_argument("--kind", choices=["group", "diet"], default=None, help="Only export one kind")
    args = p.parse_args()

    if args.config is None:
        taxonomy = default_taxonomy()
    else:
        taxonomy = build_configured_taxonomy(load_app_config(args.config).taxonomy)

    df = taxonomy_to_frame(taxonomy)
    if args.kind is not None:
        df = df[df["kind"] == args.kind]

    path = write_table(df, args.output)
    print(f"Wrote {len(df)} rows to {path}")


if __name__ == "__main__":
    main()
