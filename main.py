"""
CLI entrypoint for diet checks.

This script performs the following steps:
- loads .env (if present) and configs/app.yaml
- builds the taxonomy (bundled defaults, or defaults plus configured extra documents)
- optionally logs every group and diet (--list)
- optionally fetches all recipes from Mealie and reports which ones break a diet (--diet)
"""

import argparse
import logging
import sys
import uuid
from datetime import datetime
from pathlib import Path

from dotenv import load_dotenv

from application import (
    ResolvedTaxonomy,
    build_configured_taxonomy,
    check_recipes,
    default_taxonomy,
)
from domain.errors import CacheInitializationError, SchemaError, TaxonomyError, UnresolvedReferenceError
from infrastructure.config import AppConfig, load_app_config
from infrastructure.constants import APP_CONFIG_FILE, ENV_FILE
from infrastructure.io import ensure_exists
from infrastructure.observability import configure_logging, make_run_tag, set_log_context
from infrastructure.recipes import MealieClient, MealieError

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Check recipes against dietary restrictions")
    p.add_argument(
        "--config",
        type=str,
        default=str(APP_CONFIG_FILE),
        help="Path to app.yaml (default: configs/app.yaml)",
    )
    p.add_argument(
        "--env",
        type=str,
        default=str(ENV_FILE),
        help="Path to .env file, loaded if it exists (default: .env)",
    )
    p.add_argument(
        "--diet",
        type=str,
        default=None,
        help="Fetch all Mealie recipes and report which ones this diet disallows.",
    )
    p.add_argument(
        "--list",
        action="store_true",
        help="Log every resolved group and diet.",
    )
    p.add_argument(
        "--console-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Console log level",
    )
    return p.parse_args(argv)


def _log_taxonomy(taxonomy: ResolvedTaxonomy) -> None:
    for name in sorted(taxonomy.groups):
        members = sorted(taxonomy.groups[name].ingredients())
        logger.info("group %-20s %3d: %s", name, len(members), ", ".join(map(str, members)))
    for name in sorted(taxonomy.diets):
        banned = sorted(taxonomy.diets[name].banned_ingredients())
        logger.info("diet  %-20s %3d banned", name, len(banned))


def _report_taxonomy_error(err: BaseException) -> None:
    cause = err.__cause__ if isinstance(err, CacheInitializationError) else err
    if isinstance(cause, UnresolvedReferenceError):
        logger.error(
            "Unresolved %s reference: name=%r referenced_by=%r",
            cause.kind,
            cause.name,
            cause.referenced_by,
        )
    elif isinstance(cause, SchemaError):
        logger.error("Schema error: document=%r record=%r detail=%s", cause.document, cause.record, cause.detail)
    else:
        logger.error("Taxonomy error: %s", err)


def _check_diet(cfg: AppConfig, taxonomy: ResolvedTaxonomy, diet_name: str) -> int:
    diet = taxonomy.diets.get(diet_name)
    if diet is None:
        logger.error("Unknown diet %r. Available: %s", diet_name, ", ".join(sorted(taxonomy.diets)))
        return 2
    if cfg.mealie is None:
        logger.error("No 'mealie' section in config; cannot fetch recipes.")
        return 2

    set_log_context(diet=diet_name)
    with MealieClient.from_config(cfg.mealie) as client:
        recipes = client.get_recipes()

    results = check_recipes(recipes, diet_name, diet)
    for r in results:
        if r.compliant:
            logger.info("OK    %s", r.name or r.slug)
        else:
            logger.warning("FAIL  %s: %s", r.name or r.slug, ", ".join(r.violations))

    n_ok = sum(r.compliant for r in results)
    logger.info("%d/%d recipe(s) compatible with '%s'", n_ok, len(results), diet_name)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    configure_logging(console_level=getattr(logging, args.console_level))
    run_id = f"{datetime.now().strftime('%Y%m%d_%H%M%S')}_{uuid.uuid4().hex[:6]}"
    set_log_context(run_id_full=run_id)
    logger.info("Starting run: run_id=%s (run_tag=%s)", run_id, make_run_tag(run_id))

    env_file = Path(args.env)
    if env_file.exists():
        load_dotenv(env_file, override=True)

    config_path = Path(args.config)
    ensure_exists(config_path, "app config")
    cfg = load_app_config(config_path)

    try:
        if cfg.taxonomy.uses_only_defaults:
            taxonomy = default_taxonomy()
        else:
            taxonomy = build_configured_taxonomy(cfg.taxonomy)
    except (TaxonomyError, CacheInitializationError) as e:
        _report_taxonomy_error(e)
        return 1

    logger.info("Taxonomy ready: %d groups, %d diets", len(taxonomy.groups), len(taxonomy.diets))

    if args.list:
        _log_taxonomy(taxonomy)

    if args.diet is not None:
        try:
            return _check_diet(cfg, taxonomy, args.diet)
        except (MealieError, ValueError) as e:
            logger.error("Recipe check failed: %s", e)
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
