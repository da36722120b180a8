"""Command-line interface for cloning a tenant.

Usage:
    tenant-clone 5 7 --config network.yaml
    tenant-clone 1 7 --force-https --dry-run database_url=mysql+pymysql://wp:pw@db/wordpress
    tenant-clone 5 7 --skip-replace --json --config network.yaml wp_cli="wp --allow-root"

Positional arguments that look like ``key=value`` are configuration overrides
(see ``tenant_clone.core.config.PlatformConfig``); the others are the source
and target tenant IDs.

Exit codes: 0 when the clone or dry run completed, 1 on any error.
"""

import argparse
import json
import subprocess
import sys
from pathlib import Path

from sqlalchemy.exc import SQLAlchemyError

from tenant_clone.catalog.clone import clone_tenant
from tenant_clone.core.config import load_platform_config
from tenant_clone.core.enums import CloneStatus
from tenant_clone.core.exceptions import TenantCloneException
from tenant_clone.core.logging_config import configure_logging, get_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tenant-clone",
        description="Clone one site of a multisite network to another site",
        epilog=(
            "Examples:\n"
            "  tenant-clone 5 7 --config network.yaml\n"
            "  tenant-clone 1 7 --dry-run --config network.yaml\n"
            "  tenant-clone 5 7 --config network.yaml uploads_dir=/srv/uploads\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "arguments",
        nargs="*",
        metavar="SOURCE TARGET [key=value ...]",
        help="Source site ID, target site ID and optional configuration overrides",
    )
    parser.add_argument("--config", "-c", type=Path, help="YAML platform configuration file")
    parser.add_argument("--force-https", action="store_true", help="Force https on the target URLs")
    parser.add_argument(
        "--skip-replace",
        action="store_true",
        help="Skip search/replace on the target URLs. Useful for cross-linked sites",
    )
    parser.add_argument("--dry-run", action="store_true", help="Run the command without actually doing anything")
    parser.add_argument("--json", action="store_true", help="Print the clone result as JSON")
    return parser


def _fail(error: Exception, as_json: bool) -> int:
    if as_json:
        print(json.dumps({"status": CloneStatus.failed.value, "error": str(error)}, indent=2))
    print(f"Error: {error}", file=sys.stderr)
    return 1


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the tenant clone CLI.

    Returns:
        Exit code (0 for success or a completed dry run, 1 for failure).
    """
    args = build_parser().parse_intermixed_args(argv)
    overrides = [a for a in args.arguments if "=" in a]
    tenant_ids = [a for a in args.arguments if "=" not in a]

    logger = get_logger()
    try:
        config = load_platform_config(args.config, overrides)
        configure_logging(level=config.logging_level, sqlalchemy_level=config.sqlalchemy_logging_level)
        result = clone_tenant(
            config,
            tenant_ids,
            force_https=args.force_https,
            skip_replace=args.skip_replace,
            dry_run=args.dry_run,
        )
    except TenantCloneException as e:
        return _fail(e, args.json)
    except (SQLAlchemyError, subprocess.CalledProcessError) as e:
        logger.exception("Clone aborted")
        return _fail(e, args.json)

    if args.json:
        print(result.to_json())
    if result.status == CloneStatus.dry_run:
        print(f"Warning: {result.message}", file=sys.stderr)
    else:
        if result.assets is not None and not result.assets.complete:
            print(f"Warning: {len(result.assets.errors)} files could not be copied", file=sys.stderr)
        if not args.json:
            print(f"Success: {result.message}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
