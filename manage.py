#!/usr/bin/env python3
"""
Controlata warehouse management CLI.

Usage:
    python manage.py init-db             Apply pending migrations
    python manage.py check-db            Verify schema and stock balances
    python manage.py serve               Start the API server
    python manage.py low-stock           List materials at or below min level
    python manage.py recalculate-costs   Recompute stored picture cost prices
"""

import argparse
import asyncio
import sys

from src.application.services import build_services
from src.config import configure_logging, get_settings
from src.core.entities.picture import PictureType
from src.core.exceptions import ControlataError
from src.infrastructure.storage.sqlite import create_pool
from src.infrastructure.storage.sqlite.migrations import (
    get_migration_status,
    initialize_database,
    verify_schema_integrity,
)


async def _init_db(backup: bool) -> bool:
    settings = get_settings()
    results = await initialize_database(settings.storage.db_path, create_backup_before=backup)

    if not results:
        print(f"Database is up to date ({settings.storage.db_path}).")
    for result in results:
        if result.success:
            print(f"  applied {result.version}_{result.name} ({result.execution_time_ms} ms)")
        else:
            print(f"  FAILED  {result.version}_{result.name}: {result.error}")

    status = await get_migration_status(settings.storage.db_path)
    print(f"Current version: {status.get('current_version')}")
    return all(r.success for r in results)


async def _check_db() -> bool:
    settings = get_settings()
    checks = await verify_schema_integrity(settings.storage.db_path)
    for check in checks:
        details = {k: v for k, v in check.items() if k not in ("check", "status") and v}
        suffix = f" {details}" if details else ""
        print(f"  {check['status']:<5} {check['check']}{suffix}")
    return all(check["status"] == "PASS" for check in checks)


async def _low_stock() -> int:
    settings = get_settings()
    async with create_pool(settings.storage) as pool:
        services = build_services(pool, settings)
        report = await services.stock_ledger.check_low_stock()

    if not report.alerts:
        print("No materials below their minimum level.")
        return 0

    print(f"{'Material':<30} {'Category':<10} {'Severity':<9} {'Quantity':>10} {'Min':>10}")
    for alert in report.alerts:
        level = alert.level
        print(
            f"{level.name:<30.30} {level.category:<10} {alert.severity.value:<9} "
            f"{level.quantity:>10.2f} {level.min_level or 0:>10.2f}"
        )
    print(f"Critical: {report.critical_count}, warning: {report.warning_count}")
    return len(report.alerts)


async def _recalculate_costs(
    material_id: str | None, picture_type: str | None, update_prices: bool
) -> int:
    settings = get_settings()
    async with create_pool(settings.storage) as pool:
        services = build_services(pool, settings)
        report = await services.cost_calculator.recalculate_costs(
            material_id=material_id,
            picture_type=PictureType(picture_type) if picture_type else None,
            pricing=services.pricing if update_prices else None,
        )

    print(
        f"Pictures: {report.total_pictures}, updated: {report.updated}, "
        f"errors: {report.errors}"
    )
    for detail in report.details:
        if "error" in detail:
            print(f"  {detail['name']}: {detail['error']}")
        else:
            line = f"  {detail['name']}: {detail['old_cost_price']} -> {detail['new_cost_price']}"
            if detail["price_updated"]:
                line += f" (price {detail['old_price']} -> {detail['new_price']})"
            print(line)
    return report.errors


def cmd_init_db(args: argparse.Namespace) -> None:
    """Create or migrate the database."""
    if not asyncio.run(_init_db(backup=not args.no_backup)):
        sys.exit(1)


def cmd_check_db(args: argparse.Namespace) -> None:
    """Run schema and ledger integrity checks."""
    if not get_settings().storage.db_path.exists():
        print("Database does not exist. Run init-db first.")
        sys.exit(1)
    if not asyncio.run(_check_db()):
        sys.exit(1)


def cmd_serve(args: argparse.Namespace) -> None:
    """Run the API with uvicorn."""
    import uvicorn

    settings = get_settings()
    host = args.host or settings.api.host
    port = args.port or settings.api.port

    print(f"Starting server on {host}:{port}...")
    uvicorn.run(
        "src.api.main:app",
        host=host,
        port=port,
        reload=args.reload,
    )


def cmd_low_stock(args: argparse.Namespace) -> None:
    """Print the low-stock report."""
    try:
        count = asyncio.run(_low_stock())
    except ControlataError as e:
        print(f"Error: {e.message}")
        sys.exit(1)
    if args.fail_on_low and count:
        sys.exit(2)


def cmd_recalculate_costs(args: argparse.Namespace) -> None:
    """Recompute and store cost prices."""
    try:
        errors = asyncio.run(
            _recalculate_costs(args.material_id, args.picture_type, args.update_prices)
        )
    except ControlataError as e:
        print(f"Error: {e.message}")
        sys.exit(1)
    if errors:
        sys.exit(2)


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Controlata warehouse management CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # init-db
    p_init = sub.add_parser("init-db", help="Apply pending migrations")
    p_init.add_argument("--no-backup", action="store_true", help="Skip the pre-migration backup")
    p_init.set_defaults(func=cmd_init_db)

    # check-db
    p_check = sub.add_parser("check-db", help="Verify schema and stock balances")
    p_check.set_defaults(func=cmd_check_db)

    # serve
    p_serve = sub.add_parser("serve", help="Start the API server")
    p_serve.add_argument("--host", default=None, help="Bind host (default: API_HOST)")
    p_serve.add_argument("--port", type=int, default=None, help="Bind port (default: API_PORT)")
    p_serve.add_argument("--reload", action="store_true", help="Reload on code changes")
    p_serve.set_defaults(func=cmd_serve)

    # low-stock
    p_low = sub.add_parser("low-stock", help="List materials at or below min level")
    p_low.add_argument(
        "--fail-on-low",
        action="store_true",
        help="Exit with code 2 when any material is low (for cron alerts)",
    )
    p_low.set_defaults(func=cmd_low_stock)

    # recalculate-costs
    p_recalc = sub.add_parser("recalculate-costs", help="Recompute picture cost prices")
    p_recalc.add_argument("--material-id", default=None, help="Only pictures using this material")
    p_recalc.add_argument(
        "--picture-type",
        choices=[t.value for t in PictureType],
        default=None,
        help="Only pictures of this type",
    )
    p_recalc.add_argument(
        "--update-prices",
        action="store_true",
        help="Also set each sale price to the recommended price",
    )
    p_recalc.set_defaults(func=cmd_recalculate_costs)

    args = parser.parse_args()
    configure_logging()
    args.func(args)


if __name__ == "__main__":
    main()
