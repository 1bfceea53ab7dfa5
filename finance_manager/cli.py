"""
FinanceManager command line.

Usage:
    finance-manager serve catalog [--port 8000] [--reload]
    finance-manager serve transactions [--port 8001] [--reload]
    finance-manager init-db catalog [--no-seed]
    finance-manager init-db transactions
    finance-manager replicate

Add --test before the command to run against the TEST_ databases.
"""
import argparse
import asyncio
import sys

from finance_manager.common.config import get_settings, set_test_mode
from finance_manager.common.logging_config import configure_logging

SERVICES = ("catalog", "transactions")


def cmd_serve(service: str, port: int | None, reload: bool) -> int:
    import uvicorn

    settings = get_settings()
    default_port = settings.CATALOG_PORT if service == "catalog" else settings.TRANSACTIONS_PORT
    uvicorn.run(
        f"finance_manager.{service}.main:app",
        host="0.0.0.0",
        port=port or default_port,
        reload=reload,
        )
    return 0


async def cmd_init_db(service: str, seed: bool) -> int:
    if service == "catalog":
        from finance_manager.catalog.main import init_catalog_db
        await init_catalog_db(seed=seed)
    else:
        from finance_manager.transactions.main import init_transactions_db
        await init_transactions_db()
    print(f"✅ {service} database ready")
    return 0


async def cmd_replicate() -> int:
    from finance_manager.transactions.main import init_transactions_db
    from finance_manager.transactions.replication.job import ReplicationJob

    await init_transactions_db()
    summary = await ReplicationJob().run_once()

    for kind, count in summary.counts.items():
        print(f"  {kind:<15} {count}")
    if not summary.success:
        print(f"❌ {summary.error_code}: {summary.error_message}")
        return 1
    print("✅ Replication completed")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="finance-manager",
        description="FinanceManager services CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  finance-manager serve catalog --reload
  finance-manager init-db transactions
  finance-manager --test replicate
        """
        )
    parser.add_argument("--test", action="store_true", help="Use the test databases")

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    serve_parser = subparsers.add_parser("serve", help="Run one service with uvicorn")
    serve_parser.add_argument("service", choices=SERVICES)
    serve_parser.add_argument("--port", type=int, default=None, help="Override the configured port")
    serve_parser.add_argument("--reload", action="store_true", help="Auto-reload on code changes")

    init_parser = subparsers.add_parser("init-db", help="Create the tables of one service")
    init_parser.add_argument("service", choices=SERVICES)
    init_parser.add_argument("--no-seed", action="store_true", help="Skip catalog reference data seeding")

    subparsers.add_parser("replicate", help="Run one catalog replication pass")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    if args.test:
        set_test_mode(True)

    if args.command == "serve":
        return cmd_serve(args.service, args.port, args.reload)

    settings = get_settings()
    configure_logging(settings.LOG_LEVEL, enable_file_logging=False)

    if args.command == "init-db":
        return asyncio.run(cmd_init_db(args.service, seed=not args.no_seed))
    if args.command == "replicate":
        return asyncio.run(cmd_replicate())
    return 0


if __name__ == "__main__":
    sys.exit(main())
