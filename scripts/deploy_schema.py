#!/usr/bin/env python
# ============================================================================
# SCHEMA DEPLOYMENT SCRIPT
# ============================================================================
# EPOCH: 1 - FORM INTAKE
# PURPOSE: Deploy the intake schema and submissions table to PostgreSQL
# USAGE:
#   python scripts/deploy_schema.py --dry-run    # Preview SQL
#   python scripts/deploy_schema.py              # Execute deployment
# ============================================================================

import sys
import os
import argparse
import asyncio
import logging

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.logging import configure_logging
from infrastructure import DatabaseInitializer, InitializationResult
from repositories.database import close_pool, init_pool


async def deploy(dry_run: bool, connection: str = None) -> InitializationResult:
    """Run the initializer, opening a pool only when executing."""
    if dry_run:
        return await DatabaseInitializer().initialize_all(dry_run=True)

    pool = await init_pool(min_size=1, max_size=1, connection_string=connection)
    try:
        return await DatabaseInitializer(pool).initialize_all()
    finally:
        await close_pool()


def main():
    parser = argparse.ArgumentParser(
        description="Deploy the intake schema to PostgreSQL",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/deploy_schema.py --dry-run     # Preview DDL without executing
  python scripts/deploy_schema.py               # Deploy schema

Environment Variables:
  DATABASE_URL          Full PostgreSQL connection string
  POSTGRES_HOST         Database host (default: localhost)
  POSTGRES_DB           Database name (default: postgres)
  POSTGRES_USER         Database user (default: postgres)
  POSTGRES_PASSWORD     Database password
  INTAKE_DB_SCHEMA      Target schema (default: intake)
        """
    )
    parser.add_argument("--dry-run", action="store_true", help="Print DDL without executing")
    parser.add_argument("--connection", type=str, help="PostgreSQL connection string (overrides environment)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    args = parser.parse_args()

    configure_logging(level=logging.DEBUG if args.verbose else logging.INFO)

    print("=" * 70)
    print("GOVSERVICE INTAKE - Schema Deployment")
    print("=" * 70)

    result = asyncio.run(deploy(args.dry_run, args.connection))

    for step in result.steps:
        marker = {"success": "OK  ", "failed": "FAIL", "skipped": "--  "}[step.status]
        print(f"[{marker}] {step.name}")
        if args.dry_run or args.verbose:
            print(step.sql.strip())
            print()
        if step.error:
            print(f"       {step.error}")

    print("=" * 70)
    if args.dry_run:
        print("Dry run complete - nothing executed")
    elif result.success:
        print(f"Schema '{result.schema}' deployed")
    else:
        print(f"Deployment failed: {'; '.join(result.errors)}")

    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
