#!/usr/bin/env python3
"""
Spendlog CLI - command-line interface for tracking personal expenses.

Usage:
    python -m cli <command> <subcommand> [options]

Commands:
    expenses     Record, browse, import and export expenses
    summary      Spending dashboard and trends
    migrate      Database migrations

Examples:
    python -m cli expenses add --amount 12.50 --category Food --description Lunch
    python -m cli expenses list --search lunch --start-date 2024-01-01
    python -m cli expenses export --category Bills --output bills.csv
    python -m cli summary show
    python -m cli migrate status
"""

import sys
import argparse
from cli import expenses, summary, migrate
from config import load_config
from db.manager import DatabaseManager
from services.base import Services
from logger import setup_logging


def main():
    """Main CLI entry point with subcommands."""
    parser = argparse.ArgumentParser(
        prog="cli",
        description="Spendlog - Personal expense tracking",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
    )

    expenses.setup_parser(subparsers)
    summary.setup_parser(subparsers)
    migrate.setup_parser(subparsers)

    args = parser.parse_args()

    if hasattr(args, "func"):
        try:
            config = load_config()
            setup_logging(config)

            db_manager = DatabaseManager(config)

            if args.command == "migrate":
                # Migrate commands work on the raw database
                args.func(args, db_manager)
            else:
                # The store needs its table before the collection is first loaded
                migrate.apply_pending(db_manager)
                services = Services(config, db_manager=db_manager)
                args.func(args, services)
        except Exception as e:
            print(f"Error: {e}")
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
