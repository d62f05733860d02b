#!/usr/bin/env python3
"""Unified CLI for the work log.

Usage:
    worklog timesheets --help
    worklog invoicing --help

Examples:
    worklog timesheets log --client "Client A" --hours 2.5 -a Implementation -t ABC-123
    worklog timesheets view --client "Client A"
    worklog invoicing periods --client "Client A"
    worklog invoicing show --client "Client A" --period 2024-01-15
"""
import argparse
import logging
import sys
from typing import List, Optional, Tuple

from pydantic import ValidationError

from worklog.common.errors import WorklogError
from worklog.common.storage import JsonTaskStore, TaskStore
from worklog.config import BillingConfig, load_config

logger = logging.getLogger("worklog")

MODULES = ['timesheets', 'invoicing']


def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    """Options shared by every module CLI."""
    parser.add_argument('--config', help='Config file (default: $WORKLOG_CONFIG or config.yaml)')
    parser.add_argument('--data', help='Task file (default: $WORKLOG_DATA or data/tasks.json)')
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def open_workspace(args: argparse.Namespace) -> Tuple[BillingConfig, TaskStore]:
    """Load config and open the task store named by the common options."""
    config = load_config(args.config)
    store = JsonTaskStore(args.data)
    return config, store


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog='worklog',
        description='⏱️  Work log - track hours, bill per period',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Modules:
  timesheets  Log tasks, view hours per client and billing period
  invoicing   List billing periods and show invoices
""",
    )
    parser.add_argument('module', choices=MODULES, help='Module to run')

    # Parse just the module, pass rest to submodule
    args, remaining = parser.parse_known_args(argv)

    if args.module == 'timesheets':
        from worklog.timesheets.cli import main as module_main
    else:
        from worklog.invoicing.cli import main as module_main

    try:
        return module_main(remaining)
    except WorklogError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1
    except ValidationError as e:
        logger.error(f"Task data is malformed: {e}")
        return 1
    except OSError as e:
        logger.error(f"I/O error: {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
