"""Timesheet CLI."""
import argparse
import logging
from decimal import Decimal, InvalidOperation
from typing import List, Optional

from worklog.billing.aggregator import round_money
from worklog.cli import add_common_arguments, configure_logging, open_workspace
from worklog.common.errors import NotFound
from worklog.common.models import TaskRecord
from worklog.invoicing.service import list_client_names

from .rates import get_available_clients
from .service import ClientSummary, TaskInput, limit_status, log_task, summarize_tasks

logger = logging.getLogger(__name__)

LIMIT_MARKERS = {
    "exceeded": "🔴",
    "critical": "🟠",
    "warning": "🟡",
    "ok": "🟢",
}


def _hours(value: str) -> Decimal:
    try:
        hours = Decimal(value)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}")
    if not hours.is_finite() or hours <= 0:
        raise argparse.ArgumentTypeError("hours must be a positive number")
    return hours


def render_task_summary(task: TaskRecord) -> str:
    lines = [
        "📋 === Task Summary ===",
        f"Date: {task.date.isoformat()}",
        f"Time: {task.time}",
        f"Activity Type: {task.activity_type}",
    ]
    if task.ticket_reference:
        lines.append(f"Ticket Number: {task.ticket_reference}")
    lines += [
        f"Hours Worked: {task.hours_worked}",
        f"Client: {task.client}",
        f"Rate: ${round_money(task.rate)}/hour",
        f"Total: ${round_money(task.amount)}",
        "==================",
    ]
    return "\n".join(lines)


def _limit_note(hour_limit: Optional[Decimal], hours: Decimal) -> str:
    status = limit_status(hour_limit, hours)
    if status is None:
        return ""
    remaining = hour_limit - hours
    if status == "exceeded":
        return f" {LIMIT_MARKERS[status]} (LIMIT EXCEEDED by {round_money(abs(remaining))}h)"
    return f" {LIMIT_MARKERS[status]} ({round_money(remaining)}h remaining)"


def render_summaries(summaries: List[ClientSummary]) -> str:
    out = ["📊 === Tasks by Client and Billing Period ==="]
    grand_total = 0

    for summary in summaries:
        out.append("")
        out.append(f"📋 {summary.client}")
        if summary.hour_limit is not None:
            out.append(f"  Limit: {summary.hour_limit}h per billing period")

        for period in summary.periods:
            out.append("")
            out.append(f"  📅 {period.period_label}")
            out.append("")
            out.append(
                f"  {'Date':<12}{'Time':<10}{'Activity':<18}{'Ticket':<12}"
                f"{'Hours':>8}  {'Rate':<12}{'Total':>12}"
            )
            for task, running in zip(period.tasks, period.cumulative_hours()):
                status = limit_status(period.hour_limit, running)
                marker = LIMIT_MARKERS[status] if status else ""
                out.append(
                    f"  {task.date.isoformat():<12}{task.time:<10}{task.activity_type:<18}"
                    f"{task.ticket_reference or '-':<12}{str(task.hours_worked):>8}{marker:<2}"
                    f"{'$' + str(task.rate) + '/hr':<12}{'$' + str(round_money(task.amount)):>12}"
                )

            totals = period.totals
            out.append("")
            out.append(
                f"  Period Total: {totals.task_count} task(s), "
                f"{round_money(totals.total_hours)} hours"
                f"{_limit_note(period.hour_limit, totals.total_hours)}, "
                f"${round_money(totals.total_amount)}"
            )

        client_totals = summary.totals
        grand_total += client_totals.task_count
        out.append("")
        out.append(
            f"  Client Total: {client_totals.task_count} task(s), "
            f"{round_money(client_totals.total_hours)} hours, "
            f"${round_money(client_totals.total_amount)}"
        )

    out.append("")
    out.append("=" * 60)
    out.append(f"Grand Total: {grand_total} task(s)")
    return "\n".join(out)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog='worklog timesheets', description='Timesheet Tracking')
    parser.add_argument('command', choices=['log', 'view', 'clients'])
    parser.add_argument('--client', help='Client name')
    parser.add_argument('--hours', type=_hours, help='Hours worked')
    parser.add_argument('--activity', '-a', help='Activity type')
    parser.add_argument('--ticket', '-t', help='Ticket number (optional)')
    parser.add_argument('--period', help='Billing date (YYYY-MM-DD) to filter the view')
    add_common_arguments(parser)
    args = parser.parse_args(argv)

    configure_logging(args.verbose)
    config, store = open_workspace(args)

    if args.command == 'log':
        if not args.client or args.hours is None or not args.activity:
            parser.error('log requires --client, --hours and --activity')
        if args.activity not in config.activity_types:
            logger.debug(f"Custom activity type: {args.activity}")

        task = log_task(
            store,
            TaskInput(
                activity_type=args.activity,
                hours_worked=args.hours,
                client=args.client,
                ticket_reference=args.ticket,
            ),
            config,
        )
        print(render_task_summary(task))
        print('✅ Task entry saved successfully!')

    elif args.command == 'view':
        try:
            summaries = summarize_tasks(store.load(), config, args.client, args.period)
        except NotFound as e:
            print(f'⚠️  {e}')
            return 0
        print(render_summaries(summaries))

    elif args.command == 'clients':
        configured = get_available_clients(config)
        logged = list_client_names(store.load())
        print(f'👥 {len(configured)} configured client(s):')
        for name in configured:
            print(f'   {name}')
        print(f'🗂️  {len(logged)} client(s) with logged tasks:')
        for name in logged:
            print(f'   {name}')

    return 0


if __name__ == '__main__':
    raise SystemExit(main())
