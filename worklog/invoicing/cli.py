"""Invoice CLI."""
import argparse
from typing import List, Optional

from worklog.billing.aggregator import round_money
from worklog.billing.calendar import format_long_date
from worklog.cli import add_common_arguments, configure_logging, open_workspace
from worklog.common.errors import NotFound

from .service import Invoice, InvoiceService


def render_invoice(invoice: Invoice) -> str:
    out = [
        "=" * 60,
        "💰 INVOICE",
        "=" * 60,
        "",
        f"Client: {invoice.client}",
        f"Invoice Date: {format_long_date(invoice.billing_date)}",
        f"Due Date: {format_long_date(invoice.due_date)}",
        f"Billing Period: {invoice.period_label}",
        "",
        f"{'Service':<20}{'Description':<15}{'Rate':>12}{'Hours':>10}{'Amount':>12}",
    ]
    for item in invoice.line_items:
        out.append(
            f"{item.activity_type:<20}{item.ticket_reference or '-':<15}"
            f"{'$' + str(round_money(item.rate)):>12}"
            f"{str(round_money(item.total_hours)):>10}"
            f"{'$' + str(round_money(item.amount)):>12}"
        )
    out += [
        "",
        "─" * 60,
        f"Total Hours: {round_money(invoice.total_hours)}",
        f"Total Amount: ${round_money(invoice.total_amount)}",
        "=" * 60,
    ]
    return "\n".join(out)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog='worklog invoicing', description='Invoice Management')
    parser.add_argument('command', choices=['periods', 'show'])
    parser.add_argument('--client', required=True, help='Client name (exact match)')
    parser.add_argument('--period', help='Billing date (YYYY-MM-DD)')
    add_common_arguments(parser)
    args = parser.parse_args(argv)

    configure_logging(args.verbose)
    config, store = open_workspace(args)
    svc = InvoiceService(store, config)

    if args.command == 'periods':
        periods = svc.list_billing_dates(args.client)
        if not periods:
            print(f'⚠️  No billing periods found for client "{args.client}".')
            return 0
        print(f'📅 {len(periods)} billing period(s) for {args.client}:')
        for billing_date in periods:
            print(f'   {billing_date}  ({format_long_date(billing_date)})')

    elif args.command == 'show':
        if not args.period:
            parser.error('show requires --period (see: worklog invoicing periods --client ...)')
        try:
            invoice = svc.build(args.client, args.period)
        except NotFound as e:
            print(f'⚠️  {e}')
            return 0
        print(render_invoice(invoice))

    return 0


if __name__ == '__main__':
    raise SystemExit(main())
