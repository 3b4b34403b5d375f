from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from exception import InputFileError, OutputFileError
from order_models import Order
from order_parser import read_orders

logger = logging.getLogger("order_parser.report")

RULE_WIDTH = 60


@dataclass
class BatchSummary:
    total: int
    successful: int
    failed: int


def summarize_orders(orders: Sequence[Order]) -> BatchSummary:
    successful = sum(1 for o in orders if o.is_valid)
    return BatchSummary(total=len(orders), successful=successful, failed=len(orders) - successful)


# Report Formatting / Output
def _format_date(d: datetime) -> str:
    # %Y is not zero-padded for years below 1000 on glibc (datetime.min)
    return f"{d:%m/%d}/{d.year:04d} {d:%H:%M:%S}"


def _format_order(order: Order) -> List[str]:
    out: List[str] = []
    out.append(f"Order #: {order.order_number}")
    out.append(f"Status: {'SUCCESS' if order.is_valid else 'FAILED'}")
    out.append(f"Customer: {order.customer_name}")
    out.append(f"Order Date: {_format_date(order.order_date)}")
    out.append(f"Total Items: {order.total_items} | Total Cost: ${order.total_cost:.2f}")
    out.append(f"Paid: {order.is_paid} | Shipped: {order.is_shipped} | Completed: {order.is_completed}")

    if order.address is not None:
        a = order.address
        out.append(f"Address: {a.address_line1}")
        if a.address_line2:
            out.append(f"         {a.address_line2}")
        out.append(f"         {a.city}, {a.state} {a.zip}")
    else:
        out.append("Address: [MISSING]")

    out.append("Line Items:")
    if order.line_items:
        for item in order.line_items:
            out.append(
                f"  {item.line_number}. {item.description} - Qty: {item.quantity}"
                f" @ ${item.cost_each:.2f} = ${item.total_cost:.2f}"
            )
    else:
        out.append("  [No line items]")

    if not order.is_valid:
        out.append("")
        out.append("ERRORS:")
        for error in order.errors:
            out.append(f"  - {error}")

    out.append("-" * RULE_WIDTH)
    out.append("")
    return out


def format_report(orders: Sequence[Order]) -> str:
    """
    Builds the human-readable report: one block per order followed by a
    success/failure summary line.
    """
    if not orders:
        return "No orders found.\n"

    out: List[str] = []
    out.append("=" * RULE_WIDTH)
    out.append(f"PARSED ORDERS - Total: {len(orders)}")
    out.append("=" * RULE_WIDTH)
    out.append("")

    for order in orders:
        out.extend(_format_order(order))

    summary = summarize_orders(orders)
    out.append("=" * RULE_WIDTH)
    out.append(f"SUMMARY: {summary.successful} successful, {summary.failed} failed")
    out.append("=" * RULE_WIDTH)
    return "\n".join(out) + "\n"


def write_report(output_path: str | Path, report_text: str) -> None:
    output_path = Path(output_path)
    logger.info("Writing report | %s", output_path)
    try:
        output_path.write_text(report_text, encoding="utf-8")
    except OSError as e:
        logger.exception("Cannot write output file | %s", e)
        raise OutputFileError(f"Cannot write output file: {output_path}") from e


def prompt_for_path(
    input_fn: Callable[[str], str] = input,
    output_fn: Callable[[str], None] = print,
) -> Path:
    """Asks until the user gives the path of an existing file."""
    while True:
        raw = input_fn("Enter the path to the order file: ").strip()
        if not raw:
            output_fn("Error: File path cannot be empty. Please try again.\n")
            continue
        path = Path(raw)
        if not path.is_file():
            output_fn(f"Error: File not found at '{raw}'. Please try again.\n")
            continue
        return path


# CLI / Main
def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Parse and validate a fixed-width purchase order file.")
    parser.add_argument("path", nargs="?", help="Path to the order file (prompted for if omitted)")
    parser.add_argument("--output", help="Write the report to this file instead of stdout")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    args = parser.parse_args(argv)

    logging.getLogger("order_parser").setLevel(args.log_level)

    exit_code = 0
    try:
        path = Path(args.path) if args.path else prompt_for_path()
        orders = read_orders(path)
    except EOFError:
        logger.error("No input file given | stdin closed before a path was entered")
        orders = []
        exit_code = 1
    except InputFileError:
        # already logged by read_orders; report an empty result set
        orders = []
        exit_code = 1

    report = format_report(orders)
    if args.output:
        write_report(args.output, report)
    else:
        print(report, end="")

    summary = summarize_orders(orders)
    logger.info("Complete | orders=%d successful=%d failed=%d", summary.total, summary.successful, summary.failed)
    return exit_code


if __name__ == "__main__":
    raise SystemExit(main())
