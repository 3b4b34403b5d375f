from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from exception import FieldDecodeError, InputFileError
from fixed_width import (
    ADDRESS_FIELDS,
    ADDRESS_LENGTH,
    ADDRESS_TYPE,
    HEADER_FIELDS,
    HEADER_LENGTH,
    HEADER_TYPE,
    LINE_ITEM_FIELDS,
    LINE_ITEM_LENGTH,
    LINE_ITEM_TYPE,
    TYPE_CODE_LENGTH,
    extract_fields,
    parse_decimal,
    parse_flag,
    parse_int,
    parse_order_date,
)
from order_models import Address, LineItem, Order, OrderIssue
from order_validator import finalize_order

# -----------------------------
# Logging
# -----------------------------
logger = logging.getLogger("order_parser")
logger.setLevel(logging.INFO)
if not logger.handlers:
    h = logging.StreamHandler()
    h.setFormatter(logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s"))
    logger.addHandler(h)


# Line classifiers
def parse_header(line: str) -> Order:
    """
    Decodes a "100" line into a new Order.

    Decoding is best-effort: a field that fails to decode adds an issue,
    keeps its default value and does not stop the remaining fields.
    A line shorter than 180 characters yields a default Order with a
    single issue.
    """
    order = Order()

    if len(line) < HEADER_LENGTH:
        order.add_issue(
            "header_too_short",
            f"Header line must be at least {HEADER_LENGTH} characters (got {len(line)}).",
        )
        return order

    f = extract_fields(line, HEADER_FIELDS)

    order.order_number = f["order_number"]

    try:
        order.total_items = parse_int(f["total_items"])
    except FieldDecodeError:
        order.add_issue("header_total_items_format", f"Invalid total items format: {f['total_items']!r}.")

    try:
        order.total_cost = parse_decimal(f["total_cost"])
    except FieldDecodeError:
        order.add_issue("header_total_cost_format", f"Invalid total cost format: {f['total_cost']!r}.")

    try:
        order.order_date = parse_order_date(f["order_date"])
    except FieldDecodeError:
        order.add_issue(
            "header_order_date_format",
            f"Invalid order date format (expected MM/dd/yyyy HH:mm:ss): {f['order_date']!r}.",
        )

    order.customer_name = f["customer_name"]
    order.customer_phone = f["customer_phone"]
    order.customer_email = f["customer_email"]

    for attr, label in (("is_paid", "paid"), ("is_shipped", "shipped"), ("is_completed", "completed")):
        try:
            setattr(order, attr, parse_flag(f[attr]))
        except FieldDecodeError:
            order.add_issue(f"invalid_{label}_flag", f"Invalid {label} flag (must be 0 or 1).")

    return order


def parse_address(line: str) -> Address:
    # Short address lines decode to an empty Address without an issue;
    # the validator reports the missing parts.
    if len(line) < ADDRESS_LENGTH:
        return Address()
    return Address(**extract_fields(line, ADDRESS_FIELDS))


def parse_line_item(line: str) -> Tuple[Optional[LineItem], Optional[OrderIssue]]:
    """
    Decodes a "300" line.

    Returns (item, None) on success, or (None, issue) when the line is
    rejected. A rejected line never contributes a partial item.
    """
    if len(line) < LINE_ITEM_LENGTH:
        return None, OrderIssue(
            "line_item_too_short",
            f"Line item must be at least {LINE_ITEM_LENGTH} characters (got {len(line)}).",
        )

    f = extract_fields(line, LINE_ITEM_FIELDS)

    try:
        line_number = parse_int(f["line_number"])
    except FieldDecodeError:
        return None, OrderIssue(
            "invalid_line_number_format",
            f"Invalid line number format: {f['line_number']!r}.",
        )

    try:
        quantity = parse_int(f["quantity"])
    except FieldDecodeError:
        return None, OrderIssue(
            "invalid_quantity_format",
            f"Line {line_number} has invalid quantity format: {f['quantity']!r}.",
            line_number,
        )

    try:
        cost_each = parse_decimal(f["cost_each"])
    except FieldDecodeError:
        return None, OrderIssue(
            "invalid_cost_each_format",
            f"Line {line_number} has invalid cost each format: {f['cost_each']!r}.",
            line_number,
        )

    try:
        total_cost = parse_decimal(f["total_cost"])
    except FieldDecodeError:
        return None, OrderIssue(
            "invalid_total_cost_format",
            f"Line {line_number} has invalid total cost format: {f['total_cost']!r}.",
            line_number,
        )

    item = LineItem(
        line_number=line_number,
        quantity=quantity,
        cost_each=cost_each,
        total_cost=total_cost,
        description=f["description"],
    )
    return item, None


# Assembly
def parse_lines(lines: Iterable[str]) -> List[Order]:
    """
    Groups classified lines into orders and finalizes each one.

    - Blank lines and lines shorter than the type code are skipped.
    - Unknown type codes are logged and skipped.
    - "200" / "300" lines before the first header are skipped.
    - A repeated "200" line replaces the order's address (last one wins).
    - Every "100" line starts exactly one order, and the order still open
      at end of input is finalized too.
    """
    orders: List[Order] = []
    current: Optional[Order] = None

    for idx, raw in enumerate(lines, start=1):
        line = raw.rstrip("\r\n")

        if not line.strip() or len(line) < TYPE_CODE_LENGTH:
            logger.debug("Skipping blank/short line | line=%d", idx)
            continue

        line_type = line[:TYPE_CODE_LENGTH]

        if line_type == HEADER_TYPE:
            if current is not None:
                orders.append(finalize_order(current))
            current = parse_header(line)
        elif line_type == ADDRESS_TYPE:
            if current is None:
                logger.debug("Address line before any header | line=%d", idx)
                continue
            current.address = parse_address(line)
        elif line_type == LINE_ITEM_TYPE:
            if current is None:
                logger.debug("Line item before any header | line=%d", idx)
                continue
            item, issue = parse_line_item(line)
            if item is not None:
                current.line_items.append(item)
            else:
                current.issues.append(issue)
        else:
            logger.warning("Unknown line type | line=%d type=%r", idx, line_type)

    if current is not None:
        orders.append(finalize_order(current))

    valid = sum(1 for o in orders if o.is_valid)
    logger.info("Parsed orders | total=%d valid=%d invalid=%d", len(orders), valid, len(orders) - valid)
    return orders


def read_orders(input_path: str | Path) -> List[Order]:
    """
    Reads a fixed-width order file and returns its validated orders.

    Raises:
        InputFileError: If the file is missing or cannot be read.
    """
    input_path = Path(input_path)

    logger.info("Reading input file | %s", input_path)

    try:
        text = input_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.exception("Cannot read input file | %s", e)
        raise InputFileError(f"Cannot read input file: {input_path}") from e

    # read_text already folds \r and \r\n into \n; splitlines() would also break on
    # form feeds and other separators that may sit inside free-text fields
    return parse_lines(text.split("\n"))
