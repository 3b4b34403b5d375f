from __future__ import annotations

import logging
from decimal import Decimal
from typing import List

from order_models import Order, OrderIssue

logger = logging.getLogger("order_parser.validator")

TOLERANCE = Decimal("0.01")


def _within_tolerance(a: Decimal, b: Decimal) -> bool:
    return abs(a - b) <= TOLERANCE


def validate_order(order: Order) -> List[OrderIssue]:
    """
    Runs every business rule against an assembled order.

    The order is not modified. All rules run; each violation adds one issue.
    Address sub-checks are skipped when there is no address, and line item
    checks are skipped when there are no line items.
    """
    issues: List[OrderIssue] = []

    def fail(kind: str, message: str, line_number: int | None = None) -> None:
        issues.append(OrderIssue(kind, message, line_number))

    # Header
    if not order.order_number or not (order.order_number.isascii() and order.order_number.isdigit()):
        fail("invalid_order_number", "Order number is invalid or empty.")
    if order.total_items < 1:
        fail("invalid_total_items", "Total items must be >= 1.")
    if order.total_cost < 0:
        fail("invalid_total_cost", "Total cost must be >= 0.")
    if not order.customer_name.strip():
        fail("missing_customer_name", "Customer name is required.")

    # Address
    address = order.address
    if address is None:
        fail("missing_address", "Address is missing.")
    else:
        if not address.address_line1.strip():
            fail("missing_address_line1", "Address line 1 is required.")
        if not address.city.strip():
            fail("missing_city", "City is required.")
        state = address.state
        if len(state) != 2 or any(ch.isspace() for ch in state):
            fail("invalid_state", "State must be exactly 2 characters.")
        if not address.zip.strip():
            fail("missing_zip", "Zip is required.")

    # Line items
    if not order.line_items:
        fail("missing_line_items", "Order must have at least one line item.")
        return issues

    for item in order.line_items:
        n = item.line_number
        if n <= 0:
            fail("invalid_line_number", f"Line {n} has invalid line number.", n)
        if item.quantity <= 0:
            fail("invalid_quantity", f"Line {n} has invalid quantity.", n)
        if item.cost_each < 0:
            fail("invalid_cost_each", f"Line {n} has invalid cost each.", n)
        if item.total_cost < 0:
            fail("invalid_line_total", f"Line {n} has invalid total cost.", n)
        if not item.description.strip():
            fail("missing_description", f"Line {n} has missing description.", n)
        if not _within_tolerance(item.computed_total, item.total_cost):
            fail(
                "line_total_mismatch",
                f"Line {n} total mismatch (qty * cost = {item.computed_total:.2f}, total = {item.total_cost:.2f}).",
                n,
            )

    total_quantity = sum(item.quantity for item in order.line_items)
    if total_quantity != order.total_items:
        fail(
            "total_items_mismatch",
            f"Total quantity ({total_quantity}) does not match header total items ({order.total_items}).",
        )

    sum_totals = sum((item.total_cost for item in order.line_items), Decimal("0"))
    if not _within_tolerance(sum_totals, order.total_cost):
        fail(
            "total_cost_mismatch",
            f"Sum of line items (${sum_totals:.2f}) does not match header total (${order.total_cost:.2f}).",
        )

    return issues


def finalize_order(order: Order) -> Order:
    """
    Appends validation issues to the order and fixes its validity.

    Decode issues recorded while parsing count as well, so an order is valid
    only if nothing went wrong at either stage.
    """
    order.issues.extend(validate_order(order))
    order.is_valid = not order.issues
    if not order.is_valid:
        logger.info("Order rejected | order=%s issues=%d", order.order_number or "?", len(order.issues))
    return order
