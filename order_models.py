from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import List, Optional


@dataclass(frozen=True)
class OrderIssue:
    """
    A single problem found while decoding or validating an order.

    Attributes:
        kind (str): Stable code for the problem, e.g. "total_items_mismatch".
        message (str): Human-readable description shown in the report.
        line_number (Optional[int]): Line item number the issue refers to, if any.
    """
    kind: str
    message: str
    line_number: Optional[int] = None

    def __str__(self) -> str:
        return self.message


@dataclass
class Address:
    address_line1: str = ""
    address_line2: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""


@dataclass
class LineItem:
    line_number: int
    quantity: int
    cost_each: Decimal
    total_cost: Decimal
    description: str = ""

    @property
    def computed_total(self) -> Decimal:
        return Decimal(self.quantity) * self.cost_each


@dataclass
class Order:
    """
    An order assembled from one header line and the address / line item
    lines that follow it.

    Header fields that fail to decode keep their defaults below; the failure
    itself is recorded in issues. is_valid stays False until the order has
    been finalized by the validator.
    """
    order_number: str = ""
    total_items: int = 0
    total_cost: Decimal = Decimal("0")
    order_date: datetime = datetime.min
    customer_name: str = ""
    customer_phone: str = ""
    customer_email: str = ""
    is_paid: bool = False
    is_shipped: bool = False
    is_completed: bool = False
    address: Optional[Address] = None
    line_items: List[LineItem] = field(default_factory=list)
    issues: List[OrderIssue] = field(default_factory=list)
    is_valid: bool = False

    @property
    def errors(self) -> List[str]:
        return [issue.message for issue in self.issues]

    def add_issue(self, kind: str, message: str, line_number: Optional[int] = None) -> None:
        self.issues.append(OrderIssue(kind, message, line_number))
