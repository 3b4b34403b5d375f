from datetime import datetime
from decimal import Decimal

import pytest

from order_models import Address, LineItem, Order


def build_header(
    order_number="0000000001",
    total_items="2",
    total_cost="30.00",
    order_date="01/01/2024 10:00:00",
    name="Jane Doe",
    phone="555-123-4567",
    email="jane@example.com",
    paid="1",
    shipped="0",
    completed="0",
):
    return (
        "100"
        + order_number.ljust(10)
        + total_items.rjust(5)
        + total_cost.rjust(10)
        + order_date.ljust(19)
        + name.ljust(50)
        + phone.ljust(30)
        + email.ljust(50)
        + paid
        + shipped
        + completed
    )


def build_address(line1="123 Main St", line2="Apt 4", city="Springfield", state="IL", zip_code="62701"):
    return "200" + line1.ljust(50) + line2.ljust(50) + city.ljust(50) + state.ljust(2) + zip_code.ljust(10)


def build_item(line_number="1", quantity="1", cost_each="10.00", total_cost="10.00", description="Widget"):
    return (
        "300"
        + line_number.rjust(2)
        + quantity.rjust(5)
        + cost_each.rjust(10)
        + total_cost.rjust(10)
        + description.ljust(50)
    )


@pytest.fixture
def header_line():
    return build_header


@pytest.fixture
def address_line():
    return build_address


@pytest.fixture
def item_line():
    return build_item


@pytest.fixture
def valid_lines():
    """One complete order: 2 items of quantity 1 totalling 30.00."""
    return [
        build_header(),
        build_address(),
        build_item("1", "1", "10.00", "10.00", "Widget"),
        build_item("2", "1", "20.00", "20.00", "Gadget"),
    ]


@pytest.fixture
def valid_order():
    """An assembled, not yet validated order that passes every rule."""
    return Order(
        order_number="0000000001",
        total_items=2,
        total_cost=Decimal("30.00"),
        order_date=datetime(2024, 1, 1, 10, 0, 0),
        customer_name="Jane Doe",
        customer_phone="555-123-4567",
        customer_email="jane@example.com",
        is_paid=True,
        address=Address("123 Main St", "Apt 4", "Springfield", "IL", "62701"),
        line_items=[
            LineItem(1, 1, Decimal("10.00"), Decimal("10.00"), "Widget"),
            LineItem(2, 1, Decimal("20.00"), Decimal("20.00"), "Gadget"),
        ],
    )
