from __future__ import annotations

import re
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Dict, NamedTuple, Tuple

from exception import FieldDecodeError


# Record layout
HEADER_TYPE = "100"
ADDRESS_TYPE = "200"
LINE_ITEM_TYPE = "300"
TYPE_CODE_LENGTH = 3

HEADER_LENGTH = 180
ADDRESS_LENGTH = 165
LINE_ITEM_LENGTH = 80

DATE_FORMAT = "%m/%d/%Y %H:%M:%S"  # MM/dd/yyyy HH:mm:ss
DATE_LENGTH = 19
FLAG_VALUES = ("0", "1")

_INT_RE = re.compile(r"[+-]?[0-9]+")
_DECIMAL_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)")


class Field(NamedTuple):
    name: str
    start: int
    length: int


HEADER_FIELDS: Tuple[Field, ...] = (
    Field("order_number", 3, 10),
    Field("total_items", 13, 5),
    Field("total_cost", 18, 10),
    Field("order_date", 28, 19),
    Field("customer_name", 47, 50),
    Field("customer_phone", 97, 30),
    Field("customer_email", 127, 50),
    Field("is_paid", 177, 1),
    Field("is_shipped", 178, 1),
    Field("is_completed", 179, 1),
)

ADDRESS_FIELDS: Tuple[Field, ...] = (
    Field("address_line1", 3, 50),
    Field("address_line2", 53, 50),
    Field("city", 103, 50),
    Field("state", 153, 2),
    Field("zip", 155, 10),
)

LINE_ITEM_FIELDS: Tuple[Field, ...] = (
    Field("line_number", 3, 2),
    Field("quantity", 5, 5),
    Field("cost_each", 10, 10),
    Field("total_cost", 20, 10),
    Field("description", 30, 50),
)


# Extraction
def extract_field(line: str, start: int, length: int) -> str:
    """
    Returns the trimmed text at [start, start + length).

    Short lines never raise: a start past the end yields "" and a field that
    runs off the end yields whatever tail is present.
    """
    if start >= len(line):
        return ""
    return line[start:start + length].strip()


def extract_fields(line: str, fields: Tuple[Field, ...]) -> Dict[str, str]:
    return {f.name: extract_field(line, f.start, f.length) for f in fields}


# Decoding
def parse_int(text: str) -> int:
    if not _INT_RE.fullmatch(text):
        raise FieldDecodeError(f"not an integer: {text!r}")
    return int(text)


def parse_decimal(text: str) -> Decimal:
    # Decimal() alone would also take "NaN", "1e3" and "1_000"
    if not _DECIMAL_RE.fullmatch(text):
        raise FieldDecodeError(f"not a decimal: {text!r}")
    try:
        return Decimal(text)
    except InvalidOperation as e:
        raise FieldDecodeError(f"not a decimal: {text!r}") from e


def parse_order_date(text: str) -> datetime:
    # strptime tolerates single-digit parts, the file format does not
    if len(text) != DATE_LENGTH:
        raise FieldDecodeError(f"not a MM/dd/yyyy HH:mm:ss date: {text!r}")
    try:
        return datetime.strptime(text, DATE_FORMAT)
    except ValueError as e:
        raise FieldDecodeError(f"not a MM/dd/yyyy HH:mm:ss date: {text!r}") from e


def parse_flag(text: str) -> bool:
    if text not in FLAG_VALUES:
        raise FieldDecodeError(f"flag must be 0 or 1: {text!r}")
    return text == "1"
