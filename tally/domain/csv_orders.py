"""Parsing and grouping of bulk order CSV files.

One row per (order, product line); rows sharing channel and external id
make up one order.
"""

import csv
import io
from dataclasses import dataclass, field

from tally.core.exceptions import ValidationError

REQUIRED_COLUMNS = ["external_id", "channel", "customer_name", "sku", "qty"]


@dataclass
class ImportLine:
    sku: str
    qty: int


@dataclass
class ImportGroup:
    """All rows of one external order.

    Attributes:
        channel: Sales channel tag, e.g. "SHOPIFY"
        external_id: Order id in the source system
        customer_name: First non-empty customer name among the rows
        lines: SKU and quantity per row, in file order
    """

    channel: str
    external_id: str
    customer_name: str = ""
    lines: list[ImportLine] = field(default_factory=list)

    @property
    def key(self) -> tuple[str, str]:
        return (self.channel, self.external_id)


def parse_qty(value: str | None) -> int:
    """Row quantity; anything unparsable or below 1 counts as 1."""
    try:
        qty = int(str(value).strip())
    except (TypeError, ValueError):
        return 1
    return qty if qty > 0 else 1


def read_rows(text: str) -> list[dict[str, str]]:
    """Read CSV text into rows keyed by lower-cased, trimmed header names.

    Raises:
        ValidationError: If the text is not valid CSV, is empty, or lacks a
            required column
    """
    reader = csv.reader(io.StringIO(text.lstrip("\ufeff")), strict=True)
    try:
        records = [record for record in reader]
    except csv.Error as e:
        raise ValidationError(f"CSV parsing error: {e}") from e

    records = [record for record in records if any(cell.strip() for cell in record)]
    if not records:
        raise ValidationError("CSV file is empty")

    headers = [name.strip().lower() for name in records[0]]
    missing = [column for column in REQUIRED_COLUMNS if column not in headers]
    if missing:
        raise ValidationError(f"Missing required columns: {', '.join(missing)}")

    rows = []
    for record in records[1:]:
        row = {}
        for index, header in enumerate(headers):
            row[header] = record[index].strip() if index < len(record) else ""
        rows.append(row)
    return rows


def group_rows(rows: list[dict[str, str]]) -> list[ImportGroup]:
    """Group rows into orders by (channel, external_id).

    Rows without external_id, channel or sku are skipped.
    """
    groups: dict[tuple[str, str], ImportGroup] = {}
    for row in rows:
        external_id = row.get("external_id") or ""
        channel = row.get("channel") or ""
        sku = row.get("sku") or ""
        if not external_id or not channel or not sku:
            continue

        group = groups.get((channel, external_id))
        if group is None:
            group = ImportGroup(channel=channel, external_id=external_id)
            groups[group.key] = group

        if not group.customer_name and row.get("customer_name"):
            group.customer_name = row["customer_name"]
        group.lines.append(ImportLine(sku=sku, qty=parse_qty(row.get("qty"))))
    return list(groups.values())


def parse_order_csv(text: str) -> list[ImportGroup]:
    return group_rows(read_rows(text))
