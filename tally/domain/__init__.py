"""Pure inventory and order rules, free of I/O."""

from tally.domain.bom import BOMLine, build_stock_lookup, calculate_sellable, parse_bom
from tally.domain.csv_orders import ImportGroup, ImportLine, parse_order_csv
from tally.domain.order_code import generate_order_code, is_valid_order_code, normalize_order_code
from tally.domain.order_status import OrderStateMachine, OrderStatus
from tally.domain.stock import clamp_quantity, is_low_stock

__all__ = [
    "BOMLine",
    "build_stock_lookup",
    "calculate_sellable",
    "parse_bom",
    "ImportGroup",
    "ImportLine",
    "parse_order_csv",
    "generate_order_code",
    "is_valid_order_code",
    "normalize_order_code",
    "OrderStateMachine",
    "OrderStatus",
    "clamp_quantity",
    "is_low_stock",
]
