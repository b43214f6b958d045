"""Bill of materials and sellable quantity."""

from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from tally.core.exceptions import ValidationError


@dataclass(frozen=True)
class BOMLine:
    """Quantity of one material needed to build one product unit."""

    material_id: str
    qty: int

    def to_json(self) -> dict[str, Any]:
        return {"materialId": self.material_id, "qty": self.qty}


def parse_bom(raw: Iterable[Any] | None) -> list[BOMLine]:
    """Convert a stored BOM into BOMLine values.

    Accepts BOMLine instances or mappings with ``materialId``/``qty``
    (``material_id`` is accepted too).

    Raises:
        ValidationError: If a line lacks a material id or its qty is not a
            positive integer
    """
    if not raw:
        return []

    lines = []
    for index, item in enumerate(raw):
        if isinstance(item, BOMLine):
            lines.append(item)
            continue
        if not isinstance(item, Mapping):
            raise ValidationError(f"BOM line {index + 1} is not an object")

        material_id = item.get("materialId", item.get("material_id"))
        qty = item.get("qty")
        if not material_id:
            raise ValidationError(f"BOM line {index + 1} has no material")
        if isinstance(qty, bool) or not isinstance(qty, int) or qty <= 0:
            raise ValidationError(f"BOM line {index + 1} needs a positive whole quantity")
        lines.append(BOMLine(material_id=str(material_id), qty=qty))
    return lines


def _on_hand(entry: Any) -> int:
    if isinstance(entry, int):
        return entry
    if isinstance(entry, Mapping):
        return entry["on_hand"]
    return entry.on_hand


def calculate_sellable(
    bom: Iterable[BOMLine | Mapping[str, Any]] | None,
    stock_lookup: Mapping[str, Any],
) -> int | None:
    """Number of complete product units the current stock can build.

    Args:
        bom: Product bill of materials
        stock_lookup: Material id to on-hand quantity, or to anything
            exposing ``on_hand``

    Returns:
        The minimum of ``on_hand // qty`` over the BOM lines, 0 if any
        material is unknown, or None when the BOM is empty
    """
    if not bom:
        return None

    sellable = None
    for line in bom:
        material_id, qty = _line_parts(line)
        entry = stock_lookup.get(material_id) if material_id else None
        possible = 0 if entry is None else _on_hand(entry) // qty
        sellable = possible if sellable is None else min(sellable, possible)
    return sellable


def _line_parts(line: BOMLine | Mapping[str, Any]) -> tuple[str | None, int]:
    # Stored lines may reference a material that was never picked; those
    # count as out of stock instead of failing the whole calculation.
    if isinstance(line, BOMLine):
        return line.material_id, line.qty
    qty = line.get("qty")
    if isinstance(qty, bool) or not isinstance(qty, int) or qty <= 0:
        raise ValidationError(f"BOM quantity must be a positive whole number, got {qty!r}")
    return line.get("materialId", line.get("material_id")), qty


def build_stock_lookup(materials: Iterable[Any]) -> dict[str, int]:
    """Map material ids to on-hand quantities."""
    return {material.id: material.on_hand for material in materials}
