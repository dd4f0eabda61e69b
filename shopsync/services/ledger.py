"""Inventory ledger: on-hand quantities and reorder-point evaluation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from shopsync.errors import PartNotFound
from shopsync.schemas.part import Part


@dataclass(frozen=True, slots=True)
class Consumption:
    """Outcome of one quantity mutation."""

    part: Part
    previous_quantity: int
    delta: int
    reason: str
    order_id: str | None

    @property
    def alert_due(self) -> bool:
        # Decided on the post-mutation record only.
        return self.part.quantity_on_hand <= self.part.reorder_point

    @property
    def alert_message(self) -> str:
        return f"Low stock: {self.part.description}"


class InventoryLedger:
    """Holds the session's parts keyed by part number.

    Negative quantities are kept as-is and mean "backordered".
    """

    def __init__(self, parts: Iterable[Part] = ()) -> None:
        self._parts: dict[str, Part] = {p.part_number: p for p in parts}

    def __contains__(self, part_number: object) -> bool:
        return part_number in self._parts

    def __len__(self) -> int:
        return len(self._parts)

    def get(self, part_number: str) -> Part:
        try:
            return self._parts[part_number]
        except KeyError as exc:
            raise PartNotFound(part_number) from exc

    def list(self) -> tuple[Part, ...]:
        return tuple(self._parts.values())

    def low_stock(self) -> tuple[Part, ...]:
        return tuple(p for p in self._parts.values() if p.is_low)

    def consume(
        self, part_number: str, delta: int, reason: str, order_id: str | None
    ) -> Consumption:
        """Apply ``delta`` (negative to consume, positive to return/restock).

        Raises PartNotFound without touching anything if the part is unknown.
        """
        current = self.get(part_number)
        updated = current.model_copy(update={"quantity_on_hand": current.quantity_on_hand + delta})
        self._parts[part_number] = updated
        return Consumption(
            part=updated,
            previous_quantity=current.quantity_on_hand,
            delta=delta,
            reason=reason,
            order_id=order_id,
        )

    def upsert(self, part: Part) -> bool:
        """Insert or replace a master record. Returns True when the part is new."""
        is_new = part.part_number not in self._parts
        self._parts[part.part_number] = part
        return is_new
