from __future__ import annotations

from shopsync.schemas.base import DomainModel


class Part(DomainModel):
    """Master inventory record. quantity_on_hand may go negative (backordered)."""

    part_number: str
    description: str = ""
    quantity_on_hand: int = 0
    reorder_point: int = 0
    unit_cost: float = 0.0
    bin_location: str = ""

    @property
    def is_low(self) -> bool:
        return self.quantity_on_hand <= self.reorder_point
