"""Master inventory rows."""

from __future__ import annotations

from sqlalchemy import String, Float, Integer
from sqlalchemy.orm import Mapped, mapped_column

from shopsync.models.base import Base


class PartRow(Base):
    __tablename__ = "master_inventory"

    part_number: Mapped[str] = mapped_column(String(64), primary_key=True)
    description: Mapped[str] = mapped_column(String(255), default="")
    quantity_on_hand: Mapped[int] = mapped_column(Integer, default=0)
    reorder_point: Mapped[int] = mapped_column(Integer, default=0)
    unit_cost: Mapped[float] = mapped_column(Float, default=0.0)
    bin_location: Mapped[str] = mapped_column(String(50), default="")
