"""Repair order rows. Column names are the wire names."""

from __future__ import annotations

from sqlalchemy import String, Float, Text, JSON
from sqlalchemy.orm import Mapped, mapped_column

from shopsync.models.base import Base


class RepairOrderRow(Base):
    __tablename__ = "repair_orders"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    customer_name: Mapped[str] = mapped_column(String(200), default="")
    customer_phone: Mapped[str] = mapped_column(String(50), default="")
    vessel_name: Mapped[str] = mapped_column(String(200), default="")
    complaint: Mapped[str] = mapped_column(Text, default="")
    status: Mapped[str] = mapped_column(String(20), default="NEW")
    technician_id: Mapped[str | None] = mapped_column(String(64), nullable=True, default=None)
    line_items: Mapped[list] = mapped_column(JSON, default=list)
    labor_hours: Mapped[float] = mapped_column(Float, default=0.0)
    notes: Mapped[str] = mapped_column(Text, default="")
    # ISO-8601 text, exactly as the REST backend returns it
    created_at: Mapped[str] = mapped_column(String(40))
