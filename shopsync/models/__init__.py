"""SQLAlchemy ORM tables for the SQL-backed remote store."""

from shopsync.models.base import Base
from shopsync.models.repair_order import RepairOrderRow
from shopsync.models.part import PartRow

__all__ = ["Base", "RepairOrderRow", "PartRow"]
