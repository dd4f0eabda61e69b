"""Declarative field-name tables between engine records and remote rows.

Engine records use camelCase keys; remote rows use snake_case columns.
Each table is checked against its pydantic model so the mapping stays
total and invertible.
"""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel

from shopsync.schemas.part import Part
from shopsync.schemas.repair_order import LineItem, RepairOrder


class FieldMap:
    def __init__(
        self,
        resource: str,
        columns: Mapping[str, str],
        *,
        key: str | None = None,
        nested: Mapping[str, "FieldMap"] | None = None,
    ) -> None:
        self.resource = resource
        self.columns = dict(columns)
        self.fields = {column: field for field, column in self.columns.items()}
        self.nested = dict(nested or {})
        self.key = key
        if len(self.fields) != len(self.columns):
            raise ValueError(f"{resource}: two fields share one column")
        if key is not None and key not in self.columns:
            raise ValueError(f"{resource}: key field {key!r} is not mapped")

    @property
    def key_column(self) -> str:
        if self.key is None:
            raise ValueError(f"{self.resource} has no key field")
        return self.columns[self.key]

    def check_model(self, model: type[BaseModel]) -> None:
        """Raise ValueError unless every serialized field of ``model`` is mapped exactly."""
        aliases = {info.alias or name for name, info in model.model_fields.items()}
        missing = aliases - self.columns.keys()
        extra = self.columns.keys() - aliases
        if missing or extra:
            raise ValueError(
                f"{self.resource}: field map out of step with {model.__name__} "
                f"(unmapped={sorted(missing)}, unknown={sorted(extra)})"
            )

    def to_row(self, record: Mapping[str, Any]) -> dict[str, Any]:
        """Translate a full or partial record. Unknown fields raise KeyError."""
        row = {}
        for field, value in record.items():
            column = self.columns[field]
            sub = self.nested.get(field)
            row[column] = _translate(value, sub.to_row) if sub else value
        return row

    def from_row(self, row: Mapping[str, Any]) -> dict[str, Any]:
        """Translate a remote row.

        Columns without a field are dropped, and so are NULLs: a NULL column
        falls back to the model default.
        """
        record = {}
        for column, value in row.items():
            field = self.fields.get(column)
            if field is None or value is None:
                continue
            sub = self.nested.get(field)
            record[field] = _translate(value, sub.from_row) if sub else value
        return record


def _translate(value: Any, convert) -> Any:
    if isinstance(value, Mapping):
        return convert(value)
    if isinstance(value, (list, tuple)):
        return [convert(v) if isinstance(v, Mapping) else v for v in value]
    return value


LINE_ITEM_FIELDS = FieldMap(
    "line_items",
    {
        "partNumber": "part_number",
        "description": "description",
        "quantity": "quantity",
        "unitPrice": "unit_price",
    },
)

ORDER_FIELDS = FieldMap(
    "repair_orders",
    {
        "id": "id",
        "customerName": "customer_name",
        "customerPhone": "customer_phone",
        "vesselName": "vessel_name",
        "complaint": "complaint",
        "status": "status",
        "technicianId": "technician_id",
        "lineItems": "line_items",
        "laborHours": "labor_hours",
        "notes": "notes",
        "createdAt": "created_at",
    },
    key="id",
    nested={"lineItems": LINE_ITEM_FIELDS},
)

PART_FIELDS = FieldMap(
    "master_inventory",
    {
        "partNumber": "part_number",
        "description": "description",
        "quantityOnHand": "quantity_on_hand",
        "reorderPoint": "reorder_point",
        "unitCost": "unit_cost",
        "binLocation": "bin_location",
    },
    key="partNumber",
)

MODEL_FIELD_MAPS: tuple[tuple[FieldMap, type[BaseModel]], ...] = (
    (ORDER_FIELDS, RepairOrder),
    (LINE_ITEM_FIELDS, LineItem),
    (PART_FIELDS, Part),
)


def check_field_maps() -> None:
    for field_map, model in MODEL_FIELD_MAPS:
        field_map.check_model(model)
