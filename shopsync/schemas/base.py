"""Shared pydantic base for immutable domain records."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class DomainModel(BaseModel):
    """Frozen record whose serialized field names are camelCase.

    Python code reads and writes snake_case attributes; ``to_record`` and
    ``model_validate`` speak the camelCase record naming used by the engine,
    the HTTP API and the export document.
    """

    model_config = {"frozen": True, "alias_generator": to_camel, "populate_by_name": True}

    def to_record(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")
