"""DayEntry data model."""

import uuid
from datetime import date as date_type

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class DayEntry(BaseModel):
    """Represents the net P&L recorded for one trading day."""

    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()), description="Unique entry ID"
    )
    date: date_type = Field(..., description="Trading day")
    pnl: float = Field(..., allow_inf_nan=False, description="Signed P&L for the day")

    model_config = {"frozen": True, "alias_generator": to_camel, "populate_by_name": True}
