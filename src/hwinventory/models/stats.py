"""Aggregate counts over the inventory."""

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class InventoryStats(BaseModel):
    """Counts over the full, unfiltered collection."""

    total: int = Field(default=0, ge=0)
    healthy: int = Field(default=0, ge=0)
    warning: int = Field(default=0, ge=0)
    critical: int = Field(default=0, ge=0)
    with_maintenance: int = Field(default=0, ge=0, description="Assets with a maintenance contract")
    with_support: int = Field(default=0, ge=0, description="Assets with professional support")

    model_config = {"alias_generator": to_camel, "populate_by_name": True}
