"""Asset model for tracked hardware items."""

from datetime import date
from enum import StrEnum

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel


class AssetCategory(StrEnum):
    """Default hardware categories."""

    SERVER = "server"
    NETWORK = "network"
    STORAGE = "storage"
    NTP = "ntp"
    WORKSTATION = "workstation"
    LAPTOP = "laptop"
    PERIPHERAL = "peripheral"
    OTHER = "other"


class AssetStatus(StrEnum):
    """Derived health status of an asset."""

    HEALTHY = "healthy"
    WARNING = "warning"
    CRITICAL = "critical"


class DocumentKind(StrEnum):
    """Kinds of documents that can be referenced from an asset."""

    WARRANTY = "warranty"
    INVOICE = "invoice"


class MaintenanceContract(BaseModel):
    """Maintenance contract covering an asset."""

    has_contract: bool = Field(default=False, description="Whether a contract is in place")
    expiry_date: date | None = Field(None, description="Contract expiry date (YYYY-MM-DD)")
    provider: str | None = Field(None, description="Contract provider")

    model_config = {
        "extra": "ignore",
        "alias_generator": to_camel,
        "populate_by_name": True,
        "frozen": True,
    }


class ProfessionalSupport(BaseModel):
    """Professional support arrangement for an asset."""

    has_support: bool = Field(default=False, description="Whether support is in place")
    provider: str | None = Field(None, description="Support provider")
    contact_info: str | None = Field(None, description="Support contact (email, phone)")

    model_config = {
        "extra": "ignore",
        "alias_generator": to_camel,
        "populate_by_name": True,
        "frozen": True,
    }


class AssetInput(BaseModel):
    """Caller-supplied fields of an asset.

    Everything except ``id``, ``status``, ``created_at`` and ``updated_at``,
    which the store assigns.
    """

    name: str = Field(..., min_length=1, description="Human-readable name")
    vendor: str = Field(..., min_length=1, description="Equipment vendor")
    model: str = Field(..., min_length=1, description="Equipment model")
    serial_number: str = Field(..., min_length=1, description="Vendor serial number")
    category: str = Field(default=AssetCategory.OTHER, description="Hardware category")
    unit_cost: float | None = Field(None, ge=0, description="Purchase cost per unit")

    # Lifecycle
    purchase_date: date = Field(..., description="Purchase date (YYYY-MM-DD)")
    end_of_life: date = Field(..., description="End of life date (YYYY-MM-DD)")
    warranty_expiry: date = Field(..., description="Warranty expiry date (YYYY-MM-DD)")

    # Contracts
    maintenance_contract: MaintenanceContract = Field(default_factory=MaintenanceContract)
    professional_support: ProfessionalSupport = Field(default_factory=ProfessionalSupport)

    documents: dict[DocumentKind, str] = Field(
        default_factory=dict,
        description="Opaque document references keyed by document kind",
    )
    notes: str | None = Field(None, description="Free-form notes")

    model_config = {
        "extra": "forbid",
        "alias_generator": to_camel,
        "populate_by_name": True,
        "frozen": True,
    }


class Asset(AssetInput):
    """A tracked hardware item as held by the inventory store."""

    id: str = Field(..., description="Unique identifier for the asset")
    status: AssetStatus = Field(
        default=AssetStatus.HEALTHY,
        description="Derived health status, recomputed by the store",
    )
    created_at: date = Field(..., description="Creation date, set once")
    updated_at: date = Field(..., description="Date of the last mutation")

    # Persisted records written by newer versions may carry extra keys
    model_config = {"extra": "ignore"}


class AssetUpdate(BaseModel):
    """A partial change to an asset. Only the fields that are set are applied."""

    name: str | None = Field(None, min_length=1)
    vendor: str | None = Field(None, min_length=1)
    model: str | None = Field(None, min_length=1)
    serial_number: str | None = Field(None, min_length=1)
    category: str | None = None
    unit_cost: float | None = Field(None, ge=0)
    purchase_date: date | None = None
    end_of_life: date | None = None
    warranty_expiry: date | None = None
    maintenance_contract: MaintenanceContract | None = None
    professional_support: ProfessionalSupport | None = None
    documents: dict[DocumentKind, str] | None = None
    notes: str | None = None

    model_config = {
        "extra": "forbid",
        "alias_generator": to_camel,
        "populate_by_name": True,
    }

    @field_validator(
        "name",
        "vendor",
        "model",
        "serial_number",
        "category",
        "purchase_date",
        "end_of_life",
        "warranty_expiry",
        "maintenance_contract",
        "professional_support",
        "documents",
        mode="before",
    )
    @classmethod
    def reject_null(cls, v, info):
        """Fields an asset cannot be without may be omitted but not cleared."""
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v

    def changes(self) -> dict:
        """Return the explicitly set fields, keyed by field name."""
        return self.model_dump(exclude_unset=True)
