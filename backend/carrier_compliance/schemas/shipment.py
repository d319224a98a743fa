"""
Shipment Schemas for DHL Express Compliance v1.0.0

Pydantic models for the carrier-agnostic shipment record the compliance
layer consumes. Accepts camelCase wire names (vatNumber, hsCode, ...) as
well as snake_case attribute names.

Fields checked by compliance rules stay Optional here: a missing phone
or HS code is reported by the validator, not rejected by the parser.
"""
from datetime import date, datetime
from typing import Optional, List, Literal
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


# ==================== Party Schemas ====================


class Party(_CamelModel):
    """Shipper or receiver of a shipment."""
    company: Optional[str] = None
    contact_person: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    street_lines: List[str] = Field(default_factory=list)
    city: Optional[str] = None
    country_code: Optional[str] = Field(None, description="ISO-3166 alpha-2")
    postal_code: Optional[str] = None
    vat_number: Optional[str] = None
    eori_number: Optional[str] = None
    tax_id: Optional[str] = Field(None, description="Generic tax ID, used when no explicit VAT number is set")
    trader_type: Optional[Literal["business", "private"]] = None
    reference: Optional[str] = None

    @field_validator("trader_type", mode="before")
    @classmethod
    def validate_trader_type(cls, v):
        if isinstance(v, str):
            v = v.strip().lower()
            return v or None
        return v

    @field_validator("street_lines", mode="before")
    @classmethod
    def validate_street_lines(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return [line for line in v if line and str(line).strip()]


# ==================== Package Schemas ====================


class Weight(_CamelModel):
    value: float = Field(..., gt=0)
    unit: Literal["kg", "lb"] = "kg"

    @field_validator("unit", mode="before")
    @classmethod
    def validate_unit(cls, v):
        if isinstance(v, str):
            v = v.strip().lower()
            return {"kgs": "kg", "lbs": "lb"}.get(v, v)
        return v


class Dimensions(_CamelModel):
    length: float = Field(..., gt=0)
    width: float = Field(..., gt=0)
    height: float = Field(..., gt=0)
    unit: Literal["cm", "in"] = "cm"

    @field_validator("unit", mode="before")
    @classmethod
    def validate_unit(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v


class Package(_CamelModel):
    """Physical parcel. Carries no dangerous-goods data."""
    weight: Weight
    dimensions: Optional[Dimensions] = None
    description: Optional[str] = None
    reference: Optional[str] = None

    @field_validator("weight", mode="before")
    @classmethod
    def validate_weight(cls, v):
        # Bare numbers are kilograms
        if isinstance(v, (int, float)):
            return {"value": v}
        return v


# ==================== Customs Schemas ====================


class Item(_CamelModel):
    """Customs line item."""
    description: Optional[str] = None
    hs_code: Optional[str] = Field(None, description="Raw HS code, separators allowed")
    country_of_origin: Optional[str] = None
    quantity: Optional[float] = None
    value: Optional[float] = Field(None, description="Unit value in the shipment currency")
    net_weight: Optional[float] = Field(None, description="Net weight per unit in kg")
    sku: Optional[str] = None

    @field_validator("hs_code", mode="before")
    @classmethod
    def validate_hs_code(cls, v):
        if isinstance(v, int):
            return str(v)
        return v


class DangerousGoodsDeclaration(_CamelModel):
    """Dangerous-goods declaration. Every field is ignored unless `contains` is set."""
    contains: bool = False
    code: Optional[str] = Field(None, description="UN/ID number, e.g. 1266 or ID8000")
    service_code: Optional[str] = Field(None, description="DHL value-added service code (HE/HV/HK/HC)")
    content_id: Optional[str] = None
    proper_shipping_name: Optional[str] = None
    packing_group: Optional[str] = None
    hazard_class: Optional[str] = None
    custom_description: Optional[str] = None
    dry_ice_weight: Optional[float] = Field(None, description="Dry ice weight in kg (UN1845 only)")

    @field_validator("code", "content_id", mode="before")
    @classmethod
    def validate_numeric_codes(cls, v):
        if isinstance(v, int):
            return str(v)
        return v


# ==================== Shipment Schemas ====================


class ShipmentOrder(_CamelModel):
    """Carrier-agnostic shipment record."""
    sender: Party
    receiver: Party
    packages: List[Package] = Field(default_factory=list)
    items: List[Item] = Field(default_factory=list)
    dangerous_goods: DangerousGoodsDeclaration = Field(default_factory=DangerousGoodsDeclaration)
    service_code: Optional[str] = Field(None, description="DHL product code, e.g. P")
    currency: Optional[str] = None
    incoterm: Literal["DAP", "DDP", "EXW"] = "DAP"
    export_reason: Optional[str] = None
    export_reason_type: Optional[str] = None
    invoice_remarks: Optional[str] = None
    pallet_count: Optional[int] = Field(None, ge=0)
    package_marks: Optional[str] = None
    payer_of_vat: Optional[Literal["shipper", "receiver"]] = None
    gst_paid: bool = False
    receiver_reference: Optional[str] = None
    shipper_account: Optional[str] = Field(None, description="Overrides the configured shipper account")
    reference: Optional[str] = None
    invoice_number: Optional[str] = None
    invoice_date: Optional[date] = None
    shipment_date: Optional[datetime] = None
    place_of_incoterm: Optional[str] = None
    label_format: Optional[str] = None

    @field_validator("incoterm", mode="before")
    @classmethod
    def validate_incoterm(cls, v):
        if v is None:
            return "DAP"
        if isinstance(v, str):
            return v.strip().upper() or "DAP"
        return v

    @field_validator("payer_of_vat", mode="before")
    @classmethod
    def validate_payer_of_vat(cls, v):
        if isinstance(v, str):
            return v.strip().lower() or None
        return v

    @field_validator("dangerous_goods", mode="before")
    @classmethod
    def validate_dangerous_goods(cls, v):
        if v is None:
            return {}
        return v


class AccountConfig(_CamelModel):
    """Billing accounts the payload is booked against."""
    account_number: Optional[str] = Field(None, description="Default shipper account")
    duties_account_number: Optional[str] = Field(None, description="Account billed for duties and taxes")
