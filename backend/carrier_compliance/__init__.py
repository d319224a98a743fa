"""
Carrier Compliance

DHL Express (MyDHL API) compliance layer: validates carrier-agnostic
shipment records and compiles them into booking payloads.
"""
from carrier_compliance.core.exceptions import (
    ComplianceBaseError,
    ShipmentValidationError,
    ShippingError,
)
from carrier_compliance.schemas.shipment import AccountConfig, ShipmentOrder
from carrier_compliance.services.compliance_validator import validate_shipment
from carrier_compliance.services.payload_compiler import ShipmentPayloadCompiler, build_carrier_payload

# Short name used by callers of the booking flow
ValidationError = ShipmentValidationError

__version__ = "1.0.0"
