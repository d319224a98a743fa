# Services layer: normalization, compliance rules and payload assembly
from carrier_compliance.services.compliance_validator import validate_shipment
from carrier_compliance.services.payload_compiler import ShipmentPayloadCompiler, build_carrier_payload
