"""
Shipment preflight routes.

Thin HTTP surface over the compliance layer: check a shipment record, or
compile it into the MyDHL booking payload. Nothing is sent to the carrier.
"""
import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Body, HTTPException
from pydantic import BaseModel, Field

from carrier_compliance.core.exceptions import ShipmentValidationError
from carrier_compliance.core.pii import sanitize_for_logging
from carrier_compliance.services.payload_compiler import ShipmentPayloadCompiler

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/shipments", tags=["shipments"])


class ValidateShipmentResponse(BaseModel):
    valid: bool
    errors: List[str] = Field(default_factory=list)


# Raw dict bodies: schema errors are reported as compliance messages, not FastAPI 422s
@router.post("/validate", response_model=ValidateShipmentResponse)
def validate_shipment_route(order: Dict[str, Any] = Body(...)) -> ValidateShipmentResponse:
    errors = ShipmentPayloadCompiler().validate(order)
    return ValidateShipmentResponse(valid=not errors, errors=errors)


@router.post("/payload")
def build_payload_route(order: Dict[str, Any] = Body(...)) -> Dict[str, Any]:
    try:
        return ShipmentPayloadCompiler().build(order)
    except ShipmentValidationError as e:
        logger.info(f"Payload request rejected: {sanitize_for_logging(e.errors[0]) if e.errors else e.code}")
        raise HTTPException(
            status_code=422,
            detail={"message": "Shipment validation failed", "errors": e.errors},
        )
