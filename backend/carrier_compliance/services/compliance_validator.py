"""
Compliance Validator

Pre-flight check run before any carrier payload is built. Collects every
deficiency in one pass and returns them as human-readable messages, each
prefixed with the offending entity ("Shipper: Phone is required.").

Never raises and never mutates the shipment. Turning a non-empty result
into an error is the payload compiler's job.
"""
import logging
from typing import Any, List, Mapping, Optional, Tuple, Union

from pydantic import ValidationError as SchemaValidationError

from carrier_compliance.schemas.shipment import DangerousGoodsDeclaration, Item, Party, ShipmentOrder
from carrier_compliance.services.dangerous_goods import classify
from carrier_compliance.services.dhl_constants import FREE_TEXT_MAX_LEN, HS_CODE_MIN_DIGITS, ITEM_DESCRIPTION_MAX_LEN
from carrier_compliance.services.field_normalizer import clean_string, normalize_digits, normalize_hs_code, normalize_phone

logger = logging.getLogger(__name__)

OrderInput = Union[ShipmentOrder, Mapping[str, Any]]


def coerce_order(order: OrderInput) -> Tuple[Optional[ShipmentOrder], List[str]]:
    """
    Turn caller input into a ShipmentOrder.

    Returns (order, []) on success and (None, messages) when the input
    does not even parse, one message per schema error.
    """
    if isinstance(order, ShipmentOrder):
        return order, []
    try:
        return ShipmentOrder.model_validate(order), []
    except SchemaValidationError as e:
        messages = []
        for error in e.errors():
            location = ".".join(str(part) for part in error.get("loc", ()))
            messages.append(f"{location}: {error.get('msg', 'Invalid value')}" if location else error.get("msg", "Invalid value"))
        return None, messages


def _validate_party(party: Party, label: str) -> List[str]:
    # Checked after cleaning: a value the normalizer empties is a missing value
    errors = []
    if not clean_string(party.contact_person):
        errors.append(f"{label}: Contact Person is required.")
    if not clean_string(" ".join(party.street_lines), FREE_TEXT_MAX_LEN):
        errors.append(f"{label}: Address Line 1 is required.")
    if not party.city:
        errors.append(f"{label}: City is required.")
    if not party.postal_code:
        errors.append(f"{label}: Postal Code is required.")
    if not party.country_code:
        errors.append(f"{label}: Country Code is required.")
    if not normalize_digits(normalize_phone(party.phone)):
        errors.append(f"{label}: Phone is required.")
    return errors


def _validate_item(item: Item, position: int) -> List[str]:
    prefix = f"Item {position}:"
    errors = []

    description = clean_string(item.description, FREE_TEXT_MAX_LEN)
    if not description:
        errors.append(f"{prefix} Description is required.")
    elif len(description) > ITEM_DESCRIPTION_MAX_LEN:
        errors.append(f"{prefix} Description must be at most {ITEM_DESCRIPTION_MAX_LEN} characters.")

    if not item.hs_code or not normalize_hs_code(item.hs_code):
        errors.append(f"{prefix} HS Code is required.")
    elif len(normalize_hs_code(item.hs_code)) < HS_CODE_MIN_DIGITS:
        errors.append(f"{prefix} HS Code must be at least {HS_CODE_MIN_DIGITS} digits.")

    if not item.country_of_origin:
        errors.append(f"{prefix} Country of Origin is required.")
    if not item.quantity or item.quantity <= 0:
        errors.append(f"{prefix} Quantity must be > 0.")
    if not item.value or item.value <= 0:
        errors.append(f"{prefix} Unit Value must be > 0.")
    return errors


def _validate_dangerous_goods(declaration: DangerousGoodsDeclaration) -> List[str]:
    if not declaration.contains:
        return []

    errors = []
    if not declaration.code:
        errors.append("DG: UN Code is required.")
        return errors

    classification = classify(declaration.code)
    if not classification.code:
        errors.append("DG: UN Code must contain digits.")
        return errors

    if not (declaration.service_code or classification.vas_service_code):
        errors.append("DG: Service Code (HE/HV/HK/HC) is required.")
    if not (declaration.content_id or classification.content_id):
        errors.append("DG: Content ID is required.")
    if classification.is_dry_ice and (not declaration.dry_ice_weight or declaration.dry_ice_weight <= 0):
        errors.append(f"DG: Dry Ice ({classification.un_code}) requires positive dryIceWeight.")
    return errors


def validate_shipment(order: OrderInput) -> List[str]:
    """
    Check a shipment against the carrier's customs and DG rules.

    Args:
        order: ShipmentOrder or its camelCase/snake_case dict form

    Returns:
        Deficiency messages in a stable order; empty means compliant
    """
    parsed, errors = coerce_order(order)
    if parsed is None:
        return errors

    errors.extend(_validate_party(parsed.sender, "Shipper"))
    errors.extend(_validate_party(parsed.receiver, "Consignee"))

    if not parsed.currency:
        errors.append("Invoice: Currency is required.")

    if not parsed.items:
        errors.append("Shipment must have at least one line item.")
    for position, item in enumerate(parsed.items, start=1):
        errors.extend(_validate_item(item, position))

    errors.extend(_validate_dangerous_goods(parsed.dangerous_goods))

    if errors:
        logger.debug(f"Shipment failed compliance check with {len(errors)} issue(s)")
    return errors
