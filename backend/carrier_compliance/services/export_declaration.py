"""
Export Declaration Builder

Assembles the commercial-invoice part of the payload
(content.exportDeclaration): invoice header, customs line items and
customer references.

Expects a normalized shipment (see field_normalizer.normalize_order).
"""
import re
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional

from carrier_compliance.core.config import settings
from carrier_compliance.schemas.shipment import ShipmentOrder
from carrier_compliance.services.dangerous_goods import ResolvedDangerousGoods
from carrier_compliance.services.dhl_constants import (
    DEFAULT_EXPORT_REASON_TYPE,
    DEFAULT_SIGNATURE_TITLE,
    INVOICE_INSTRUCTIONS_MAX_LEN,
    INVOICE_NUMBER_PREFIX,
    REFERENCE_TYPE_CUSTOMER,
)
from carrier_compliance.services.dhl_records import DhlLineItem
from carrier_compliance.services.field_normalizer import weight_in_kg


def generate_invoice_number(reference: Optional[str] = None, now: Optional[datetime] = None) -> str:
    """
    Invoice number with the INV- prefix downstream consumers rely on.

    Uses the shipment reference when there is one, otherwise a UTC
    timestamp down to microseconds.
    """
    if reference:
        return f"{INVOICE_NUMBER_PREFIX}{reference}"
    now = now or datetime.now(timezone.utc)
    return f"{INVOICE_NUMBER_PREFIX}{now.strftime('%Y%m%d%H%M%S%f')}"


def resolve_invoice_number(order: ShipmentOrder) -> str:
    if order.invoice_number:
        if INVOICE_NUMBER_PREFIX in order.invoice_number:
            return order.invoice_number
        return f"{INVOICE_NUMBER_PREFIX}{order.invoice_number}"
    return generate_invoice_number(order.reference or order.sender.reference)


def resolve_invoice_date(order: ShipmentOrder) -> date:
    if order.invoice_date:
        return order.invoice_date
    if order.shipment_date:
        return order.shipment_date.date()
    return datetime.now(timezone.utc).date()


def compose_item_description(description: Optional[str], dangerous_goods: Optional[ResolvedDangerousGoods] = None) -> str:
    """
    Line-item description, annotated for dangerous goods.

    Dry ice gets "Dry Ice UN1845 <weight>kg" appended. Any other DG code
    gets its UN/ID identifier appended so customs can match the line to
    the value-added service entry.
    """
    text = description or "Item"
    if dangerous_goods is None:
        return text

    if dangerous_goods.is_dry_ice:
        weight = dangerous_goods.dry_ice_weight or 0
        return f"{text} Dry Ice {dangerous_goods.un_code} {weight:.1f}kg"

    if not re.search(rf"\b{re.escape(dangerous_goods.un_code)}\b", text, re.IGNORECASE):
        text = f"{text} {dangerous_goods.un_code}"
    return text


def build_line_items(
    order: ShipmentOrder,
    dangerous_goods: Optional[ResolvedDangerousGoods] = None,
) -> List[DhlLineItem]:
    """
    One invoice line per customs item.

    Gross weight is the total package weight shared out by quantity, so
    the invoice agrees with the physical parcels; without packages each
    line falls back to its own net weight.
    """
    total_package_weight = sum(weight_in_kg(package.weight) for package in order.packages)
    total_quantity = sum(item.quantity or 0 for item in order.items)

    line_items = []
    for number, item in enumerate(order.items, start=1):
        quantity = item.quantity or 0
        net_weight = (item.net_weight or 0) * quantity
        if total_package_weight > 0 and total_quantity > 0:
            gross_weight = total_package_weight * (quantity / total_quantity)
        else:
            gross_weight = net_weight

        line_items.append(DhlLineItem(
            number=number,
            description=compose_item_description(item.description, dangerous_goods),
            price=item.value or 0,
            quantity=quantity,
            hs_code=item.hs_code or "",
            manufacturer_country=item.country_of_origin or order.sender.country_code,
            net_weight=net_weight,
            gross_weight=gross_weight,
            sku=item.sku,
        ))
    return line_items


def _unconsumed_tax_id(vat_number: Optional[str], tax_id: Optional[str]) -> Optional[str]:
    # A tax ID fills the VAT slot unless an explicit VAT number took it
    if tax_id and vat_number and tax_id != vat_number:
        return tax_id
    return None


def build_invoice_instructions(order: ShipmentOrder) -> List[str]:
    """Free-text invoice remarks, joined into a single instruction line."""
    payer = (order.payer_of_vat or "receiver").title()
    fragments = [
        order.invoice_remarks,
        "GST: Paid" if order.gst_paid else "GST: Not Paid",
        f"Payer of GST/VAT: {payer}",
        f"Total Pallets: {order.pallet_count}" if order.pallet_count else None,
        f"Package Marks: {order.package_marks}" if order.package_marks else None,
    ]

    shipper_tax_id = _unconsumed_tax_id(order.sender.vat_number, order.sender.tax_id)
    if shipper_tax_id:
        fragments.append(f"Shipper TaxID: {shipper_tax_id}")
    receiver_tax_id = _unconsumed_tax_id(order.receiver.vat_number, order.receiver.tax_id)
    if receiver_tax_id:
        fragments.append(f"Receiver TaxID: {receiver_tax_id}")

    return [" | ".join(f for f in fragments if f)[:INVOICE_INSTRUCTIONS_MAX_LEN]]


def build_customer_references(order: ShipmentOrder) -> List[Dict[str, str]]:
    references = []
    receiver_reference = order.receiver_reference or order.receiver.reference
    if receiver_reference:
        references.append({"typeCode": REFERENCE_TYPE_CUSTOMER, "value": receiver_reference})
    return references


def build_export_declaration(
    order: ShipmentOrder,
    dangerous_goods: Optional[ResolvedDangerousGoods] = None,
) -> Dict[str, Any]:
    """
    Build content.exportDeclaration for a normalized shipment.

    Args:
        order: Normalized shipment
        dangerous_goods: Resolved DG declaration, None for ordinary goods

    Returns:
        exportDeclaration dict (invoice, lineItems, export reason, place of incoterm)
    """
    sender = order.sender
    return {
        "lineItems": [line.to_dhl_format() for line in build_line_items(order, dangerous_goods)],
        "invoice": {
            "number": resolve_invoice_number(order),
            "date": resolve_invoice_date(order).isoformat(),
            "signatureName": sender.contact_person or sender.company or "Shipper",
            "signatureTitle": DEFAULT_SIGNATURE_TITLE,
            "instructions": build_invoice_instructions(order),
            "customerReferences": build_customer_references(order),
        },
        "exportReason": order.export_reason or settings.DHL_DEFAULT_EXPORT_REASON,
        "exportReasonType": order.export_reason_type or DEFAULT_EXPORT_REASON_TYPE,
        "placeOfIncoterm": order.place_of_incoterm or order.receiver.city,
    }
