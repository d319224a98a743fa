"""
Field normalization for shipment records.

Cleans and canonicalizes raw fields before the builders consume them.
Nothing here raises: absent or invalid data is the validator's concern.
"""
import re
from typing import Iterable, List, Optional

from carrier_compliance.schemas.shipment import (
    Dimensions,
    Item,
    Package,
    Party,
    ShipmentOrder,
    Weight,
)
from carrier_compliance.services.dhl_constants import (
    ADDRESS_LINE_MAX_LEN,
    ADDRESS_MAX_LINES,
    CM_PER_IN,
    DEFAULT_PACKAGE_DIMENSION_CM,
    DEFAULT_PACKAGE_WEIGHT_KG,
    FREE_TEXT_MAX_LEN,
    KG_PER_LB,
    PHONE_MAX_LEN,
    TRADER_TYPE_BUSINESS,
)

_NON_DIGITS = re.compile(r"\D")
_UN_PREFIX = re.compile(r"^\s*(UN|ID)", re.IGNORECASE)
_PICTOGRAPHS = re.compile(
    "["
    "\U0001F300-\U0001FAFF"
    "\u2600-\u27BF"
    "]"
)
_LINE_BREAKS = re.compile(r"[\r\n\t]+")
_PHONE_DISALLOWED = re.compile(r"[^0-9+\s-]")


def normalize_digits(value) -> str:
    """Strip every non-digit character. Idempotent."""
    if value is None:
        return ""
    return _NON_DIGITS.sub("", str(value))


def normalize_hs_code(value) -> str:
    """Canonical HS code: digits only (6109.10.00 -> 61091000)."""
    return normalize_digits(value)


def normalize_country_code(value: Optional[str]) -> Optional[str]:
    if not value:
        return value
    return value.strip().upper()


def normalize_trader_type(value: Optional[str]) -> str:
    if not value:
        return TRADER_TYPE_BUSINESS
    return value.strip().lower()


def normalize_un_code(value) -> str:
    """Bare UN/ID number without prefix (UN1266 -> 1266, ID8000 -> 8000)."""
    if value is None:
        return ""
    return normalize_digits(_UN_PREFIX.sub("", str(value)))


def clean_string(value: Optional[str], max_length: Optional[int] = 255) -> str:
    """
    Remove characters the carrier API rejects.

    Drops emoji and pictographs, turns newlines and tabs into spaces
    and truncates to max_length.
    """
    if not value:
        return ""
    cleaned = _PICTOGRAPHS.sub("", value)
    cleaned = _LINE_BREAKS.sub(" ", cleaned).strip()
    if max_length and len(cleaned) > max_length:
        cleaned = cleaned[:max_length]
    return cleaned


def normalize_phone(value: Optional[str]) -> str:
    if not value:
        return ""
    return _PHONE_DISALLOWED.sub("", value).strip()[:PHONE_MAX_LEN]


def split_address_lines(
    street_lines: Iterable[str],
    max_length: int = ADDRESS_LINE_MAX_LEN,
    max_lines: int = ADDRESS_MAX_LINES,
) -> List[str]:
    """
    Re-flow street lines into at most three carrier address lines.

    Lines are joined and split again on the last space that fits; words
    longer than the limit are cut. Empty input yields a single "." line,
    which the carrier accepts as a placeholder.
    """
    remaining = clean_string(" ".join(line for line in street_lines if line), FREE_TEXT_MAX_LEN)
    lines: List[str] = []

    while remaining and len(lines) < max_lines:
        if len(remaining) <= max_length:
            lines.append(remaining)
            break

        split_at = remaining.rfind(" ", 0, max_length + 1)
        if split_at <= 0:
            split_at = max_length

        lines.append(remaining[:split_at].strip())
        remaining = remaining[split_at:].strip()

    return lines or ["."]


def weight_in_kg(weight: Weight) -> float:
    if weight.unit == "lb":
        return weight.value * KG_PER_LB
    return weight.value


def length_in_cm(value: float, unit: str) -> float:
    if unit == "in":
        return value * CM_PER_IN
    return value


# ==================== Record Normalization ====================


def normalize_party(party: Party) -> Party:
    """Return a normalized copy of a shipper or receiver."""
    return party.model_copy(update={
        "company": clean_string(party.company) or None,
        "contact_person": clean_string(party.contact_person) or None,
        "phone": normalize_phone(party.phone) or None,
        "country_code": normalize_country_code(party.country_code),
        "trader_type": normalize_trader_type(party.trader_type),
        "vat_number": party.vat_number or None,
        "eori_number": party.eori_number or None,
        "tax_id": party.tax_id or None,
    })


def normalize_item(item: Item, fallback_origin: Optional[str] = None) -> Item:
    """Return a normalized copy of a customs line item."""
    return item.model_copy(update={
        "description": clean_string(item.description, FREE_TEXT_MAX_LEN),
        "hs_code": normalize_hs_code(item.hs_code),
        "country_of_origin": normalize_country_code(item.country_of_origin or fallback_origin),
    })


def normalize_package(package: Package) -> Package:
    """Return a copy of a package with default dimensions filled in."""
    dimensions = package.dimensions or Dimensions(
        length=DEFAULT_PACKAGE_DIMENSION_CM,
        width=DEFAULT_PACKAGE_DIMENSION_CM,
        height=DEFAULT_PACKAGE_DIMENSION_CM,
    )
    return package.model_copy(update={
        "description": clean_string(package.description, FREE_TEXT_MAX_LEN) or None,
        "dimensions": dimensions,
    })


def consolidated_package(items: Iterable[Item]) -> Package:
    """Single package standing in for a shipment that declares none."""
    total_weight = sum((item.net_weight or 0) * (item.quantity or 0) for item in items)
    return Package(
        weight=Weight(value=round(total_weight, 3) or DEFAULT_PACKAGE_WEIGHT_KG),
        dimensions=Dimensions(
            length=DEFAULT_PACKAGE_DIMENSION_CM,
            width=DEFAULT_PACKAGE_DIMENSION_CM,
            height=DEFAULT_PACKAGE_DIMENSION_CM,
        ),
        description="Consolidated Items",
    )


def normalize_order(order: ShipmentOrder) -> ShipmentOrder:
    """
    Return a normalized copy of the whole shipment.

    The input is left untouched. Items inherit the shipper country as
    origin when they declare none.
    """
    sender = normalize_party(order.sender)
    items = [normalize_item(item, fallback_origin=sender.country_code) for item in order.items]
    packages = [normalize_package(package) for package in order.packages]
    if not packages and items:
        packages = [consolidated_package(items)]

    dangerous_goods = order.dangerous_goods
    if dangerous_goods.contains:
        dangerous_goods = dangerous_goods.model_copy(update={
            "code": normalize_un_code(dangerous_goods.code) or None,
        })

    return order.model_copy(update={
        "sender": sender,
        "receiver": normalize_party(order.receiver),
        "items": items,
        "packages": packages,
        "dangerous_goods": dangerous_goods,
        "currency": order.currency.strip().upper() if order.currency else order.currency,
        "package_marks": clean_string(order.package_marks) or None,
        "invoice_remarks": clean_string(order.invoice_remarks, FREE_TEXT_MAX_LEN) or None,
    })
