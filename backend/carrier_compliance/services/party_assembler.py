"""
Account & Party Assembler

Resolves who pays (billing accounts by Incoterm), who ships and who
receives (trader type, contact, registration numbers), and how the
physical content is described.
"""
import logging
from typing import Any, Dict, List, Optional

from carrier_compliance.schemas.shipment import Package, Party, ShipmentOrder
from carrier_compliance.services.dhl_constants import (
    ACCOUNT_TYPE_DUTIES_TAXES,
    ACCOUNT_TYPE_SHIPPER,
    DEFAULT_CONTENT_DESCRIPTION,
    DEFAULT_PACKAGE_DESCRIPTION,
    INCOTERM_DDP,
    REGISTRATION_TYPE_EORI,
    REGISTRATION_TYPE_VAT,
)
from carrier_compliance.services.dhl_records import (
    DhlAccount,
    DhlContact,
    DhlPackage,
    DhlPartyDetails,
    DhlPostalAddress,
    DhlRegistrationNumber,
)
from carrier_compliance.services.field_normalizer import (
    length_in_cm,
    normalize_package,
    normalize_trader_type,
    split_address_lines,
    weight_in_kg,
)

logger = logging.getLogger(__name__)


# ==================== Accounts ====================


def assemble_accounts(
    incoterm: Optional[str],
    shipper_account_override: Optional[str],
    default_account_number: Optional[str],
    duties_account_number: Optional[str] = None,
    payer_of_vat: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """
    Billing accounts for the booking.

    The shipper account is the per-order override or the configured
    default. DDP (or VAT explicitly payable by the shipper) adds a
    duties-taxes account at index 1, billed to the configured duties
    account or, failing that, the default account.
    """
    shipper_number = shipper_account_override or default_account_number or ""
    if not shipper_number:
        logger.warning("No shipper account number configured; booking will be rejected by the carrier")

    accounts = [DhlAccount(number=shipper_number, type_code=ACCOUNT_TYPE_SHIPPER)]

    if incoterm == INCOTERM_DDP or payer_of_vat == "shipper":
        duties_number = duties_account_number or default_account_number or shipper_number
        accounts.append(DhlAccount(number=duties_number, type_code=ACCOUNT_TYPE_DUTIES_TAXES))

    return [account.to_dhl_format() for account in accounts]


# ==================== Parties ====================


def registration_numbers_for(party: Party) -> List[DhlRegistrationNumber]:
    """
    VAT and EORI registrations of a party.

    The explicit VAT number wins over the generic tax ID for the VAT
    slot. Absent values produce no entry at all.
    """
    registrations = []
    vat_number = party.vat_number or party.tax_id
    if vat_number:
        registrations.append(DhlRegistrationNumber(
            type_code=REGISTRATION_TYPE_VAT,
            number=vat_number,
            issuer_country_code=party.country_code,
        ))
    if party.eori_number:
        registrations.append(DhlRegistrationNumber(
            type_code=REGISTRATION_TYPE_EORI,
            number=party.eori_number,
            issuer_country_code=party.country_code,
        ))
    return registrations


def assemble_party(party: Party) -> Dict[str, Any]:
    """Shipper/receiver details block: postal address, contact, type code, registrations."""
    details = DhlPartyDetails(
        postal_address=DhlPostalAddress(
            address_lines=tuple(split_address_lines(party.street_lines)),
            city_name=party.city,
            country_code=party.country_code,
            postal_code=party.postal_code,
        ),
        contact=DhlContact(
            company_name=party.company,
            full_name=party.contact_person,
            phone=party.phone,
            email=party.email,
        ),
        type_code=normalize_trader_type(party.trader_type),
        registration_numbers=tuple(registration_numbers_for(party)),
    )
    return details.to_dhl_format()


# ==================== Content ====================


def assemble_content_description(order: ShipmentOrder) -> str:
    """Shipment content description, with the pallet count appended when set."""
    base = order.invoice_remarks or (order.items[0].description if order.items else None) or DEFAULT_CONTENT_DESCRIPTION
    if order.pallet_count:
        return f"{base} - Pallets: {order.pallet_count}"
    return base


def package_description(description: Optional[str], package_marks: Optional[str] = None) -> str:
    text = description or DEFAULT_PACKAGE_DESCRIPTION
    if package_marks:
        return f"{text} - {package_marks}"
    return text


def assemble_package(package: Package, package_marks: Optional[str], reference: str) -> Dict[str, Any]:
    """
    One content.packages[] entry, converted to kg/cm.

    Takes only the physical package: dangerous-goods data has no way in.
    """
    dimensions = normalize_package(package).dimensions
    return DhlPackage(
        weight=weight_in_kg(package.weight),
        length=length_in_cm(dimensions.length, dimensions.unit),
        width=length_in_cm(dimensions.width, dimensions.unit),
        height=length_in_cm(dimensions.height, dimensions.unit),
        description=package_description(package.description, package_marks),
        reference=reference,
    ).to_dhl_format()


def assemble_packages(order: ShipmentOrder) -> List[Dict[str, Any]]:
    packages = []
    for index, package in enumerate(order.packages, start=1):
        reference = package.reference or order.reference or order.sender.reference or f"PKG-{index}"
        packages.append(assemble_package(package, order.package_marks, reference))
    return packages
