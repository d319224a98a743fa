"""
DHL Express wire records.

Immutable building blocks of the MyDHL shipment payload. Each record
renders its own JSON fragment through to_dhl_format(); field names in
the output are the carrier's and must not be renamed.
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from carrier_compliance.services.dhl_constants import (
    COMMODITY_CODE_TYPE_HS,
    QUANTITY_UNIT_PIECES,
    REFERENCE_TYPE_CUSTOMER,
    REFERENCE_TYPE_SKU,
)


def _number(value: float, digits: int):
    """Round, and drop the fraction when the value is whole (10.0 -> 10)."""
    rounded = round(float(value), digits)
    return int(rounded) if rounded.is_integer() else rounded


@dataclass(frozen=True)
class DhlAccount:
    """Billing account."""
    number: str
    type_code: str

    def to_dhl_format(self) -> Dict[str, Any]:
        return {"typeCode": self.type_code, "number": self.number}


@dataclass(frozen=True)
class DhlRegistrationNumber:
    """VAT / EORI registration of a party."""
    type_code: str
    number: str
    issuer_country_code: Optional[str] = None

    def to_dhl_format(self) -> Dict[str, Any]:
        registration = {"typeCode": self.type_code, "number": self.number}
        if self.issuer_country_code:
            registration["issuerCountryCode"] = self.issuer_country_code
        return registration


@dataclass(frozen=True)
class DhlPostalAddress:
    """Postal address with at most three street lines."""
    address_lines: Tuple[str, ...]
    city_name: Optional[str]
    country_code: Optional[str]
    postal_code: Optional[str] = None

    def to_dhl_format(self) -> Dict[str, Any]:
        address = {
            "postalCode": self.postal_code or "",
            "cityName": self.city_name,
            "countryCode": self.country_code,
        }
        for index, line in enumerate(self.address_lines[:3], start=1):
            address[f"addressLine{index}"] = line
        return address


@dataclass(frozen=True)
class DhlContact:
    company_name: Optional[str]
    full_name: Optional[str]
    phone: Optional[str]
    email: Optional[str] = None

    def to_dhl_format(self) -> Dict[str, Any]:
        contact = {
            "companyName": self.company_name or self.full_name,
            "fullName": self.full_name,
            "phone": self.phone,
        }
        if self.email:
            contact["email"] = self.email
        return contact


@dataclass(frozen=True)
class DhlPartyDetails:
    """Shipper or receiver block of customerDetails."""
    postal_address: DhlPostalAddress
    contact: DhlContact
    type_code: str
    registration_numbers: Tuple[DhlRegistrationNumber, ...] = ()

    def to_dhl_format(self) -> Dict[str, Any]:
        details = {
            "postalAddress": self.postal_address.to_dhl_format(),
            "contactInformation": self.contact.to_dhl_format(),
            "typeCode": self.type_code,
        }
        # The carrier rejects an empty registrationNumbers array
        if self.registration_numbers:
            details["registrationNumbers"] = [r.to_dhl_format() for r in self.registration_numbers]
        return details


@dataclass(frozen=True)
class DhlPackage:
    """
    Physical package, metric units.

    Has no dangerous-goods fields: DG data is declared only through
    value-added services.
    """
    weight: float  # kg
    length: float  # cm
    width: float  # cm
    height: float  # cm
    description: str
    reference: str

    def to_dhl_format(self) -> Dict[str, Any]:
        return {
            "weight": _number(self.weight, 3),
            "dimensions": {
                "length": _number(self.length, 1),
                "width": _number(self.width, 1),
                "height": _number(self.height, 1),
            },
            "customerReferences": [{"value": self.reference, "typeCode": REFERENCE_TYPE_CUSTOMER}],
            "description": self.description,
        }


@dataclass(frozen=True)
class DhlLineItem:
    """Commercial invoice line."""
    number: int
    description: str
    price: float
    quantity: float
    hs_code: str
    manufacturer_country: Optional[str]
    net_weight: float
    gross_weight: float
    sku: Optional[str] = None

    def to_dhl_format(self) -> Dict[str, Any]:
        line_item = {
            "number": self.number,
            "description": self.description,
            "price": _number(self.price, 3),
            "quantity": {
                "value": _number(self.quantity, 3),
                "unitOfMeasure": QUANTITY_UNIT_PIECES,
            },
            "commodityCodes": [{"typeCode": COMMODITY_CODE_TYPE_HS, "value": self.hs_code}],
            "manufacturerCountry": self.manufacturer_country,
            "weight": {
                "netValue": round(self.net_weight, 3),
                "grossValue": round(self.gross_weight, 3),
            },
        }
        if self.sku:
            line_item["customerReferences"] = [{"typeCode": REFERENCE_TYPE_SKU, "value": self.sku}]
        return line_item


@dataclass(frozen=True)
class DhlDangerousGoodsItem:
    content_id: str
    un_code: str
    custom_description: Optional[str] = None
    dry_ice_weight: Optional[float] = None

    def to_dhl_format(self) -> Dict[str, Any]:
        item = {"contentId": self.content_id, "unCode": self.un_code}
        if self.custom_description:
            item["customDescription"] = self.custom_description
        if self.dry_ice_weight is not None:
            item["dryIceWeight"] = self.dry_ice_weight
        return item


@dataclass(frozen=True)
class DhlValueAddedService:
    """Value-added service entry. Carries DG declarations."""
    service_code: str
    dangerous_goods: Tuple[DhlDangerousGoodsItem, ...] = ()
    value: Optional[float] = None

    def to_dhl_format(self) -> Dict[str, Any]:
        service = {"serviceCode": self.service_code}
        if self.value is not None:
            service["value"] = self.value
        if self.dangerous_goods:
            service["dangerousGoods"] = [dg.to_dhl_format() for dg in self.dangerous_goods]
        return service
