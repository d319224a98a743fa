"""
Tests for billing accounts, party details and packages.
"""
import logging

import pytest

from carrier_compliance.schemas.shipment import Package, Party, ShipmentOrder
from carrier_compliance.services.field_normalizer import normalize_order
from carrier_compliance.services.party_assembler import (
    assemble_accounts,
    assemble_content_description,
    assemble_package,
    assemble_packages,
    assemble_party,
    registration_numbers_for,
)


class TestAccounts:
    """Billing accounts by Incoterm."""

    def test_dap_single_shipper_account(self):
        accounts = assemble_accounts("DAP", None, "950000001")
        assert accounts == [{"typeCode": "shipper", "number": "950000001"}]

    def test_ddp_adds_duties_account(self):
        accounts = assemble_accounts("DDP", None, "950000001")
        assert len(accounts) == 2
        assert accounts[1] == {"typeCode": "duties-taxes", "number": "950000001"}

    def test_ddp_uses_dedicated_duties_account(self):
        accounts = assemble_accounts("DDP", None, "950000001", duties_account_number="960000002")
        assert accounts[1]["number"] == "960000002"

    def test_vat_payable_by_shipper_adds_duties_account(self):
        accounts = assemble_accounts("DAP", None, "950000001", payer_of_vat="shipper")
        assert [a["typeCode"] for a in accounts] == ["shipper", "duties-taxes"]

    def test_order_override_wins(self):
        accounts = assemble_accounts("DAP", "123456", "950000001")
        assert accounts[0]["number"] == "123456"

    def test_missing_account_logged(self, caplog):
        with caplog.at_level(logging.WARNING):
            accounts = assemble_accounts("DAP", None, None)
        assert accounts[0]["number"] == ""
        assert "No shipper account number configured" in caplog.text


class TestRegistrationNumbers:
    """VAT / EORI registrations."""

    def test_vat_and_eori(self):
        party = Party(country_code="DE", vat_number="DE123456789", eori_number="DE987654321000")
        registrations = [r.to_dhl_format() for r in registration_numbers_for(party)]
        assert registrations == [
            {"typeCode": "VAT", "number": "DE123456789", "issuerCountryCode": "DE"},
            {"typeCode": "EOR", "number": "DE987654321000", "issuerCountryCode": "DE"},
        ]

    def test_tax_id_fills_vat_slot(self):
        party = Party(country_code="DE", tax_id="DE123456789")
        assert [r.number for r in registration_numbers_for(party)] == ["DE123456789"]

    def test_explicit_vat_wins_over_tax_id(self):
        party = Party(country_code="DE", vat_number="DE111111111", tax_id="DE222222222")
        assert [r.number for r in registration_numbers_for(party)] == ["DE111111111"]

    def test_none_declared(self):
        assert registration_numbers_for(Party(country_code="DE")) == []


class TestPartyDetails:
    """customerDetails.shipperDetails / receiverDetails."""

    def test_party_shape(self, base_order):
        order = normalize_order(ShipmentOrder.model_validate(base_order))
        details = assemble_party(order.sender)

        assert details["postalAddress"] == {
            "postalCode": "12345",
            "cityName": "Kuwait City",
            "countryCode": "KW",
            "addressLine1": "Block 1 Street 2",
        }
        assert details["contactInformation"] == {
            "companyName": "Sender Co",
            "fullName": "Adnan",
            "phone": "96512345678",
            "email": "sender@test.com",
        }
        assert details["typeCode"] == "business"
        assert "registrationNumbers" not in details

    def test_private_trader(self):
        details = assemble_party(Party(contact_person="Hans", trader_type="Private", street_lines=["A 1"]))
        assert details["typeCode"] == "private"

    def test_company_falls_back_to_contact(self):
        details = assemble_party(Party(contact_person="Hans", street_lines=["A 1"]))
        assert details["contactInformation"]["companyName"] == "Hans"

    def test_long_address_split(self):
        party = Party(street_lines=["Building 42, Al Shuhada Street, Sharq Commercial Area, Floor 7"])
        address = assemble_party(party)["postalAddress"]
        assert address["addressLine1"] == "Building 42, Al Shuhada Street, Sharq"
        assert address["addressLine2"] == "Commercial Area, Floor 7"
        assert "addressLine3" not in address


class TestContentAndPackages:
    """content.description and content.packages."""

    def test_description_from_first_item(self, base_order):
        order = ShipmentOrder.model_validate(base_order)
        assert assemble_content_description(order) == "T-Shirt"

    def test_pallet_count_appended(self, make_order):
        order = ShipmentOrder.model_validate(make_order(palletCount=2))
        assert "Pallets: 2" in assemble_content_description(order)

    def test_package_marks_appended(self):
        package = assemble_package(Package(weight=2.5, description="Box 1"), "FRAGILE", "PKG-1")
        assert package["description"] == "Box 1 - FRAGILE"

    def test_package_shape(self):
        package = assemble_package(
            Package.model_validate({
                "weight": {"value": 2.5, "unit": "kg"},
                "dimensions": {"length": 30, "width": 20, "height": 10},
            }),
            None,
            "ORD-1",
        )
        assert package == {
            "weight": 2.5,
            "dimensions": {"length": 30, "width": 20, "height": 10},
            "customerReferences": [{"value": "ORD-1", "typeCode": "CU"}],
            "description": "Box",
        }

    def test_imperial_package_converted(self):
        package = assemble_package(
            Package.model_validate({
                "weight": {"value": 10, "unit": "lb"},
                "dimensions": {"length": 10, "width": 10, "height": 10, "unit": "in"},
            }),
            None,
            "PKG-1",
        )
        assert package["weight"] == pytest.approx(4.536)
        assert package["dimensions"]["length"] == pytest.approx(25.4)

    def test_package_never_carries_dangerous_goods(self, dg_order):
        order = normalize_order(ShipmentOrder.model_validate(dg_order("dry_ice")))
        for package in assemble_packages(order):
            assert "dangerousGoods" not in package

    def test_package_references(self, make_order):
        order = ShipmentOrder.model_validate(make_order(packages=[
            {"weight": 1, "reference": "BOX-A"},
            {"weight": 2},
        ]))
        references = [p["customerReferences"][0]["value"] for p in assemble_packages(order)]
        assert references == ["BOX-A", "PKG-2"]
