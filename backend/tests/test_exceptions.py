"""
Tests for the compliance exception hierarchy.
"""
import pytest

from carrier_compliance import ValidationError
from carrier_compliance.core.exceptions import (
    ComplianceBaseError,
    ShipmentValidationError,
    ShippingError,
)


class TestComplianceBaseError:
    def test_defaults(self):
        error = ComplianceBaseError("Something broke")
        assert error.code == "COMPLIANCE_ERROR"
        assert error.severity == "P2"
        assert error.details == {}
        assert str(error) == "Something broke"

    def test_to_dict(self):
        error = ShippingError("Carrier rejected", code="DHL_REJECTED", details={"status": 400})
        assert error.to_dict() == {
            "error_type": "ShippingError",
            "code": "DHL_REJECTED",
            "message": "Carrier rejected",
            "severity": "P1",
            "details": {"status": 400},
        }

    def test_repr(self):
        assert repr(ShippingError("x")) == "ShippingError(code='SHIPPING_ERROR', message='x')"


class TestShipmentValidationError:
    def test_carries_all_errors(self):
        errors = ["Shipper: Phone is required.", "Item 1: HS Code is required."]
        error = ShipmentValidationError(errors)

        assert error.errors == errors
        assert error.details["errors"] == errors
        assert error.code == "SHIPMENT_VALIDATION_FAILED"
        assert error.severity == "P3"
        assert str(error) == "Shipment validation failed:\nShipper: Phone is required.\nItem 1: HS Code is required."

    def test_custom_message(self):
        error = ShipmentValidationError(["DG: UN Code is required."], message="DG declaration incomplete")
        assert error.message == "DG declaration incomplete"

    def test_details_none_accepted(self):
        error = ShipmentValidationError(["Shipper: City is required."], details=None)
        assert error.details == {"errors": ["Shipper: City is required."]}

    def test_caller_details_not_mutated(self):
        details = {"order_id": "ORD-9"}
        error = ShipmentValidationError(["Shipper: City is required."], details=details)
        assert error.details["order_id"] == "ORD-9"
        assert details == {"order_id": "ORD-9"}

    def test_errors_list_copied(self):
        errors = ["Invoice: Currency is required."]
        error = ShipmentValidationError(errors)
        errors.append("later")
        assert error.errors == ["Invoice: Currency is required."]

    def test_hierarchy(self):
        error = ShipmentValidationError([])
        assert isinstance(error, ShippingError)
        assert isinstance(error, ComplianceBaseError)

    def test_public_alias(self):
        assert ValidationError is ShipmentValidationError
        with pytest.raises(ValidationError):
            raise ShipmentValidationError(["Shipper: City is required."])
