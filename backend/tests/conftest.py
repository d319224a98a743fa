"""
Shared fixtures for the carrier compliance tests.
"""
import copy
import os

# Set test environment before any carrier_compliance import
os.environ["ENVIRONMENT"] = "development"
os.environ["DHL_ACCOUNT_NUMBER"] = "950000001"
os.environ.pop("DHL_DUTIES_ACCOUNT_NUMBER", None)

import pytest


BASE_ORDER = {
    "sender": {
        "company": "Sender Co",
        "contactPerson": "Adnan",
        "streetLines": ["Block 1", "Street 2"],
        "city": "Kuwait City",
        "postalCode": "12345",
        "countryCode": "KW",
        "phone": "96512345678",
        "email": "sender@test.com",
    },
    "receiver": {
        "company": "Receiver GmbH",
        "contactPerson": "Hans",
        "streetLines": ["Berliner Str 1"],
        "city": "Berlin",
        "postalCode": "10115",
        "countryCode": "DE",
        "phone": "49123456789",
        "email": "receiver@test.com",
    },
    "items": [
        {
            "description": "T-Shirt",
            "hsCode": "610910",
            "quantity": 10,
            "value": 5.00,
            "netWeight": 0.2,
            "countryOfOrigin": "KW",
        }
    ],
    "packages": [
        {
            "weight": {"value": 2.5, "unit": "kg"},
            "dimensions": {"length": 30, "width": 20, "height": 10, "unit": "cm"},
            "description": "Box 1",
        }
    ],
    "currency": "USD",
    "incoterm": "DAP",
    "shipmentDate": "2023-10-25T10:00:00Z",
}

DANGEROUS_GOODS = {
    "perfume": {"contains": True, "code": "1266", "serviceCode": "HE", "contentId": "910", "packingGroup": "II"},
    "lithium": {
        "contains": True,
        "code": "3481",
        "serviceCode": "HV",
        "contentId": "967",
        "customDescription": "LITHIUM ION BATTERIES CONTAINED IN EQUIPMENT",
    },
    "consumer_commodity": {"contains": True, "code": "8000", "serviceCode": "HK", "contentId": "700"},
    "dry_ice": {"contains": True, "code": "1845", "serviceCode": "HC", "contentId": "901", "dryIceWeight": 2.5},
}


@pytest.fixture
def base_order():
    """Compliant KW -> DE shipment of ordinary goods, as a camelCase dict."""
    return copy.deepcopy(BASE_ORDER)


@pytest.fixture
def make_order():
    """Factory: base order with top-level fields replaced."""
    def _make(**overrides):
        order = copy.deepcopy(BASE_ORDER)
        order.update(copy.deepcopy(overrides))
        return order
    return _make


@pytest.fixture
def dg_order(make_order):
    """Factory: base order carrying one of the supported dangerous-goods declarations."""
    def _make(kind, **overrides):
        return make_order(dangerousGoods=DANGEROUS_GOODS[kind], **overrides)
    return _make
