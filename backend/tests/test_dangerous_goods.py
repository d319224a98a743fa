"""
Tests for the dangerous-goods classifier.
"""
import pytest

from carrier_compliance.schemas.shipment import DangerousGoodsDeclaration
from carrier_compliance.services.dangerous_goods import (
    DANGEROUS_GOODS_TABLE,
    classify,
    resolve_declaration,
    un_identifier,
)


class TestClassification:
    """Static table lookups."""

    @pytest.mark.parametrize("code,un_code,service_code,content_id", [
        ("1266", "UN1266", "HE", "910"),
        ("3481", "UN3481", "HV", "967"),
        ("8000", "ID8000", "HK", "700"),
        ("1845", "UN1845", "HC", "901"),
    ])
    def test_supported_types(self, code, un_code, service_code, content_id):
        classification = classify(code)
        assert classification.un_code == un_code
        assert classification.vas_service_code == service_code
        assert classification.content_id == content_id
        assert classification.is_known

    def test_prefixed_input_accepted(self):
        assert classify("UN1266") is DANGEROUS_GOODS_TABLE["1266"]
        assert un_identifier("ID8000") == "ID8000"

    def test_only_consumer_commodity_uses_id_prefix(self):
        prefixes = {code: record.un_prefix for code, record in DANGEROUS_GOODS_TABLE.items()}
        assert prefixes == {"1266": "UN", "3481": "UN", "8000": "ID", "1845": "UN"}

    def test_unknown_code_is_manual_entry(self):
        classification = classify("1950")
        assert classification.un_code == "UN1950"
        assert classification.vas_service_code is None
        assert classification.content_id is None
        assert not classification.is_known

    def test_only_1845_is_dry_ice(self):
        assert classify("1845").is_dry_ice
        assert not any(classify(code).is_dry_ice for code in ("1266", "3481", "8000"))

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            DANGEROUS_GOODS_TABLE["9999"] = DANGEROUS_GOODS_TABLE["1266"]


class TestResolveDeclaration:
    """Merging a declaration with the table."""

    def test_nothing_declared(self):
        assert resolve_declaration(DangerousGoodsDeclaration()) is None

    def test_fields_ignored_without_contains(self):
        declaration = DangerousGoodsDeclaration(contains=False, code="1266", service_code="HE")
        assert resolve_declaration(declaration) is None

    def test_table_fills_gaps(self):
        resolved = resolve_declaration(DangerousGoodsDeclaration(contains=True, code="1266"))
        assert resolved.service_code == "HE"
        assert resolved.content_id == "910"
        assert resolved.custom_description == "PERFUMERY PRODUCTS"

    def test_declaration_wins_over_table(self):
        # Cargo-aircraft-only perfume
        resolved = resolve_declaration(DangerousGoodsDeclaration(contains=True, code="1266", content_id="911"))
        assert resolved.content_id == "911"
        assert resolved.service_code == "HE"

    def test_dry_ice_weight_kept_for_dry_ice_only(self):
        dry_ice = resolve_declaration(DangerousGoodsDeclaration(contains=True, code="1845", dry_ice_weight=2.5))
        perfume = resolve_declaration(DangerousGoodsDeclaration(contains=True, code="1266", dry_ice_weight=2.5))
        assert dry_ice.dry_ice_weight == 2.5
        assert dry_ice.is_dry_ice
        assert perfume.dry_ice_weight is None

    def test_numeric_code_accepted(self):
        resolved = resolve_declaration(DangerousGoodsDeclaration.model_validate({"contains": True, "code": 3481}))
        assert resolved.un_code == "UN3481"
