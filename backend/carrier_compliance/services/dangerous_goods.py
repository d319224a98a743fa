"""
Dangerous-Goods Classifier

Static lookup of the dangerous-goods types the shipment flow supports,
keyed by UN/ID number. Each record carries the identifier prefix, the
DHL value-added service code and content ID, and the regulatory
shipping metadata.

The table is read-only after import. A declaration's own values always
win over the table; the table only fills gaps.
"""
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional

from carrier_compliance.schemas.shipment import DangerousGoodsDeclaration
from carrier_compliance.services.field_normalizer import normalize_un_code

UN_PREFIX = "UN"
ID_PREFIX = "ID"

PERFUMERY_CODE = "1266"
LITHIUM_ION_IN_EQUIPMENT_CODE = "3481"
CONSUMER_COMMODITY_CODE = "8000"
DRY_ICE_CODE = "1845"


@dataclass(frozen=True)
class DangerousGoodsClass:
    """Shipping metadata for one UN/ID number."""
    code: str
    un_prefix: str
    vas_service_code: Optional[str] = None
    content_id: Optional[str] = None
    proper_shipping_name: Optional[str] = None
    hazard_class: Optional[str] = None
    packing_group: Optional[str] = None

    @property
    def un_code(self) -> str:
        return f"{self.un_prefix}{self.code}"

    @property
    def is_dry_ice(self) -> bool:
        return self.code == DRY_ICE_CODE

    @property
    def is_known(self) -> bool:
        return self.code in DANGEROUS_GOODS_TABLE


DANGEROUS_GOODS_TABLE: Mapping[str, DangerousGoodsClass] = MappingProxyType({
    PERFUMERY_CODE: DangerousGoodsClass(
        code=PERFUMERY_CODE,
        un_prefix=UN_PREFIX,
        vas_service_code="HE",
        content_id="910",  # 911 for cargo-aircraft-only
        proper_shipping_name="PERFUMERY PRODUCTS",
        hazard_class="3",
        packing_group="II",
    ),
    LITHIUM_ION_IN_EQUIPMENT_CODE: DangerousGoodsClass(
        code=LITHIUM_ION_IN_EQUIPMENT_CODE,
        un_prefix=UN_PREFIX,
        vas_service_code="HV",
        content_id="967",
        proper_shipping_name="LITHIUM ION BATTERIES CONTAINED IN EQUIPMENT",
        hazard_class="9",
        packing_group="II",
    ),
    CONSUMER_COMMODITY_CODE: DangerousGoodsClass(
        code=CONSUMER_COMMODITY_CODE,
        un_prefix=ID_PREFIX,
        vas_service_code="HK",
        content_id="700",
        proper_shipping_name="CONSUMER COMMODITY",
        hazard_class="9",
        packing_group="II",
    ),
    DRY_ICE_CODE: DangerousGoodsClass(
        code=DRY_ICE_CODE,
        un_prefix=UN_PREFIX,
        vas_service_code="HC",
        content_id="901",
        proper_shipping_name="DRY ICE",
        hazard_class="9",
        packing_group="III",
    ),
})


def un_prefix_for(code: str) -> str:
    """Consumer commodity (8000) is an ID number; everything else is UN."""
    return ID_PREFIX if code == CONSUMER_COMMODITY_CODE else UN_PREFIX


def classify(code) -> DangerousGoodsClass:
    """
    Look up the shipping metadata for a UN/ID number.

    Accepts bare or prefixed codes ("1266", "UN1266"). Unknown codes are
    manual entries: they get the UN prefix and no table metadata, so the
    declaration itself has to supply service code and content ID.
    """
    bare = normalize_un_code(code)
    known = DANGEROUS_GOODS_TABLE.get(bare)
    if known is not None:
        return known
    return DangerousGoodsClass(code=bare, un_prefix=un_prefix_for(bare))


def un_identifier(code) -> str:
    """Prefixed identifier, e.g. UN1266 or ID8000."""
    return classify(code).un_code


@dataclass(frozen=True)
class ResolvedDangerousGoods:
    """A declaration merged with its table record."""
    classification: DangerousGoodsClass
    service_code: Optional[str]
    content_id: Optional[str]
    proper_shipping_name: Optional[str]
    custom_description: Optional[str]
    dry_ice_weight: Optional[float]

    @property
    def un_code(self) -> str:
        return self.classification.un_code

    @property
    def is_dry_ice(self) -> bool:
        return self.classification.is_dry_ice


def resolve_declaration(declaration: DangerousGoodsDeclaration) -> Optional[ResolvedDangerousGoods]:
    """
    Merge a declaration with the table. Returns None when nothing is declared.
    """
    if not declaration.contains:
        return None

    classification = classify(declaration.code)
    proper_shipping_name = declaration.proper_shipping_name or classification.proper_shipping_name
    return ResolvedDangerousGoods(
        classification=classification,
        service_code=declaration.service_code or classification.vas_service_code,
        content_id=declaration.content_id or classification.content_id,
        proper_shipping_name=proper_shipping_name,
        custom_description=declaration.custom_description or proper_shipping_name,
        dry_ice_weight=declaration.dry_ice_weight if classification.is_dry_ice else None,
    )
