"""
DHL Express Payload Compiler v1.0.0

Top-level orchestration of the compliance layer:
- Pre-flight compliance check (fails with every deficiency at once)
- Field normalization
- Dangerous-goods classification and value-added services
- Export declaration, billing accounts and party details

Pure: no I/O and no state between calls. Each call returns a freshly
built payload dict, so compiling shipments from several threads at
once needs no coordination.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Union

from carrier_compliance.core.config import settings
from carrier_compliance.core.exceptions import ShipmentValidationError
from carrier_compliance.core.pii import mask_pii
from carrier_compliance.schemas.shipment import AccountConfig, ShipmentOrder
from carrier_compliance.services.compliance_validator import OrderInput, coerce_order, validate_shipment
from carrier_compliance.services.dangerous_goods import ResolvedDangerousGoods, resolve_declaration
from carrier_compliance.services.dhl_constants import (
    DG_DESCRIPTION_MAX_LEN,
    OUTPUT_IMAGE_TYPES,
    UNIT_OF_MEASUREMENT_METRIC,
)
from carrier_compliance.services.dhl_records import DhlDangerousGoodsItem, DhlValueAddedService
from carrier_compliance.services.export_declaration import build_export_declaration
from carrier_compliance.services.field_normalizer import clean_string, normalize_order
from carrier_compliance.services.party_assembler import (
    assemble_accounts,
    assemble_content_description,
    assemble_packages,
    assemble_party,
)

logger = logging.getLogger(__name__)

AccountConfigInput = Union[AccountConfig, Mapping[str, Any], None]


def format_planned_shipping_date(value: Optional[datetime] = None) -> str:
    """Carrier date format: 2026-02-02T12:00:00 GMT+00:00 (always UTC)."""
    value = value or datetime.now(timezone.utc)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S") + " GMT+00:00"


def build_value_added_services(dangerous_goods: ResolvedDangerousGoods) -> List[Dict[str, Any]]:
    """
    Exactly one value-added service entry for a DG shipment.

    `value` and `dryIceWeight` are set for dry ice only, the one
    weight-bearing DG type.
    """
    dry_ice_weight = dangerous_goods.dry_ice_weight if dangerous_goods.is_dry_ice else None
    service = DhlValueAddedService(
        service_code=dangerous_goods.service_code,
        value=dry_ice_weight,
        dangerous_goods=(
            DhlDangerousGoodsItem(
                content_id=dangerous_goods.content_id,
                un_code=dangerous_goods.un_code,
                custom_description=clean_string(dangerous_goods.custom_description, DG_DESCRIPTION_MAX_LEN) or None,
                dry_ice_weight=dry_ice_weight,
            ),
        ),
    )
    return [service.to_dhl_format()]


class ShipmentPayloadCompiler:
    """
    Builds MyDHL shipment payloads from carrier-agnostic shipment records.

    Holds only billing configuration; no per-shipment state.
    """

    def __init__(self, account_config: AccountConfigInput = None):
        if account_config is None:
            account_config = AccountConfig()
        elif not isinstance(account_config, AccountConfig):
            account_config = AccountConfig.model_validate(account_config)

        self.account_number = account_config.account_number or settings.DHL_ACCOUNT_NUMBER
        self.duties_account_number = account_config.duties_account_number or settings.DHL_DUTIES_ACCOUNT_NUMBER

    def validate(self, order: OrderInput) -> List[str]:
        """Compliance messages for a shipment; empty means it can be booked."""
        return validate_shipment(order)

    def build(self, order: OrderInput) -> Dict[str, Any]:
        """
        Build the booking payload.

        Args:
            order: ShipmentOrder or its dict form

        Returns:
            MyDHL shipment request body

        Raises:
            ShipmentValidationError: the shipment is not compliant; carries all messages
        """
        parsed, errors = coerce_order(order)
        if parsed is not None:
            errors = validate_shipment(parsed)
        if errors:
            logger.warning(f"Shipment rejected by compliance check: {len(errors)} issue(s)")
            raise ShipmentValidationError(errors)

        normalized = normalize_order(parsed)
        dangerous_goods = resolve_declaration(normalized.dangerous_goods)

        payload = self._assemble(normalized, dangerous_goods)

        logger.info(
            f"Compiled DHL payload: {normalized.sender.country_code}->{normalized.receiver.country_code}, "
            f"{len(payload['content']['packages'])} package(s), "
            f"{len(normalized.items)} line item(s), "
            f"incoterm={normalized.incoterm}, "
            f"dg={dangerous_goods.un_code if dangerous_goods else 'none'}, "
            f"account={mask_pii(payload['accounts'][0]['number'])}"
        )
        return payload

    def _assemble(self, order: ShipmentOrder, dangerous_goods: Optional[ResolvedDangerousGoods]) -> Dict[str, Any]:
        service_code = order.service_code or settings.DHL_DEFAULT_PRODUCT_CODE
        label_format = (order.label_format or settings.DHL_LABEL_FORMAT).lower()
        currency = order.currency or settings.DHL_DEFAULT_CURRENCY

        payload: Dict[str, Any] = {
            "plannedShippingDateAndTime": format_planned_shipping_date(order.shipment_date),
            "pickup": {"isRequested": False},
            "productCode": service_code,
            "localProductCode": service_code,
            "getRateEstimates": False,
            "accounts": assemble_accounts(
                order.incoterm,
                order.shipper_account,
                self.account_number,
                duties_account_number=self.duties_account_number,
                payer_of_vat=order.payer_of_vat,
            ),
        }

        # DG is declared here and nowhere else
        if dangerous_goods is not None:
            payload["valueAddedServices"] = build_value_added_services(dangerous_goods)

        payload["outputImageProperties"] = {
            "encodingFormat": label_format,
            "imageOptions": [{"typeCode": type_code, "isRequested": True} for type_code in OUTPUT_IMAGE_TYPES],
        }
        payload["customerDetails"] = {
            "shipperDetails": assemble_party(order.sender),
            "receiverDetails": assemble_party(order.receiver),
        }
        payload["content"] = {
            "packages": assemble_packages(order),
            "isCustomsDeclarable": True,
            "description": assemble_content_description(order),
            "incoterm": order.incoterm,
            "unitOfMeasurement": UNIT_OF_MEASUREMENT_METRIC,
            "declaredValue": round(sum((item.value or 0) * (item.quantity or 0) for item in order.items), 3),
            "declaredValueCurrency": currency,
            "exportDeclaration": build_export_declaration(order, dangerous_goods),
        }
        return payload


def build_carrier_payload(order: OrderInput, account_config: AccountConfigInput = None) -> Dict[str, Any]:
    """
    Build the MyDHL booking payload or fail with every compliance issue.

    Equivalent to ShipmentPayloadCompiler(account_config).build(order).
    """
    return ShipmentPayloadCompiler(account_config).build(order)
