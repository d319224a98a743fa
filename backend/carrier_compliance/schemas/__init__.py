from carrier_compliance.schemas.shipment import (
    AccountConfig,
    DangerousGoodsDeclaration,
    Dimensions,
    Item,
    Package,
    Party,
    ShipmentOrder,
    Weight,
)
