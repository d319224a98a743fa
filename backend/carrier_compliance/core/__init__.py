from carrier_compliance.core.config import settings
from carrier_compliance.core.exceptions import (
    ComplianceBaseError,
    ShippingError,
    ShipmentValidationError,
)
