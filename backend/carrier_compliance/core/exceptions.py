"""
Carrier Compliance Exception Hierarchy

Structured exception classes for the shipment compliance layer.
All exceptions include code, message, and details for audit trail
and debugging.

Exception Hierarchy:
    ComplianceBaseError
    └── ShippingError
        └── ShipmentValidationError
"""
import logging
from typing import Optional, Dict, Any, List

logger = logging.getLogger(__name__)


class ComplianceBaseError(Exception):
    """
    Base exception for all carrier compliance errors.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code for programmatic handling
        details: Additional context for debugging/audit
        severity: P0-P3 severity level
    """

    default_code: str = "COMPLIANCE_ERROR"
    default_severity: str = "P2"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        severity: Optional[str] = None,
    ):
        self.message = message
        self.code = code or self.default_code
        self.details = details or {}
        self.severity = severity or self.default_severity
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "severity": self.severity,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


# =============================================================================
# SHIPPING ERRORS
# =============================================================================

class ShippingError(ComplianceBaseError):
    """Base exception for shipping-related errors."""
    default_code = "SHIPPING_ERROR"
    default_severity = "P1"


class ShipmentValidationError(ShippingError):
    """
    Shipment failed the pre-flight compliance check.

    Carries every deficiency found, not just the first one. Callers are
    expected to show ``errors`` to the user one message per line.
    """
    default_code = "SHIPMENT_VALIDATION_FAILED"
    default_severity = "P3"  # Recoverable by correcting input

    def __init__(
        self,
        errors: List[str],
        message: Optional[str] = None,
        **kwargs
    ):
        self.errors = list(errors)
        details = dict(kwargs.pop("details", None) or {})
        details["errors"] = self.errors
        if message is None:
            message = "Shipment validation failed:\n" + "\n".join(self.errors)
        super().__init__(message, details=details, **kwargs)
