"""
PII masking for log output

Shipment records carry names, phone numbers, emails and street
addresses. None of them may reach the logs in clear text.
"""
import re
from typing import Optional

# Patterns to redact, most specific first
_REDACTION_PATTERNS = [
    # Emails
    (r'\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b', '[EMAIL]'),
    # International and domestic phone numbers
    (r'\+\d{1,3}[-.\s]?\d{1,4}[-.\s]?\d{1,4}[-.\s]?\d{1,9}\b', '[PHONE]'),
    (r'\b\d{3}[-.\s]?\d{3}[-.\s]?\d{4}\b', '[PHONE]'),
    (r'\b\d{8,15}\b', '[PHONE]'),
]


def mask_email(email: str) -> str:
    """
    Mask an email for display (e.g., j***@example.com).

    Args:
        email: Email address

    Returns:
        Masked email
    """
    if not email or "@" not in email:
        return "***"

    local, domain = email.rsplit("@", 1)

    if len(local) <= 1:
        masked_local = "*"
    else:
        masked_local = local[0] + "***"

    return f"{masked_local}@{domain}"


def mask_pii(value: Optional[str]) -> str:
    """
    Mask a single PII value, keeping just enough to recognise it.

    Emails keep the first character of the local part and the domain;
    anything else keeps its first and last three characters.
    """
    if not value or len(value) < 4:
        return "****"
    if "@" in value:
        return mask_email(value)
    if len(value) <= 6:
        return f"{value[0]}****"
    return f"{value[:3]}****{value[-3:]}"


def sanitize_for_logging(text: str, max_length: int = 500) -> str:
    """
    Remove PII from text for safe logging.

    Args:
        text: Text that may contain PII
        max_length: Maximum length of result

    Returns:
        Sanitized text safe for logging
    """
    if not text:
        return ""

    sanitized = text[:max_length]

    for pattern, replacement in _REDACTION_PATTERNS:
        sanitized = re.sub(pattern, replacement, sanitized, flags=re.IGNORECASE)

    return sanitized
