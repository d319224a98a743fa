"""
Tests for PII masking in log output.
"""
import pytest

from carrier_compliance.core.pii import mask_email, mask_pii, sanitize_for_logging


class TestMasking:
    @pytest.mark.parametrize("value,expected", [
        ("950000001", "950****001"),
        ("ABCDE", "A****"),
        ("abc", "****"),
        ("", "****"),
        (None, "****"),
        ("hans@example.com", "h***@example.com"),
    ])
    def test_mask_pii(self, value, expected):
        assert mask_pii(value) == expected

    def test_mask_email_invalid(self):
        assert mask_email("not-an-email") == "***"

    def test_mask_email_single_char_local(self):
        assert mask_email("a@example.com") == "*@example.com"


class TestSanitizeForLogging:
    def test_email_redacted(self):
        assert sanitize_for_logging("Contact sender@test.com") == "Contact [EMAIL]"

    def test_phone_redacted(self):
        assert "96512345678" not in sanitize_for_logging("Shipper phone 96512345678 invalid")

    def test_compliance_messages_untouched(self):
        assert sanitize_for_logging("Item 1: HS Code is required.") == "Item 1: HS Code is required."

    def test_truncated(self):
        assert len(sanitize_for_logging("x" * 1000, max_length=100)) == 100

    def test_empty(self):
        assert sanitize_for_logging("") == ""
