"""
DHL Express (MyDHL API) payload constants.

Field limits, type codes and defaults used by the payload builders.
Type codes are part of the carrier contract and must not be renamed.
"""

# Field limits
ADDRESS_LINE_MAX_LEN = 45
ADDRESS_MAX_LINES = 3
ITEM_DESCRIPTION_MAX_LEN = 70
PHONE_MAX_LEN = 25
INVOICE_INSTRUCTIONS_MAX_LEN = 300
DG_DESCRIPTION_MAX_LEN = 70
HS_CODE_MIN_DIGITS = 6
FREE_TEXT_MAX_LEN = 500

# Account type codes
ACCOUNT_TYPE_SHIPPER = "shipper"
ACCOUNT_TYPE_DUTIES_TAXES = "duties-taxes"

# Registration number type codes
REGISTRATION_TYPE_VAT = "VAT"
REGISTRATION_TYPE_EORI = "EOR"

# Reference type codes
REFERENCE_TYPE_CUSTOMER = "CU"
REFERENCE_TYPE_SKU = "AFE"

# Customs
COMMODITY_CODE_TYPE_HS = "HS"
QUANTITY_UNIT_PIECES = "PCS"
UNIT_OF_MEASUREMENT_METRIC = "metric"
DEFAULT_EXPORT_REASON_TYPE = "permanent"
DEFAULT_CONTENT_DESCRIPTION = "Export Goods"
DEFAULT_PACKAGE_DESCRIPTION = "Box"
DEFAULT_SIGNATURE_TITLE = "Sender"
INVOICE_NUMBER_PREFIX = "INV-"

# Trader types
TRADER_TYPE_BUSINESS = "business"
TRADER_TYPE_PRIVATE = "private"

# Incoterms
INCOTERM_DAP = "DAP"
INCOTERM_DDP = "DDP"
INCOTERM_EXW = "EXW"

# Legacy single-package fallback (kg / cm)
DEFAULT_PACKAGE_WEIGHT_KG = 1.0
DEFAULT_PACKAGE_DIMENSION_CM = 10.0

# Unit conversion
KG_PER_LB = 0.45359237
CM_PER_IN = 2.54

# Documents requested with every booking
OUTPUT_IMAGE_TYPES = ("label", "waybillDoc", "invoice")
