"""Shared constants."""

STATUS_PENDING = "pending"
STATUS_APPROVED = "approved"
STATUS_DISAPPROVED = "disapproved"

APPLICATION_STATUSES = frozenset({STATUS_PENDING, STATUS_APPROVED, STATUS_DISAPPROVED})

PAYMENT_STATUS_PAID = "paid"
INVOICE_STATUS_PENDING = "pending"

FEE_TYPE_APPLICATION = "Application Fee"
FEE_TYPE_PERMIT = "Permit Fee"
FEE_TYPE_LOCATION = "Location Fee"

PARK_BLACKOUT_REASON = "Park blackout day"
TEMPLATE_BLACKOUT_REASON = "Blackout date"

DEFAULT_API_URI = "/api"
DEFAULT_TIMEOUT_SECONDS = 30

APPLICATIONS_ENDPOINT = "/applications"
INVOICES_ENDPOINT = "/invoices"
PARKS_ENDPOINT = "/parks"
PERMITS_ENDPOINT = "/permits"
PERMIT_TEMPLATES_ENDPOINT = "/permit-templates"

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "User-Agent": "parkpermits",
}
