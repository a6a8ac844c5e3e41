"""parkpermits package."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from .aggregation import group_by, revenue_by_month, sum_by
from .availability import find_conflicts, find_conflicts_for_range
from .client import Client
from .exceptions import ApiError, AuthError, NetworkError, NotFoundError, ValidationError
from .models import (
    Application,
    BlackoutRule,
    Bucket,
    Conflict,
    ConflictResult,
    Invoice,
    Location,
    Park,
    PermitTemplate,
)
from .status import DerivedStatus, paid_amount, resolve_status

try:
    __version__ = version("parkpermits")
except PackageNotFoundError:  # pragma: no cover - not installed
    __version__ = "0.0.0"

__all__ = [
    "ApiError",
    "Application",
    "AuthError",
    "BlackoutRule",
    "Bucket",
    "Client",
    "Conflict",
    "ConflictResult",
    "DerivedStatus",
    "Invoice",
    "Location",
    "NetworkError",
    "NotFoundError",
    "Park",
    "PermitTemplate",
    "ValidationError",
    "__version__",
    "find_conflicts",
    "find_conflicts_for_range",
    "group_by",
    "paid_amount",
    "resolve_status",
    "revenue_by_month",
    "sum_by",
]
