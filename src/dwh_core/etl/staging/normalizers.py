"""Code-to-label normalizers for silver columns.

Every normalizer trims and upper-cases the raw code before looking it up, so
``' s '``, ``'S'`` and ``'s'`` all map the same way. Unknown, blank and null
codes fall through to ``NOT_AVAILABLE``. None of these functions raise.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from dwh_core.etl.staging.cleaning_utils import trim

NOT_AVAILABLE = "n/a"

MARITAL_STATUS_LABELS = {
    "S": "Single",
    "M": "Married",
}

GENDER_LABELS = {
    "F": "Female",
    "M": "Male",
}

# ERP exports spell genders out as well as using the CRM single-letter codes.
ERP_GENDER_LABELS = {
    "F": "Female",
    "FEMALE": "Female",
    "M": "Male",
    "MALE": "Male",
}

PRODUCT_LINE_LABELS = {
    "M": "Mountain",
    "R": "Road",
    "S": "Other Sales",
    "T": "Touring",
}

COUNTRY_LABELS = {
    "DE": "Germany",
    "US": "United States",
    "USA": "United States",
}


def code_key(value: Any) -> Optional[str]:
    """Return the comparison key for a raw code, or None when blank/null.

    Examples:
        >>> code_key("  usa ")
        'USA'
        >>> code_key("   ") is None
        True
    """
    s = trim(value)
    if not s:
        return None
    return s.upper()


def normalize_code(
    value: Any,
    labels: Mapping[str, str],
    default: str = NOT_AVAILABLE,
) -> str:
    """Map a raw code to its label, or ``default`` when it is not a known code.

    Examples:
        >>> normalize_code(" m", MARITAL_STATUS_LABELS)
        'Married'
        >>> normalize_code("X", MARITAL_STATUS_LABELS)
        'n/a'
    """
    key = code_key(value)
    if key is None:
        return default
    return labels.get(key, default)


def normalize_marital_status(value: Any) -> str:
    return normalize_code(value, MARITAL_STATUS_LABELS)


def normalize_gender(value: Any) -> str:
    return normalize_code(value, GENDER_LABELS)


def normalize_erp_gender(value: Any) -> str:
    return normalize_code(value, ERP_GENDER_LABELS)


def normalize_product_line(value: Any) -> str:
    return normalize_code(value, PRODUCT_LINE_LABELS)


def normalize_country(value: Any) -> str:
    """Map country codes to names; unknown non-blank values pass through trimmed.

    Examples:
        >>> normalize_country("DE")
        'Germany'
        >>> normalize_country(" France ")
        'France'
        >>> normalize_country("")
        'n/a'
    """
    key = code_key(value)
    if key is None:
        return NOT_AVAILABLE
    return COUNTRY_LABELS.get(key, trim(value))
