"""
label_import/validators/format_validators.py

Cell format validators. Each returns an error message, or None when valid.
"""

from __future__ import annotations

import re
from typing import Callable
from urllib.parse import urlparse

from eth_utils import is_address

TX_HASH_PATTERN = re.compile(r"^0x[a-fA-F0-9]{64}$")

AddressCheck = Callable[[str], bool]


def validate_address(value: str, *, address_check: AddressCheck = is_address) -> str | None:
    if not value:
        return "Address is required"
    try:
        if address_check(value):
            return None
    except (TypeError, ValueError):
        pass
    return "Invalid EVM address"


def validate_optional_address(value: str, *, address_check: AddressCheck = is_address) -> str | None:
    if not value:
        return None
    return validate_address(value, address_check=address_check)


def make_max_length_validator(max_length: int, label: str) -> Callable[[str], str | None]:
    def _validate(value: str) -> str | None:
        if value and len(value) > max_length:
            return f"{label} must be {max_length} characters or less"
        return None

    return _validate


def validate_tx_hash(value: str) -> str | None:
    if not value:
        return None
    if not TX_HASH_PATTERN.match(value):
        return "Invalid transaction hash format"
    return None


def validate_url(value: str) -> str | None:
    """
    Accept ``https://`` URLs and bare ``www.`` hosts.
    """

    if not value:
        return None
    if not value.startswith("https://") and not value.startswith("www."):
        return "URL must start with https:// or www."

    candidate = f"https://{value}" if value.startswith("www.") else value
    try:
        parsed = urlparse(candidate)
    except ValueError:
        return "Invalid URL format"
    if not parsed.netloc or " " in parsed.netloc:
        return "Invalid URL format"
    return None


def validate_boolean(value: str) -> str | None:
    if value in {"", "true", "false"}:
        return None
    return "Must be true or false"
