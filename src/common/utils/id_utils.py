"""Identifier and SKU generation helpers."""

import random
import secrets
import string

_ID_ALPHABET = string.ascii_lowercase + string.digits
ID_LENGTH = 9


def generate_id() -> str:
    """Returns a short random base-36 identifier."""
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(ID_LENGTH))


def generate_sku(brand: str | None) -> str:
    """Builds a synthetic SKU from the brand initials and a random number, e.g. 'NIK-482'."""
    prefix = (brand or "Unknown")[:3].upper()
    return f"{prefix}-{random.randint(0, 999)}"
