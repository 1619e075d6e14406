"""Custom validators for callable inputs"""

import re
from typing import Any, Optional

from wishlist_api.core.exceptions import InvalidArgumentException

# Firestore reserves ids of this shape
RESERVED_ID_PATTERN = re.compile(r"^__.*__$")

MAX_DOCUMENT_ID_BYTES = 1500

def document_id_problem(value: str) -> Optional[str]:
    """Return why value cannot be used as a single document id, or None"""
    if "/" in value:
        return "must not contain '/'"
    if value in (".", ".."):
        return "must not be '.' or '..'"
    if RESERVED_ID_PATTERN.match(value):
        return "must not match __.*__"
    if len(value.encode("utf-8")) > MAX_DOCUMENT_ID_BYTES:
        return f"must be at most {MAX_DOCUMENT_ID_BYTES} bytes"
    return None

def validate_product_id(data: Any, message: str) -> str:
    """
    Extract productId from callable data

    Raises:
        InvalidArgumentException: if productId is missing, not a non-empty
            string, or not usable as a document id
    """
    product_id = data.get("productId") if isinstance(data, dict) else None

    if not product_id or not isinstance(product_id, str):
        raise InvalidArgumentException(message)

    problem = document_id_problem(product_id)
    if problem:
        raise InvalidArgumentException(f"productId {problem}")

    return product_id
