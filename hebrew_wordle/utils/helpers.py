"""
Helper Functions

Contains request parsing helpers used by the controllers.
"""

from typing import Any, Dict, Optional
from flask import request


def get_request_data(request_obj=None) -> Dict[str, Any]:
    """Return the JSON body as a dict; a missing or malformed body yields {}."""
    if request_obj is None:
        request_obj = request

    data = request_obj.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def get_int(data: Dict[str, Any], key: str, default: Optional[int] = None) -> Optional[int]:
    """
    Read an integer field from a request body.

    Raises:
        ValueError: If the field is present but not an integer
    """
    value = data.get(key, default)
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"'{key}' must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"'{key}' must be an integer")
