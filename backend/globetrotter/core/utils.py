"""
Utility functions for the application.
"""
from typing import Any, Dict, Optional
import math


def format_response(data: Any = None, message: str = "Success", meta: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Format API response."""
    response = {"success": True, "message": message}
    if data is not None:
        response["data"] = data
    if meta:
        response["meta"] = meta
    return response


def format_error(message: str, code: str, details: Any = None) -> Dict[str, Any]:
    """Format error response."""
    response = {"success": False, "error": message, "code": code}
    if details:
        response["details"] = details
    return response


def pagination_meta(page: int, limit: int, total: int) -> Dict[str, int]:
    """Build pagination metadata for list responses."""
    return {
        "page": page,
        "limit": limit,
        "total": total,
        "total_pages": math.ceil(total / limit) if limit else 0,
    }
