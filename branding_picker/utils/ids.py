"""
Branding Picker Request ID Utilities
Generate unique request IDs for tracing.
"""
import uuid
from datetime import datetime


def generate_request_id(prefix: str = "brand") -> str:
    """
    Generate a unique request ID for tracking.

    Args:
        prefix: Short tag identifying the endpoint family

    Returns:
        Request ID of the form ``<prefix>-<YYYYmmddHHMMSS>-<8 hex>``
    """
    timestamp = datetime.now().strftime("%Y%m%d%H%M%S")
    short_uuid = uuid.uuid4().hex[:8]
    return f"{prefix}-{timestamp}-{short_uuid}"


def extract_timestamp_from_request_id(request_id: str) -> str:
    """
    Extract timestamp from request ID.

    Returns:
        Timestamp string or empty if the ID is not in the expected form
    """
    parts = request_id.split("-")
    if len(parts) == 3 and len(parts[1]) == 14 and parts[1].isdigit():
        return parts[1]
    return ""
