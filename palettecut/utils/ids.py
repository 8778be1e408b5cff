"""
palettecut Request ID Utilities
Unique ids for palette reports.
"""
import uuid
from datetime import datetime
from typing import Optional

REQUEST_ID_PREFIX = "pal"
_TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"


def generate_request_id(prefix: str = REQUEST_ID_PREFIX) -> str:
    """
    Generate a unique request ID of the form <prefix>-<timestamp>-<8 hex chars>.
    """
    timestamp = datetime.now().strftime(_TIMESTAMP_FORMAT)
    return f"{prefix}-{timestamp}-{uuid.uuid4().hex[:8]}"


def request_id_timestamp(request_id: str) -> Optional[datetime]:
    """
    Recover the creation time encoded in a request ID.

    Returns:
        The timestamp, or None when the id was not made by generate_request_id
    """
    parts = request_id.split("-")
    if len(parts) != 3:
        return None
    try:
        return datetime.strptime(parts[1], _TIMESTAMP_FORMAT)
    except ValueError:
        return None
