import time
import uuid


def generate_id(prefix: str | None = None) -> str:
    """Time-ordered local id, e.g. ``user-1718000000000-3f9a1c2b7``."""
    value = f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:9]}"
    return f"{prefix}-{value}" if prefix else value
