import json
from datetime import datetime

from app.core.config import settings


def log_debug(event: str, data: dict):
    """Print one JSON line per API event when DEBUG_LOG is on."""
    if not settings.DEBUG_LOG:
        return

    entry = {"ts": datetime.now().isoformat(), "event": event, **data}
    print(f"[api] {json.dumps(entry, default=str)}")
