"""Opaque keyset-pagination cursors.

A cursor wraps the id of the last row on the previous page. Listing queries
resolve it back to that row's (created_at, id) position.
"""

import base64
import json
import uuid


def cursor_encode(last_id: str) -> str:
    """Encode the last row id into an opaque Base64 cursor string."""
    payload = json.dumps({"id": last_id})
    return base64.urlsafe_b64encode(payload.encode()).decode()


def cursor_decode(cursor: str | None) -> str | None:
    """Decode a cursor string back to the last seen id. Returns None on error."""
    if cursor is None:
        return None
    try:
        payload = json.loads(base64.urlsafe_b64decode(cursor.encode()).decode())
        return str(uuid.UUID(str(payload["id"])))
    except (ValueError, KeyError, TypeError):
        return None
