from __future__ import annotations

import uuid


def new_id() -> str:
    """Random 128-bit record identifier, rendered as a UUID4 string."""
    return str(uuid.uuid4())
