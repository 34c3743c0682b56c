"""Primary key generation for text-keyed tables."""

import uuid


def new_id() -> str:
    """Return a new random identifier in canonical UUID text form."""
    return str(uuid.uuid4())
