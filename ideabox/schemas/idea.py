"""Idea Pydantic schemas."""

from typing import Any, Optional

from pydantic import BaseModel, field_validator

# Largest id SQLite (and any signed 64-bit primary key) can hold.
MAX_ID = 2**63 - 1


def usable_id(value: Any) -> Optional[int]:
    """Coerce a form or path value to a storable positive id, else None."""
    if isinstance(value, bool):
        return None
    if not isinstance(value, int):
        try:
            value = int(str(value).strip())
        except ValueError:
            return None
    return value if 0 < value <= MAX_ID else None


class IdeaDraft(BaseModel):
    """Values submitted on the new/edit idea form, as entered."""
    description: Optional[str] = None
    category_id: Optional[int] = None

    @field_validator("category_id", mode="before")
    @classmethod
    def _blank_category_is_missing(cls, value: Any) -> Any:
        # An unselected <select> posts "", garbage posts non-numbers.
        if value is None:
            return None
        return usable_id(value)
