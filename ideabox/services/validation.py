"""
Idea validation — decides whether a draft idea may be persisted.

Works on a plain ``IdeaDraft`` only, so it can be exercised without a
database or a request.
"""

from typing import Optional

from ideabox.errors import IdeaValidationError
from ideabox.schemas.idea import IdeaDraft

IDEA_FIELDS_REQUIRED = "Category and Description must be present"


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def is_valid_idea(draft: IdeaDraft) -> bool:
    """Return True when both the description and the category are present."""
    return not _is_blank(draft.description) and draft.category_id is not None


def validate_idea(draft: IdeaDraft) -> None:
    """Raise ``IdeaValidationError`` unless the draft can be persisted."""
    if not is_valid_idea(draft):
        raise IdeaValidationError(IDEA_FIELDS_REQUIRED)
