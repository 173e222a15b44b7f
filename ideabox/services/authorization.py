"""
Ownership authorization for ideas.

``authorize`` is a pure predicate over (user, idea, action); ``ensure_owner``
is the enforcing wrapper the routers call before touching an idea.
"""

import enum
import logging
from typing import NamedTuple, Optional

from ideabox.errors import NotAuthorizedError
from ideabox.models.idea import Idea
from ideabox.models.user import User

logger = logging.getLogger(__name__)


class IdeaAction(str, enum.Enum):
    VIEW = "view"
    EDIT = "edit"
    UPDATE = "update"
    DELETE = "delete"


class AuthorizationDecision(NamedTuple):
    allowed: bool
    reason: str


def authorize(user: Optional[User], idea: Idea, action: IdeaAction) -> AuthorizationDecision:
    """Allow the action iff ``user`` is the idea's owner."""
    if user is None:
        return AuthorizationDecision(False, f"You must be signed in to {action.value} this idea.")
    if idea.owner_id != user.id:
        return AuthorizationDecision(False, f"You are not allowed to {action.value} this idea.")
    return AuthorizationDecision(True, "owner")


def ensure_owner(user: Optional[User], idea: Idea, action: IdeaAction) -> None:
    """Raise ``NotAuthorizedError`` when ``authorize`` denies the action."""
    decision = authorize(user, idea, action)
    if not decision.allowed:
        logger.warning(
            "Blocked %s on idea %s by user %s",
            action.value,
            idea.id,
            user.id if user else None,
        )
        raise NotAuthorizedError(decision.reason)
