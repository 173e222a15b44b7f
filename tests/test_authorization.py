"""Ownership rules, checked without any request or session."""

import pytest

from ideabox.errors import NotAuthorizedError
from ideabox.models.idea import Idea
from ideabox.models.user import User
from ideabox.services.authorization import IdeaAction, authorize, ensure_owner


def _idea(owner_id: int) -> Idea:
    return Idea(id=7, description="Existing Idea", category_id=1, owner_id=owner_id)


@pytest.mark.parametrize("action", list(IdeaAction))
def test_owner_is_allowed_every_action(action):
    decision = authorize(User(id=1), _idea(owner_id=1), action)
    assert decision.allowed
    ensure_owner(User(id=1), _idea(owner_id=1), action)


@pytest.mark.parametrize("action", list(IdeaAction))
def test_other_user_is_denied_with_reason(action):
    decision = authorize(User(id=2), _idea(owner_id=1), action)

    assert not decision.allowed
    assert decision.reason == f"You are not allowed to {action.value} this idea."


def test_anonymous_user_is_denied():
    decision = authorize(None, _idea(owner_id=1), IdeaAction.VIEW)
    assert not decision.allowed
    assert "signed in" in decision.reason


def test_ensure_owner_raises_for_non_owner():
    with pytest.raises(NotAuthorizedError) as exc_info:
        ensure_owner(User(id=2), _idea(owner_id=1), IdeaAction.DELETE)
    assert exc_info.value.reason == "You are not allowed to delete this idea."
