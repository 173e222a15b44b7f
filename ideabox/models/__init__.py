"""
Ideabox – SQLAlchemy ORM models package.

Imports all model classes so the metadata (and ``create_all``) can
discover them through a single ``import ideabox.models``.
"""

from ideabox.models.user import User            # noqa: F401
from ideabox.models.category import Category    # noqa: F401
from ideabox.models.idea import Idea            # noqa: F401
