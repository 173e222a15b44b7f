"""Domain-level errors for Ideabox.

Routers turn these into page renders (validation) or HTTP error pages
(authorization, not found); see ``ideabox.main``.
"""


class IdeaboxError(Exception):
    """Base class for every error raised by the domain layer."""


class IdeaValidationError(IdeaboxError):
    """Raised when an idea is missing its description or category."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class CategoryValidationError(IdeaboxError):
    """Raised when a category title is blank or already taken."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotAuthorizedError(IdeaboxError):
    """Raised when a user acts on an idea they do not own."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class NotFoundError(IdeaboxError):
    """Raised when an id does not resolve to a stored row."""

    label = "Record"

    def __init__(self, record_id: int):
        super().__init__(f"{self.label} {record_id} not found")
        self.record_id = record_id


class IdeaNotFoundError(NotFoundError):
    label = "Idea"


class CategoryNotFoundError(NotFoundError):
    label = "Category"
