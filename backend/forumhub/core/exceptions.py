"""
Forum error types.

Every failed query or mutation raises one of these. The HTTP layer maps
them onto status codes through ``status_code``.
"""


class ForumError(Exception):
    """Base class for request-level failures."""

    status_code = 400
    kind = "ForumError"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(ForumError):
    """Referenced entity does not exist."""

    status_code = 404
    kind = "NotFound"

    def __init__(self, entity: str, entity_id: str) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f'The {entity} with ID "{entity_id}" does not exist.')


class InvalidArgumentError(ForumError):
    """Argument failed validation (empty after trimming)."""

    status_code = 422
    kind = "InvalidArgument"

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f'Field "{field}" cannot be empty.')


class AlreadyMemberError(ForumError):
    """User already belongs to the forum."""

    status_code = 409
    kind = "AlreadyMember"

    def __init__(self, user_id: str, forum_id: str) -> None:
        self.user_id = user_id
        self.forum_id = forum_id
        super().__init__(
            f'User with ID "{user_id}" is already a member of the forum with ID "{forum_id}".'
        )


class NotAMemberError(ForumError):
    """User does not belong to the forum."""

    status_code = 403
    kind = "NotAMember"

    def __init__(self, user_id: str, forum_id: str) -> None:
        self.user_id = user_id
        self.forum_id = forum_id
        super().__init__(
            f'User with ID "{user_id}" is not a member of the forum with ID "{forum_id}".'
        )


class FixtureError(Exception):
    """Seed data is malformed or violates a store invariant."""
