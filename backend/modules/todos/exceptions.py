"""
Todos module exceptions.
"""

from shared.exceptions import AuthorizationError, NotFoundError


class TodoNotFoundError(NotFoundError):
    """Raised when a todo is not found."""

    def __init__(self, todo_id: int):
        super().__init__(
            "Todo not found",
            code="TODO_NOT_FOUND",
            details={"todo_id": todo_id},
        )


class TodoAccessDeniedError(AuthorizationError):
    """Raised when a user touches a todo owned by someone else."""

    def __init__(self, todo_id: int, user_id: int):
        super().__init__(
            "You do not have access to this todo",
            code="TODO_ACCESS_DENIED",
            details={"todo_id": todo_id, "user_id": user_id},
        )
