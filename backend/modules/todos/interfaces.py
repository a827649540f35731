"""
Todos module interface.

Every operation takes the caller's user ID from the verified token and
checks ownership itself; the auth gate only guarantees the ID is real.
"""

from typing import Protocol, runtime_checkable

from .models import CreateTodoRequest, Todo, UpdateTodoRequest


@runtime_checkable
class ITodoService(Protocol):
    """Interface for todo operations."""

    async def list_todos(self, user_id: int) -> list[Todo]:
        """List the user's todos, newest first."""
        ...

    async def create_todo(self, user_id: int, request: CreateTodoRequest) -> Todo:
        """
        Create a todo owned by the user.

        Raises:
            ValidationError: If the title is missing or blank
        """
        ...

    async def update_todo(self, todo_id: int, user_id: int, request: UpdateTodoRequest) -> Todo:
        """
        Update a todo the user owns.

        Raises:
            TodoNotFoundError: If the todo doesn't exist
            TodoAccessDeniedError: If another user owns it
        """
        ...

    async def delete_todo(self, todo_id: int, user_id: int) -> Todo:
        """
        Delete a todo the user owns and return it.

        Raises:
            TodoNotFoundError: If the todo doesn't exist
            TodoAccessDeniedError: If another user owns it
        """
        ...
