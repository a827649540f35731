"""
Todo service implementation.

Owner-scoped CRUD for todo items.
"""

import asyncio
import logging

from shared.exceptions import ValidationError

from .exceptions import TodoAccessDeniedError, TodoNotFoundError
from .interfaces import ITodoService
from .models import CreateTodoRequest, Todo, UpdateTodoRequest
from .repository import TodoRepository

logger = logging.getLogger(__name__)


class TodoService(ITodoService):
    """
    Implements ITodoService on top of TodoRepository.

    Repository calls run in worker threads so the blocking driver never
    stalls the event loop.
    """

    def __init__(self, repository: TodoRepository):
        self._repository = repository

    async def list_todos(self, user_id: int) -> list[Todo]:
        return await asyncio.to_thread(self._repository.list_for_user, user_id)

    async def create_todo(self, user_id: int, request: CreateTodoRequest) -> Todo:
        title = (request.title or "").strip()
        if not title:
            raise ValidationError("Title required", code="MISSING_TITLE")
        return await asyncio.to_thread(self._repository.create, user_id, title)

    async def update_todo(self, todo_id: int, user_id: int, request: UpdateTodoRequest) -> Todo:
        title = request.title
        if title is not None:
            title = title.strip()
            if not title:
                raise ValidationError("Title cannot be empty", code="MISSING_TITLE")

        await asyncio.to_thread(self._get_owned, todo_id, user_id)
        todo = await asyncio.to_thread(
            self._repository.update, todo_id, user_id, title=title, completed=request.completed
        )
        if todo is None:
            # Deleted between the ownership check and the update.
            raise TodoNotFoundError(todo_id)
        return todo

    async def delete_todo(self, todo_id: int, user_id: int) -> Todo:
        await asyncio.to_thread(self._get_owned, todo_id, user_id)
        todo = await asyncio.to_thread(self._repository.delete, todo_id, user_id)
        if todo is None:
            raise TodoNotFoundError(todo_id)
        return todo

    def _get_owned(self, todo_id: int, user_id: int) -> Todo:
        todo = self._repository.get_by_id(todo_id)
        if todo is None:
            raise TodoNotFoundError(todo_id)
        if todo.user_id != user_id:
            logger.warning(f"User {user_id} denied access to todo {todo_id}")
            raise TodoAccessDeniedError(todo_id, user_id)
        return todo
