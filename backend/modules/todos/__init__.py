"""
Todos module.

Owner-scoped todo items; the reference resource handler for the auth gate.
"""

from .interfaces import ITodoService
from .models import CreateTodoRequest, Todo, UpdateTodoRequest
from .exceptions import TodoAccessDeniedError, TodoNotFoundError

__all__ = [
    "ITodoService",
    "CreateTodoRequest",
    "Todo",
    "UpdateTodoRequest",
    "TodoAccessDeniedError",
    "TodoNotFoundError",
]
