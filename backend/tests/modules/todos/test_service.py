"""Tests for modules/todos/service.py."""

import threading

import pytest
from unittest.mock import MagicMock

from modules.todos.exceptions import TodoAccessDeniedError, TodoNotFoundError
from modules.todos.models import CreateTodoRequest, Todo, UpdateTodoRequest
from modules.todos.service import TodoService
from shared.exceptions import ValidationError


@pytest.fixture
def repository():
    return MagicMock()


@pytest.fixture
def service(repository):
    return TodoService(repository=repository)


def todo(todo_id: int = 1, user_id: int = 1, **kwargs) -> Todo:
    return Todo(id=todo_id, user_id=user_id, title=kwargs.pop("title", "Buy milk"), **kwargs)


class TestCreateTodo:
    @pytest.mark.asyncio
    async def test_create_strips_title(self, service, repository):
        repository.create.return_value = todo()
        await service.create_todo(1, CreateTodoRequest(title="  Buy milk "))
        repository.create.assert_called_once_with(1, "Buy milk")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("title", [None, "", "   "])
    async def test_title_required(self, service, repository, title):
        with pytest.raises(ValidationError) as exc_info:
            await service.create_todo(1, CreateTodoRequest(title=title))
        assert exc_info.value.message == "Title required"
        repository.create.assert_not_called()


class TestOwnership:
    @pytest.mark.asyncio
    async def test_update_own_todo(self, service, repository):
        repository.get_by_id.return_value = todo()
        repository.update.return_value = todo(completed=True)

        result = await service.update_todo(1, 1, UpdateTodoRequest(completed=True))

        assert result.completed is True
        repository.update.assert_called_once_with(1, 1, title=None, completed=True)

    @pytest.mark.asyncio
    async def test_update_someone_elses_todo(self, service, repository):
        repository.get_by_id.return_value = todo(user_id=2)

        with pytest.raises(TodoAccessDeniedError):
            await service.update_todo(1, 1, UpdateTodoRequest(title="mine"))
        repository.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_missing_todo(self, service, repository):
        repository.get_by_id.return_value = None
        with pytest.raises(TodoNotFoundError):
            await service.update_todo(1, 1, UpdateTodoRequest(title="x"))

    @pytest.mark.asyncio
    async def test_update_deleted_concurrently(self, service, repository):
        repository.get_by_id.return_value = todo()
        repository.update.return_value = None
        with pytest.raises(TodoNotFoundError):
            await service.update_todo(1, 1, UpdateTodoRequest(completed=True))

    @pytest.mark.asyncio
    async def test_blank_title_on_update(self, service, repository):
        with pytest.raises(ValidationError):
            await service.update_todo(1, 1, UpdateTodoRequest(title="  "))
        repository.get_by_id.assert_not_called()

    @pytest.mark.asyncio
    async def test_delete_someone_elses_todo(self, service, repository):
        repository.get_by_id.return_value = todo(user_id=2)
        with pytest.raises(TodoAccessDeniedError):
            await service.delete_todo(1, 1)
        repository.delete.assert_not_called()

    @pytest.mark.asyncio
    async def test_delete_own_todo(self, service, repository):
        repository.get_by_id.return_value = todo()
        repository.delete.return_value = todo()
        result = await service.delete_todo(1, 1)
        assert result.id == 1
        repository.delete.assert_called_once_with(1, 1)

    @pytest.mark.asyncio
    async def test_list_is_scoped_to_user(self, service, repository):
        repository.list_for_user.return_value = [todo()]
        assert len(await service.list_todos(1)) == 1
        repository.list_for_user.assert_called_once_with(1)


class TestWorkerThreads:
    @pytest.mark.asyncio
    async def test_repository_calls_leave_the_event_loop(self, service, repository):
        loop_thread = threading.get_ident()
        seen = []

        def lookup(todo_id):
            seen.append(threading.get_ident())
            return todo(todo_id)

        def remove(todo_id, user_id):
            seen.append(threading.get_ident())
            return todo(todo_id, user_id)

        repository.get_by_id.side_effect = lookup
        repository.delete.side_effect = remove

        await service.delete_todo(1, 1)
        assert len(seen) == 2
        assert loop_thread not in seen
