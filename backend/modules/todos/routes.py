"""
Todo API endpoints.

Every route in this router sits behind the bearer auth gate.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_todo_service
from api.middleware.auth import RequireAuth, get_current_user
from shared.models import ApiResponse, AuthenticatedUser

from .interfaces import ITodoService
from .models import CreateTodoRequest, Todo, UpdateTodoRequest

router = APIRouter(dependencies=[RequireAuth])


@router.get("", response_model=ApiResponse[list[Todo]])
async def list_todos(
    user: AuthenticatedUser = Depends(get_current_user),
    service: ITodoService = Depends(get_todo_service),
) -> ApiResponse[list[Todo]]:
    """List the current user's todos, most recent first."""
    return ApiResponse.ok(await service.list_todos(user.id))


@router.post("", response_model=ApiResponse[Todo])
async def create_todo(
    request: CreateTodoRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ITodoService = Depends(get_todo_service),
) -> ApiResponse[Todo]:
    return ApiResponse.ok(await service.create_todo(user.id, request))


@router.put("/{todo_id}", response_model=ApiResponse[Todo])
async def update_todo(
    todo_id: int,
    request: UpdateTodoRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ITodoService = Depends(get_todo_service),
) -> ApiResponse[Todo]:
    """Update title and/or completion of one of the user's todos."""
    return ApiResponse.ok(await service.update_todo(todo_id, user.id, request))


@router.delete("/{todo_id}", response_model=ApiResponse[Todo])
async def delete_todo(
    todo_id: int,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ITodoService = Depends(get_todo_service),
) -> ApiResponse[Todo]:
    return ApiResponse.ok(await service.delete_todo(todo_id, user.id))
