from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Request, status

from ..repositories import Repository
from ..schemas import TodoComplete, TodoCreate, TodoCreated, TodoOut

router = APIRouter(
    prefix="/todo",
    tags=["todos"],
)


def get_repository(request: Request) -> Repository:
    """
    Return the store owned by the application instance handling the request.
    """
    return request.app.state.store


# PUBLIC_INTERFACE
# "/todo/" variants are registered too so they do not fall through to the front-end mount.
@router.get("/", response_model=List[TodoOut], include_in_schema=False)
@router.get(
    "",
    response_model=List[TodoOut],
    summary="List Todos",
    description="Return every todo item in the order it was added.",
    responses={200: {"description": "List retrieved successfully"}},
)
def list_todos(repo: Repository = Depends(get_repository)) -> List[TodoOut]:
    """
    List all todos.
    """
    return [TodoOut(**it) for it in repo.list()]  # type: ignore[arg-type]


# PUBLIC_INTERFACE
@router.post("/", response_model=TodoCreated, include_in_schema=False)
@router.post(
    "",
    response_model=TodoCreated,
    summary="Add Todo",
    description="Create a new, incomplete todo item and return its id.",
    responses={
        200: {"description": "Todo created successfully"},
        422: {"description": "Validation error"},
    },
)
def add_todo(payload: TodoCreate, repo: Repository = Depends(get_repository)) -> TodoCreated:
    """
    Add a new Todo.
    """
    return TodoCreated(id=repo.add(payload.message))


# PUBLIC_INTERFACE
@router.delete(
    "/{todo_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Todo",
    description="Delete a Todo item by ID.",
    responses={
        204: {"description": "Todo deleted"},
        404: {"description": "Todo not found"},
    },
)
def delete_todo(todo_id: str, repo: Repository = Depends(get_repository)) -> None:
    """
    Delete a Todo. Returns 204 on success, 404 if not found.
    """
    repo.delete(todo_id)
    return None


# PUBLIC_INTERFACE
@router.put("/", status_code=status.HTTP_204_NO_CONTENT, include_in_schema=False)
@router.put(
    "",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Complete Todo",
    description="Mark the Todo item identified by the body's id as complete.",
    responses={
        204: {"description": "Todo marked complete"},
        404: {"description": "Todo not found"},
        422: {"description": "Validation error"},
    },
)
def complete_todo(payload: TodoComplete, repo: Repository = Depends(get_repository)) -> None:
    """
    Mark a Todo complete. Completing an already complete todo is a no-op.
    """
    repo.complete(payload.id)
    return None
