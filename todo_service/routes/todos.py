"""
Todo routes. Every endpoint requires a bearer token and only ever sees
the caller's own todos.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
import logging
import uuid

from ..db import get_db
from ..errors import AppError
from ..identity import require_identity
from ..schemas import (
    CreateTodoRequest,
    CreateTodoResponse,
    UpdateTodoRequest,
    TodoResponse,
    MessageResponse,
    ErrorResponse,
)
from ..stores import TodoStore
from ..validators import validate_title

router = APIRouter(
    prefix="/todos",
    tags=["todos"],
    dependencies=[Depends(require_identity)],
    responses={401: {"model": ErrorResponse}}
)
logger = logging.getLogger(__name__)

TODO_NOT_FOUND = "Todo not found"


def get_todo_store(db: Session = Depends(get_db)) -> TodoStore:
    return TodoStore(db)


@router.post("", response_model=CreateTodoResponse, responses={400: {"model": ErrorResponse}})
def create_todo(
    payload: CreateTodoRequest,
    user_id: uuid.UUID = Depends(require_identity),
    store: TodoStore = Depends(get_todo_store)
):
    todo = store.insert(user_id, validate_title(payload.title))
    logger.info("Created todo %s for user_id=%s", todo.id, user_id)
    return CreateTodoResponse(id=todo.id)


@router.get("", response_model=List[TodoResponse])
def list_todos(
    user_id: uuid.UUID = Depends(require_identity),
    store: TodoStore = Depends(get_todo_store)
):
    return store.list_by_owner(user_id)


@router.put(
    "/{todo_id}",
    response_model=TodoResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}
)
def update_todo(
    todo_id: uuid.UUID,
    payload: UpdateTodoRequest,
    user_id: uuid.UUID = Depends(require_identity),
    store: TodoStore = Depends(get_todo_store)
):
    title = validate_title(payload.title)
    todo = store.update_by_id_and_owner(todo_id, user_id, title, payload.completed)
    if todo is None:
        raise AppError.not_found(TODO_NOT_FOUND)
    return todo


@router.delete(
    "/{todo_id}",
    response_model=MessageResponse,
    responses={404: {"model": ErrorResponse}}
)
def delete_todo(
    todo_id: uuid.UUID,
    user_id: uuid.UUID = Depends(require_identity),
    store: TodoStore = Depends(get_todo_store)
):
    if not store.delete_by_id_and_owner(todo_id, user_id):
        raise AppError.not_found(TODO_NOT_FOUND)
    logger.info("Deleted todo %s for user_id=%s", todo_id, user_id)
    return MessageResponse(message="Todo deleted")
