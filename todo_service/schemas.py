from pydantic import BaseModel
from datetime import datetime
import uuid


class RegisterRequest(BaseModel):
    email: str
    password: str


class LoginRequest(BaseModel):
    email: str
    password: str


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str


class TokenResponse(BaseModel):
    token: str


# Todos
class CreateTodoRequest(BaseModel):
    title: str


class UpdateTodoRequest(BaseModel):
    title: str
    completed: bool


class CreateTodoResponse(BaseModel):
    id: uuid.UUID


class TodoResponse(BaseModel):
    id: uuid.UUID
    title: str
    completed: bool
    created_at: datetime

    model_config = {
        "from_attributes": True
    }
