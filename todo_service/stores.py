"""
Credential and todo stores.

Every SQLAlchemy failure is translated here into the service error
taxonomy, so no backend error text reaches a client. Todo queries always
filter on the owner.
"""
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from typing import List, Optional
import logging
import uuid

from .errors import AppError, DuplicateEmailError
from .models import User, Todo

logger = logging.getLogger(__name__)


class CredentialStore:
    def __init__(self, db: Session):
        self.db = db

    def insert(self, user_id: uuid.UUID, email: str, password_hash: str) -> None:
        """
        Insert a credential.

        Raises:
            DuplicateEmailError: the email is already registered
            AppError: INTERNAL on any other persistence failure
        """
        self.db.add(User(id=user_id, email=email, password_hash=password_hash))
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.info("Rejected duplicate registration for %s", email)
            raise DuplicateEmailError() from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Failed to insert credential: %s", e)
            raise AppError.internal() from e

    def find_by_email(self, email: str) -> Optional[User]:
        try:
            return self.db.query(User).filter(User.email == email).first()
        except SQLAlchemyError as e:
            logger.error("Failed to look up credential: %s", e)
            raise AppError.internal() from e


class TodoStore:
    def __init__(self, db: Session):
        self.db = db

    def insert(self, owner_id: uuid.UUID, title: str) -> Todo:
        todo = Todo(id=uuid.uuid4(), user_id=owner_id, title=title, completed=False)
        self.db.add(todo)
        try:
            self.db.commit()
            self.db.refresh(todo)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Failed to insert todo for user_id=%s: %s", owner_id, e)
            raise AppError.internal() from e
        return todo

    def list_by_owner(self, owner_id: uuid.UUID) -> List[Todo]:
        try:
            return (
                self.db.query(Todo)
                .filter(Todo.user_id == owner_id)
                .order_by(Todo.created_at.asc(), Todo.id.asc())
                .all()
            )
        except SQLAlchemyError as e:
            logger.error("Failed to list todos for user_id=%s: %s", owner_id, e)
            raise AppError.internal() from e

    def update_by_id_and_owner(
        self,
        todo_id: uuid.UUID,
        owner_id: uuid.UUID,
        title: str,
        completed: bool
    ) -> Optional[Todo]:
        """Returns None when no todo with this id belongs to the owner."""
        try:
            todo = (
                self.db.query(Todo)
                .filter(Todo.id == todo_id, Todo.user_id == owner_id)
                .first()
            )
            if todo is None:
                return None
            todo.title = title
            todo.completed = completed
            self.db.commit()
            self.db.refresh(todo)
            return todo
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Failed to update todo %s: %s", todo_id, e)
            raise AppError.internal() from e

    def delete_by_id_and_owner(self, todo_id: uuid.UUID, owner_id: uuid.UUID) -> bool:
        try:
            deleted = (
                self.db.query(Todo)
                .filter(Todo.id == todo_id, Todo.user_id == owner_id)
                .delete(synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Failed to delete todo %s: %s", todo_id, e)
            raise AppError.internal() from e
        return deleted > 0
