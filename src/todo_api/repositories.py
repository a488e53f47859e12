from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from threading import RLock
from typing import List, Optional

import structlog

from .models import TodoEntity

log = structlog.get_logger(__name__)


class TodoNotFoundError(LookupError):
    """Raised when no todo matches the requested id."""

    def __init__(self, todo_id: str) -> None:
        super().__init__(f"Todo not found: {todo_id}")
        self.todo_id = todo_id


# PUBLIC_INTERFACE
class Repository(ABC):
    """Abstract repository contract for todo storage backends."""

    @abstractmethod
    def initialize(self) -> None:
        """Ensure the backing collection exists. Repeated calls have no effect."""

    @abstractmethod
    def list(self) -> List[TodoEntity]:
        """Return copies of all todos in insertion order."""

    @abstractmethod
    def count(self) -> int:
        """Return the number of todos currently held."""

    @abstractmethod
    def add(self, message: str) -> str:
        """Append a new incomplete todo and return its id."""

    @abstractmethod
    def delete(self, todo_id: str) -> None:
        """Remove a todo by id. Raise TodoNotFoundError if it does not exist."""

    @abstractmethod
    def complete(self, todo_id: str) -> None:
        """Mark a todo as complete. Raise TodoNotFoundError if it does not exist."""


class TodoStore(Repository):
    """
    Thread-safe in-memory todo collection.

    All reads and writes go through a single re-entrant lock, so every
    operation is linearizable and list() never observes a half-applied change.
    The backing list is created lazily on first use or by initialize().
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._items: Optional[List[TodoEntity]] = None

    def _collection(self) -> List[TodoEntity]:
        # Caller must hold self._lock.
        if self._items is None:
            self._items = []
        return self._items

    def _index_of(self, todo_id: str) -> int:
        for i, item in enumerate(self._collection()):
            if item["id"] == todo_id:
                return i
        raise TodoNotFoundError(todo_id)

    def initialize(self) -> None:
        with self._lock:
            if self._items is None:
                self._items = []
                log.debug("todo store initialized")

    def list(self) -> List[TodoEntity]:
        with self._lock:
            # Return copies to avoid external mutation
            return [t.copy() for t in self._collection()]

    def add(self, message: str) -> str:
        entity: TodoEntity = {
            "id": uuid.uuid4().hex,
            "message": message,
            "complete": False,
        }
        with self._lock:
            self._collection().append(entity)
        log.info("todo added", todo_id=entity["id"])
        return entity["id"]

    def delete(self, todo_id: str) -> None:
        with self._lock:
            try:
                index = self._index_of(todo_id)
            except TodoNotFoundError:
                log.info("todo delete missed", todo_id=todo_id)
                raise
            del self._collection()[index]
        log.info("todo deleted", todo_id=todo_id)

    def complete(self, todo_id: str) -> None:
        with self._lock:
            try:
                index = self._index_of(todo_id)
            except TodoNotFoundError:
                log.info("todo complete missed", todo_id=todo_id)
                raise
            self._collection()[index]["complete"] = True
        log.info("todo completed", todo_id=todo_id)

    def count(self) -> int:
        with self._lock:
            return len(self._collection())
