from __future__ import annotations

from typing import TypedDict


# PUBLIC_INTERFACE
class TodoEntity(TypedDict):
    """
    A lightweight domain model representing a Todo item held by the in-memory
    store.

    Fields:
    - id: Opaque unique string identifier assigned at creation
    - message: Free-form task text
    - complete: Boolean completion flag, False until marked complete
    """

    id: str
    message: str
    complete: bool
