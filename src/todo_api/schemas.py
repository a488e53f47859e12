from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


# PUBLIC_INTERFACE
class TodoCreate(BaseModel):
    """
    Schema for creating a new Todo item.
    """

    model_config = ConfigDict(
        json_schema_extra={"example": {"message": "Buy groceries"}}
    )

    message: str = Field(..., description="Text of the todo item, stored as given")


# PUBLIC_INTERFACE
class TodoCreated(BaseModel):
    """
    Schema returned after a Todo item has been created.
    """

    model_config = ConfigDict(
        json_schema_extra={"example": {"id": "9f1c2b7e4a8d4e0f9c3b5a6d7e8f9a0b"}}
    )

    id: str = Field(..., description="Identifier assigned to the new todo item")


# PUBLIC_INTERFACE
class TodoComplete(BaseModel):
    """
    Schema for marking a Todo item complete. Any other keys a client sends
    along with the id (such as the full todo) are ignored.
    """

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={"example": {"id": "9f1c2b7e4a8d4e0f9c3b5a6d7e8f9a0b"}},
    )

    id: str = Field(..., description="Identifier of the todo item to complete")


# PUBLIC_INTERFACE
class TodoOut(BaseModel):
    """
    Schema returned by the API for a Todo item.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "9f1c2b7e4a8d4e0f9c3b5a6d7e8f9a0b",
                "message": "Buy groceries",
                "complete": False,
            }
        }
    )

    id: str = Field(..., description="Unique identifier of the todo item")
    message: str = Field(..., description="Text of the todo item")
    complete: bool = Field(..., description="Completion status flag")
