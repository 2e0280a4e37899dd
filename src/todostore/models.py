from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# PUBLIC_INTERFACE
class Todo(BaseModel):
    """
    The Todo record handed between callers, the store and repositories.

    Fields:
    - id: Unique integer identifier, assigned by the repository on first save
    - title: Short title
    - description: Optional detailed description
    - completed: Boolean completion flag
    - created_at: Creation timestamp; filled in by TodoStore.save when missing

    Only created_at is looked at by the store, everything else passes through.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 1,
                "title": "Buy milk",
                "description": "Two litres",
                "completed": False,
                "created_at": "2025-01-25T10:15:30.123456",
            }
        }
    )

    id: Optional[int] = Field(default=None, description="Unique identifier of the todo item")
    title: Optional[str] = Field(default=None, description="Short title for the todo item")
    description: Optional[str] = Field(default=None, description="Optional detailed description")
    completed: bool = Field(default=False, description="Completion status flag")
    created_at: Optional[datetime] = Field(default=None, description="Creation timestamp")
