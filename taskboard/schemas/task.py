from pydantic import BaseModel, ConfigDict
from typing import Optional

class Task(BaseModel):
    """Read-only projection of a task row, built per request."""
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    title: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
