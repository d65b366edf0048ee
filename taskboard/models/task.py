from sqlalchemy import Column, Text
from sqlmodel import SQLModel, Field
from typing import Optional

class Task(SQLModel, table=True):
    """Task row.

    Timestamps are stored as RFC 3339 text; ``updated_at`` stays NULL
    until the first edit. Columns other than ``id`` are nullable so rows
    written by other clients still load; a NULL title fails the projection.
    """
    __tablename__ = "tasks"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(sa_column=Column(Text))
    created_at: Optional[str] = Field(default=None, sa_column=Column(Text))
    updated_at: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
