from __future__ import annotations

from pydantic import BaseModel, Field


class StatusOut(BaseModel):
    id: str
    name: str
    description: str
    is_terminal: bool = Field(alias="isTerminal")
    priority: int

    class Config:
        populate_by_name = True
        from_attributes = True


class EventTypeOut(BaseModel):
    id: str
    name: str
    description: str

    class Config:
        from_attributes = True
