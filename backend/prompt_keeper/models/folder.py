"""Folder model for grouping prompts."""
from datetime import datetime
from sqlmodel import Field, SQLModel

from prompt_keeper.models.common import new_id, utcnow

FOLDER_COLORS = ["#3b82f6", "#8b5cf6", "#ec4899", "#f59e0b", "#10b981", "#ef4444", "#14b8a6"]


class FolderBase(SQLModel):
    name: str
    color: str = FOLDER_COLORS[0]


class Folder(FolderBase, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)
    created_at: datetime = Field(default_factory=utcnow)


class FolderCreate(FolderBase):
    pass


class FolderUpdate(FolderBase):
    pass


class FolderRead(FolderBase):
    id: str
    created_at: datetime
