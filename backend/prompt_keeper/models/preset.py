"""Preset model: a named set of variable values saved for one prompt."""
from typing import Dict
from datetime import datetime
from sqlmodel import Field, SQLModel, JSON

from prompt_keeper.models.common import new_id, utcnow


class PresetBase(SQLModel):
    prompt_id: str = Field(index=True)
    name: str
    values: Dict[str, str] = Field(default_factory=dict, sa_type=JSON)


class Preset(PresetBase, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)
    created_at: datetime = Field(default_factory=utcnow)


class PresetCreate(PresetBase):
    pass


class PresetRead(PresetBase):
    id: str
    created_at: datetime
