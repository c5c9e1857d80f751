from typing import Dict, List, Optional
from datetime import datetime
from sqlmodel import Field, SQLModel, JSON

from prompt_keeper.core.variables import Segment
from prompt_keeper.models.common import new_id, utcnow


class PromptBase(SQLModel):
    title: str
    body: str = ""
    tags: List[str] = Field(default_factory=list, sa_type=JSON)
    folder_id: Optional[str] = Field(default=None, index=True)  # may point at a deleted folder
    source_url: Optional[str] = None


class Prompt(PromptBase, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class PromptCreate(PromptBase):
    pass


class PromptUpdate(PromptBase):
    pass


class PromptRead(PromptBase):
    id: str
    created_at: datetime
    updated_at: datetime


class PromptRender(SQLModel):
    values: Dict[str, str] = Field(default_factory=dict)


class PromptRenderRead(SQLModel):
    prompt_id: str
    variables: List[str]
    resolved: str
    segments: List[Segment]
