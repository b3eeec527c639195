from datetime import datetime

from pydantic import BaseModel


class ProjectFileResponse(BaseModel):
    id: int
    project_id: int
    name: str
    path: str
    content: str
    language: str
    is_directory: bool
    parent_id: int | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ProjectFileCreate(BaseModel):
    name: str
    path: str
    content: str = ""
    language: str = "javascript"
    is_directory: bool = False
    parent_id: int | None = None


class ProjectFileUpdate(BaseModel):
    name: str | None = None
    path: str | None = None
    content: str | None = None
    language: str | None = None
