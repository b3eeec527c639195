from datetime import datetime

from pydantic import BaseModel, Field


class ProjectSummary(BaseModel):
    id: int
    name: str
    description: str | None = None

    model_config = {"from_attributes": True}


class FileSnapshot(BaseModel):
    id: int
    project_id: int
    name: str
    path: str
    content: str = ""
    language: str | None = None
    is_directory: bool = False
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class FileStructureEntry(BaseModel):
    type: str
    language: str
    size: int
    last_modified: datetime


class FileStructure(BaseModel):
    directories: list[str] = Field(default_factory=list)
    files: dict[str, FileStructureEntry] = Field(default_factory=dict)


class ProjectContext(BaseModel):
    project: ProjectSummary
    files: list[FileSnapshot] = []
    structure: FileStructure = Field(default_factory=FileStructure)
    dependencies: list[str] = []
    errors: list[str] = []
