from typing import Protocol

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ide_assistant.models.project import Project
from ide_assistant.models.project_file import ProjectFile
from ide_assistant.schemas.context import FileSnapshot, ProjectSummary


class ProjectStore(Protocol):
    """Read contract the assistant pipeline needs from the project/file store."""

    async def get_project(self, project_id: int) -> ProjectSummary | None: ...

    async def list_files(self, project_id: int) -> list[FileSnapshot]: ...


class SqlProjectStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_project(self, project_id: int) -> ProjectSummary | None:
        project = await self.db.get(Project, project_id)
        if not project:
            return None
        return ProjectSummary.model_validate(project)

    async def list_files(self, project_id: int) -> list[FileSnapshot]:
        result = await self.db.execute(
            select(ProjectFile).where(ProjectFile.project_id == project_id).order_by(ProjectFile.path)
        )
        return [FileSnapshot.model_validate(f) for f in result.scalars().all()]


class InMemoryProjectStore:
    """Dict-backed store, handy for scripts and tests that don't want a database."""

    def __init__(self, projects: list[ProjectSummary] | None = None, files: list[FileSnapshot] | None = None):
        self.projects = {p.id: p for p in projects or []}
        self.files = list(files or [])

    async def get_project(self, project_id: int) -> ProjectSummary | None:
        return self.projects.get(project_id)

    async def list_files(self, project_id: int) -> list[FileSnapshot]:
        return sorted((f for f in self.files if f.project_id == project_id), key=lambda f: f.path)
