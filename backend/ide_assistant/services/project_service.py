from sqlalchemy import select, delete, update
from sqlalchemy.ext.asyncio import AsyncSession

from ide_assistant.models.project import Project
from ide_assistant.models.project_file import ProjectFile
from ide_assistant.models.chat_thread import ChatThread
from ide_assistant.schemas.project import ProjectCreate, ProjectUpdate


async def create_project(db: AsyncSession, data: ProjectCreate) -> Project:
    project = Project(name=data.name, description=data.description)
    db.add(project)
    await db.commit()
    await db.refresh(project)
    return project


async def list_projects(db: AsyncSession) -> list[Project]:
    result = await db.execute(select(Project).order_by(Project.created_at.desc(), Project.id.desc()))
    return list(result.scalars().all())


async def get_project(db: AsyncSession, project_id: int) -> Project | None:
    return await db.get(Project, project_id)


async def update_project(db: AsyncSession, project_id: int, data: ProjectUpdate) -> Project | None:
    project = await db.get(Project, project_id)
    if not project:
        return None
    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(project, field, value)
    await db.commit()
    await db.refresh(project)
    return project


async def delete_project(db: AsyncSession, project_id: int) -> bool:
    project = await db.get(Project, project_id)
    if not project:
        return False
    # Conversations outlive the project they were attached to
    await db.execute(update(ChatThread).where(ChatThread.project_id == project_id).values(project_id=None))
    await db.execute(delete(ProjectFile).where(ProjectFile.project_id == project_id))
    await db.execute(delete(Project).where(Project.id == project_id))
    await db.commit()
    return True
