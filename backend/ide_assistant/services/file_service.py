import posixpath

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ide_assistant.models.project_file import ProjectFile
from ide_assistant.schemas.pipeline import GeneratedFile
from ide_assistant.schemas.project_file import ProjectFileCreate, ProjectFileUpdate


async def list_files(db: AsyncSession, project_id: int) -> list[ProjectFile]:
    result = await db.execute(
        select(ProjectFile).where(ProjectFile.project_id == project_id).order_by(ProjectFile.path)
    )
    return list(result.scalars().all())


async def get_file(db: AsyncSession, project_id: int, file_id: int) -> ProjectFile | None:
    result = await db.execute(
        select(ProjectFile).where(ProjectFile.id == file_id, ProjectFile.project_id == project_id)
    )
    return result.scalar_one_or_none()


async def get_file_by_path(db: AsyncSession, project_id: int, path: str) -> ProjectFile | None:
    result = await db.execute(
        select(ProjectFile).where(ProjectFile.project_id == project_id, ProjectFile.path == path)
    )
    return result.scalars().first()


async def create_file(db: AsyncSession, project_id: int, data: ProjectFileCreate) -> ProjectFile:
    f = ProjectFile(project_id=project_id, **data.model_dump())
    db.add(f)
    await db.commit()
    await db.refresh(f)
    return f


async def update_file(db: AsyncSession, project_id: int, file_id: int, data: ProjectFileUpdate) -> ProjectFile | None:
    f = await get_file(db, project_id, file_id)
    if not f:
        return None
    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(f, field, value)
    await db.commit()
    await db.refresh(f)
    return f


async def delete_file(db: AsyncSession, project_id: int, file_id: int) -> bool:
    f = await get_file(db, project_id, file_id)
    if not f:
        return False
    await db.delete(f)
    await db.commit()
    return True


async def _ensure_directories(db: AsyncSession, project_id: int, path: str) -> int | None:
    """Create missing parent directory entries for path; return the direct parent's id."""
    parent_id = None
    directory = posixpath.dirname(path)
    chain = []
    while directory not in ("", "/"):
        chain.append(directory)
        directory = posixpath.dirname(directory)
    for dir_path in reversed(chain):
        existing = await get_file_by_path(db, project_id, dir_path)
        if not existing:
            existing = ProjectFile(
                project_id=project_id,
                name=posixpath.basename(dir_path),
                path=dir_path,
                content="",
                language="text",
                is_directory=True,
                parent_id=parent_id,
            )
            db.add(existing)
            await db.flush()
        parent_id = existing.id
    return parent_id


async def write_generated_files(db: AsyncSession, project_id: int, files: list[GeneratedFile]) -> list[ProjectFile]:
    """Insert generated files into the project, overwriting files that share a path."""
    written = []
    for gen in files:
        f = await get_file_by_path(db, project_id, gen.path)
        if f and not f.is_directory:
            f.content = gen.content
            f.language = gen.language
        else:
            parent_id = await _ensure_directories(db, project_id, gen.path)
            f = ProjectFile(
                project_id=project_id,
                name=gen.name,
                path=gen.path,
                content=gen.content,
                language=gen.language,
                parent_id=parent_id,
            )
            db.add(f)
        await db.flush()
        written.append(f)
    await db.commit()
    return written
