from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from ide_assistant.dependencies import get_db
from ide_assistant.models.project import Project
from ide_assistant.schemas.project_file import ProjectFileCreate, ProjectFileResponse, ProjectFileUpdate
from ide_assistant.services import file_service

router = APIRouter(prefix="/api/v1/projects/{project_id}/files", tags=["files"])


async def _require_project(db: AsyncSession, project_id: int) -> None:
    if not await db.get(Project, project_id):
        raise HTTPException(status_code=404, detail="Project not found")


@router.get("", response_model=list[ProjectFileResponse])
async def list_files(project_id: int, db: AsyncSession = Depends(get_db)):
    await _require_project(db, project_id)
    return await file_service.list_files(db, project_id)


@router.post("", response_model=ProjectFileResponse, status_code=201)
async def create_file(project_id: int, data: ProjectFileCreate, db: AsyncSession = Depends(get_db)):
    await _require_project(db, project_id)
    return await file_service.create_file(db, project_id, data)


@router.get("/{file_id}", response_model=ProjectFileResponse)
async def get_file(project_id: int, file_id: int, db: AsyncSession = Depends(get_db)):
    f = await file_service.get_file(db, project_id, file_id)
    if not f:
        raise HTTPException(status_code=404, detail="File not found")
    return f


@router.put("/{file_id}", response_model=ProjectFileResponse)
async def update_file(project_id: int, file_id: int, data: ProjectFileUpdate, db: AsyncSession = Depends(get_db)):
    f = await file_service.update_file(db, project_id, file_id, data)
    if not f:
        raise HTTPException(status_code=404, detail="File not found")
    return f


@router.delete("/{file_id}", status_code=204)
async def delete_file(project_id: int, file_id: int, db: AsyncSession = Depends(get_db)):
    deleted = await file_service.delete_file(db, project_id, file_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="File not found")
