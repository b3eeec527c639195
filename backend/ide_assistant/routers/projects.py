from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from ide_assistant.dependencies import get_db
from ide_assistant.schemas.context import ProjectContext
from ide_assistant.schemas.project import ProjectCreate, ProjectUpdate, ProjectResponse
from ide_assistant.services import project_service
from ide_assistant.services.context_service import ProjectNotFoundError, gather_context
from ide_assistant.services.project_store import SqlProjectStore

router = APIRouter(prefix="/api/v1/projects", tags=["projects"])


@router.post("", response_model=ProjectResponse, status_code=201)
async def create_project(data: ProjectCreate, db: AsyncSession = Depends(get_db)):
    return await project_service.create_project(db, data)


@router.get("", response_model=list[ProjectResponse])
async def list_projects(db: AsyncSession = Depends(get_db)):
    return await project_service.list_projects(db)


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(project_id: int, db: AsyncSession = Depends(get_db)):
    project = await project_service.get_project(db, project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return project


@router.patch("/{project_id}", response_model=ProjectResponse)
async def update_project(project_id: int, data: ProjectUpdate, db: AsyncSession = Depends(get_db)):
    project = await project_service.update_project(db, project_id, data)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return project


@router.delete("/{project_id}", status_code=204)
async def delete_project(project_id: int, db: AsyncSession = Depends(get_db)):
    deleted = await project_service.delete_project(db, project_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Project not found")


@router.get("/{project_id}/context", response_model=ProjectContext)
async def get_project_context(project_id: int, db: AsyncSession = Depends(get_db)):
    try:
        return await gather_context(SqlProjectStore(db), project_id)
    except ProjectNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
