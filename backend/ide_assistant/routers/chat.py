import asyncio
from weakref import WeakValueDictionary

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse
from openai import AsyncOpenAI
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ide_assistant.dependencies import get_db, get_file_generator, get_openai_client, get_session_factory
from ide_assistant.logging_config import get_logger
from ide_assistant.models.project import Project
from ide_assistant.pipeline.orchestrator import run_assistant
from ide_assistant.schemas.chat import (
    ChatMessageResponse,
    ChatSendRequest,
    ChatThreadCreate,
    ChatThreadResponse,
)
from ide_assistant.schemas.pipeline import AssistRequest
from ide_assistant.services import build_gate, chat_service
from ide_assistant.services.build_gate import PlanNotFoundError, PlanNotPendingError
from ide_assistant.services.file_generator import FileGenerator
from ide_assistant.utils.sse import sse_error, sse_done

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/conversations", tags=["conversations"])

# Per-conversation lock: one request at a time per thread. Entries go away
# once no request holds or waits on the lock.
_thread_locks: "WeakValueDictionary[int, asyncio.Lock]" = WeakValueDictionary()


def _thread_lock(thread_id: int) -> asyncio.Lock:
    lock = _thread_locks.get(thread_id)
    if lock is None:
        lock = _thread_locks[thread_id] = asyncio.Lock()
    return lock


async def _require_thread(db: AsyncSession, thread_id: int):
    thread = await chat_service.get_thread(db, thread_id)
    if not thread:
        raise HTTPException(status_code=404, detail="Conversation not found")
    return thread


@router.post("", response_model=ChatThreadResponse, status_code=201)
async def create_conversation(data: ChatThreadCreate, db: AsyncSession = Depends(get_db)):
    if data.project_id is not None and not await db.get(Project, data.project_id):
        raise HTTPException(status_code=404, detail="Project not found")
    return await chat_service.create_thread(db, data)


@router.get("", response_model=list[ChatThreadResponse])
async def list_conversations(db: AsyncSession = Depends(get_db)):
    return await chat_service.list_threads(db)


@router.get("/{thread_id}/messages", response_model=list[ChatMessageResponse])
async def get_messages(thread_id: int, db: AsyncSession = Depends(get_db)):
    await _require_thread(db, thread_id)
    messages = await chat_service.get_messages(db, thread_id)
    return [chat_service.to_message_response(m) for m in messages]


@router.post("/{thread_id}/send")
async def send_message(
    thread_id: int,
    data: ChatSendRequest,
    db: AsyncSession = Depends(get_db),
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
    client: AsyncOpenAI | None = Depends(get_openai_client),
):
    thread = await _require_thread(db, thread_id)
    request = AssistRequest(
        message=data.message,
        project_id=data.project_id if data.project_id is not None else thread.project_id,
        code=data.code,
        language=data.language,
    )

    async def event_stream():
        lock = _thread_lock(thread_id)
        async with lock:
            async with session_factory() as session:
                try:
                    async for event in run_assistant(client, session, thread_id, request):
                        yield event
                except Exception as e:
                    logger.exception("Assistant pipeline failed for conversation %s", thread_id)
                    yield sse_error(str(e))
                    yield sse_done()

    return StreamingResponse(event_stream(), media_type="text/event-stream")


@router.post("/{thread_id}/messages/{message_id}/approve", response_model=ChatMessageResponse)
async def approve_plan(
    thread_id: int,
    message_id: int,
    db: AsyncSession = Depends(get_db),
    generator: FileGenerator = Depends(get_file_generator),
):
    await _require_thread(db, thread_id)
    async with _thread_lock(thread_id):
        try:
            result = await build_gate.approve_plan(db, thread_id, message_id, generator)
        except PlanNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
        except PlanNotPendingError as e:
            raise HTTPException(status_code=409, detail=str(e))
    return chat_service.to_message_response(result)


@router.post("/{thread_id}/messages/{message_id}/reject", response_model=ChatMessageResponse)
async def reject_plan(thread_id: int, message_id: int, db: AsyncSession = Depends(get_db)):
    await _require_thread(db, thread_id)
    async with _thread_lock(thread_id):
        try:
            result = await build_gate.reject_plan(db, thread_id, message_id)
        except PlanNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
        except PlanNotPendingError as e:
            raise HTTPException(status_code=409, detail=str(e))
    return chat_service.to_message_response(result)
