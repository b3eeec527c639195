from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ide_assistant.models.chat_thread import ChatThread
from ide_assistant.models.chat_message import ChatMessage
from ide_assistant.schemas.chat import (
    BuildResultMessage,
    ChatThreadCreate,
    PlainMessage,
    PlanMessage,
)
from ide_assistant.schemas.pipeline import ApplicationPlan, GeneratedFile


async def create_thread(db: AsyncSession, data: ChatThreadCreate) -> ChatThread:
    thread = ChatThread(title=data.title, project_id=data.project_id)
    db.add(thread)
    await db.commit()
    await db.refresh(thread)
    return thread


async def list_threads(db: AsyncSession) -> list[ChatThread]:
    result = await db.execute(select(ChatThread).order_by(ChatThread.id.desc()))
    return list(result.scalars().all())


async def get_thread(db: AsyncSession, thread_id: int) -> ChatThread | None:
    return await db.get(ChatThread, thread_id)


async def add_message(db: AsyncSession, thread_id: int, role: str, content: str) -> ChatMessage:
    msg = ChatMessage(thread_id=thread_id, role=role, kind="plain", content=content)
    db.add(msg)
    await db.commit()
    await db.refresh(msg)
    return msg


async def add_plan_message(
    db: AsyncSession,
    thread_id: int,
    content: str,
    plan: ApplicationPlan,
    source: str,
) -> ChatMessage:
    msg = ChatMessage(
        thread_id=thread_id,
        role="assistant",
        kind="plan",
        content=content,
        plan_json=plan.model_dump(),
        plan_status="pending",
        plan_source=source,
    )
    db.add(msg)
    await db.commit()
    await db.refresh(msg)
    return msg


async def add_build_result_message(
    db: AsyncSession,
    thread_id: int,
    plan_message_id: int,
    content: str,
    success: bool,
    files: list[GeneratedFile],
) -> ChatMessage:
    msg = ChatMessage(
        thread_id=thread_id,
        role="assistant",
        kind="build_result",
        content=content,
        build_json={"success": success, "files": [f.model_dump() for f in files]},
        source_message_id=plan_message_id,
    )
    db.add(msg)
    await db.commit()
    await db.refresh(msg)
    return msg


async def get_message(db: AsyncSession, thread_id: int, message_id: int) -> ChatMessage | None:
    result = await db.execute(
        select(ChatMessage).where(ChatMessage.id == message_id, ChatMessage.thread_id == thread_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def get_messages(db: AsyncSession, thread_id: int) -> list[ChatMessage]:
    result = await db.execute(
        select(ChatMessage).where(ChatMessage.thread_id == thread_id).order_by(ChatMessage.id)
        .execution_options(populate_existing=True)
    )
    return list(result.scalars().all())


async def transition_plan(db: AsyncSession, message_id: int, from_status: str, to_status: str) -> bool:
    """Conditional status change; True only if this call made the transition."""
    result = await db.execute(
        update(ChatMessage)
        .where(
            ChatMessage.id == message_id,
            ChatMessage.kind == "plan",
            ChatMessage.plan_status == from_status,
        )
        .values(plan_status=to_status)
        .execution_options(synchronize_session=False)
    )
    await db.commit()
    return result.rowcount == 1


async def supersede_pending_plans(db: AsyncSession, thread_id: int) -> int:
    result = await db.execute(
        update(ChatMessage)
        .where(
            ChatMessage.thread_id == thread_id,
            ChatMessage.kind == "plan",
            ChatMessage.plan_status == "pending",
        )
        .values(plan_status="superseded")
        .execution_options(synchronize_session=False)
    )
    await db.commit()
    return result.rowcount


def to_message_response(msg: ChatMessage) -> PlainMessage | PlanMessage | BuildResultMessage:
    base = {
        "id": msg.id,
        "thread_id": msg.thread_id,
        "role": msg.role,
        "content": msg.content,
        "created_at": msg.created_at,
    }
    if msg.kind == "plan":
        return PlanMessage(
            **base,
            plan=ApplicationPlan.model_validate(msg.plan_json),
            plan_status=msg.plan_status,
            plan_source=msg.plan_source or "heuristic",
        )
    if msg.kind == "build_result":
        build = msg.build_json or {}
        return BuildResultMessage(
            **base,
            success=bool(build.get("success")),
            plan_message_id=msg.source_message_id,
            files=[GeneratedFile.model_validate(f) for f in build.get("files", [])],
        )
    return PlainMessage(**base)


async def get_history_for_ai(db: AsyncSession, thread_id: int, limit: int = 10) -> list[dict]:
    """Recent messages formatted for the chat completions API."""
    messages = await get_messages(db, thread_id)
    return [
        {"role": msg.role if msg.role in ("user", "assistant", "system") else "assistant", "content": msg.content}
        for msg in messages[-limit:]
    ]
