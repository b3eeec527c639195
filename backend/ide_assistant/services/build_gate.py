"""Approval gate between showing a plan and generating files for it.

A plan message moves ``pending -> approved | rejected | superseded`` exactly
once. Only the ``pending -> approved`` transition, made by this module on an
explicit approval of that message id, can reach the file generator.
"""

import asyncio

from sqlalchemy.ext.asyncio import AsyncSession

from ide_assistant.config import settings
from ide_assistant.logging_config import get_logger
from ide_assistant.models.chat_message import ChatMessage
from ide_assistant.schemas.pipeline import ApplicationPlan, GeneratedFile, GenerationRequest
from ide_assistant.services import chat_service, file_service
from ide_assistant.services.file_generator import FileGenerator

logger = get_logger(__name__)


class PlanNotFoundError(LookupError):
    pass


class PlanNotPendingError(ValueError):
    def __init__(self, message_id: int, status: str | None):
        super().__init__(f"Plan {message_id} is {status or 'unknown'}, not pending approval")
        self.message_id = message_id
        self.status = status


def _build_success_text(plan: ApplicationPlan, files: list[GeneratedFile], note: str) -> str:
    listing = "\n".join(f"- {f.name}" for f in files)
    text = f"Application built successfully!\n\nGenerated {len(files)} files for {plan.name}:\n{listing}"
    return f"{text}\n\n{note}" if note else text


def _build_failure_text(reason: str) -> str:
    return (
        f"I built a plan but couldn't generate files for it ({reason}). "
        "Send your request again to get a new plan."
    )


async def _load_plan_message(db: AsyncSession, thread_id: int, message_id: int) -> ChatMessage:
    msg = await chat_service.get_message(db, thread_id, message_id)
    if not msg or msg.kind != "plan":
        raise PlanNotFoundError(f"Plan message {message_id} not found in conversation {thread_id}")
    return msg


async def approve_plan(
    db: AsyncSession,
    thread_id: int,
    message_id: int,
    generator: FileGenerator,
) -> ChatMessage:
    """Approve one plan message and run file generation for it. Returns the build-result message."""
    msg = await _load_plan_message(db, thread_id, message_id)
    plan = ApplicationPlan.model_validate(msg.plan_json)

    if not await chat_service.transition_plan(db, message_id, "pending", "approved"):
        current = await chat_service.get_message(db, thread_id, message_id)
        raise PlanNotPendingError(message_id, current.plan_status if current else None)

    thread = await chat_service.get_thread(db, thread_id)
    project_id = thread.project_id if thread else None
    logger.info("Plan %s approved, generating files for %r", message_id, plan.name)

    try:
        result = await asyncio.wait_for(
            generator.generate(GenerationRequest(description=plan.description, plan=plan)),
            timeout=settings.build_timeout_seconds,
        )
        if project_id is not None:
            await file_service.write_generated_files(db, project_id, result.files)
    except asyncio.TimeoutError:
        logger.warning("File generation for plan %s timed out", message_id)
        await db.rollback()
        return await chat_service.add_build_result_message(
            db, thread_id, message_id, _build_failure_text("file generation timed out"), False, []
        )
    except Exception as e:
        # No automatic retry: the plan stays approved and the user decides what to do next.
        logger.exception("File generation for plan %s failed", message_id)
        await db.rollback()
        return await chat_service.add_build_result_message(
            db, thread_id, message_id, _build_failure_text(str(e) or type(e).__name__), False, []
        )

    return await chat_service.add_build_result_message(
        db, thread_id, message_id, _build_success_text(plan, result.files, result.message), True, result.files
    )


async def reject_plan(db: AsyncSession, thread_id: int, message_id: int) -> ChatMessage:
    """Discard a pending plan ("modify plan"). Never generates files."""
    await _load_plan_message(db, thread_id, message_id)
    if not await chat_service.transition_plan(db, message_id, "pending", "rejected"):
        current = await chat_service.get_message(db, thread_id, message_id)
        raise PlanNotPendingError(message_id, current.plan_status if current else None)
    return await chat_service.get_message(db, thread_id, message_id)
