from collections.abc import AsyncGenerator

from openai import AsyncOpenAI
from sqlalchemy.ext.asyncio import AsyncSession

from ide_assistant.logging_config import get_logger
from ide_assistant.pipeline.backend import request_completion
from ide_assistant.pipeline.intent_classifier import classify
from ide_assistant.pipeline.plan_synthesizer import synthesize_plan_with_source
from ide_assistant.pipeline.prompt_assembler import build_prompts
from ide_assistant.schemas.context import ProjectContext
from ide_assistant.schemas.pipeline import AssistRequest
from ide_assistant.services import chat_service
from ide_assistant.services.context_service import ProjectNotFoundError, gather_context
from ide_assistant.services.project_store import SqlProjectStore
from ide_assistant.utils.sse import (
    sse_done,
    sse_error,
    sse_intent,
    sse_plan,
    sse_stage_change,
    sse_token,
)

logger = get_logger(__name__)

ASSISTANT_UNAVAILABLE = (
    "I couldn't reach the assistant right now, so I can't answer this one. "
    "Please try again in a moment."
)


def plan_intro(plan_name: str) -> str:
    return f"Here's the plan for {plan_name}. Approve it to generate the project files, or ask for changes."


async def run_assistant(
    client: AsyncOpenAI | None,
    db: AsyncSession,
    thread_id: int,
    request: AssistRequest,
) -> AsyncGenerator[str, None]:
    """Handle one user message in a conversation. Yields SSE-formatted events."""

    # A new request makes any plan still waiting in this thread stale.
    superseded = await chat_service.supersede_pending_plans(db, thread_id)
    if superseded:
        logger.info("Superseded %d pending plan(s) in conversation %s", superseded, thread_id)
    history = await chat_service.get_history_for_ai(db, thread_id)
    await chat_service.add_message(db, thread_id, "user", request.message)

    # Stage 1: Intent
    yield sse_stage_change("intent")
    intent = classify(request.message)
    yield sse_intent(intent.model_dump())

    # Stage 2: Project context
    context: ProjectContext | None = None
    if request.project_id is not None:
        yield sse_stage_change("context")
        try:
            context = await gather_context(SqlProjectStore(db), request.project_id)
        except ProjectNotFoundError as e:
            msg = await chat_service.add_message(
                db, thread_id, "assistant", f"I couldn't find project {e.project_id}, so I stopped before answering."
            )
            yield sse_error(str(e), code="project_not_found")
            yield sse_done(msg.id)
            return

    # Stage 3: Prompts + backend
    yield sse_stage_change("prompt")
    prompts = build_prompts(request, context, intent)

    yield sse_stage_change("backend")
    reply = await request_completion(client, prompts, history=history)

    # Stage 4a: Plan, held for approval
    if intent.type == "create_app":
        yield sse_stage_change("plan")
        plan, source = synthesize_plan_with_source(reply.content, intent)
        msg = await chat_service.add_plan_message(db, thread_id, plan_intro(plan.name), plan, source)
        yield sse_plan(msg.id, plan.model_dump(), source)
        yield sse_done(msg.id)
        return

    # Stage 4b: Direct answer
    yield sse_stage_change("responding")
    if reply.ok:
        msg = await chat_service.add_message(db, thread_id, "assistant", reply.content)
        yield sse_token(reply.content)
        yield sse_done(msg.id)
        return

    logger.info("Assistant unavailable for %s request: %s", intent.type, reply.error)
    msg = await chat_service.add_message(db, thread_id, "assistant", ASSISTANT_UNAVAILABLE)
    yield sse_error(ASSISTANT_UNAVAILABLE, code="assistant_unavailable")
    yield sse_done(msg.id)
