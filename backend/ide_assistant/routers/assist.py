from fastapi import APIRouter, Depends, HTTPException
from openai import AsyncOpenAI
from sqlalchemy.ext.asyncio import AsyncSession

from ide_assistant.dependencies import get_db, get_openai_client
from ide_assistant.pipeline.backend import request_completion
from ide_assistant.pipeline.intent_classifier import classify
from ide_assistant.pipeline.plan_synthesizer import synthesize_plan_with_source
from ide_assistant.pipeline.prompt_assembler import build_prompts
from ide_assistant.schemas.context import ProjectContext
from ide_assistant.schemas.pipeline import AssembledPrompts, AssistRequest, PlanResponse, UserIntent
from ide_assistant.services.context_service import ProjectNotFoundError, gather_context
from ide_assistant.services.project_store import SqlProjectStore

router = APIRouter(prefix="/api/v1/assist", tags=["assist"])


async def _context_for(db: AsyncSession, request: AssistRequest) -> ProjectContext | None:
    if request.project_id is None:
        return None
    try:
        return await gather_context(SqlProjectStore(db), request.project_id)
    except ProjectNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/classify", response_model=UserIntent)
async def classify_message(data: AssistRequest):
    return classify(data.message)


@router.post("/prompts", response_model=AssembledPrompts)
async def preview_prompts(data: AssistRequest, db: AsyncSession = Depends(get_db)):
    """Show exactly what would be sent to the generation backend."""
    context = await _context_for(db, data)
    return build_prompts(data, context, classify(data.message))


@router.post("/plan", response_model=PlanResponse)
async def generate_plan(
    data: AssistRequest,
    db: AsyncSession = Depends(get_db),
    client: AsyncOpenAI | None = Depends(get_openai_client),
):
    """One-shot plan without a conversation. Not held for approval."""
    intent = classify(data.message)
    context = await _context_for(db, data)
    reply = await request_completion(client, build_prompts(data, context, intent))
    plan, source = synthesize_plan_with_source(reply.content, intent)
    return PlanResponse(plan=plan, source=source, intent=intent)
