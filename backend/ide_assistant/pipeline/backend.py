import asyncio
from dataclasses import dataclass

from openai import AsyncOpenAI, OpenAIError

from ide_assistant.config import settings
from ide_assistant.logging_config import get_logger
from ide_assistant.schemas.pipeline import AssembledPrompts

logger = get_logger(__name__)

BACKEND_DISABLED = "backend disabled: no API key configured"


@dataclass(frozen=True)
class BackendReply:
    """Outcome of one generation-backend call: content on success, error otherwise."""

    content: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and bool(self.content)


async def request_completion(
    client: AsyncOpenAI | None,
    prompts: AssembledPrompts,
    history: list[dict] | None = None,
    max_tokens: int = 2000,
    temperature: float = 0.2,
) -> BackendReply:
    """Call the chat backend once. Never raises: every failure comes back as BackendReply.error."""
    if client is None:
        return BackendReply(error=BACKEND_DISABLED)

    try:
        response = await asyncio.wait_for(
            client.chat.completions.create(
                model=settings.openai_model,
                messages=[
                    {"role": "system", "content": prompts.system_prompt},
                    *(history or []),
                    {"role": "user", "content": prompts.user_prompt},
                ],
                temperature=temperature,
                **settings.max_tokens_param(max_tokens),
            ),
            timeout=settings.backend_timeout_seconds,
        )
    except asyncio.TimeoutError:
        logger.warning("Generation backend timed out after %.1fs", settings.backend_timeout_seconds)
        return BackendReply(error="backend timed out")
    except OpenAIError as e:
        logger.warning("Generation backend call failed: %s", e)
        return BackendReply(error=f"backend error: {e}")

    content = (response.choices[0].message.content or "").strip() if response.choices else ""
    if not content:
        logger.warning("Generation backend returned no content")
        return BackendReply(error="backend returned no content")
    return BackendReply(content=content)
