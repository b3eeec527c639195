from ide_assistant.config import settings
from ide_assistant.pipeline.intent_classifier import DEFAULT_APP_TYPE
from ide_assistant.pipeline.prompts.assistant import ASSISTANT_SYSTEM, INTENT_INSTRUCTIONS, TRUNCATION_MARKER
from ide_assistant.schemas.context import FileSnapshot, ProjectContext
from ide_assistant.schemas.pipeline import AssembledPrompts, AssistRequest, UserIntent


def _join(items: list[str]) -> str:
    return ", ".join(items) if items else "none"


def build_intent_block(intent: UserIntent) -> str:
    return f"""## User Intent
- Type: {intent.type}
- App type: {intent.app_type or DEFAULT_APP_TYPE}
- Domain: {intent.domain}
- Complexity: {intent.complexity}
- Features: {_join(intent.features)}
- Technologies: {_join(intent.technologies)}"""


def build_project_block(context: ProjectContext) -> str:
    file_count = sum(1 for f in context.files if not f.is_directory)
    block = f"""## Project Context
- Project: {context.project.name}
- Files: {file_count}
- Dependencies: {_join(context.dependencies)}"""
    if context.errors:
        block += "\n- Detected issues:\n" + "\n".join(f"  - {e}" for e in context.errors)
    return block


def truncate_body(content: str, budget: int) -> str:
    if len(content) <= budget:
        return content
    return content[:budget] + TRUNCATION_MARKER


def select_representative_files(context: ProjectContext, limit: int) -> list[FileSnapshot]:
    candidates = [f for f in context.files if not f.is_directory and f.content]
    return sorted(candidates, key=lambda f: f.path)[:limit]


def build_system_prompt(context: ProjectContext | None = None, intent: UserIntent | None = None) -> str:
    parts = [ASSISTANT_SYSTEM]
    if intent is not None:
        parts.append(build_intent_block(intent))
    if context is not None:
        parts.append(build_project_block(context))
    return "\n\n".join(parts)


def build_user_prompt(
    request: AssistRequest,
    context: ProjectContext | None = None,
    intent: UserIntent | None = None,
) -> str:
    parts = [request.message]

    if request.code:
        language = request.language or ""
        parts.append(f"Current code:\n```{language}\n{request.code}\n```")

    if context is not None:
        # Caps the payload sent to the generation backend.
        budget = settings.prompt_file_char_budget
        for f in select_representative_files(context, settings.prompt_max_files):
            parts.append(f"File: {f.path}\n```{f.language or ''}\n{truncate_body(f.content, budget)}\n```")

    if intent is not None:
        parts.append(INTENT_INSTRUCTIONS[intent.type])

    return "\n\n".join(parts)


def build_prompts(
    request: AssistRequest,
    context: ProjectContext | None = None,
    intent: UserIntent | None = None,
) -> AssembledPrompts:
    """Pure string construction; no I/O."""
    return AssembledPrompts(
        system_prompt=build_system_prompt(context, intent),
        user_prompt=build_user_prompt(request, context, intent),
    )
