"""
Tests for system/user prompt assembly
"""
import pytest

from ide_assistant.pipeline.intent_classifier import classify
from ide_assistant.pipeline.plan_synthesizer import extract_plan
from ide_assistant.pipeline.prompt_assembler import build_prompts, select_representative_files, truncate_body
from ide_assistant.pipeline.prompts.assistant import ASSISTANT_SYSTEM, PLAN_JSON_SHAPE, TRUNCATION_MARKER
from ide_assistant.schemas.context import FileSnapshot, ProjectContext, ProjectSummary
from ide_assistant.schemas.pipeline import ApplicationPlan, AssistRequest


def file(id, path, content, language='javascript', is_directory=False):
    return FileSnapshot(
        id=id, project_id=1, name=path.rsplit('/', 1)[-1], path=path,
        content=content, language=language, is_directory=is_directory,
    )


@pytest.fixture
def context():
    return ProjectContext(
        project=ProjectSummary(id=1, name='Candy Shop'),
        files=[
            file(1, '/src', '', is_directory=True),
            file(2, '/src/c.js', 'x' * 801),
            file(3, '/src/a.js', 'const a = 1;'),
            file(4, '/src/b.js', 'const b = 2;'),
        ],
        dependencies=['react', 'express'],
        errors=['Potential error in c.js'],
    )


def test_bare_request_is_passed_through():
    prompts = build_prompts(AssistRequest(message='hello'))
    assert prompts.system_prompt == ASSISTANT_SYSTEM
    assert prompts.user_prompt == 'hello'


def test_code_is_fenced_verbatim():
    code = 'function add(a, b) {\n  return a + b\n}'
    request = AssistRequest(message='Explain this', code=code, language='javascript')
    prompts = build_prompts(request, intent=classify(request.message))
    assert f'```javascript\n{code}\n```' in prompts.user_prompt
    assert prompts.user_prompt.startswith('Explain this')


def test_intent_and_project_blocks(context):
    request = AssistRequest(message='Sell candy with React', project_id=1)
    prompts = build_prompts(request, context, classify(request.message))

    assert prompts.system_prompt.startswith(ASSISTANT_SYSTEM)
    assert '- Type: create_app' in prompts.system_prompt
    assert '- App type: e-commerce' in prompts.system_prompt
    assert '- Project: Candy Shop' in prompts.system_prompt
    assert '- Files: 3' in prompts.system_prompt
    assert '- Dependencies: react, express' in prompts.system_prompt
    assert 'Potential error in c.js' in prompts.system_prompt


def test_unknown_app_type_renders_default():
    prompts = build_prompts(AssistRequest(message='xyzzy'), intent=classify('xyzzy'))
    assert '- App type: web-app' in prompts.system_prompt


def test_only_two_files_embedded_in_path_order(context):
    prompts = build_prompts(AssistRequest(message='Sell candy'), context, classify('Sell candy'))
    assert 'File: /src/a.js' in prompts.user_prompt
    assert 'File: /src/b.js' in prompts.user_prompt
    assert 'File: /src/c.js' not in prompts.user_prompt
    assert 'File: /src\n' not in prompts.user_prompt


def test_file_bodies_are_capped():
    long = file(1, '/a.js', 'x' * 801)
    ctx = ProjectContext(project=ProjectSummary(id=1, name='P'), files=[long])
    prompts = build_prompts(AssistRequest(message='go'), ctx)
    assert 'x' * 800 + TRUNCATION_MARKER in prompts.user_prompt
    assert 'x' * 801 not in prompts.user_prompt


def test_truncate_body_boundary():
    assert truncate_body('x' * 800, 800) == 'x' * 800
    assert truncate_body('x' * 801, 800) == 'x' * 800 + TRUNCATION_MARKER


def test_empty_files_are_not_representative():
    ctx = ProjectContext(
        project=ProjectSummary(id=1, name='P'),
        files=[file(1, '/a.js', ''), file(2, '/b.js', 'b')],
    )
    assert [f.path for f in select_representative_files(ctx, 2)] == ['/b.js']


def test_create_app_asks_for_json_plan():
    prompts = build_prompts(AssistRequest(message='Build a todo app'), intent=classify('Build a todo app'))
    assert PLAN_JSON_SHAPE in prompts.user_prompt
    assert 'Respond with only valid JSON.' in prompts.user_prompt
    # the example shape in the instruction is itself a plan the extractor accepts
    assert isinstance(extract_plan(PLAN_JSON_SHAPE), ApplicationPlan)


def test_debug_instruction_differs_from_create():
    prompts = build_prompts(AssistRequest(message='fix this'), intent=classify('fix this'))
    assert PLAN_JSON_SHAPE not in prompts.user_prompt
    assert 'bugs' in prompts.user_prompt
