"""
Tests for the plan approval gate
"""
import pytest

from conftest import RecordingGenerator
from ide_assistant.config import settings
from ide_assistant.pipeline.intent_classifier import classify
from ide_assistant.pipeline.plan_synthesizer import heuristic_plan
from ide_assistant.schemas.chat import ChatThreadCreate
from ide_assistant.schemas.project import ProjectCreate
from ide_assistant.schemas.project_file import ProjectFileCreate
from ide_assistant.services import chat_service, file_service, project_service
from ide_assistant.services.build_gate import PlanNotFoundError, PlanNotPendingError, approve_plan, reject_plan


@pytest.fixture
async def project(db_session):
    return await project_service.create_project(db_session, ProjectCreate(name='Shop'))


@pytest.fixture
async def thread(db_session, project):
    return await chat_service.create_thread(db_session, ChatThreadCreate(project_id=project.id))


async def add_plan(db, thread_id, message='sell candy online'):
    plan = heuristic_plan(classify(message))
    return await chat_service.add_plan_message(db, thread_id, f"Here's the plan for {plan.name}", plan, 'heuristic')


async def test_approve_generates_once_and_writes_files(db_session, project, thread, generator):
    msg = await add_plan(db_session, thread.id)

    result = await approve_plan(db_session, thread.id, msg.id, generator)

    assert len(generator.calls) == 1
    assert generator.calls[0].plan.name == 'Sweet Treats Store'
    assert result.kind == 'build_result'
    assert result.build_json['success'] is True
    assert result.source_message_id == msg.id
    assert 'Sweet Treats Store' in result.content

    paths = [f.path for f in await file_service.list_files(db_session, project.id)]
    assert '/src/App.tsx' in paths
    assert '/database/schema.sql' in paths
    assert '/src' in paths

    refreshed = await chat_service.get_message(db_session, thread.id, msg.id)
    assert refreshed.plan_status == 'approved'


async def test_second_approval_is_rejected(db_session, thread, generator):
    msg = await add_plan(db_session, thread.id)
    await approve_plan(db_session, thread.id, msg.id, generator)

    with pytest.raises(PlanNotPendingError) as exc:
        await approve_plan(db_session, thread.id, msg.id, generator)

    assert exc.value.status == 'approved'
    assert len(generator.calls) == 1


async def test_rejected_plan_cannot_be_approved(db_session, thread, generator):
    msg = await add_plan(db_session, thread.id)
    rejected = await reject_plan(db_session, thread.id, msg.id)
    assert rejected.plan_status == 'rejected'

    with pytest.raises(PlanNotPendingError):
        await approve_plan(db_session, thread.id, msg.id, generator)
    assert generator.calls == []


async def test_superseded_plan_cannot_be_approved(db_session, thread, generator):
    old = await add_plan(db_session, thread.id)
    assert await chat_service.supersede_pending_plans(db_session, thread.id) == 1
    new = await add_plan(db_session, thread.id, 'Build a todo app')

    with pytest.raises(PlanNotPendingError) as exc:
        await approve_plan(db_session, thread.id, old.id, generator)
    assert exc.value.status == 'superseded'

    result = await approve_plan(db_session, thread.id, new.id, generator)
    assert result.build_json['success'] is True
    assert [c.plan.name for c in generator.calls] == ['TaskFlow Manager']


async def test_plain_message_is_not_a_plan(db_session, thread, generator):
    msg = await chat_service.add_message(db_session, thread.id, 'assistant', 'hello')
    with pytest.raises(PlanNotFoundError):
        await approve_plan(db_session, thread.id, msg.id, generator)


async def test_plan_from_another_conversation(db_session, thread, generator):
    other = await chat_service.create_thread(db_session, ChatThreadCreate())
    msg = await add_plan(db_session, other.id)
    with pytest.raises(PlanNotFoundError):
        await approve_plan(db_session, thread.id, msg.id, generator)
    with pytest.raises(PlanNotFoundError):
        await reject_plan(db_session, thread.id, msg.id)


async def test_rejecting_twice(db_session, thread):
    msg = await add_plan(db_session, thread.id)
    await reject_plan(db_session, thread.id, msg.id)
    with pytest.raises(PlanNotPendingError):
        await reject_plan(db_session, thread.id, msg.id)


async def test_generator_failure_is_reported_not_raised(db_session, project, thread):
    # the gate rolls back on failure, which expires loaded instances
    project_id, thread_id = project.id, thread.id
    generator = RecordingGenerator(fail=RuntimeError('disk full'))
    msg = await add_plan(db_session, thread_id)
    message_id = msg.id

    result = await approve_plan(db_session, thread_id, message_id, generator)

    assert result.build_json['success'] is False
    assert "couldn't generate files" in result.content
    assert 'disk full' in result.content
    assert len(generator.calls) == 1
    assert await file_service.list_files(db_session, project_id) == []

    # No retry path: the plan stays approved
    refreshed = await chat_service.get_message(db_session, thread_id, message_id)
    assert refreshed.plan_status == 'approved'


async def test_generator_timeout(db_session, thread, monkeypatch):
    monkeypatch.setattr(settings, 'build_timeout_seconds', 0.01)
    generator = RecordingGenerator(delay=1)
    msg = await add_plan(db_session, thread.id)

    result = await approve_plan(db_session, thread.id, msg.id, generator)

    assert result.build_json['success'] is False
    assert 'timed out' in result.content


async def test_thread_without_project_still_builds(db_session, generator):
    thread = await chat_service.create_thread(db_session, ChatThreadCreate())
    msg = await add_plan(db_session, thread.id)

    result = await approve_plan(db_session, thread.id, msg.id, generator)

    assert result.build_json['success'] is True
    assert len(result.build_json['files']) == 4


async def test_overwrites_existing_file(db_session, project, thread, generator):
    await file_service.create_file(
        db_session, project.id, ProjectFileCreate(name='package.json', path='/package.json', content='{}', language='json')
    )
    msg = await add_plan(db_session, thread.id)
    await approve_plan(db_session, thread.id, msg.id, generator)

    manifests = [f for f in await file_service.list_files(db_session, project.id) if f.path == '/package.json']
    assert len(manifests) == 1
    assert '"sweet-treats-store"' in manifests[0].content
