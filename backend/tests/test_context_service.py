"""
Tests for project context gathering
"""
import json
from datetime import datetime, timezone

import pytest

from ide_assistant.schemas.context import FileSnapshot, ProjectSummary
from ide_assistant.services.context_service import (
    ProjectNotFoundError,
    detect_issues,
    extract_dependencies,
    gather_context,
    get_file_type,
)
from ide_assistant.services.project_store import InMemoryProjectStore, SqlProjectStore
from ide_assistant.models.project import Project
from ide_assistant.models.project_file import ProjectFile

STAMP = datetime(2026, 1, 1, tzinfo=timezone.utc)


def snapshot(id, path, content='', language='javascript', is_directory=False, project_id=1):
    return FileSnapshot(
        id=id,
        project_id=project_id,
        name=path.rsplit('/', 1)[-1],
        path=path,
        content=content,
        language=language,
        is_directory=is_directory,
        updated_at=STAMP,
    )


@pytest.fixture
def store():
    manifest = json.dumps({
        'dependencies': {'react': '^18.2.0', 'express': '^4.18.2'},
        'devDependencies': {'vite': '^5.0.0', 'react': '^18.2.0'},
    })
    return InMemoryProjectStore(
        projects=[ProjectSummary(id=1, name='Shop'), ProjectSummary(id=2, name='Other')],
        files=[
            snapshot(1, '/src', is_directory=True, language='text'),
            snapshot(2, '/src/App.tsx', 'export default function App() {}', language='typescript'),
            snapshot(3, '/package.json', manifest, language='json'),
            snapshot(4, '/src/api.js', 'fetch(url).catch(e => console.error(e))'),
            snapshot(5, '/README.md', '# Shop', language='markdown'),
            snapshot(6, '/elsewhere.js', 'console.error(1)', project_id=2),
        ],
    )


async def test_missing_project_raises(store):
    with pytest.raises(ProjectNotFoundError) as exc:
        await gather_context(store, 99)
    assert exc.value.project_id == 99


async def test_context_only_contains_the_projects_files(store):
    context = await gather_context(store, 1)
    assert context.project.name == 'Shop'
    assert {f.project_id for f in context.files} == {1}
    assert len(context.files) == 5


async def test_structure_separates_directories_and_files(store):
    context = await gather_context(store, 1)
    assert context.structure.directories == ['/src']
    assert '/src' not in context.structure.files

    app = context.structure.files['/src/App.tsx']
    assert app.type == 'react-typescript'
    assert app.language == 'typescript'
    assert app.size == len('export default function App() {}')
    assert app.last_modified == STAMP

    assert context.structure.files['/README.md'].type == 'documentation'


async def test_dependencies_are_deduplicated(store):
    context = await gather_context(store, 1)
    assert sorted(context.dependencies) == ['express', 'react', 'vite']


async def test_issue_marker_scan(store):
    context = await gather_context(store, 1)
    assert context.errors == ['Potential error in api.js']


class TestDependencies:
    def test_invalid_manifest_is_ignored(self):
        files = [snapshot(1, '/package.json', '{not json', language='json')]
        assert extract_dependencies(files) == []

    def test_non_object_manifest_is_ignored(self):
        files = [snapshot(1, '/package.json', '["react"]', language='json')]
        assert extract_dependencies(files) == []

    def test_only_exact_name_counts(self):
        files = [
            snapshot(1, '/package.json.bak', '{"dependencies": {"left-pad": "1.0.0"}}', language='json'),
            snapshot(2, '/client/package.json', '{"dependencies": {"vue": "3.0.0"}}', language='json'),
        ]
        assert extract_dependencies(files) == ['vue']


class TestIssues:
    def test_other_languages_are_not_scanned(self):
        files = [snapshot(1, '/tool.py', 'print("console.error")', language='python')]
        assert detect_issues(files) == []

    def test_typescript_is_scanned(self):
        files = [snapshot(1, '/a.ts', 'console.error("x")', language='typescript')]
        assert detect_issues(files) == ['Potential error in a.ts']


@pytest.mark.parametrize('name,expected', [
    ('index.js', 'javascript'),
    ('main.ts', 'typescript'),
    ('Button.jsx', 'react'),
    ('style.CSS', 'stylesheet'),
    ('index.html', 'markup'),
    ('Makefile', 'text'),
    ('notes.txt', 'text'),
])
def test_file_type(name, expected):
    assert get_file_type(name) == expected


async def test_sql_store(db_session):
    project = Project(name='Real')
    db_session.add(project)
    await db_session.flush()
    db_session.add(ProjectFile(project_id=project.id, name='b.js', path='/b.js', content='b'))
    db_session.add(ProjectFile(project_id=project.id, name='a.js', path='/a.js', content='a'))
    await db_session.commit()
    db_session.expunge_all()

    context = await gather_context(SqlProjectStore(db_session), project.id)
    assert context.project.name == 'Real'
    assert [f.path for f in context.files] == ['/a.js', '/b.js']

    with pytest.raises(ProjectNotFoundError):
        await gather_context(SqlProjectStore(db_session), project.id + 100)
