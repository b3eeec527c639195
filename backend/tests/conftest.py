"""
Test configuration and fixtures
"""
import asyncio
import json
import os
from typing import AsyncGenerator

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

# Must be set before the app (and its settings) are imported
os.environ['DATABASE_URL'] = 'sqlite+aiosqlite:///./test.db'
os.environ['OPENAI_API_KEY'] = ''
os.environ['APP_ENV'] = 'test'
os.environ['LOG_LEVEL'] = 'WARNING'

from ide_assistant.main import app
from ide_assistant.db.base import Base
from ide_assistant.dependencies import get_db, get_file_generator, get_openai_client, get_session_factory
from ide_assistant.routers import chat as chat_router
from ide_assistant.schemas.pipeline import GenerationRequest, GenerationResult
from ide_assistant.services.file_generator import TemplateFileGenerator


class RecordingGenerator:
    """File generator double that records every call."""

    def __init__(self, fail: Exception | None = None, delay: float = 0):
        self.calls: list[GenerationRequest] = []
        self.fail = fail
        self.delay = delay

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        self.calls.append(request)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail:
            raise self.fail
        return await TemplateFileGenerator().generate(request)


def parse_sse(body: str) -> list[tuple[str, dict]]:
    events = []
    for block in body.strip().split('\n\n'):
        if not block:
            continue
        lines = block.split('\n')
        event = lines[0].removeprefix('event: ')
        data = json.loads(lines[1].removeprefix('data: '))
        events.append((event, data))
    return events


@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(f'sqlite+aiosqlite:///{tmp_path / "test.db"}', echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Fresh database session for each test"""
    async with session_factory() as session:
        yield session


@pytest.fixture
def generator() -> RecordingGenerator:
    return RecordingGenerator()


@pytest.fixture
async def client(session_factory, generator) -> AsyncGenerator[AsyncClient, None]:
    """Test client with database, backend and generator overrides"""
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_openai_client] = lambda: None
    app.dependency_overrides[get_file_generator] = lambda: generator
    chat_router._thread_locks.clear()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac

    app.dependency_overrides.clear()
