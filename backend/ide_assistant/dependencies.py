from collections.abc import AsyncGenerator

from openai import AsyncOpenAI
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ide_assistant.config import settings
from ide_assistant.db.engine import async_session_factory
from ide_assistant.services.file_generator import FileGenerator, TemplateFileGenerator


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with async_session_factory() as session:
        yield session


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """For streaming endpoints that need a session outliving the request scope."""
    return async_session_factory


def get_openai_client() -> AsyncOpenAI | None:
    """None when no API key is configured; callers then skip the backend entirely."""
    if not settings.backend_enabled:
        return None
    kwargs: dict = {"api_key": settings.openai_api_key}
    if settings.openai_base_url:
        kwargs["base_url"] = settings.openai_base_url
    return AsyncOpenAI(**kwargs)


def get_file_generator() -> FileGenerator:
    return TemplateFileGenerator()
