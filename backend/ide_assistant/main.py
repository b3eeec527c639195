from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ide_assistant.config import settings
from ide_assistant.logging_config import logger
from ide_assistant.routers import projects, files, chat, assist

app = FastAPI(title="IDE Assistant", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(projects.router)
app.include_router(files.router)
app.include_router(chat.router)
app.include_router(assist.router)

logger.info("Generation backend %s", "enabled" if settings.backend_enabled else "disabled, using heuristic plans")


@app.get("/health")
async def health():
    return {"status": "ok", "backend_enabled": settings.backend_enabled}
