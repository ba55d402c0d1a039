from __future__ import annotations

from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator
from pathlib import Path

import structlog
import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from workshop_diff.core.config import settings
from workshop_diff.modules.modlist.router import router as modlist_router
from workshop_diff.modules.workshop.router import legacy_router, router as workshop_router

logger = structlog.get_logger()

# Relative static dirs resolve against backend/
_backend = Path(__file__).resolve().parent.parent
STATIC_DIR = Path(settings.static_dir)
if not STATIC_DIR.is_absolute():
    STATIC_DIR = _backend / STATIC_DIR


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    logger.info("Starting Workshop Diff API", static_dir=str(STATIC_DIR))
    yield
    logger.info("Shutting down Workshop Diff API")


app = FastAPI(
    title=settings.app_name,
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/api/docs",
    openapi_url="/api/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["Origin", "X-Requested-With", "Content-Type", "Accept"],
)

# Mount routers
app.include_router(modlist_router, prefix=settings.api_prefix)
app.include_router(workshop_router, prefix=settings.api_prefix)
app.include_router(legacy_router)  # original client posts to /steamapi

app.mount("/static", StaticFiles(directory=STATIC_DIR, check_dir=False), name="static")


@app.get("/", include_in_schema=False)
async def index() -> FileResponse:
    landing = STATIC_DIR / "index.html"
    if not landing.is_file():
        raise HTTPException(status_code=404, detail="Landing page not found.")
    return FileResponse(landing)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


def run() -> None:
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
