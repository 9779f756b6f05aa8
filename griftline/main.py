from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from griftline.config import settings
from griftline.errors import TimelineError
from griftline.logging import setup_logging
from griftline.routers import cache, entries, health, leaderboard, metadata, preferences, search

setup_logging()

app = FastAPI(title="Griftline Timeline API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(TimelineError)
async def timeline_error_handler(request: Request, exc: TimelineError):
    # InvalidQuery -> 400, NotFound -> 404, TransientFetchError -> 503
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path}: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


# routers
app.include_router(health.router)           # GET /
app.include_router(entries.router)          # /entries/*
app.include_router(leaderboard.router)
app.include_router(metadata.router)         # /metadata, /glossary
app.include_router(search.router)
app.include_router(preferences.router)
app.include_router(cache.router)
