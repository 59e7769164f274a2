import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from auth import router as auth_router
from core import db, log, storage
from core.errors import STORE_ERRORS
from jobs import router as jobs_router
from news import router as news_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    log.configure_logging()
    storage.ensure_upload_dir()
    # Initialize the DB pool once per process.
    await db.init_pool()
    try:
        yield
    finally:
        await db.close_pool()


def cors_origins() -> list[str]:
    raw = os.environ.get("CORS_ORIGINS", "*")
    origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
    return origins or ["*"]


app = FastAPI(lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def store_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "store_error method=%s path=%s",
        request.method,
        request.url.path,
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


for _error_type in STORE_ERRORS:
    app.add_exception_handler(_error_type, store_error_handler)


app.include_router(auth_router.router, tags=["auth"])
app.include_router(news_router.router, tags=["news"])
app.include_router(jobs_router.router, tags=["jobs"])


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}
