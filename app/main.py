import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import settings
from app.core.cors import EmptyPreflightCORSMiddleware
from app.core.logging import configure_logging
from shared.entities.envelope import fail
from shared.wiring import get_provider_registry

# Routers
from media.routers import download_router, files_router

logger = logging.getLogger(__name__)

configure_logging(settings.log_level, settings.log_file)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: build the provider registry once so misconfiguration fails fast
    registry = get_provider_registry()
    logger.info("Providers (in order): %s", ", ".join(registry.names))
    yield


app = FastAPI(
    title=settings.app_name,
    version="0.1.0",
    debug=settings.debug,
    docs_url="/docs",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    EmptyPreflightCORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=fail(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = "Invalid request body"
    if errors:
        first = errors[0]
        field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=fail(message))


@app.get("/health", tags=["system"])
async def health():
    return {"status": "ok"}


# Media
app.include_router(download_router)
app.include_router(files_router)
