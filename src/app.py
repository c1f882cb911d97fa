from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from typing import Any, AsyncGenerator
from .routers import commands
from contextlib import asynccontextmanager
import os
import logging
from dotenv import load_dotenv

from src.config.settings import Settings
from src.core.errors import (
    CommandNotFoundError,
    CommandValidationError,
    PersistenceError,
    PersistenceFailureError,
)
from src.data.factory import get_command_store
from src.mapping.command_mapper import build_command_mapper

# Configure logging at module level
logging.basicConfig(
    level=logging.WARNING,  # Set default to WARNING for all loggers
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler()],
)

# Set your application loggers to DEBUG
logging.getLogger("src").setLevel(logging.DEBUG)  # All src.* modules
logging.getLogger("__main__").setLevel(logging.DEBUG)  # Main module if needed

# Keep third-party loggers at INFO or WARNING to reduce noise
logging.getLogger("uvicorn.access").setLevel(logging.INFO)
logging.getLogger("uvicorn.error").setLevel(logging.INFO)
logging.getLogger("asyncio").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


# Build the command store and mapper once at app startup
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[Any, Any]:
    # Load environment variables at startup
    env_path = os.path.join(os.path.dirname(__file__), "..", ".env")
    if os.path.exists(env_path):
        load_dotenv(env_path)
        logger.info(f"Loaded environment from {env_path}")
    else:
        logger.info(f"No .env file found at {env_path}, using system environment variables")

    settings = Settings.from_env()
    app.state.command_store = get_command_store(settings)
    app.state.command_mapper = build_command_mapper()
    yield


app = FastAPI(
    lifespan=lifespan,
    title="Command API",
    description="API for storing and looking up platform-specific command lines",
    version="1.0.0",
)

# Add CORS middleware
# Origins are read from the process environment when the module is imported
app.add_middleware(
    CORSMiddleware,
    allow_origins=Settings.from_env().cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],  # Allow all HTTP methods
    allow_headers=["*"],  # Allow all headers
    expose_headers=["Location"],
)


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    # Malformed payloads are client errors (400), not FastAPI's default 422
    errors = [
        {"loc": list(e["loc"]), "msg": e["msg"], "type": e["type"]}
        for e in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={"detail": "Invalid request", "errors": errors},
    )


@app.exception_handler(CommandValidationError)
async def command_validation_error_handler(
    request: Request, exc: CommandValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=400, content={"detail": str(exc), "errors": exc.errors}
    )


@app.exception_handler(CommandNotFoundError)
async def command_not_found_handler(
    request: Request, exc: CommandNotFoundError
) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(PersistenceError)
@app.exception_handler(PersistenceFailureError)
async def persistence_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Persistence failure on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"detail": "Failed to save changes"})


# Include routers
app.include_router(commands.router)


@app.get("/")
async def root() -> dict[str, Any]:
    return {
        "message": "Welcome to the Command API",
        "docs_url": "/docs",
        "endpoints": {"commands": commands.router.prefix},
    }
