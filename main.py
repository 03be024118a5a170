import inspect
import logging
import os
from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from openai import AsyncOpenAI

from routes.analysis_route import router as analysis_router
from routes.assistant_route import router as assistant_router
from routes.catalog_route import router as catalog_router
from routes.image_analysis_route import router as image_analysis_router
from services.genai.model_client import ModelClient
from services.genai.retrying_invoker import RetryingInvoker, RetryPolicy
from utils.database_init import AsyncDatabaseInitializer
from utils.errors import ApiError
from utils.settings import Settings

LOGGER = logging.getLogger(__name__)


def _build_model_client(settings: Settings) -> ModelClient:
    """Create the OpenAI-backed model client; a missing key leaves it unconfigured."""
    if not settings.openai_api_key:
        LOGGER.warning("OPENAI_API_KEY is not set; model endpoints will return fallback responses.")
        return ModelClient(None)
    try:
        return ModelClient(AsyncOpenAI(api_key=settings.openai_api_key))
    except Exception as exc:  # pylint: disable=broad-exception-caught
        LOGGER.warning("Failed to initialize OpenAI async client: %s", exc)
        return ModelClient(None)


async def _init_database(settings: Settings) -> Optional[AsyncDatabaseInitializer]:
    """Create the record store; failures are logged and the server keeps running."""
    try:
        db_initializer = AsyncDatabaseInitializer(settings.database_dir)
        await db_initializer.ensure_database()
    except Exception as exc:  # pylint: disable=broad-exception-caught
        LOGGER.warning("Database initialization failed: %s", exc)
        return None
    LOGGER.info("Database ready at %s", db_initializer.db_path)
    return db_initializer


async def _close_quietly(client: Any) -> None:
    """Close a client exposing aclose/close, sync or async."""
    aclose = getattr(client, "aclose", None) or getattr(client, "close", None)
    if aclose is None:
        return
    try:
        if inspect.iscoroutinefunction(aclose):
            await aclose()
        else:
            result = aclose()
            if inspect.isawaitable(result):
                await result
    except Exception as exc:  # pylint: disable=broad-exception-caught
        LOGGER.warning("Error while closing model client: %s", exc)


def create_app(settings: Optional[Settings] = None, *, model_client: Any = None) -> FastAPI:
    """
    Create and configure the FastAPI application instance.

    Args:
        settings: Configuration; read from the environment when omitted.
        model_client: Optional replacement for the OpenAI-backed model client
            (any object with an async `generate(request)` method).
    """
    if settings is None:
        settings = Settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Initialize the record store and the model client once and attach
        them, together with the retrying invoker, to `app.state`.
        """
        app.state.settings = settings
        app.state.db_initializer = await _init_database(settings)

        client = model_client if model_client is not None else _build_model_client(settings)
        app.state.model_client = client
        app.state.invoker = RetryingInvoker(
            client,
            RetryPolicy(max_attempts=settings.max_attempts, base_delay=settings.base_delay_seconds),
        )

        try:
            yield
        finally:
            if model_client is None:
                await _close_quietly(client)

    app = FastAPI(title="Skin AI API", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        return JSONResponse(status_code=exc.status_code, content=exc.body())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        if errors:
            first = errors[0]
            location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
            message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
        else:
            message = "Invalid request"
        return JSONResponse(status_code=400, content={"success": False, "error": message})

    # Register application routers
    app.include_router(catalog_router)
    app.include_router(analysis_router)
    app.include_router(assistant_router)
    app.include_router(image_analysis_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "4000")))
