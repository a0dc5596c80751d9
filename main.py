import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from src.core.config import Settings, load_settings
from src.core.errors import RequestValidationFailed, error_response
from src.core.logging_config import setup_logging
from src.db.gateway import TranslationStoreGateway
from src.db.session import get_async_engine
from src.gemini.client import GeminiClient
from src.routers import evaluation as evaluation_router
from src.routers import questions as questions_router
from src.routers import translations as translations_router

logger = logging.getLogger(__name__)

ENDPOINTS = ["/api/questions", "/api/translations", "/api/evaluate", "/api/test"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    # Fails the startup (and so the process) when the model key is missing.
    settings.require_model_credentials()
    logger.info(f"API server is running → http://localhost:{settings.port}")
    yield
    await app.state.model_client.close()
    await app.state.engine.dispose()
    logger.info("API server shut down, connections released.")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Builds the FastAPI application and its collaborators from one Settings instance.
    """
    settings = settings or load_settings()
    setup_logging(settings.log_level)

    app = FastAPI(title="Teto/Egen Quiz API", lifespan=lifespan)

    app.state.settings = settings
    app.state.engine = get_async_engine(settings.sqlalchemy_url, pool_size=settings.db_pool_size)
    app.state.gateway = TranslationStoreGateway(app.state.engine)
    app.state.model_client = GeminiClient(
        api_key=settings.gemini_api_key,
        model=settings.gemini_model,
        base_url=settings.gemini_api_base_url,
        timeout=settings.model_timeout_seconds,
    )

    # Only allow-listed origins get CORS headers; requests without an Origin header pass through.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Error-Code"],
    )

    app.include_router(questions_router.router, prefix="/api", tags=["questions"])
    app.include_router(translations_router.router, prefix="/api", tags=["translations"])
    app.include_router(evaluation_router.router, prefix="/api", tags=["evaluation"])

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Rejected malformed request to {request.url.path}: {exc.errors()}")
        return error_response(
            422,
            "Invalid request body.",
            RequestValidationFailed(str(exc)),
            extra={"detail": jsonable_encoder(exc.errors())},
        )

    @app.get("/", tags=["Health Check"])
    async def read_root():
        return {"status": "API server is running.", "endpoints": ENDPOINTS}

    @app.get("/api/test", tags=["Health Check"])
    async def api_test():
        response = {"msg": "API call successful!", "time": datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")}
        logger.info("API call successful!")
        return response

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=app.state.settings.port)
