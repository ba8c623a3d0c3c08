import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from appbuilder.api.routes import router
from appbuilder.config import Settings, get_settings
from appbuilder.errors import GenerationError, PromptRequired
from appbuilder.middleware import BodySizeLimitMiddleware
from appbuilder.service import AppGenerationService


logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
    # basicConfig is a no-op once the root logger has handlers
    logging.getLogger("appbuilder").setLevel(level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    app.state.generation_service.close()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="App Builder",
        version="0.1.0",
        lifespan=lifespan,
    )

    # One upstream client (and HTTP session) per app
    app.state.generation_service = AppGenerationService(settings)

    # Middleware FIRST; the last one added runs outermost
    app.add_middleware(BodySizeLimitMiddleware, max_body_bytes=settings.max_body_bytes)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ============================
    # ERROR HANDLERS
    # ============================

    @app.exception_handler(GenerationError)
    async def handle_generation_error(request: Request, exc: GenerationError):
        logger.warning("%s %s -> %s %s", request.method, request.url.path, exc.status_code, exc.error)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        error = PromptRequired()
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.exception("Generation failed: %s", exc)
        return JSONResponse(status_code=500, content={"error": str(exc)})

    # Routes AFTER middleware
    app.include_router(router)

    return app


app = create_app()
