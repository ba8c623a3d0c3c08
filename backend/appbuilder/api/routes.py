import logging
from typing import Iterator

from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse

from appbuilder.errors import GenerationError
from appbuilder.schemas import (
    ErrorResponse,
    GenerateRequest,
    GenerateResponse,
    StreamChunk,
)
from appbuilder.service import AppGenerationService, chunk_code


logger = logging.getLogger(__name__)

NDJSON_MEDIA_TYPE = "application/x-ndjson"

router = APIRouter(
    prefix="/api",
    tags=["generator"],
)


def get_generation_service(request: Request) -> AppGenerationService:
    return request.app.state.generation_service


@router.get("/health")
def health_check():
    return {"status": "ok"}


@router.post(
    "/generate-app",
    response_model=GenerateResponse,
    responses={
        400: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
def generate_app(
    request: GenerateRequest,
    service: AppGenerationService = Depends(get_generation_service),
):
    code = service.generate(request.prompt)
    return GenerateResponse(code=code)


# ============================================================
# STREAMING ENDPOINT - newline-delimited JSON
# ============================================================

def _ndjson(model) -> str:
    return model.model_dump_json(exclude_none=True) + "\n"


@router.post("/generate-app/stream")
def generate_app_stream(
    request: GenerateRequest,
    service: AppGenerationService = Depends(get_generation_service),
):
    """
    Stream generated code as NDJSON.

    Emits partial chunks followed by one final line holding the whole
    code. Failures produce a single error line with the error's status.
    """
    try:
        code = service.generate(request.prompt)
    except GenerationError as e:
        logger.warning("Streaming generation failed: %s", e.error)
        return StreamingResponse(
            iter([_ndjson(ErrorResponse(**e.to_dict()))]),
            status_code=e.status_code,
            media_type=NDJSON_MEDIA_TYPE,
        )

    def line_generator() -> Iterator[str]:
        for chunk in chunk_code(code):
            yield _ndjson(StreamChunk(code=chunk, partial=True))
        yield _ndjson(StreamChunk(code=code, partial=False))

    return StreamingResponse(
        line_generator(),
        media_type=NDJSON_MEDIA_TYPE,
        headers={"Cache-Control": "no-cache"},
    )
