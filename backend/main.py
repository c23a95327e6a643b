"""CogniAssist API application.

Wires settings, logging, CORS, the request-id middleware, envelope-shaped
exception handlers and the ``/api`` router.
"""

import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import get_app_config, get_cors_config, get_settings, setup_logging
from responses import ResponseCode, error_response
from router import router as api_router

setup_logging(get_settings().log_level)
logger = logging.getLogger(__name__)

# Framework HTTP errors keep their status; this picks the envelope code.
HTTP_ERROR_CODES: dict[int, ResponseCode] = {
    404: ResponseCode.NOT_FOUND,
    405: ResponseCode.VALIDATION_ERROR,
    413: ResponseCode.FILE_TOO_LARGE,
    429: ResponseCode.LLM_RATE_LIMIT,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logger.info(
        "Starting CogniAssist (%s): model=%s fast_model=%s max_attachment=%dMB",
        settings.environment,
        settings.llm_model,
        settings.fast_llm_model,
        settings.max_attachment_size_mb,
    )
    yield
    logger.info("Shutting down CogniAssist")


app = FastAPI(lifespan=lifespan, **get_app_config())
app.add_middleware(CORSMiddleware, **get_cors_config())


def _request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Tag each request with a short id, echoed in X-Request-ID."""
    request_id = str(uuid.uuid4())[:8]
    request.state.request_id = request_id

    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    field_name = errors[0].get("loc", ["unknown"])[-1] if errors else "unknown"
    return error_response(
        ResponseCode.VALIDATION_ERROR,
        f"Validation failed for field '{field_name}'",
        _request_id(request),
        error_details={"validation_errors": errors},
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return error_response(
        HTTP_ERROR_CODES.get(exc.status_code, ResponseCode.INTERNAL_ERROR),
        str(exc.detail),
        _request_id(request),
        status_code=exc.status_code,
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception: %s", exc)
    return error_response(
        ResponseCode.INTERNAL_ERROR,
        "An unexpected error occurred",
        _request_id(request),
        error_details={"exception_type": type(exc).__name__},
    )


app.include_router(api_router, prefix="/api")


@app.get("/", include_in_schema=False)
async def root():
    return {
        "name": "CogniAssist",
        "description": "Conversational assistant for Informatica IDMC",
        "docs": "/api/docs",
        "health": "/api/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
