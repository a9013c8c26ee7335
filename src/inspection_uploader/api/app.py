"""FastAPI application exposing the upload endpoints."""

import json
import logging

from fastapi import Depends, FastAPI, File, Form, Request, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from inspection_uploader.config import MAX_BODY_BYTES
from inspection_uploader.handlers.batch_upload import process_batch
from inspection_uploader.handlers.single_upload import (
    upload_binary,
    upload_form,
    upload_json,
)
from inspection_uploader.infrastructure.dependency_injection import DependenciesContainer
from inspection_uploader.models.schemas import BatchResult, HealthResponse
from inspection_uploader.services.s3_uploader import S3Uploader

logger = logging.getLogger(__name__)

ENDPOINTS = ["/upload-json", "/upload", "/upload-binary", "/upload-batch"]


class InvalidJSONBody(Exception):
    """Request body could not be parsed as JSON."""


class PayloadTooLarge(Exception):
    """Request body exceeded the configured size ceiling."""


def get_container(request: Request) -> DependenciesContainer:
    return request.app.state.container


def get_s3_uploader(
    container: DependenciesContainer = Depends(get_container),
) -> S3Uploader:
    return container.s3_uploader()


async def _read_body(request: Request) -> bytes:
    """Read the request body, stopping once it exceeds MAX_BODY_BYTES."""
    chunks = []
    received = 0
    async for chunk in request.stream():
        received += len(chunk)
        if received > MAX_BODY_BYTES:
            raise PayloadTooLarge(f"Body exceeds {MAX_BODY_BYTES} bytes")
        chunks.append(chunk)
    return b"".join(chunks)


async def _read_json(request: Request):
    body = await _read_body(request)
    try:
        return json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise InvalidJSONBody(str(e)) from e


def _respond(result: BatchResult) -> JSONResponse:
    return JSONResponse(status_code=result.status_code, content=result.body)


def create_app(container: DependenciesContainer | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        container: Dependency container; a default one is created when omitted.

    Returns:
        Configured FastAPI instance.
    """
    app = FastAPI(
        title="Inspection Screenshot Uploader",
        description="Uploads inspection images to S3",
        version="1.0.0",
    )
    app.state.container = container or DependenciesContainer()

    @app.middleware("http")
    async def limit_body_size(request: Request, call_next):
        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > MAX_BODY_BYTES:
            return JSONResponse(status_code=413, content={"error": "Payload too large"})
        return await call_next(request)

    @app.exception_handler(InvalidJSONBody)
    async def invalid_json_handler(request: Request, exc: InvalidJSONBody) -> JSONResponse:
        logger.warning("Invalid JSON body on %s: %s", request.url.path, exc)
        return JSONResponse(status_code=400, content={"error": "Invalid JSON body"})

    @app.exception_handler(PayloadTooLarge)
    async def payload_too_large_handler(request: Request, exc: PayloadTooLarge) -> JSONResponse:
        logger.warning("Rejected body on %s: %s", request.url.path, exc)
        return JSONResponse(status_code=413, content={"error": "Payload too large"})

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        # Unknown paths and wrong methods share the not-found body.
        if exc.status_code in (404, 405):
            return JSONResponse(status_code=404, content={"error": "Endpoint not found"})
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled error on %s: %s", request.url.path, exc, exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "details": str(exc)},
        )

    @app.get("/")
    async def health(container: DependenciesContainer = Depends(get_container)):
        """Health check endpoint."""
        config = container.config()
        return HealthResponse(
            status="ok",
            message="Screenshot upload server (S3 version) running",
            bucket=config.bucket_name,
            region=config.aws_region,
            endpoint=config.endpoint,
            endpoints=ENDPOINTS,
        )

    @app.post("/upload-batch")
    async def upload_batch(
        request: Request,
        s3_uploader: S3Uploader = Depends(get_s3_uploader),
    ) -> JSONResponse:
        payload = await _read_json(request)
        try:
            result = await run_in_threadpool(process_batch, payload, s3_uploader)
        except Exception as e:
            logger.error("[BATCH] Upload error: %s", e, exc_info=True)
            return JSONResponse(
                status_code=500,
                content={"error": "Batch upload failed", "details": str(e)},
            )
        return _respond(result)

    @app.post("/upload-json")
    async def upload_json_route(
        request: Request,
        s3_uploader: S3Uploader = Depends(get_s3_uploader),
    ) -> JSONResponse:
        payload = await _read_json(request)
        result = await run_in_threadpool(upload_json, payload, s3_uploader)
        return _respond(result)

    @app.post("/upload")
    async def upload_form_route(
        image: UploadFile | None = File(None),
        timestamp: str | None = Form(None),
        s3_uploader: S3Uploader = Depends(get_s3_uploader),
    ) -> JSONResponse:
        if image is None:
            result = upload_form(None, None, None, timestamp, s3_uploader)
        else:
            body = await image.read()
            result = await run_in_threadpool(
                upload_form,
                image.filename,
                body,
                image.content_type,
                timestamp,
                s3_uploader,
            )
        return _respond(result)

    @app.post("/upload-binary")
    async def upload_binary_route(
        request: Request,
        s3_uploader: S3Uploader = Depends(get_s3_uploader),
    ) -> JSONResponse:
        body = await _read_body(request)
        result = await run_in_threadpool(
            upload_binary,
            request.headers.get("x-filename"),
            request.headers.get("content-type"),
            body,
            request.headers.get("x-timestamp"),
            s3_uploader,
        )
        return _respond(result)

    return app
