"""FastAPI entrypoint for the trusted backend that proxies video job requests."""

from __future__ import annotations

from dotenv import load_dotenv

load_dotenv()

import logging
import os
from typing import Annotated, Any

from fastapi import Depends, FastAPI, File, Form, Header, HTTPException, Query, Request, UploadFile, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from pydantic import BaseModel, ConfigDict, Field, SecretStr
from starlette.responses import JSONResponse

from .integrations.video_jobs import (
    ConfigurationError,
    ContentVariant,
    DirectConfig,
    InputReference,
    InvalidCredentialError,
    TransportError,
    ValidationError,
    VideoJobClient,
    VideoJobError,
    hash_password,
    password_hash_matches,
)
from .integrations.video_jobs.types import VARIANT_MEDIA_TYPES

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class BackendSettings(BaseModel):
    """Server-side settings. The OpenAI key never leaves this process."""

    openai_api_key: SecretStr | None = None
    openai_base_url: str | None = None
    app_password: SecretStr | None = None

    @classmethod
    def from_env(cls) -> BackendSettings:
        return cls(
            openai_api_key=os.environ.get("OPENAI_API_KEY") or None,
            openai_base_url=os.environ.get("OPENAI_BASE_URL") or None,
            app_password=os.environ.get("APP_PASSWORD") or None,
        )

    @property
    def expected_password_hash(self) -> str | None:
        if self.app_password is None:
            return None
        return hash_password(self.app_password.get_secret_value())


class RemixRequest(BaseModel):
    """JSON body of a remix request."""

    model_config = ConfigDict(populate_by_name=True)

    prompt: str = Field(..., description="Description of the change to apply")
    password_hash: str | None = Field(None, alias="passwordHash")


app = FastAPI(title="Sora Video Jobs Backend")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_settings() -> BackendSettings:
    """Dependency to get the backend settings."""
    return BackendSettings.from_env()


def get_video_client(settings: BackendSettings = Depends(get_settings)) -> VideoJobClient:
    """Dependency to get a client that talks to OpenAI with the server's key."""
    return VideoJobClient(
        DirectConfig(api_key=settings.openai_api_key, base_url=settings.openai_base_url)
    )


def require_password(candidate: str | None, settings: BackendSettings) -> None:
    """Reject the request unless it carries the configured password hash."""
    expected = settings.expected_password_hash
    if expected is None:
        return
    if not password_hash_matches(candidate, expected):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid password")


def _status_for(exc: VideoJobError) -> int:
    if isinstance(exc, ValidationError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, InvalidCredentialError):
        return status.HTTP_401_UNAUTHORIZED
    if isinstance(exc, ConfigurationError):
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    if isinstance(exc, TransportError) and exc.status_code and 400 <= exc.status_code < 600:
        return exc.status_code
    return status.HTTP_502_BAD_GATEWAY


@app.exception_handler(VideoJobError)
async def video_job_error_handler(request: Request, exc: VideoJobError) -> JSONResponse:
    status_code = _status_for(exc)
    logger.warning("[API] %s %s -> %d %s", request.method, request.url.path, status_code, type(exc).__name__)
    return JSONResponse(status_code=status_code, content={"error": exc.message})


@app.exception_handler(HTTPException)
async def http_error_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    fields = ", ".join(".".join(str(part) for part in error["loc"]) for error in exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": f"Invalid request: {fields}"},
    )


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}


@app.post("/api/videos")
async def create_video(
    model: Annotated[str, Form()],
    prompt: Annotated[str, Form()],
    size: Annotated[str, Form()],
    seconds: Annotated[str, Form()],
    password_hash: Annotated[str | None, Form(alias="passwordHash")] = None,
    input_reference: Annotated[UploadFile | None, File()] = None,
    settings: BackendSettings = Depends(get_settings),
    client: VideoJobClient = Depends(get_video_client),
) -> dict[str, Any]:
    """Submit a new video generation with the server's API key."""
    require_password(password_hash, settings)

    reference = None
    if input_reference is not None:
        reference = InputReference(
            filename=input_reference.filename or "input_reference",
            content=await input_reference.read(),
            mime_type=input_reference.content_type or "application/octet-stream",
        )

    job = await client.create_video(
        model=model,
        prompt=prompt,
        size=size,
        seconds=seconds,
        input_reference=reference,
    )
    return job.model_dump(mode="json")


@app.post("/api/videos/{video_id}/remix")
async def remix_video(
    video_id: str,
    body: RemixRequest,
    settings: BackendSettings = Depends(get_settings),
    client: VideoJobClient = Depends(get_video_client),
) -> dict[str, Any]:
    """Submit a remix of an existing video."""
    require_password(body.password_hash, settings)
    job = await client.remix_video(video_id, body.prompt)
    return job.model_dump(mode="json")


@app.get("/api/videos/{video_id}")
async def retrieve_video(
    video_id: str,
    x_password_hash: Annotated[str | None, Header()] = None,
    settings: BackendSettings = Depends(get_settings),
    client: VideoJobClient = Depends(get_video_client),
) -> dict[str, Any]:
    """Get the current state of a video job."""
    require_password(x_password_hash, settings)
    job = await client.retrieve_video(video_id)
    return job.model_dump(mode="json")


@app.delete("/api/videos/{video_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_video(
    video_id: str,
    x_password_hash: Annotated[str | None, Header()] = None,
    settings: BackendSettings = Depends(get_settings),
    client: VideoJobClient = Depends(get_video_client),
) -> Response:
    """Delete a video job."""
    require_password(x_password_hash, settings)
    await client.delete_video(video_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@app.get("/api/videos/{video_id}/content")
async def download_content(
    video_id: str,
    variant: ContentVariant = "video",
    password_hash_param: Annotated[str | None, Query(alias="password-hash")] = None,
    x_password_hash: Annotated[str | None, Header()] = None,
    settings: BackendSettings = Depends(get_settings),
    client: VideoJobClient = Depends(get_video_client),
) -> Response:
    """Serve one binary asset of a completed video."""
    require_password(x_password_hash or password_hash_param, settings)
    content = await client.download_content(video_id, variant)
    return Response(content=content, media_type=VARIANT_MEDIA_TYPES[variant])
