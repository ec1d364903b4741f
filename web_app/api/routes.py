"""API routes implementation."""

from fastapi import APIRouter, Request
from pydantic import ValidationError

from .schemas import ShortenRequest, ShortenResponse
from shortener.errors import InvalidURLError
from shortener.common.url_builder import build_short_url
from shortener.common.headers import build_base_url

router = APIRouter()


async def read_shorten_request(request: Request) -> ShortenRequest:
    """Decode the body as JSON whatever Content-Type the client sent.

    Raises:
        InvalidURLError: If the body is not a JSON object with a non-empty url
    """
    raw = await request.body()
    try:
        return ShortenRequest.model_validate_json(raw)
    except ValidationError as e:
        raise InvalidURLError(f"invalid request body: {e.error_count()} error(s)") from e


@router.post(
    "/shorten",
    response_model=ShortenResponse,
    responses={
        400: {"description": "Malformed request body"},
        500: {"description": "Database error"},
    },
    summary="Create short URL",
    description="Return the key for a URL, creating a new mapping if the URL is unseen.",
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": ShortenRequest.model_json_schema()}},
        }
    },
)
async def shorten_url(request: Request):
    """Create or fetch the short URL for a long URL."""
    service = request.app.state.service
    config = request.app.state.config

    body = await read_shorten_request(request)

    # Store errors propagate to the exception handlers in web_app.errors
    result = await service.shorten(body.url)

    base_url = build_base_url(
        headers=request.headers,
        fallback_base_url=config.base_url,
        request_scheme=request.url.scheme,
        request_host=request.headers.get("host"),
    )

    short_url = build_short_url(
        key=result.key,
        base_url=base_url,
        path_prefix=config.path_prefix,
    )

    return ShortenResponse(url=result.url, key=result.key, short_url=short_url)
