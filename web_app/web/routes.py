"""Web interface routes implementation."""

import os
from fastapi import APIRouter, Request, HTTPException, status
from fastapi.responses import FileResponse, RedirectResponse

STATIC_DIR = os.path.join(os.path.dirname(__file__), "..", "static")
INDEX_FILE = os.path.join(STATIC_DIR, "index.html")

router = APIRouter()
redirect_router = APIRouter()


def last_path_segment(path: str) -> str:
    """Last non-empty segment of a slash-separated path, or "" if there is none."""
    segments = [segment for segment in path.split("/") if segment]
    return segments[-1] if segments else ""


@router.get("/", include_in_schema=False)
async def homepage():
    """Serve the landing page."""
    if not os.path.exists(INDEX_FILE):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="404 page not found")
    return FileResponse(INDEX_FILE, media_type="text/html")


@redirect_router.get(
    "/{key_path:path}",
    responses={
        301: {"description": "Redirect to the stored URL"},
        404: {"description": "Key not found"},
    },
    summary="Follow short URL",
)
async def redirect_to_url(request: Request, key_path: str):
    """Permanently redirect a key to its stored URL.

    The key is the last path segment, so /go/x/1a2b3c4d and /go/1a2b3c4d/ both
    resolve 1a2b3c4d.
    """
    service = request.app.state.service
    key = last_path_segment(key_path)

    # KeyNotFoundError becomes a 404 in web_app.errors
    target = await service.resolve(key)

    return RedirectResponse(url=target, status_code=status.HTTP_301_MOVED_PERMANENTLY)
