"""
Extraction endpoints.

GET and POST variants share the same response shapes:
- 200 {"success": true, "data": <tool JSON>}
- 400 {"error": "..."} when no URL is supplied
- 500 {"success": false, "error": "<message>"} on any extraction failure
"""

import json
import logging
from typing import Any, Optional

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from ..assets import AssetError
from ..extraction import ExtractionError, ExtractionInvoker

logger = logging.getLogger(__name__)

router = APIRouter(tags=["ytdl"])

MISSING_QUERY_URL = "URL query parameter is required"
MISSING_BODY_URL = "URL is required in the request body"


def _get_invoker(request: Request) -> ExtractionInvoker:
    return request.app.state.invoker


async def _run_extraction(request: Request, url: str, endpoint: str) -> JSONResponse:
    """Run the invoker off the event loop and map its outcome to a response."""
    try:
        result = await run_in_threadpool(_get_invoker(request).extract, url)
    except (AssetError, ExtractionError) as e:
        logger.error("Error in %s endpoint: %s", endpoint, e)
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": str(e)},
        )

    return JSONResponse(content={"success": True, "data": result})


@router.get("/ytdl")
async def ytdl_get(request: Request, url: Optional[str] = None):
    """Extract metadata for the URL given as a query parameter."""
    if not url:
        return JSONResponse(status_code=400, content={"error": MISSING_QUERY_URL})

    logger.info("Received URL: %s", url)
    return await _run_extraction(request, url, "GET /ytdl")


@router.post("/ytdl")
async def ytdl_post(request: Request):
    """
    Extract metadata for the URL given in a JSON body.

    Body: {"url": "<string>"}
    A body that is absent, not JSON, not an object or without a
    non-empty string url is a 400.
    """
    url = _url_from_body(await request.body())
    if not url:
        return JSONResponse(status_code=400, content={"error": MISSING_BODY_URL})

    logger.info("Received URL: %s", url)
    return await _run_extraction(request, url, "POST /ytdl")


def _url_from_body(raw: bytes) -> Optional[str]:
    if not raw:
        return None
    try:
        payload: Any = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
    if not isinstance(payload, dict):
        return None
    url = payload.get("url")
    if not isinstance(url, str):
        return None
    return url
