"""
Image proxy endpoint.

Relays remote image bytes so browser clients can display thumbnails
hosted on origins that block cross-origin loads.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse, Response
from starlette.concurrency import run_in_threadpool

from ..proxy import ImageFetchError, ImageProxy

logger = logging.getLogger(__name__)

router = APIRouter(tags=["proxy"])

FETCH_ERROR_MESSAGE = "Error fetching image"


@router.get("/proxy")
async def proxy_image(request: Request, url: Optional[str] = None):
    """
    Fetch an image and return its bytes labelled image/jpeg.

    Failures return 500 with a fixed plain-text message.
    """
    image_proxy: ImageProxy = request.app.state.image_proxy

    try:
        image = await run_in_threadpool(image_proxy.fetch_image, url)
    except ImageFetchError as e:
        logger.error("Error in /proxy endpoint: %s", e.reason)
        return PlainTextResponse(FETCH_ERROR_MESSAGE, status_code=500)

    return Response(content=image.content, media_type=image.content_type)
