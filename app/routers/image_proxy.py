# =============================================================================
# app/routers/image_proxy.py - Image Proxy Endpoint
# =============================================================================
# GET /image-proxy?url=... relays a remote image with our own Cache-Control.
# Public: <img> tags cannot send bearer tokens.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Query
from fastapi.responses import Response

from core.services.image_proxy_service import ImageProxyService

router = APIRouter()


@router.get("", response_class=Response)
async def proxy_image(
    url: Annotated[str | None, Query(description="Absolute http(s) URL of the image")] = None,
):
    """
    Fetch a remote image and return its bytes.

    Errors:
        400: url missing, not http(s), or host not allowed
        4xx/5xx: upstream status relayed
        500: upstream unreachable or image too large
    """
    image = await ImageProxyService.fetch(url)
    return Response(
        content=image["content"],
        media_type=image["content_type"],
        headers={"Cache-Control": image["cache_control"]},
    )
