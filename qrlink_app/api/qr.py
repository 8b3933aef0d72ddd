from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, Response
from starlette.concurrency import run_in_threadpool

from qrlink_app.dependencies import get_qr_renderer, get_url_service
from qrlink_app.schemas.url import MAX_URL_ID, QRFormat
from qrlink_app.services.qr_renderer import QRRenderer
from qrlink_app.services.url_service import URLService

router = APIRouter(tags=["qr"])


@router.get("/{url_id}/qr")
async def get_qr_code(
    url_id: int = Path(..., gt=0, le=MAX_URL_ID),
    size: Optional[int] = Query(None, description="Minimum image side in pixels (PNG only)"),
    output_format: Optional[str] = Query(None, alias="format", description='"ascii" for text, anything else for PNG'),
    url_service: URLService = Depends(get_url_service),
    renderer: QRRenderer = Depends(get_qr_renderer)
):
    """
    QR code pointing at the stored URL.

    Rendering is CPU-bound, so it runs in the worker thread pool instead of
    on the event loop.
    """
    payload = await url_service.get_qr_payload(url_id)
    rendered = await run_in_threadpool(renderer.render, payload, QRFormat.parse(output_format), size)
    return Response(content=rendered.content, media_type=rendered.media_type)
