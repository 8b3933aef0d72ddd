from fastapi import APIRouter, Depends, Path
from fastapi.responses import RedirectResponse

from qrlink_app.config import settings
from qrlink_app.dependencies import get_url_service
from qrlink_app.schemas.url import MAX_URL_ID
from qrlink_app.services.url_service import URLService

router = APIRouter(tags=["redirect"])


@router.get("/{url_id}")
async def redirect_to_target_url(
    url_id: int = Path(..., gt=0, le=MAX_URL_ID, description="Identifier returned on creation"),
    url_service: URLService = Depends(get_url_service)
):
    """
    Redirect to the stored URL.

    Temporary redirect: the identifier may be deleted later, so clients
    should not cache the location permanently.
    """
    target_url = await url_service.get_target_url(url_id)
    return RedirectResponse(url=target_url, status_code=settings.redirect_status_code)
