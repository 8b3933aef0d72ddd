from fastapi import APIRouter, Depends, Path, Query, Response, status

from qrlink_app.config import settings
from qrlink_app.dependencies import get_url_service
from qrlink_app.schemas.url import MAX_URL_ID, StoredURL
from qrlink_app.services.url_service import URLService

router = APIRouter(tags=["urls"])


@router.get("/")
def get_info():
    """Static description of the public operations"""
    return {
        "openapi": "3.0.0",
        "info": {
            "title": settings.app_name,
            "version": settings.app_version,
        },
        "paths": {
            "/{id}": {
                "get": {"summary": "Redirect to URL"},
                "delete": {"summary": "Delete short URL"},
            },
            "/{id}/qr": {"get": {"summary": "Return QR code"}},
            "/{id}/meta": {"get": {"summary": "Return metadata"}},
            "/": {"post": {"summary": "Create short URL"}},
        },
    }


@router.post("/", response_model=StoredURL)
async def create_short_url(
    url: str = Query(..., description="The URL to shorten"),
    url_service: URLService = Depends(get_url_service)
):
    """Store ``url`` and return its identifier"""
    return await url_service.create_short_url(url)


@router.get("/{url_id}/meta", response_model=StoredURL)
async def get_url_meta(
    url_id: int = Path(..., gt=0, le=MAX_URL_ID),
    url_service: URLService = Depends(get_url_service)
):
    """Stored record for an identifier, without redirecting"""
    return await url_service.get_url_meta(url_id)


@router.delete("/{url_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_url(
    url_id: int = Path(..., gt=0, le=MAX_URL_ID),
    url_service: URLService = Depends(get_url_service)
):
    """Soft-delete a short URL"""
    await url_service.delete_url(url_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
