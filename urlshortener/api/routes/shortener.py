"""URL shortening endpoint."""

from fastapi import APIRouter, Depends, HTTPException, Request, status
from loguru import logger

from urlshortener.api import schemas
from urlshortener.api.dependencies import get_shortener_service
from urlshortener.services.exceptions import (
    InvalidURLError,
    ShortCodeGenerationError,
    URLStorageError,
)
from urlshortener.services.shortener import ShortenerService

router = APIRouter(tags=["shortener"])


def _client_context(request: Request) -> dict:
    return {
        "remote_ip": request.client.host if request.client else "unknown",
        "user_agent": request.headers.get("user-agent", ""),
    }


@router.post(
    "/shorten",
    response_model=schemas.ShortenResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": schemas.ErrorResponse, "description": "Invalid URL"},
        500: {"model": schemas.ErrorResponse, "description": "Short code could not be issued"},
    }
)
async def create_short_url(
    request: Request,
    payload: schemas.ShortenRequest,
    shortener_service: ShortenerService = Depends(get_shortener_service),
):
    try:
        result = await shortener_service.shorten(payload.url)
    except InvalidURLError as e:
        logger.bind(url=payload.url, reason=e.reason, **_client_context(request)).warning(
            "Invalid URL provided for shortening"
        )
        raise HTTPException(status_code=400, detail=str(e))
    except (ShortCodeGenerationError, URLStorageError) as e:
        logger.bind(url=payload.url, error=str(e), **_client_context(request)).error(
            "Failed to shorten URL"
        )
        raise HTTPException(status_code=500, detail="Failed to shorten URL")

    logger.bind(
        original_url=payload.url,
        short_code=result.code,
        short_url=result.short_url,
        **_client_context(request),
    ).info("URL shortened successfully")

    return schemas.ShortenResponse(code=result.code, short_url=result.short_url)
