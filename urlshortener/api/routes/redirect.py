"""URL redirection endpoint."""

from fastapi import APIRouter, Depends, HTTPException, Request, status
from loguru import logger
from starlette.responses import RedirectResponse

from urlshortener.api import schemas
from urlshortener.api.dependencies import get_shortener_service
from urlshortener.services.exceptions import URLNotFoundError, URLStorageError
from urlshortener.services.shortener import ShortenerService
from urlshortener.services.validation import with_default_scheme

router = APIRouter(tags=["redirect"])


@router.get(
    "/{code}",
    response_class=RedirectResponse,
    status_code=status.HTTP_302_FOUND,
    responses={
        404: {"model": schemas.ErrorResponse, "description": "URL not found"},
        500: {"model": schemas.ErrorResponse, "description": "Storage failure"},
    }
)
async def redirect_to_original_url(
    request: Request,
    code: str,
    shortener_service: ShortenerService = Depends(get_shortener_service),
):
    """Redirect to the original URL stored for ``code``."""
    client = {
        "remote_ip": request.client.host if request.client else "unknown",
        "user_agent": request.headers.get("user-agent", ""),
        "referer": request.headers.get("referer", ""),
    }
    try:
        original_url = await shortener_service.resolve(code)
    except URLNotFoundError:
        logger.bind(code=code, **client).warning("URL not found for redirect")
        raise HTTPException(status_code=404, detail="URL not found")
    except URLStorageError as e:
        logger.bind(code=code, error=str(e), **client).error("Internal error during URL redirect")
        raise HTTPException(status_code=500, detail="Internal server error")

    logger.bind(code=code, original_url=original_url, **client).info("URL redirect successful")
    # Stored text may lack a scheme
    return RedirectResponse(url=with_default_scheme(original_url), status_code=status.HTTP_302_FOUND)
