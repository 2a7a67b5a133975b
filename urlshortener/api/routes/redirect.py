"""URL redirection endpoint."""

from fastapi import APIRouter, Depends, HTTPException, Response, status
from starlette.responses import RedirectResponse
from loguru import logger

from urlshortener.api.dependencies import get_shortener_service
from urlshortener.services.shortener import ShortenerService
from urlshortener.services.exceptions import InvalidInputError, URLNotFoundError

# Create router with tags
router = APIRouter(tags=["redirect"])


@router.get("/favicon.ico", include_in_schema=False)
async def favicon():
    """Answer browsers' favicon requests without hitting the short code route."""
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{short_code}",
    response_class=RedirectResponse,
    status_code=status.HTTP_301_MOVED_PERMANENTLY
)
async def redirect_to_long_url(
    short_code: str,
    shortener_service: ShortenerService = Depends(get_shortener_service),
):
    """Redirect to the long URL stored for the short code."""
    try:
        long_url = await shortener_service.get_long_url(short_code)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=e.reason)
    except URLNotFoundError as e:
        logger.info("Short code not found", short_code=short_code)
        raise HTTPException(status_code=404, detail=str(e))

    return RedirectResponse(url=long_url, status_code=status.HTTP_301_MOVED_PERMANENTLY)
