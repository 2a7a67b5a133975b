from fastapi import APIRouter, Depends, HTTPException, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from urlshortener.api import schemas
from urlshortener.api.dependencies import get_shortener_service
from urlshortener.db.session import get_db, db_transaction
from urlshortener.services.shortener import ShortenerService
from urlshortener.services.exceptions import (
    InvalidInputError,
    ShortCodeGenerationError,
    URLNotFoundError,
)

router = APIRouter(tags=["shortener"])
info_router = APIRouter(tags=["shortener"])


@router.post(
    "/shorten",
    response_model=schemas.URLCreateResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": schemas.ErrorResponse, "description": "Invalid or disallowed URL"},
        503: {"model": schemas.ErrorResponse, "description": "No free short code found"}
    }
)
@db_transaction()
async def create_short_url(
    url_data: schemas.URLCreateRequest,
    db: AsyncSession = Depends(get_db),
    shortener_service: ShortenerService = Depends(get_shortener_service),
):
    try:
        created = await shortener_service.create(url_data.url)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=e.reason)
    except ShortCodeGenerationError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return schemas.URLCreateResponse.model_validate(created)


@info_router.get(
    "/{short_code}",
    response_model=schemas.URLInfoResponse,
    responses={
        400: {"model": schemas.ErrorResponse, "description": "Malformed short code"},
        404: {"model": schemas.ErrorResponse, "description": "URL not found"}
    }
)
async def get_url_info(
    short_code: str = Path(..., description="The short code of the URL"),
    shortener_service: ShortenerService = Depends(get_shortener_service),
):
    try:
        info = await shortener_service.get(short_code)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=e.reason)
    except URLNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return schemas.URLInfoResponse.model_validate(info)
