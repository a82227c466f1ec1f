"""The media endpoint: upload, list and delete behind one URL."""

import json
import logging
from typing import Annotated, Any

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse

from cutout.domain.media.command.delete import DeleteImage, DeleteImageHandler
from cutout.domain.media.command.upload import UploadImage, UploadImageHandler
from cutout.domain.media.model.value import Action
from cutout.domain.media.query.list_images import ListImages, ListImagesHandler
from cutout.domain.media.service.router import route
from cutout.domain.shared.command import Result
from cutout.domain.shared.error import ClientInputError, CutoutError, UnexpectedServerError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/media", tags=["Media"], route_class=DishkaRoute)

# Every method is accepted here so unsupported ones get the JSON 405 from route()
MEDIA_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


async def _read_upload(request: Request) -> UploadImage:
    raw = await request.body()
    payload: Any = {}
    if raw.strip():
        try:
            payload = json.loads(raw)
        except ValueError as e:
            raise ClientInputError("Request body must be JSON") from e
    file_b64 = payload.get("fileB64") if isinstance(payload, dict) else None
    return UploadImage(file_b64=file_b64 if isinstance(file_b64, str) else None)


@router.api_route("", methods=MEDIA_METHODS)
async def media(
    request: Request,
    upload_handler: FromDishka[UploadImageHandler],
    list_handler: FromDishka[ListImagesHandler],
    delete_handler: FromDishka[DeleteImageHandler],
    action: Annotated[str | None, Query()] = None,
    pathname: Annotated[str | None, Query()] = None,
    url: Annotated[str | None, Query()] = None,
) -> JSONResponse:
    """Dispatch on method and the optional ``action`` hint.

    POST uploads ``{"fileB64": ...}``, GET lists the caller's images and
    DELETE removes the image named by ``pathname`` or ``url``.
    """
    resolved = route(request.method, action)

    result: Result
    try:
        if resolved is Action.UPLOAD:
            result = await upload_handler.run(await _read_upload(request))
        elif resolved is Action.LIST:
            result = await list_handler.run(ListImages())
        else:
            result = await delete_handler.run(DeleteImage(pathname=pathname, url=url))
    except CutoutError:
        raise
    except Exception as e:
        logger.exception("Unexpected failure during %s", resolved)
        raise UnexpectedServerError("Server error", details=str(e) or type(e).__name__) from e

    return JSONResponse(result.model_dump(mode="json", by_alias=True))
