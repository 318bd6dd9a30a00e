import logging
from io import BytesIO
from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, Header, Request, Response
from fastapi.responses import StreamingResponse

from veranstalter.core.config import REST_PATH
from veranstalter.core.dependencies import get_veranstalter_service
from veranstalter.core.exceptions import NotAcceptableError, NotFoundError
from veranstalter.schemas.page_schema import CountOut, PageOut, create_page
from veranstalter.schemas.veranstalter_schema import VeranstalterListOut, VeranstalterOut
from veranstalter.services.pageable import create_pageable
from veranstalter.services.veranstalter_service import VeranstalterService

logger = logging.getLogger(__name__)
router = APIRouter(prefix=REST_PATH, tags=["Veranstalter REST-API"])

_ACCEPTABLE = {"*/*", "application/*", "text/*", "application/json", "text/html"}


def ensure_acceptable(request: Request) -> None:
    """Raise NotAcceptableError unless the client accepts JSON or HTML."""
    accept = request.headers.get("accept")
    if not accept:
        return
    for part in accept.split(","):
        media = part.split(";")[0].strip().lower()
        if media in _ACCEPTABLE or media.endswith("+json"):
            return
    logger.debug("Accept header not satisfiable: %s", accept)
    raise NotAcceptableError()


def parse_id(value: str) -> int:
    if not VeranstalterService.ID_PATTERN.match(value):
        raise NotFoundError(f"Die Veranstalter-ID {value} ist ungueltig.")
    return int(value)


# ─── PUBLIC ROUTES ────────────────────────────────────────────────

@router.get("/file/{id}")
async def get_file_by_id(id: str, service: VeranstalterService = Depends(get_veranstalter_service)):
    """Download the file attached to a Veranstalter."""
    veranstalter_file = await service.find_file_by_veranstalter_id(parse_id(id))
    if veranstalter_file is None:
        raise NotFoundError("Keine Datei gefunden.")

    return StreamingResponse(
        BytesIO(veranstalter_file.data),
        media_type=veranstalter_file.mimetype or "image/png",
        headers={"Content-Disposition": f'inline; filename="{quote(veranstalter_file.filename)}"'},
    )


@router.get(
    "/{id}",
    response_model=VeranstalterOut,
    responses={304: {"description": "Der Veranstalter wurde bereits heruntergeladen"}},
)
async def get_by_id(
    id: str,
    request: Request,
    response: Response,
    if_none_match: Optional[str] = Header(None),
    service: VeranstalterService = Depends(get_veranstalter_service),
):
    """Veranstalter by id; conditional GET with If-None-Match."""
    logger.debug("get_by_id: id=%s, if_none_match=%s", id, if_none_match)
    ensure_acceptable(request)

    veranstalter = await service.find_by_id(parse_id(id), mit_teilnehmer=True)
    etag = f'"{veranstalter.version}"'
    if if_none_match == etag:
        logger.debug("get_by_id: NOT_MODIFIED")
        return Response(status_code=304, headers={"ETag": etag})

    response.headers["ETag"] = etag
    return veranstalter


@router.get("", response_model=PageOut[VeranstalterListOut] | CountOut)
async def find(request: Request, service: VeranstalterService = Depends(get_veranstalter_service)):
    """Search with query parameters; ``only=count`` returns just the number of Veranstalter."""
    ensure_acceptable(request)
    suchparameter = dict(request.query_params)
    if "kategorien" in suchparameter:
        suchparameter["kategorien"] = request.query_params.getlist("kategorien")
    logger.debug("find: query=%s", suchparameter)

    if suchparameter.pop("only", None) is not None:
        return {"count": await service.count()}

    pageable = create_pageable(suchparameter.pop("page", None), suchparameter.pop("size", None))
    veranstalter_slice = await service.find(suchparameter, pageable)
    return create_page(veranstalter_slice, pageable)
