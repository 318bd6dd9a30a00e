import logging
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, File, Header, Request, Response, UploadFile

from veranstalter.core.auth import Principal, require_admin, require_roles
from veranstalter.core.config import ALLOWED_MIME_TYPES, MAX_FILE_SIZE, REST_PATH
from veranstalter.core.dependencies import get_veranstalter_write_service
from veranstalter.core.exceptions import FileTooLargeError, InvalidMimeTypeError, PreconditionRequiredError
from veranstalter.routers.veranstalter_route import parse_id
from veranstalter.schemas.mapper import to_update_data, to_veranstalter
from veranstalter.schemas.veranstalter_schema import VeranstalterIn, VeranstalterUpdateIn
from veranstalter.services.veranstalter_service import VeranstalterService
from veranstalter.services.veranstalter_write_service import VeranstalterWriteService

logger = logging.getLogger(__name__)
router = APIRouter(prefix=REST_PATH, tags=["Veranstalter REST-API"])


def create_base_uri(request: Request) -> str:
    """Request URL without query, trailing slash and trailing id segment."""
    base = str(request.url.replace(query="")).rstrip("/")
    head, _, last = base.rpartition("/")
    if VeranstalterService.ID_PATTERN.match(last):
        return head
    return base


@router.post("", status_code=201, responses={201: {"description": "Erfolgreich neu angelegt"}})
async def create(
    payload: VeranstalterIn,
    request: Request,
    background_tasks: BackgroundTasks,
    service: VeranstalterWriteService = Depends(get_veranstalter_write_service),
    admin: Principal = Depends(require_admin),
):
    """Admin: create a Veranstalter; the Location header points to it."""
    logger.debug("create: payload=%s", payload)
    id = await service.create(to_veranstalter(payload), background_tasks)

    location = f"{create_base_uri(request)}/{id}"
    logger.debug("create: location=%s", location)
    return Response(status_code=201, headers={"Location": location})


@router.post("/{id}", status_code=204)
async def add_file(
    id: str,
    request: Request,
    file: UploadFile = File(...),
    service: VeranstalterWriteService = Depends(get_veranstalter_write_service),
):
    """Upload a PNG, JPEG or PDF file; replaces a previously attached file."""
    veranstalter_id = parse_id(id)
    logger.debug("add_file: id=%d, filename=%s, content_type=%s", veranstalter_id, file.filename, file.content_type)
    if file.content_type not in ALLOWED_MIME_TYPES:
        raise InvalidMimeTypeError(file.content_type)

    data = await file.read(MAX_FILE_SIZE + 1)
    if len(data) > MAX_FILE_SIZE:
        raise FileTooLargeError(len(data))

    await service.add_file(veranstalter_id, data, file.filename or "upload", len(data))

    location = f"{create_base_uri(request)}/file/{veranstalter_id}"
    logger.debug("add_file: location=%s", location)
    return Response(status_code=204, headers={"Location": location})


@router.put("/{id}", status_code=204)
async def update(
    id: str,
    payload: VeranstalterUpdateIn,
    if_match: Optional[str] = Header(None),
    service: VeranstalterWriteService = Depends(get_veranstalter_write_service),
    user: Principal = Depends(require_roles("admin", "user")),
):
    """Admin/User: update fields sent in the body; requires If-Match with the current version."""
    logger.debug("update: id=%s, payload=%s, if_match=%s", id, payload, if_match)
    if if_match is None:
        raise PreconditionRequiredError()

    new_version = await service.update(parse_id(id), to_update_data(payload), if_match)
    logger.debug("update: version=%d", new_version)
    return Response(status_code=204, headers={"ETag": f'"{new_version}"'})


@router.delete("/{id}", status_code=204)
async def delete(
    id: str,
    service: VeranstalterWriteService = Depends(get_veranstalter_write_service),
    admin: Principal = Depends(require_admin),
):
    """Admin: delete a Veranstalter; unknown ids are not an error."""
    logger.debug("delete: id=%s", id)
    if VeranstalterService.ID_PATTERN.match(id):
        await service.delete(int(id))
    return Response(status_code=204)
