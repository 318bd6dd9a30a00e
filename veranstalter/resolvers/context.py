from typing import Optional

from fastapi import Depends
from graphql import GraphQLError
from sqlalchemy.ext.asyncio import AsyncSession
from strawberry.types import Info

from veranstalter.core.auth import MSG_FORBIDDEN, Principal, get_current_user_optional
from veranstalter.core.database import get_db
from veranstalter.core.exceptions import VeranstalterError
from veranstalter.core.mail import Mailer, get_mailer
from veranstalter.services.veranstalter_service import VeranstalterService
from veranstalter.services.veranstalter_write_service import VeranstalterWriteService


async def get_context(
    db: AsyncSession = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
    principal: Optional[Principal] = Depends(get_current_user_optional),
) -> dict:
    # strawberry adds request, response and background_tasks to dict contexts
    return {"session": db, "mailer": mailer, "principal": principal}


def read_service(info: Info) -> VeranstalterService:
    return VeranstalterService(info.context["session"])


def write_service(info: Info) -> VeranstalterWriteService:
    service = read_service(info)
    return VeranstalterWriteService(service.session, service, info.context["mailer"])


def to_graphql_error(exc: VeranstalterError) -> GraphQLError:
    extensions = {"code": exc.error_code, "status": exc.http_status()}
    if exc.fields:
        extensions["fields"] = exc.fields
    return GraphQLError(exc.message, extensions=extensions, original_error=exc)


def require_roles(info: Info, *roles: str) -> Principal:
    principal: Optional[Principal] = info.context.get("principal")
    if principal is None:
        raise GraphQLError("Could not validate credentials",
                           extensions={"code": "unauthorized", "status": 401})
    if not principal.has_any_role(*roles):
        raise GraphQLError(MSG_FORBIDDEN, extensions={"code": "forbidden", "status": 403})
    return principal
