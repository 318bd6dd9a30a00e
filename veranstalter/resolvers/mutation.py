import logging

import strawberry
from pydantic import ValidationError
from strawberry.types import Info

from veranstalter.core.exceptions import NotFoundError, ValidationFailedError, VeranstalterError
from veranstalter.resolvers.context import require_roles, to_graphql_error, write_service
from veranstalter.resolvers.types import (
    CreatePayload,
    DeletePayload,
    UpdatePayload,
    VeranstalterInput,
    VeranstalterUpdateInput,
    input_to_dict,
)
from veranstalter.schemas.mapper import to_update_data, to_veranstalter
from veranstalter.schemas.validation import format_validation_errors
from veranstalter.schemas.veranstalter_schema import VeranstalterIn, VeranstalterUpdateIn
from veranstalter.services.veranstalter_service import VeranstalterService

logger = logging.getLogger(__name__)


def _validate(model, data: dict):
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise ValidationFailedError(format_validation_errors(e.errors())) from e


@strawberry.type
class Mutation:
    @strawberry.mutation
    async def create(self, info: Info, input: VeranstalterInput) -> CreatePayload:
        require_roles(info, "admin", "user")
        logger.debug("create: input=%s", input)
        try:
            dto = _validate(VeranstalterIn, input_to_dict(input))
            id = await write_service(info).create(
                to_veranstalter(dto), info.context.get("background_tasks")
            )
        except VeranstalterError as e:
            raise to_graphql_error(e) from e
        logger.debug("create: id=%d", id)
        return CreatePayload(id=id)

    @strawberry.mutation
    async def update(self, info: Info, input: VeranstalterUpdateInput) -> UpdatePayload:
        require_roles(info, "admin", "user")
        logger.debug("update: input=%s", input)
        try:
            if not VeranstalterService.ID_PATTERN.match(str(input.id)):
                raise NotFoundError(f"Es gibt keinen Veranstalter mit der ID {input.id}.")
            dto = _validate(VeranstalterUpdateIn, input_to_dict(input, exclude=("id", "version")))
            version = await write_service(info).update(
                int(input.id), to_update_data(dto), f'"{input.version}"'
            )
        except VeranstalterError as e:
            raise to_graphql_error(e) from e
        logger.debug("update: version=%d", version)
        return UpdatePayload(version=version)

    @strawberry.mutation
    async def delete(self, info: Info, id: strawberry.ID) -> DeletePayload:
        require_roles(info, "admin")
        logger.debug("delete: id=%s", id)
        if VeranstalterService.ID_PATTERN.match(str(id)):
            await write_service(info).delete(int(id))
        return DeletePayload(success=True)
