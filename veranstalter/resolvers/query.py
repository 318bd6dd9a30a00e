import logging
from typing import List, Optional

import strawberry
from strawberry.types import Info

from veranstalter.core.exceptions import NotFoundError, VeranstalterError
from veranstalter.resolvers.context import read_service, to_graphql_error
from veranstalter.resolvers.types import SuchparameterInput, VeranstalterType
from veranstalter.services.pageable import create_pageable
from veranstalter.services.veranstalter_service import VeranstalterService

logger = logging.getLogger(__name__)


def _suchparameter(input: Optional[SuchparameterInput]) -> dict:
    if input is None:
        return {}
    suchparameter = {}
    for key, value in vars(input).items():
        if value is None or value is strawberry.UNSET:
            continue
        if isinstance(value, bool):
            value = str(value).lower()
        elif key == "art":
            value = value.value
        suchparameter[key] = value
    return suchparameter


@strawberry.type
class Query:
    @strawberry.field
    async def veranstalter(self, info: Info, id: strawberry.ID) -> VeranstalterType:
        logger.debug("veranstalter: id=%s", id)
        try:
            if not VeranstalterService.ID_PATTERN.match(str(id)):
                raise NotFoundError(f"Die Veranstalter-ID {id} ist ungueltig.")
            veranstalter = await read_service(info).find_by_id(int(id), mit_teilnehmer=True)
        except VeranstalterError as e:
            raise to_graphql_error(e) from e
        return VeranstalterType.from_entity(veranstalter)

    @strawberry.field
    async def veranstalters(
        self, info: Info, suchparameter: Optional[SuchparameterInput] = None
    ) -> List[VeranstalterType]:
        params = _suchparameter(suchparameter)
        logger.debug("veranstalters: suchparameter=%s", params)
        try:
            veranstalter_slice = await read_service(info).find(params, create_pageable())
        except VeranstalterError as e:
            raise to_graphql_error(e) from e
        return [VeranstalterType.from_entity(v) for v in veranstalter_slice.content]
