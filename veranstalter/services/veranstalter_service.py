"""
Read access to Veranstalter: lookup by id, paginated search with the
``WhereBuilder`` predicate, attached file lookup and counting.
"""

import logging
import re
from typing import Any, Mapping, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from veranstalter.core.exceptions import NotFoundError
from veranstalter.models.veranstalter import Veranstalter
from veranstalter.models.veranstalter_file import VeranstalterFile
from veranstalter.services.pageable import Pageable, Slice
from veranstalter.services.where_builder import SUCHPARAMETER_NAMEN, WhereBuilder


class VeranstalterService:
    ID_PATTERN = re.compile(r"^[1-9]\d{0,10}$")

    def __init__(self, session: AsyncSession, where_builder: Optional[WhereBuilder] = None,
                 logger: Optional[logging.Logger] = None):
        self.session = session
        self.where_builder = where_builder or WhereBuilder()
        self.logger = logger or logging.getLogger(__name__)

    async def find_by_id(self, id: int, mit_teilnehmer: bool = False) -> Veranstalter:
        """
        Veranstalter with Standort and Dokumente; ``mit_teilnehmer`` also loads
        Teilnehmer and the attached file.

        Raises:
            NotFoundError: no row for ``id``.
        """
        self.logger.debug("find_by_id: id=%s, mit_teilnehmer=%s", id, mit_teilnehmer)
        options = [selectinload(Veranstalter.standort), selectinload(Veranstalter.dokumente)]
        if mit_teilnehmer:
            options += [selectinload(Veranstalter.teilnehmer), selectinload(Veranstalter.datei)]

        result = await self.session.execute(
            select(Veranstalter).where(Veranstalter.id == id).options(*options)
        )
        veranstalter = result.scalar_one_or_none()
        if veranstalter is None:
            self.logger.debug("find_by_id: no Veranstalter with id %s", id)
            raise NotFoundError(f"Es gibt keinen Veranstalter mit der ID {id}.")

        self.logger.debug("find_by_id: name=%s, version=%d", veranstalter.name, veranstalter.version)
        return veranstalter

    async def find_file_by_veranstalter_id(self, veranstalter_id: int) -> Optional[VeranstalterFile]:
        self.logger.debug("find_file_by_veranstalter_id: veranstalter_id=%s", veranstalter_id)
        result = await self.session.execute(
            select(VeranstalterFile).where(VeranstalterFile.veranstalter_id == veranstalter_id)
        )
        veranstalter_file = result.scalar_one_or_none()
        if veranstalter_file is None:
            self.logger.debug("find_file_by_veranstalter_id: no file")
            return None

        self.logger.debug(
            "find_file_by_veranstalter_id: id=%d, byteLength=%d, filename=%s, mimetype=%s",
            veranstalter_file.id, len(veranstalter_file.data),
            veranstalter_file.filename, veranstalter_file.mimetype,
        )
        return veranstalter_file

    async def find(self, suchparameter: Optional[Mapping[str, Any]], pageable: Pageable) -> Slice:
        """
        One page of Veranstalter with Standort.

        Unknown search keys and empty pages both raise ``NotFoundError``.
        """
        self.logger.debug("find: suchparameter=%s, pageable=%s", suchparameter, pageable)

        if not suchparameter:
            return await self._find_all(pageable)

        if not self._check_keys(suchparameter.keys()):
            self.logger.debug("find: invalid search parameters")
            raise NotFoundError("Ungueltige Suchparameter", fields=list(suchparameter.keys()))

        predicate = self.where_builder.build(suchparameter)
        stmt = self.where_builder.apply(
            select(Veranstalter).options(selectinload(Veranstalter.standort)), predicate
        )
        result = await self.session.execute(
            stmt.order_by(Veranstalter.id).offset(pageable.skip).limit(pageable.take)
        )
        veranstalter = list(result.scalars().all())
        if not veranstalter:
            self.logger.debug("find: no Veranstalter found")
            raise NotFoundError(
                f"Keine Veranstalter gefunden: {dict(suchparameter)}, Seite {pageable.number}"
            )

        count_stmt = self.where_builder.apply(
            select(func.count(Veranstalter.id)).select_from(Veranstalter), predicate
        )
        total_elements = (await self.session.execute(count_stmt)).scalar_one()
        return self._create_slice(veranstalter, total_elements)

    async def count(self) -> int:
        count = (await self.session.execute(select(func.count(Veranstalter.id)))).scalar_one()
        self.logger.debug("count: %d", count)
        return count

    async def _find_all(self, pageable: Pageable) -> Slice:
        result = await self.session.execute(
            select(Veranstalter)
            .options(selectinload(Veranstalter.standort))
            .order_by(Veranstalter.id)
            .offset(pageable.skip)
            .limit(pageable.take)
        )
        veranstalter = list(result.scalars().all())
        if not veranstalter:
            self.logger.debug("_find_all: no Veranstalter found")
            raise NotFoundError(f'Ungueltige Seite "{pageable.number}"')

        return self._create_slice(veranstalter, await self.count())

    def _create_slice(self, veranstalter: list, total_elements: int) -> Slice:
        self.logger.debug("_create_slice: size=%d, total_elements=%d", len(veranstalter), total_elements)
        return Slice(content=veranstalter, total_elements=total_elements)

    def _check_keys(self, keys) -> bool:
        self.logger.debug("_check_keys: keys=%s", list(keys))
        return all(key in SUCHPARAMETER_NAMEN for key in keys)
