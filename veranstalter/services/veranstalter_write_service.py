"""
Write access to Veranstalter: create (with notification mail), update with
optimistic version check, idempotent delete and file attachment replacement.
"""

import html
import logging
import re
from typing import Any, Mapping, Optional

from fastapi import BackgroundTasks
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from veranstalter.core.database import transaction
from veranstalter.core.exceptions import NotFoundError, VersionInvalidError, VersionOutdatedError
from veranstalter.core.mail import Mailer
from veranstalter.core.mimetype import sniff_mimetype
from veranstalter.models.veranstalter import Veranstalter
from veranstalter.models.veranstalter_file import VeranstalterFile
from veranstalter.services.veranstalter_service import VeranstalterService


class VeranstalterWriteService:
    VERSION_PATTERN = re.compile(r'^"\d+"$')

    def __init__(self, session: AsyncSession, read_service: VeranstalterService, mailer: Mailer,
                 logger: Optional[logging.Logger] = None):
        self.session = session
        self.read_service = read_service
        self.mailer = mailer
        self.logger = logger or logging.getLogger(__name__)

    async def create(self, veranstalter: Veranstalter,
                     background_tasks: Optional[BackgroundTasks] = None) -> int:
        """Insert Veranstalter with Standort, Dokumente and Teilnehmer in one transaction."""
        self.logger.debug("create: name=%s", veranstalter.name)
        veranstalter.version = 0
        async with transaction(self.session):
            self.session.add(veranstalter)
            await self.session.flush()
            id = veranstalter.id

        subject = f"Neuer Veranstalter {id}"
        body = f"Der Veranstalter mit dem Namen <strong>{html.escape(veranstalter.name)}</strong> ist angelegt"
        if background_tasks is not None:
            background_tasks.add_task(self.mailer.send, subject, body)
        else:
            await self.mailer.send(subject, body)

        self.logger.debug("create: id=%d", id)
        return id

    async def add_file(self, veranstalter_id: int, data: bytes, filename: str, size: int) -> VeranstalterFile:
        """Replace the attached file of a Veranstalter; at most one file per Veranstalter."""
        self.logger.debug("add_file: veranstalter_id=%d, filename=%s, size=%d", veranstalter_id, filename, size)
        async with transaction(self.session):
            veranstalter = await self.session.get(Veranstalter, veranstalter_id)
            if veranstalter is None:
                raise NotFoundError(f"Es gibt keinen Veranstalter mit der ID {veranstalter_id}.")

            await self.session.execute(
                delete(VeranstalterFile).where(VeranstalterFile.veranstalter_id == veranstalter_id)
            )
            veranstalter_file = VeranstalterFile(
                filename=filename,
                data=bytes(data),
                mimetype=sniff_mimetype(data),
                veranstalter_id=veranstalter_id,
            )
            self.session.add(veranstalter_file)
            await self.session.flush()

        self.logger.debug(
            "add_file: id=%d, byteLength=%d, filename=%s, mimetype=%s",
            veranstalter_file.id, len(veranstalter_file.data),
            veranstalter_file.filename, veranstalter_file.mimetype,
        )
        return veranstalter_file

    async def update(self, id: int, data: Mapping[str, Any], version: str) -> int:
        """
        Write only the fields present in ``data`` and increment the version.

        ``version`` is the quoted integer from ``If-Match``. A version older than the
        stored one is rejected; an equal version is accepted.

        Raises:
            VersionInvalidError: malformed version, checked before any DB access.
            NotFoundError: no row for ``id``.
            VersionOutdatedError: ``version`` is older than the stored version.
        """
        self.logger.debug("update: id=%s, data=%s, version=%s", id, dict(data), version)
        version_int = self._parse_version(version)
        veranstalter = await self.read_service.find_by_id(id)
        if version_int < veranstalter.version:
            self.logger.debug("update: version %d < %d", version_int, veranstalter.version)
            raise VersionOutdatedError(version_int)

        async with transaction(self.session):
            for field, value in data.items():
                if field == "standort":
                    for standort_field, standort_value in (value or {}).items():
                        setattr(veranstalter.standort, standort_field, standort_value)
                else:
                    setattr(veranstalter, field, value)
            veranstalter.version = veranstalter.version + 1
            await self.session.flush()
            new_version = veranstalter.version

        self.logger.debug("update: new_version=%d", new_version)
        return new_version

    async def delete(self, id: int) -> None:
        """Delete a Veranstalter with everything it owns; unknown ids are ignored."""
        self.logger.debug("delete: id=%s", id)
        async with transaction(self.session):
            result = await self.session.execute(
                select(Veranstalter)
                .where(Veranstalter.id == id)
                .options(
                    selectinload(Veranstalter.standort),
                    selectinload(Veranstalter.dokumente),
                    selectinload(Veranstalter.teilnehmer),
                    selectinload(Veranstalter.datei),
                )
            )
            veranstalter = result.scalar_one_or_none()
            if veranstalter is None:
                self.logger.debug("delete: no Veranstalter with id %s", id)
                return
            await self.session.delete(veranstalter)

    def _parse_version(self, version: str) -> int:
        if version is None or not self.VERSION_PATTERN.match(version):
            raise VersionInvalidError(version)
        return int(version[1:-1])
