from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from veranstalter.core.database import get_db
from veranstalter.core.mail import Mailer, get_mailer
from veranstalter.services.veranstalter_service import VeranstalterService
from veranstalter.services.veranstalter_write_service import VeranstalterWriteService


def get_veranstalter_service(db: AsyncSession = Depends(get_db)) -> VeranstalterService:
    return VeranstalterService(db)


def get_veranstalter_write_service(
    service: VeranstalterService = Depends(get_veranstalter_service),
    mailer: Mailer = Depends(get_mailer),
) -> VeranstalterWriteService:
    return VeranstalterWriteService(service.session, service, mailer)
