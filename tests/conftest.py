"""
Core pytest configuration.

Every test gets its own in-memory SQLite database (aiosqlite + StaticPool, so all
sessions share one connection). The FastAPI app is driven through an httpx
``AsyncClient`` with ``get_db`` and ``get_mailer`` overridden.
"""

from __future__ import annotations

import os

# Must happen before importing veranstalter.* (engine is created at import time).
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("MAIL_ENABLED", "false")

import logging
from datetime import date
from typing import AsyncGenerator, List, Tuple

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from veranstalter.core.auth import create_access_token
from veranstalter.core.database import get_db, init_models
from veranstalter.core.mail import Mailer, get_mailer
from veranstalter.main import app
from veranstalter.models import Dokument, Standort, Teilnehmer, Veranstalter, VeranstalterArt

for _name in ("sqlalchemy", "sqlalchemy.engine", "asyncio", "httpx", "aiosqlite"):
    logging.getLogger(_name).setLevel(logging.WARNING)

PNG_BYTES = (
    b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01"
    b"\x08\x02\x00\x00\x00\x90wS\xde\x00\x00\x00\x0cIDATx\x9cc\xf8\x0f\x00"
    b"\x00\x01\x01\x00\x05\x18\xd8N\x00\x00\x00\x00IEND\xaeB`\x82"
)
PDF_BYTES = b"%PDF-1.4\n1 0 obj\n<< /Type /Catalog >>\nendobj\ntrailer\n<< /Root 1 0 R >>\n%%EOF\n"


class RecordingMailer(Mailer):
    """Mailer that keeps messages instead of talking to an SMTP server."""

    def __init__(self):
        super().__init__(False, "localhost", 25, "test@acme.de", "admin@acme.de")
        self.sent: List[Tuple[str, str]] = []

    async def send(self, subject: str, body: str) -> None:
        self.sent.append((subject, body))


@pytest.fixture()
async def async_engine() -> AsyncGenerator[AsyncEngine, None]:
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest.fixture()
def session_maker(async_engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(bind=async_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture()
async def db_session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as session:
        yield session


@pytest.fixture()
def mailer() -> RecordingMailer:
    return RecordingMailer()


@pytest.fixture()
async def client(session_maker, mailer) -> AsyncGenerator[AsyncClient, None]:
    async def override_get_db():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_mailer] = lambda: mailer
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


def auth_header(*roles: str, username: str = "tester") -> dict:
    token = create_access_token({"sub": username, "roles": list(roles)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def admin_headers() -> dict:
    return auth_header("admin", username="admin")


@pytest.fixture()
def user_headers() -> dict:
    return auth_header("user", username="user")


def make_veranstalter(name: str = "ACME GmbH", **overrides) -> Veranstalter:
    standort = overrides.pop("standort", None) or Standort(
        ort="Karlsruhe", plz="76133", strasse="Hauptstrasse 5", land="Deutschland"
    )
    values = dict(
        version=0,
        name=name,
        email=f"info@{name.split()[0].lower()}.de",
        telefon="+49 721 1234567",
        homepage="https://acme.de",
        gruendungsdatum=date(2020, 1, 15),
        bewertung=4,
        aktiv=True,
        art=VeranstalterArt.PRAESENZ,
        kategorien=["Musik", "Kunst"],
        standort=standort,
        dokumente=[Dokument(titel="Programm", dateiname="programm.pdf")],
        teilnehmer=[Teilnehmer(vorname="Max", nachname="Mustermann", email="max@mustermann.de")],
    )
    values.update(overrides)
    return Veranstalter(**values)


@pytest.fixture()
async def sample_veranstalter(db_session: AsyncSession) -> List[Veranstalter]:
    """Three rows: two active (ACME GmbH, EventPro Karlsruhe), one inactive ONLINE (Kulturbuero)."""
    rows = [
        make_veranstalter("ACME GmbH"),
        make_veranstalter(
            "EventPro Karlsruhe",
            email="info@eventpro.de",
            art=VeranstalterArt.HYBRID,
            kategorien=["Theater"],
        ),
        make_veranstalter(
            "Kulturbuero Berlin",
            email="kontakt@kulturbuero.de",
            aktiv=False,
            art=VeranstalterArt.ONLINE,
            standort=Standort(ort="Berlin", plz="10115", land="Deutschland"),
        ),
    ]
    db_session.add_all(rows)
    await db_session.commit()
    return rows
