import enum
from datetime import date, datetime
from typing import Optional, List

from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import (
    String, Integer, Boolean, Date, JSON, TIMESTAMP, Enum, CheckConstraint, func,
)
from veranstalter.models.base import Base


class VeranstalterArt(str, enum.Enum):
    ONLINE = "ONLINE"
    PRAESENZ = "PRAESENZ"
    HYBRID = "HYBRID"


class Veranstalter(Base):
    __tablename__ = "veranstalter"
    __table_args__ = (
        CheckConstraint("bewertung >= 0 AND bewertung <= 5", name="ck_veranstalter_bewertung"),
    )
    __mapper_args__ = {"eager_defaults": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    name: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    telefon: Mapped[Optional[str]] = mapped_column(String(40), nullable=True)
    homepage: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    gruendungsdatum: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    bewertung: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    aktiv: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    art: Mapped[Optional[VeranstalterArt]] = mapped_column(
        Enum(VeranstalterArt, name="veranstalterart"), nullable=True
    )
    kategorien: Mapped[Optional[List[str]]] = mapped_column(JSON, nullable=True)

    erzeugt: Mapped[datetime] = mapped_column(TIMESTAMP, server_default=func.now())
    aktualisiert: Mapped[Optional[datetime]] = mapped_column(TIMESTAMP, onupdate=func.now(), nullable=True)

    standort: Mapped["Standort"] = relationship(
        "Standort", back_populates="veranstalter", uselist=False, cascade="all, delete-orphan"
    )
    dokumente: Mapped[List["Dokument"]] = relationship(
        "Dokument", back_populates="veranstalter", cascade="all, delete-orphan"
    )
    teilnehmer: Mapped[List["Teilnehmer"]] = relationship(
        "Teilnehmer", back_populates="veranstalter", cascade="all, delete-orphan"
    )
    datei: Mapped[Optional["VeranstalterFile"]] = relationship(
        "VeranstalterFile", back_populates="veranstalter", uselist=False, cascade="all, delete-orphan"
    )
