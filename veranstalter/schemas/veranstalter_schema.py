from datetime import date, datetime
from pydantic import BaseModel, EmailStr, Field, HttpUrl, field_validator, model_validator
from typing import Optional, List

from veranstalter.models.veranstalter import VeranstalterArt
from veranstalter.schemas.standort_schema import StandortIn, StandortUpdateIn, StandortOut

MAX_BEWERTUNG = 5
TELEFON_PATTERN = r"^\+?[0-9\s/()-]{5,}$"


def _unique(kategorien: Optional[List[str]]) -> Optional[List[str]]:
    if kategorien is not None and len(set(kategorien)) != len(kategorien):
        raise ValueError("kategorien must be unique")
    return kategorien


class DokumentIn(BaseModel):
    titel: str = Field(max_length=64)
    beschreibung: Optional[str] = Field(None, max_length=256)
    dateiname: str = Field(max_length=128)


class TeilnehmerIn(BaseModel):
    vorname: str = Field(max_length=64)
    nachname: str = Field(max_length=64)
    email: EmailStr


class VeranstalterIn(BaseModel):
    name: str = Field(pattern=r"^\w.*", max_length=64, examples=["EventPro Karlsruhe"])
    email: Optional[EmailStr] = None
    telefon: Optional[str] = Field(None, pattern=TELEFON_PATTERN)
    homepage: Optional[HttpUrl] = None
    gruendungsdatum: Optional[date] = None
    bewertung: Optional[int] = Field(None, ge=0, le=MAX_BEWERTUNG)
    aktiv: bool = True
    art: Optional[VeranstalterArt] = None
    kategorien: Optional[List[str]] = None
    standort: StandortIn
    dokumente: Optional[List[DokumentIn]] = None
    teilnehmer: Optional[List[TeilnehmerIn]] = None

    @field_validator("kategorien")
    @classmethod
    def kategorien_unique(cls, v):
        return _unique(v)


class VeranstalterUpdateIn(BaseModel):
    """Partial update: only fields sent by the client are written, explicit null included."""
    name: Optional[str] = Field(None, pattern=r"^\w.*", max_length=64)
    email: Optional[EmailStr] = None
    telefon: Optional[str] = Field(None, pattern=TELEFON_PATTERN)
    homepage: Optional[HttpUrl] = None
    gruendungsdatum: Optional[date] = None
    bewertung: Optional[int] = Field(None, ge=0, le=MAX_BEWERTUNG)
    aktiv: Optional[bool] = None
    art: Optional[VeranstalterArt] = None
    kategorien: Optional[List[str]] = None
    standort: Optional[StandortUpdateIn] = None

    @field_validator("kategorien")
    @classmethod
    def kategorien_unique(cls, v):
        return _unique(v)

    @model_validator(mode="after")
    def required_fields_not_null(self):
        for field in ("name", "aktiv", "standort"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} must not be null")
        return self


class DokumentOut(BaseModel):
    titel: str
    beschreibung: Optional[str] = None
    dateiname: str

    class Config:
        from_attributes = True


class TeilnehmerOut(BaseModel):
    vorname: str
    nachname: str
    email: str

    class Config:
        from_attributes = True


class VeranstalterListOut(BaseModel):
    id: int
    version: int
    name: str
    email: Optional[str] = None
    telefon: Optional[str] = None
    homepage: Optional[str] = None
    gruendungsdatum: Optional[date] = None
    bewertung: Optional[int] = None
    aktiv: bool
    art: Optional[VeranstalterArt] = None
    kategorien: Optional[List[str]] = None
    standort: Optional[StandortOut] = None
    erzeugt: Optional[datetime] = None
    aktualisiert: Optional[datetime] = None

    class Config:
        from_attributes = True


class VeranstalterOut(VeranstalterListOut):
    dokumente: List[DokumentOut] = []
    teilnehmer: List[TeilnehmerOut] = []
