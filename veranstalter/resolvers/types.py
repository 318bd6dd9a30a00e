"""GraphQL object and input types for Veranstalter."""

import dataclasses
from datetime import date
from typing import Any, Dict, List, Optional

import strawberry
from sqlalchemy import inspect

from veranstalter.models.veranstalter import Veranstalter, VeranstalterArt

VeranstalterArtType = strawberry.enum(VeranstalterArt, name="VeranstalterArt")


@strawberry.type
class Standort:
    ort: str
    plz: Optional[str] = None
    strasse: Optional[str] = None
    land: Optional[str] = None
    details: Optional[str] = None


@strawberry.type
class Dokument:
    titel: str
    dateiname: str
    beschreibung: Optional[str] = None


@strawberry.type
class Teilnehmer:
    vorname: str
    nachname: str
    email: str


def _loaded(entity, attr: str) -> bool:
    return attr not in inspect(entity).unloaded


@strawberry.type(name="Veranstalter")
class VeranstalterType:
    id: strawberry.ID
    version: int
    name: str
    email: Optional[str]
    telefon: Optional[str]
    homepage: Optional[str]
    gruendungsdatum: Optional[date]
    bewertung: Optional[int]
    aktiv: bool
    art: Optional[VeranstalterArtType]
    kategorien: Optional[List[str]]
    standort: Optional[Standort]
    dokumente: Optional[List[Dokument]]
    teilnehmer: Optional[List[Teilnehmer]]

    @classmethod
    def from_entity(cls, v: Veranstalter) -> "VeranstalterType":
        """Relationships that were not eager loaded come back as null."""
        standort = v.standort if _loaded(v, "standort") else None
        return cls(
            id=strawberry.ID(str(v.id)),
            version=v.version,
            name=v.name,
            email=v.email,
            telefon=v.telefon,
            homepage=v.homepage,
            gruendungsdatum=v.gruendungsdatum,
            bewertung=v.bewertung,
            aktiv=v.aktiv,
            art=v.art,
            kategorien=v.kategorien,
            standort=Standort(
                ort=standort.ort, plz=standort.plz, strasse=standort.strasse,
                land=standort.land, details=standort.details,
            ) if standort is not None else None,
            dokumente=[
                Dokument(titel=d.titel, beschreibung=d.beschreibung, dateiname=d.dateiname)
                for d in v.dokumente
            ] if _loaded(v, "dokumente") else None,
            teilnehmer=[
                Teilnehmer(vorname=t.vorname, nachname=t.nachname, email=t.email)
                for t in v.teilnehmer
            ] if _loaded(v, "teilnehmer") else None,
        )


@strawberry.input
class StandortInput:
    ort: str
    plz: Optional[str] = strawberry.UNSET
    strasse: Optional[str] = strawberry.UNSET
    land: Optional[str] = strawberry.UNSET
    details: Optional[str] = strawberry.UNSET


@strawberry.input
class StandortUpdateInput:
    ort: Optional[str] = strawberry.UNSET
    plz: Optional[str] = strawberry.UNSET
    strasse: Optional[str] = strawberry.UNSET
    land: Optional[str] = strawberry.UNSET
    details: Optional[str] = strawberry.UNSET


@strawberry.input
class DokumentInput:
    titel: str
    dateiname: str
    beschreibung: Optional[str] = strawberry.UNSET


@strawberry.input
class TeilnehmerInput:
    vorname: str
    nachname: str
    email: str


@strawberry.input
class VeranstalterInput:
    name: str
    standort: StandortInput
    email: Optional[str] = strawberry.UNSET
    telefon: Optional[str] = strawberry.UNSET
    homepage: Optional[str] = strawberry.UNSET
    gruendungsdatum: Optional[date] = strawberry.UNSET
    bewertung: Optional[int] = strawberry.UNSET
    aktiv: Optional[bool] = strawberry.UNSET
    art: Optional[VeranstalterArtType] = strawberry.UNSET
    kategorien: Optional[List[str]] = strawberry.UNSET
    dokumente: Optional[List[DokumentInput]] = strawberry.UNSET
    teilnehmer: Optional[List[TeilnehmerInput]] = strawberry.UNSET


@strawberry.input
class VeranstalterUpdateInput:
    id: strawberry.ID
    version: int
    name: Optional[str] = strawberry.UNSET
    email: Optional[str] = strawberry.UNSET
    telefon: Optional[str] = strawberry.UNSET
    homepage: Optional[str] = strawberry.UNSET
    gruendungsdatum: Optional[date] = strawberry.UNSET
    bewertung: Optional[int] = strawberry.UNSET
    aktiv: Optional[bool] = strawberry.UNSET
    art: Optional[VeranstalterArtType] = strawberry.UNSET
    kategorien: Optional[List[str]] = strawberry.UNSET
    standort: Optional[StandortUpdateInput] = strawberry.UNSET


@strawberry.input
class SuchparameterInput:
    id: Optional[strawberry.ID] = None
    name: Optional[str] = None
    email: Optional[str] = None
    aktiv: Optional[bool] = None
    ort: Optional[str] = None
    land: Optional[str] = None
    plz: Optional[str] = None
    telefon: Optional[str] = None
    kategorien: Optional[List[str]] = None
    art: Optional[VeranstalterArtType] = None


def input_to_dict(value: Any, exclude: tuple = ()) -> Any:
    """Strawberry input into plain data; UNSET fields are left out, explicit null is kept."""
    if isinstance(value, list):
        return [input_to_dict(item) for item in value]
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        data: Dict[str, Any] = {}
        for field in dataclasses.fields(value):
            if field.name in exclude:
                continue
            field_value = getattr(value, field.name)
            if field_value is strawberry.UNSET:
                continue
            data[field.name] = input_to_dict(field_value)
        return data
    return value


@strawberry.type
class CreatePayload:
    id: int


@strawberry.type
class UpdatePayload:
    version: int


@strawberry.type
class DeletePayload:
    success: bool
