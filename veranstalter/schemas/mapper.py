from typing import Any, Dict

from veranstalter.models.dokument import Dokument
from veranstalter.models.standort import Standort
from veranstalter.models.teilnehmer import Teilnehmer
from veranstalter.models.veranstalter import Veranstalter
from veranstalter.schemas.veranstalter_schema import VeranstalterIn, VeranstalterUpdateIn


def to_veranstalter(dto: VeranstalterIn) -> Veranstalter:
    return Veranstalter(
        version=0,
        name=dto.name,
        email=dto.email,
        telefon=dto.telefon,
        homepage=str(dto.homepage) if dto.homepage is not None else None,
        gruendungsdatum=dto.gruendungsdatum,
        bewertung=dto.bewertung,
        aktiv=dto.aktiv,
        art=dto.art,
        kategorien=dto.kategorien,
        standort=Standort(**dto.standort.model_dump()),
        dokumente=[Dokument(**d.model_dump()) for d in dto.dokumente or []],
        teilnehmer=[Teilnehmer(**t.model_dump()) for t in dto.teilnehmer or []],
    )


def to_update_data(dto: VeranstalterUpdateIn) -> Dict[str, Any]:
    """Only the fields the client sent; explicit ``None`` stays in the mapping."""
    data = dto.model_dump(exclude_unset=True)
    if data.get("homepage") is not None:
        data["homepage"] = str(data["homepage"])
    return data
