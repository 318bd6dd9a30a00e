from veranstalter.models.base import Base
from veranstalter.models.veranstalter import Veranstalter, VeranstalterArt
from veranstalter.models.standort import Standort
from veranstalter.models.dokument import Dokument
from veranstalter.models.teilnehmer import Teilnehmer
from veranstalter.models.veranstalter_file import VeranstalterFile

__all__ = [
    "Base",
    "Veranstalter",
    "VeranstalterArt",
    "Standort",
    "Dokument",
    "Teilnehmer",
    "VeranstalterFile",
]
