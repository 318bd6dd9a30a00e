"""
Translate flat search parameters into a predicate and the predicate into a
SQLAlchemy WHERE clause.

``WhereBuilder.build`` is pure: it returns a tuple of ``Clause`` values which
``WhereBuilder.apply`` ANDs onto a ``select``.
"""

import enum
import json
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

from sqlalchemy import Select, String, cast, false

from veranstalter.models.standort import Standort
from veranstalter.models.veranstalter import Veranstalter, VeranstalterArt

SUCHPARAMETER_NAMEN = (
    "id",
    "name",
    "email",
    "aktiv",
    "ort",
    "land",
    "plz",
    "telefon",
    "kategorien",
    "art",
)


class Op(str, enum.Enum):
    EQUALS = "equals"
    CONTAINS_IGNORE_CASE = "contains_ignore_case"
    CONTAINS_ELEMENT = "contains_element"
    # value cannot match, e.g. a non-numeric id
    NEVER = "never"


@dataclass(frozen=True)
class Clause:
    field: str
    op: Op
    value: Any = None


Predicate = Tuple[Clause, ...]

_COLUMNS = {
    "id": Veranstalter.id,
    "name": Veranstalter.name,
    "email": Veranstalter.email,
    "aktiv": Veranstalter.aktiv,
    "art": Veranstalter.art,
    "telefon": Veranstalter.telefon,
    "kategorien": Veranstalter.kategorien,
    "standort.ort": Standort.ort,
    "standort.plz": Standort.plz,
    "standort.land": Standort.land,
}


class WhereBuilder:
    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def build(self, suchparameter: Mapping[str, Any]) -> Predicate:
        self.logger.debug("build: suchparameter=%s", dict(suchparameter))
        clauses = []
        for key, value in suchparameter.items():
            if value is None:
                continue
            if key == "id":
                try:
                    clauses.append(Clause("id", Op.EQUALS, int(value)))
                except (TypeError, ValueError):
                    clauses.append(Clause("id", Op.NEVER, value))
            elif key == "name":
                clauses.append(Clause("name", Op.CONTAINS_IGNORE_CASE, str(value)))
            elif key == "email":
                clauses.append(Clause("email", Op.EQUALS, str(value)))
            elif key == "aktiv":
                clauses.append(Clause("aktiv", Op.EQUALS, str(value).lower() == "true"))
            elif key == "art":
                try:
                    clauses.append(Clause("art", Op.EQUALS, VeranstalterArt(str(value).upper())))
                except ValueError:
                    clauses.append(Clause("art", Op.NEVER, value))
            elif key == "telefon":
                clauses.append(Clause("telefon", Op.EQUALS, str(value)))
            elif key in ("ort", "land"):
                clauses.append(Clause(f"standort.{key}", Op.CONTAINS_IGNORE_CASE, str(value)))
            elif key == "plz":
                clauses.append(Clause("standort.plz", Op.EQUALS, str(value)))
            elif key == "kategorien":
                values = value if isinstance(value, (list, tuple)) else [value]
                kategorien = [k for item in values for k in str(item).split(",")]
                for kategorie in kategorien:
                    if str(kategorie).strip():
                        clauses.append(Clause("kategorien", Op.CONTAINS_ELEMENT, str(kategorie).strip()))
            else:
                self.logger.debug("build: unknown parameter ignored: %s", key)

        predicate = tuple(clauses)
        self.logger.debug("build: predicate=%s", predicate)
        return predicate

    def apply(self, stmt: Select, predicate: Predicate) -> Select:
        if any(clause.field.startswith("standort.") for clause in predicate):
            stmt = stmt.join(Veranstalter.standort)
        for clause in predicate:
            stmt = stmt.where(self._condition(clause))
        return stmt

    @staticmethod
    def _condition(clause: Clause):
        column = _COLUMNS[clause.field]
        if clause.op is Op.EQUALS:
            return column == clause.value
        if clause.op is Op.CONTAINS_IGNORE_CASE:
            return column.icontains(clause.value, autoescape=True)
        if clause.op is Op.CONTAINS_ELEMENT:
            return cast(column, String).contains(json.dumps(clause.value), autoescape=True)
        return false()
