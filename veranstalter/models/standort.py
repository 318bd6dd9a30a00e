from typing import Optional
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import String, Integer, ForeignKey
from veranstalter.models.base import Base


class Standort(Base):
    __tablename__ = "standort"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    ort: Mapped[str] = mapped_column(String(40), nullable=False)
    plz: Mapped[Optional[str]] = mapped_column(String(5), nullable=True)
    strasse: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    land: Mapped[Optional[str]] = mapped_column(String(40), nullable=True)
    details: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)

    veranstalter_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("veranstalter.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    veranstalter: Mapped["Veranstalter"] = relationship("Veranstalter", back_populates="standort")
