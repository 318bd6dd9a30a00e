from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import String, Integer, ForeignKey
from veranstalter.models.base import Base


class Teilnehmer(Base):
    __tablename__ = "teilnehmer"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    vorname: Mapped[str] = mapped_column(String(64), nullable=False)
    nachname: Mapped[str] = mapped_column(String(64), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)

    veranstalter_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("veranstalter.id", ondelete="CASCADE"), nullable=False
    )
    veranstalter: Mapped["Veranstalter"] = relationship("Veranstalter", back_populates="teilnehmer")
