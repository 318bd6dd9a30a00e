from typing import Optional
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import String, Integer, ForeignKey
from veranstalter.models.base import Base


class Dokument(Base):
    __tablename__ = "dokument"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    titel: Mapped[str] = mapped_column(String(64), nullable=False)
    beschreibung: Mapped[Optional[str]] = mapped_column(String(256), nullable=True)
    dateiname: Mapped[str] = mapped_column(String(128), nullable=False)

    veranstalter_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("veranstalter.id", ondelete="CASCADE"), nullable=False
    )
    veranstalter: Mapped["Veranstalter"] = relationship("Veranstalter", back_populates="dokumente")
