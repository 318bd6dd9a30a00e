from typing import Optional
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import String, Integer, LargeBinary, ForeignKey
from veranstalter.models.base import Base


class VeranstalterFile(Base):
    __tablename__ = "veranstalter_file"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    filename: Mapped[str] = mapped_column(String(255), nullable=False)
    data: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)
    mimetype: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    veranstalter_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("veranstalter.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    veranstalter: Mapped["Veranstalter"] = relationship("Veranstalter", back_populates="datei")
