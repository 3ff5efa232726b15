# src/ngo_registry/models/ngo/ngo_info.py
import uuid

from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from src.ngo_registry.utils.timezone import now_local
from src.ngo_registry.utils.database import Base

class NgoInfo(Base):
    __tablename__ = "ngos"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name: Mapped[str] = mapped_column(String(200), nullable=False)

    status: Mapped[str | None] = mapped_column(String(20), default="active")
    created_by = Column(String(50), nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_local, nullable=False)
    updated_by = Column(String(50), nullable=True)
    updated_at = Column(DateTime(timezone=True), default=now_local, onupdate=now_local, nullable=False)

    def __repr__(self) -> str:
        return f"<NgoInfo {self.id} {self.name}>"
