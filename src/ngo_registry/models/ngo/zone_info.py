# src/ngo_registry/models/ngo/zone_info.py
import uuid

from sqlalchemy import Column, String, DateTime, ForeignKey, Enum as SAEnum, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from src.ngo_registry.schemas.zone import ZoneType
from src.ngo_registry.utils.timezone import now_local
from src.ngo_registry.utils.database import Base

class InterventionZone(Base):
    __tablename__ = "ngo_intervention_zones"
    __table_args__ = (
        # repeated municipality names are renamed before insert, see crud.zone
        UniqueConstraint("ngo_id", "zone_type", "name", name="uq_ngo_zone_type_name"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    ngo_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("ngos.id", ondelete="CASCADE"), nullable=False, index=True
    )
    zone_type: Mapped[ZoneType] = mapped_column(
        SAEnum(ZoneType, name="zonetype", native_enum=False, length=20), nullable=False
    )
    name: Mapped[str] = mapped_column(String(320), nullable=False)
    parent_zone_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("ngo_intervention_zones.id", ondelete="CASCADE"), nullable=True
    )

    created_at = Column(DateTime(timezone=True), default=now_local, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=now_local, onupdate=now_local, nullable=False)

    def __repr__(self) -> str:
        return f"<InterventionZone {self.zone_type.value}:{self.name} parent={self.parent_zone_id}>"
