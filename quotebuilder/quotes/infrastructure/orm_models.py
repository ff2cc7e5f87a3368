from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from quotebuilder.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class QuoteDB(Base):
    __tablename__ = "Quote"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    builder_name: Mapped[str] = mapped_column("builderName", String(255), nullable=False)
    job_name: Mapped[str] = mapped_column("jobName", String(255), nullable=False)
    quote_number: Mapped[int] = mapped_column(Integer, unique=True, nullable=False)
    user_id: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column("createdAt", DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column("updatedAt", DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    # Relation One-to-Many vers OrderItemDB, dans l'ordre de la liste
    items: Mapped[List["OrderItemDB"]] = relationship(
        back_populates="quote",
        cascade="all, delete-orphan",
        order_by="OrderItemDB.position",
    )


class OrderItemDB(Base):
    __tablename__ = "OrderItem"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    quote_id: Mapped[str] = mapped_column(
        "quoteId", String(36), ForeignKey("Quote.id", ondelete="CASCADE"), index=True, nullable=False
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    type: Mapped[str] = mapped_column(String(16), nullable=False)
    width: Mapped[float] = mapped_column(Float, nullable=False)
    height: Mapped[float] = mapped_column(Float, nullable=False)
    # Fenêtre: style / option; porte: type de panneau / sens d'ouverture
    style: Mapped[Optional[str]] = mapped_column(String(64))
    sub_style: Mapped[Optional[str]] = mapped_column("subStyle", String(64))
    material: Mapped[Optional[str]] = mapped_column(String(64))
    color: Mapped[Optional[str]] = mapped_column(String(64))
    custom_color: Mapped[Optional[str]] = mapped_column("customColor", String(128))
    measurement_given: Mapped[Optional[str]] = mapped_column(String(32))
    hardware_type: Mapped[Optional[str]] = mapped_column(String(32))
    slab_type: Mapped[Optional[str]] = mapped_column(String(32))
    vendor_style: Mapped[Optional[str]] = mapped_column(String(64))
    opening_type: Mapped[Optional[str]] = mapped_column(String(32))
    number_of_panels: Mapped[Optional[int]] = mapped_column(Integer)
    stack_type: Mapped[Optional[str]] = mapped_column(String(32))
    pocket_type: Mapped[Optional[str]] = mapped_column(String(32))
    notes: Mapped[Optional[str]] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column("createdAt", DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column("updatedAt", DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    # Relation Many-to-One vers QuoteDB
    quote: Mapped["QuoteDB"] = relationship(back_populates="items")

    # Colonnes exposées à la conversion article <-> ligne
    ROW_FIELDS = (
        "position", "type", "width", "height", "style", "sub_style", "material", "color",
        "custom_color", "measurement_given", "hardware_type", "slab_type", "vendor_style",
        "opening_type", "number_of_panels", "stack_type", "pocket_type", "notes",
    )

    def to_row(self) -> dict:
        return {name: getattr(self, name) for name in self.ROW_FIELDS}
