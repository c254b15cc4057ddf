"""Venue model."""
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.database import Base


class Venue(Base):
    """Represents a sports venue listed by an owner."""

    __tablename__ = "venues"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=False, default="")
    address = Column(String, nullable=False)
    city = Column(String, nullable=False)
    district = Column(String, nullable=False, default="")
    image_url = Column(String, nullable=True)
    payment_qr_url = Column(String, nullable=True)  # Manual proof-of-payment QR
    google_maps_url = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    owner = relationship("User", back_populates="venues")
    courts = relationship(
        "Court",
        back_populates="venue",
        cascade="all, delete-orphan",
        order_by="Court.id",
    )
