"""Schedule window model."""
from sqlalchemy import Column, Integer, String, ForeignKey, Numeric, Index, CheckConstraint
from sqlalchemy.orm import relationship
from app.core.database import Base


class ScheduleWindow(Base):
    """Weekly recurring opening window with its hourly price."""

    __tablename__ = "schedules"

    id = Column(Integer, primary_key=True, index=True)
    court_id = Column(Integer, ForeignKey("courts.id", ondelete="CASCADE"), nullable=False, index=True)
    day_of_week = Column(Integer, nullable=False)  # 0 = Sunday .. 6 = Saturday
    start_time = Column(String(5), nullable=False)  # "HH:MM"
    end_time = Column(String(5), nullable=False)    # "HH:MM", "24:00" allowed
    price = Column(Numeric(10, 2), nullable=False)

    # Relationships
    court = relationship("Court", back_populates="schedules")

    __table_args__ = (
        Index("ix_schedules_court_day", "court_id", "day_of_week"),
        CheckConstraint("day_of_week BETWEEN 0 AND 6", name="check_schedule_day_of_week"),
        CheckConstraint("start_time < end_time", name="check_schedule_window_order"),
    )
