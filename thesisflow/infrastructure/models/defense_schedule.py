"""SQLAlchemy models for defense schedules and assigned panelists."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from thesisflow.infrastructure.database import Base


class DefenseScheduleModel(Base):
    """Database representation of a scheduled thesis defense."""

    __tablename__ = "defense_schedule"

    id = Column(Integer, primary_key=True, index=True)
    group_id = Column(
        Integer, ForeignKey("thesis_group.id", ondelete="CASCADE"), nullable=False, index=True
    )
    scheduled_at = Column(DateTime(), nullable=False)
    room = Column(String(120), nullable=True)
    status = Column(String(30), nullable=False, default="scheduled")
    created_by = Column(Integer, ForeignKey("user.id", ondelete="SET NULL"), nullable=True)

    panelists = relationship(
        "SchedulePanelistModel",
        lazy="selectin",
        cascade="all, delete-orphan",
        order_by="SchedulePanelistModel.staff_id",
    )


class SchedulePanelistModel(Base):
    """Association between a defense schedule and a panelist."""

    __tablename__ = "schedule_panelist"

    schedule_id = Column(
        Integer, ForeignKey("defense_schedule.id", ondelete="CASCADE"), primary_key=True
    )
    staff_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), primary_key=True, index=True
    )


__all__ = ["DefenseScheduleModel", "SchedulePanelistModel"]
