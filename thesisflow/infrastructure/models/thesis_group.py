"""SQLAlchemy models for thesis groups and their student members."""

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from thesisflow.infrastructure.database import Base


class ThesisGroupModel(Base):
    """Database representation of a thesis group."""

    __tablename__ = "thesis_group"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    program = Column(String(120), nullable=True)
    term = Column(String(60), nullable=True)
    adviser_id = Column(Integer, ForeignKey("user.id", ondelete="SET NULL"), nullable=True)

    members = relationship(
        "GroupMemberModel",
        lazy="selectin",
        cascade="all, delete-orphan",
        order_by="GroupMemberModel.student_id",
    )


class GroupMemberModel(Base):
    """Association between a thesis group and a student."""

    __tablename__ = "group_member"

    group_id = Column(
        Integer, ForeignKey("thesis_group.id", ondelete="CASCADE"), primary_key=True
    )
    student_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), primary_key=True, index=True
    )


__all__ = ["ThesisGroupModel", "GroupMemberModel"]
