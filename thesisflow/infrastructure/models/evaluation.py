"""SQLAlchemy model for panel evaluations."""

from sqlalchemy import Column, ForeignKey, Integer, String

from thesisflow.infrastructure.database import Base


class EvaluationModel(Base):
    """Database representation of a panel evaluation."""

    __tablename__ = "evaluation"

    id = Column(Integer, primary_key=True, index=True)
    schedule_id = Column(
        Integer, ForeignKey("defense_schedule.id", ondelete="CASCADE"), nullable=False, index=True
    )
    evaluator_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    status = Column(String(20), nullable=False, default="pending")


__all__ = ["EvaluationModel"]
